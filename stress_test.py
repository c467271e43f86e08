"""
Stress tests / adversarial evaluation of structdiff.

This script attempts to BREAK the claimed properties:
  1. Equality is reflexive and symmetric; copies are equal
  2. Mapping key order never matters, sequence order always does
  3. Added/removed array values mirror each other
  4. Object numeric diffs are sparse and agree with numerical_diff
  5. Transform composition
  6. Deep trees
"""

import sys, os, random, time
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from structdiff.core import equal, classify, MISSING
from structdiff.comparison import Comparison, numerical_diff_between_objects
from structdiff.sentinels import server_timestamp, server_increment


def test(name, condition, detail=""):
    status = "PASS" if condition else "FAIL"
    print(f"  [{status}] {name}" + (f"  ({detail})" if detail else ""))
    return condition


MARKERS = [server_timestamp(), server_increment(1)]


def random_value(depth=0, max_depth=3):
    """Generate a random Value tree."""
    if depth >= max_depth:
        return random.choice([1, 2, 0, 2.5, "a", "1", None, True, False] + MARKERS)

    kind = random.choice(["scalar", "seq", "map", "map"])
    if kind == "scalar":
        return random.choice([1, 2, "a", None, True] + MARKERS)
    elif kind == "seq":
        n = random.randint(0, 4)
        return [random_value(depth+1, max_depth) for _ in range(n)]
    else:
        n = random.randint(0, 4)
        keys = random.sample(["a", "b", "c", "d", "x", "y"], n)
        return {k: random_value(depth+1, max_depth) for k in keys}


def shuffled_keys(value):
    """Same value, every mapping rebuilt in a random key order."""
    if isinstance(value, dict):
        keys = list(value)
        random.shuffle(keys)
        return {k: shuffled_keys(value[k]) for k in keys}
    if isinstance(value, list):
        return [shuffled_keys(v) for v in value]
    return value


def copy_tree(value):
    """Deep copy that keeps markers by identity."""
    if isinstance(value, dict):
        return {k: copy_tree(v) for k, v in value.items()}
    if isinstance(value, list):
        return [copy_tree(v) for v in value]
    return value


random.seed(7)
values = [random_value() for _ in range(60)]


# ═══════════════════════════════════════════════════════════════
#  §1  EQUALITY PROPERTIES
# ═══════════════════════════════════════════════════════════════

print("=" * 70)
print("  §1  EQUALITY PROPERTIES — random trees")
print("=" * 70)

test(f"Reflexivity ({len(values)} values)",
     all(equal(v, v) for v in values))

test(f"Copies are equal ({len(values)} values)",
     all(equal(v, copy_tree(v)) for v in values))

sym_violations = 0
for a in values:
    for b in values:
        if equal(a, b) != equal(b, a):
            sym_violations += 1
test(f"Symmetry ({len(values)**2} pairs)",
     sym_violations == 0,
     f"{sym_violations} violations")

test("Key order independence",
     all(equal(v, shuffled_keys(v)) for v in values))

kind_violations = 0
for a in values:
    for b in values:
        if classify(a) is not classify(b) and equal(a, b):
            kind_violations += 1
test("Kind mismatch is always unequal",
     kind_violations == 0,
     f"{kind_violations} violations")

swap_checks = 0
swap_violations = 0
for v in values:
    if not isinstance(v, list):
        continue
    for i in range(len(v) - 1):
        if equal(v[i], v[i+1]):
            continue
        swapped = v[:i] + [v[i+1], v[i]] + v[i+2:]
        swap_checks += 1
        if equal(v, swapped):
            swap_violations += 1
test(f"Swapping unequal neighbours breaks equality ({swap_checks} swaps)",
     swap_violations == 0,
     f"{swap_violations} violations")


# ═══════════════════════════════════════════════════════════════
#  §2  ARRAY SET-DIFFERENCE
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  §2  ARRAY SET-DIFFERENCE")
print("=" * 70)

seqs = [v for v in values if isinstance(v, list)]
seqs += [[random_value(1) for _ in range(random.randint(0, 6))] for _ in range(20)]

mirror_violations = 0
membership_violations = 0
for a in seqs:
    for b in seqs:
        added = Comparison(a, b).added_array_values
        removed = Comparison(b, a).removed_array_values
        if not equal(added, removed):
            mirror_violations += 1
        for item in added:
            if any(equal(item, other) for other in a):
                membership_violations += 1
test(f"added(A,B) == removed(B,A) ({len(seqs)**2} pairs)",
     mirror_violations == 0,
     f"{mirror_violations} violations")
test("Added values never appear in old",
     membership_violations == 0,
     f"{membership_violations} violations")

test("Self-diff is empty",
     all(Comparison(s, copy_tree(s)).added_array_values == [] for s in seqs))


# ═══════════════════════════════════════════════════════════════
#  §3  NUMERIC DIFFS
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  §3  NUMERIC DIFFS")
print("=" * 70)


def random_numeric_tree(depth=0):
    keys = random.sample(["a", "b", "c", "d", "e"], random.randint(0, 5))
    tree = {}
    for k in keys:
        if depth < 2 and random.random() < 0.3:
            tree[k] = random_numeric_tree(depth+1)
        else:
            tree[k] = random.choice([0, 1, 2, 5, -3, "s", None])
    return tree


def all_leaves_nonzero(tree):
    for v in tree.values():
        if isinstance(v, dict):
            if not v or not all_leaves_nonzero(v):
                return False
        elif not v:
            return False
    return True


trees = [random_numeric_tree() for _ in range(80)]

sparse_violations = 0
leaf_violations = 0
for old in trees:
    for new in trees:
        result = numerical_diff_between_objects(old, new)
        if not all_leaves_nonzero(result):
            sparse_violations += 1
        for k, delta in result.items():
            if isinstance(delta, dict):
                continue
            expected = Comparison(old.get(k, MISSING), new.get(k, MISSING)).numerical_diff
            if delta != expected:
                leaf_violations += 1
test(f"Result is sparse ({len(trees)**2} pairs)",
     sparse_violations == 0,
     f"{sparse_violations} violations")
test("Top-level leaves agree with numerical_diff",
     leaf_violations == 0,
     f"{leaf_violations} violations")

test("Self-diff is empty",
     all(numerical_diff_between_objects(t, t) == {} for t in trees))

antisym_violations = 0
for old in trees:
    for new in trees:
        forward = numerical_diff_between_objects(old, new)
        backward = numerical_diff_between_objects(new, old)
        if set(forward) != set(backward):
            antisym_violations += 1
test("Diff keys are the same in both directions",
     antisym_violations == 0,
     f"{antisym_violations} violations")


# ═══════════════════════════════════════════════════════════════
#  §4  TRANSFORM
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  §4  TRANSFORM COMPOSITION")
print("=" * 70)

f = lambda v: {"wrapped": v, "kind": classify(v).value}
g = lambda v: [v["kind"], v["wrapped"]]
compose_violations = 0
for a in values[:20]:
    for b in values[:20]:
        c = Comparison(a, b)
        two_step = c.transform(f).transform(g)
        one_step = c.transform(lambda v: g(f(v)))
        if two_step.is_equal != one_step.is_equal:
            compose_violations += 1
test("transform(f).transform(g) ~ transform(g∘f)",
     compose_violations == 0,
     f"{compose_violations} violations")


# ═══════════════════════════════════════════════════════════════
#  §5  DEEP AND WIDE TREES
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  §5  DEEP AND WIDE TREES")
print("=" * 70)

deep_a = deep_b = {"leaf": 1}
for i in range(250):
    deep_a = {"n": deep_a, "i": i}
    deep_b = {"i": i, "n": deep_b}
test("Depth 250 mapping chain", equal(deep_a, deep_b))

wide_a = {f"k{i}": [i, {"v": i}] for i in range(5000)}
wide_b = dict(reversed(list(wide_a.items())))
start = time.perf_counter()
ok = equal(wide_a, wide_b)
elapsed = time.perf_counter() - start
test("5000-key mapping, reversed insertion order", ok, f"{elapsed*1000:.1f} ms")

old_list = list(range(1000))
new_list = list(range(500, 1500))
start = time.perf_counter()
added = Comparison(old_list, new_list).added_array_values
elapsed = time.perf_counter() - start
test("1000×1000 array diff", added == list(range(1000, 1500)), f"{elapsed*1000:.1f} ms")


# ═══════════════════════════════════════════════════════════════
#  SUMMARY
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  STRESS TEST SUMMARY")
print("=" * 70)
print("  If you see FAIL above, there's a bug.")
print("  If everything is PASS, the implementation is correct")
print("  for the tested cases (not a proof, but high confidence).")
