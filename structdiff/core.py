"""
structdiff.core — Structural Equality
======================================

§1  THE VALUE MODEL
───────────────────

A Value is whatever a document-store decoder hands back once the
store-specific wrappers are gone:

    None                      → Kind.NULL
    True / False              → Kind.BOOLEAN
    42, 3.14                  → Kind.NUMBER
    "hello"                   → Kind.TEXT
    [..] or (..)              → Kind.SEQUENCE     (ORDERED)
    {"k": ..}  (any Mapping)  → Kind.MAPPING      (UNORDERED)
    anything else             → Kind.SENTINEL     (opaque marker)

Sentinels are never recursed into.  They are equal only to themselves
(identity), which is how the store's write markers ("delete this field",
"increment by n") and the MISSING marker behave.

Note that None is its own kind.  It is never folded into MAPPING, so
None and {} are different values, and neither equals [].


§2  THE EQUALITY ORACLE
───────────────────────

equal(a, b) is defined recursively, depth-first, stopping at the first
divergence:

    (1)  classify(a) ≠ classify(b)             → unequal
    (2)  both NULL                              → equal
    (3)  both SEQUENCE: len(a) ≠ len(b)         → unequal
                        else ∀i  equal(a[i], b[i])
    (4)  both MAPPING:  keys(a) △ keys(b) ≠ ∅   → unequal
                        else ∀k  equal(a[k], b[k])
    (5)  SENTINEL                               → a is b
    (6)  other scalars                          → a == b

So equality is KEY-ORDER independent and SEQUENCE-ORDER dependent:

    equal({"a": 1, "b": 2}, {"b": 2, "a": 1})   → True
    equal([1, 2], [2, 1])                       → False
    equal(0, "0")                               → False

With a trace sink, the first divergence is reported as (path, reason)
before False is returned.  Only the first one: the walk short-circuits.

Trees are assumed FINITE.  Cycles are not detected; an opt-in depth
guard (max_depth) turns runaway recursion into DepthLimitError.
"""

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable, Optional, Union

from .config import get_settings

log = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  ERRORS
# ═══════════════════════════════════════════════════════════════════

class StructDiffError(Exception):
    """Base class for all structdiff errors."""


class TypePreconditionError(StructDiffError, TypeError):
    """
    A comparison operation was asked of values with the wrong shape,
    e.g. added_array_values on two mappings.  Raised before any
    traversal happens.
    """


class DepthLimitError(StructDiffError, RecursionError):
    """The configured max_depth was exceeded while walking a tree."""

    def __init__(self, max_depth: int, path: tuple):
        self.max_depth = max_depth
        self.path = path
        super().__init__(
            f"Maximum depth {max_depth} exceeded at: {format_path(path)}"
        )


# ═══════════════════════════════════════════════════════════════════
#  CLASSIFICATION
# ═══════════════════════════════════════════════════════════════════

class Kind(Enum):
    """The closed set of Value classifications."""
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    TEXT = "text"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    SENTINEL = "sentinel"


class _Missing:
    """Marker for "no value at all", distinct from None."""
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return "MISSING"


MISSING = _Missing()


def classify(value: Any) -> Kind:
    """
    Map any Python object to exactly one Kind.

    bool is checked before int: in Python True == 1, and without this
    guard booleans would be conflated with numbers.
    """
    if value is None:
        return Kind.NULL
    if isinstance(value, bool):
        return Kind.BOOLEAN
    if isinstance(value, (int, float)):
        return Kind.NUMBER
    if isinstance(value, str):
        return Kind.TEXT
    if isinstance(value, (list, tuple)):
        return Kind.SEQUENCE
    if isinstance(value, Mapping):
        return Kind.MAPPING
    return Kind.SENTINEL


# ═══════════════════════════════════════════════════════════════════
#  TRACE SINKS
# ═══════════════════════════════════════════════════════════════════

Path = tuple[Union[int, str], ...]
TraceSink = Callable[[Path, str], None]


def format_path(path: Path) -> str:
    """Render a path as dotted text: ("a", 0, "b") → "a.0.b"."""
    return ".".join(str(p) for p in path)


def logging_trace(logger: Optional[logging.Logger] = None,
                  level: Union[int, str] = logging.DEBUG) -> TraceSink:
    """Build a trace sink that writes the first divergence to a logger."""
    target = logger or log
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    def sink(path: Path, description: str) -> None:
        target.log(level, "%s at: %s", description, format_path(path))

    return sink


def default_trace() -> Optional[TraceSink]:
    """The sink to use when the caller gave none (verbose mode only)."""
    settings = get_settings()
    if settings.verbose:
        return logging_trace(level=settings.trace_level)
    return None


# ═══════════════════════════════════════════════════════════════════
#  STRUCTURAL EQUALITY ORACLE
# ═══════════════════════════════════════════════════════════════════

def equal(a: Any, b: Any, trace: Optional[TraceSink] = None,
          max_depth: Optional[int] = None) -> bool:
    """
    Deep structural equality of two Values.

    Mapping key order is ignored; sequence order is not.  Values of
    different Kind are never equal, whatever they look like.

    If `trace` is given it is called once, with the path and a short
    reason, at the first point of divergence.  When no sink is given
    and Settings.verbose is on, the divergence goes to the log instead.

    `max_depth` (or Settings.max_depth) bounds the recursion; exceeding
    it raises DepthLimitError.  Unbounded by default.
    """
    if trace is None:
        trace = default_trace()
    if max_depth is None:
        max_depth = get_settings().max_depth
    return _equal(a, b, trace, max_depth, ())


def _equal(a: Any, b: Any, trace: Optional[TraceSink],
           max_depth: Optional[int], path: Path) -> bool:
    if max_depth is not None and len(path) > max_depth:
        log.debug("Depth guard tripped at %s", format_path(path))
        raise DepthLimitError(max_depth, path)

    kind = classify(a)
    if kind is not classify(b):
        return _diverged(trace, path, "Value types are different")

    if kind is Kind.NULL:
        return True

    if kind is Kind.SEQUENCE:
        if len(a) != len(b):
            return _diverged(trace, path, "Array lengths are different")
        return all(
            _equal(x, y, trace, max_depth, path + (i,))
            for i, (x, y) in enumerate(zip(a, b))
        )

    if kind is Kind.MAPPING:
        only_a = [k for k in a if k not in b]
        if only_a:
            return _diverged(trace, path, f"Key not found in object 2: {only_a[0]}")
        only_b = [k for k in b if k not in a]
        if only_b:
            return _diverged(trace, path, f"Key not found in object 1: {only_b[0]}")
        return all(
            _equal(a[k], b[k], trace, max_depth, path + (k,))
            for k in a
        )

    if kind is Kind.SENTINEL:
        same = a is b
    else:
        same = a == b
    if not same:
        return _diverged(trace, path, "Values are different")
    return True


def _diverged(trace: Optional[TraceSink], path: Path, description: str) -> bool:
    if trace is not None:
        trace(path, description)
    return False
