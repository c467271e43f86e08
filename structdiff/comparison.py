"""
structdiff.comparison — Old/new value pairs and what changed between them.

A Comparison holds the value of something before and after a write.
It answers the questions a document-change handler usually asks:

    c = Comparison(before, after)
    c.is_equal                                   # anything changed at all?
    c.transform(lambda d: d["tags"]).added_array_values
    c.transform(lambda d: d["stats"]).object_numerical_diff

Every deep-equality question is delegated to structdiff.core.equal.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

from .config import get_settings
from .core import (
    MISSING, DepthLimitError, Kind, Path, TraceSink, TypePreconditionError,
    classify, equal, format_path,
)

log = logging.getLogger(__name__)

NumericDiffTree = dict[str, Union[int, float, "NumericDiffTree"]]


@dataclass(frozen=True, eq=False, slots=True)
class Comparison:
    """
    An immutable (old_value, new_value) pair.

    Either side may be MISSING (no value), which is not the same as
    None.  `trace` is an optional sink for is_equal diagnostics.

    Two Comparison objects compare by identity; ask is_equal for a
    structural answer about the two sides.
    """
    old_value: Any = MISSING
    new_value: Any = MISSING
    trace: Optional[TraceSink] = field(default=None, repr=False)

    def transform(self, transformer: Callable[[Any], Any] = lambda v: v) -> "Comparison":
        """
        Project both sides through the same function.

        The function is applied to each side on its own; an error it
        raises for one side's shape propagates unchanged.
        """
        return Comparison(transformer(self.old_value),
                          transformer(self.new_value),
                          trace=self.trace)

    @property
    def is_equal(self) -> bool:
        return equal(self.old_value, self.new_value, trace=self.trace)

    @property
    def is_unequal(self) -> bool:
        return not self.is_equal

    @property
    def added_array_values(self) -> list:
        """Elements of new_value with no deep-equal element in old_value."""
        old, new = self._require_sequences("added_array_values")
        return [item for item in new
                if not any(equal(item, other, trace=_silent) for other in old)]

    @property
    def removed_array_values(self) -> list:
        """Elements of old_value with no deep-equal element in new_value."""
        old, new = self._require_sequences("removed_array_values")
        return [item for item in old
                if not any(equal(item, other, trace=_silent) for other in new)]

    @property
    def numerical_diff(self) -> Union[int, float]:
        """new_value - old_value, with a MISSING or NaN side counting as 0."""
        if not (_is_absent_or(self.old_value, Kind.NUMBER)
                and _is_absent_or(self.new_value, Kind.NUMBER)):
            _precondition_failed('Both values must be numbers to use "numerical_diff"')
        return _or_zero(self.new_value) - _or_zero(self.old_value)

    @property
    def object_numerical_diff(self) -> NumericDiffTree:
        """
        Per-field numeric movement between two mappings.

        A MISSING side counts as {}.  See numerical_diff_between_objects
        for which fields survive.
        """
        if not (_is_absent_or(self.old_value, Kind.MAPPING)
                and _is_absent_or(self.new_value, Kind.MAPPING)):
            _precondition_failed('Both values must be objects to use "object_numerical_diff"')
        return numerical_diff_between_objects(_or_empty(self.old_value),
                                              _or_empty(self.new_value))

    def _require_sequences(self, operation: str) -> tuple:
        if (classify(self.old_value) is not Kind.SEQUENCE
                or classify(self.new_value) is not Kind.SEQUENCE):
            _precondition_failed(f'Both values must be arrays to use "{operation}"')
        return self.old_value, self.new_value


# ═══════════════════════════════════════════════════════════════════
#  NUMERIC DIFF TREE
# ═══════════════════════════════════════════════════════════════════

def numerical_diff_between_objects(object1: Mapping, object2: Mapping,
                                   max_depth: Optional[int] = None) -> NumericDiffTree:
    """
    Sparse tree of numeric changes from object1 to object2.

    For every key in either mapping, the kinds of the values that are
    present are collected.  Only when they agree on a single kind:

        NUMBER   → (value2 or 0) - (value1 or 0), kept if nonzero;
                   MISSING and NaN both count as 0
        MAPPING  → recurse, kept if the nested result is non-empty

    Keys whose kind changed between sides, and keys of any other kind,
    are left out.  A key present on one side only is compared against
    an absent value, not against a type mismatch.

        old  {"a": 1, "b": 10, "d": 1000, "e": "hello"}
        new  {"a": 3, "c": 100, "d": 1000, "e": "world"}
        →    {"a": 2, "b": -10, "c": 100}
    """
    if max_depth is None:
        max_depth = get_settings().max_depth
    return _object_diff(object1, object2, max_depth, ())


def _object_diff(object1: Mapping, object2: Mapping,
                 max_depth: Optional[int], path: Path) -> NumericDiffTree:
    if max_depth is not None and len(path) > max_depth:
        log.debug("Depth guard tripped at %s", format_path(path))
        raise DepthLimitError(max_depth, path)

    keys = list(object1)
    keys.extend(k for k in object2 if k not in object1)

    result: NumericDiffTree = {}
    for key in keys:
        value1 = object1.get(key, MISSING)
        value2 = object2.get(key, MISSING)

        kinds = {classify(v) for v in (value1, value2) if v is not MISSING}
        if len(kinds) != 1:
            continue
        kind = kinds.pop()

        if kind is Kind.MAPPING:
            nested = _object_diff(_or_empty(value1), _or_empty(value2),
                                  max_depth, path + (key,))
            if nested:
                result[key] = nested
        elif kind is Kind.NUMBER:
            delta = _or_zero(value2) - _or_zero(value1)
            if delta:
                result[key] = delta

    return result


def _is_absent_or(value: Any, kind: Kind) -> bool:
    return value is MISSING or classify(value) is kind


def _or_zero(value: Any) -> Union[int, float]:
    # NaN counts as no value
    if value is MISSING or value != value:
        return 0
    return value


def _or_empty(value: Any) -> Mapping:
    return {} if value is MISSING else value


def _silent(path: Path, description: str) -> None:
    """Sink for the element scans, which expect most pairings to differ."""


def _precondition_failed(message: str) -> None:
    log.debug("Precondition failed: %s", message)
    raise TypePreconditionError(message)
