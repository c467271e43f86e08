"""
Structural Comparison for Document Data
=======================================

Deep equality and change detection for the nested dict/list/scalar
trees a document store hands back.

    equal({"a": 1, "b": 2}, {"b": 2, "a": 1})     → True   (key order ignored)
    equal([1, 2], [2, 1])                         → False  (sequence order matters)
    equal(None, {})                               → False  (null is not an empty map)

    c = Comparison({"n": 1, "tags": ["x"]}, {"n": 3, "tags": ["x", "y"]})
    c.object_numerical_diff                       → {"n": 2}
    c.transform(lambda d: d["tags"]).added_array_values  → ["y"]
"""

from structdiff.core import (
    # Classification
    Kind,
    classify,
    MISSING,
    # Equality
    equal,
    format_path,
    logging_trace,
    # Errors
    StructDiffError,
    TypePreconditionError,
    DepthLimitError,
)
from structdiff.comparison import Comparison, numerical_diff_between_objects
from structdiff.sentinels import (
    Sentinel, server_timestamp, server_increment, array_union, array_remove,
    delete_field, document_id, is_sentinel,
)
from structdiff.formats import from_python, decode_document, from_json, to_json
from structdiff.config import Settings, get_settings, reset_settings

__version__ = "0.1.0"
__all__ = [
    "Kind", "classify", "MISSING",
    "equal", "format_path", "logging_trace",
    "StructDiffError", "TypePreconditionError", "DepthLimitError",
    "Comparison", "numerical_diff_between_objects",
    "Sentinel", "server_timestamp", "server_increment", "array_union",
    "array_remove", "delete_field", "document_id", "is_sentinel",
    "from_python", "decode_document", "from_json", "to_json",
    "Settings", "get_settings", "reset_settings",
]
