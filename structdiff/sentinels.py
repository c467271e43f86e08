"""
structdiff.sentinels — Opaque document-store write markers.

These stand in for the values a document store resolves on the server
("now", "add 1", "drop this field").  The comparison engine never looks
inside them: a Sentinel is equal only to itself.

    ts = server_timestamp()
    equal({"at": ts}, {"at": ts})                    → True
    equal({"at": ts}, {"at": server_timestamp()})    → False
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, eq=False, slots=True)
class Sentinel:
    """A store marker.  Compared by identity, never structurally."""
    kind: str
    args: tuple = ()

    def __repr__(self) -> str:
        if not self.args:
            return f"Sentinel({self.kind})"
        inner = ", ".join(repr(a) for a in self.args)
        return f"Sentinel({self.kind}: {inner})"


def server_timestamp() -> Sentinel:
    """Marker for the server's commit time."""
    return Sentinel("server_timestamp")


def server_increment(n: float) -> Sentinel:
    """Marker to increment (or set, if absent) a numeric field by n."""
    return Sentinel("increment", (n,))


def array_union(*elements: Any) -> Sentinel:
    """Marker to merge elements into an existing array field."""
    return Sentinel("array_union", elements)


def array_remove(*elements: Any) -> Sentinel:
    """Marker to remove elements from an existing array field."""
    return Sentinel("array_remove", elements)


def delete_field() -> Sentinel:
    """Marker to remove a field from a document."""
    return Sentinel("delete")


_DOCUMENT_ID = Sentinel("document_id")


def document_id() -> Sentinel:
    """Field-path marker that refers to a document's ID in queries."""
    return _DOCUMENT_ID


def is_sentinel(value: Any) -> bool:
    return isinstance(value, Sentinel)
