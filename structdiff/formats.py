"""
structdiff.formats — Turn decoded store records into Values.

Supported conversions:
    • Python objects (dict, list, tuple, str, int, float, bool, None,
      datetime, Decimal) → Value
    • Store documents (field map or None) → Value
    • JSON strings ↔ Value
"""

import json
import logging
from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from .core import MISSING
from .sentinels import Sentinel

log = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  PYTHON OBJECTS → VALUES
# ═══════════════════════════════════════════════════════════════════

def from_python(obj: Any) -> Any:
    """
    Normalize a Python object into a Value tree.

    Mapping:
        None/bool/int/float/str → unchanged
        list/tuple              → list (recursively)
        Mapping                 → dict (recursively, text keys only)
        datetime/date           → ISO-8601 text
        Decimal                 → float
        Sentinel / MISSING      → unchanged

    Anything else, bytes included, is passed through as an opaque
    value, which the equality oracle compares by identity.
    """
    if obj is None or obj is MISSING or isinstance(obj, Sentinel):
        return obj
    if isinstance(obj, (bool, int, float, str)):
        return obj
    if isinstance(obj, (list, tuple)):
        return [from_python(item) for item in obj]
    if isinstance(obj, Mapping):
        result = {}
        for key, value in obj.items():
            if not isinstance(key, str):
                raise TypeError(f"Mapping keys must be text, got {type(key).__name__}: {key!r}")
            result[key] = from_python(value)
        return result
    # datetime is a subclass of date
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, Decimal):
        return float(obj)

    log.debug("Passing through opaque %s value", type(obj).__name__)
    return obj


def decode_document(data: Optional[Mapping]) -> dict:
    """Decode a store document's fields.  A missing document decodes to {}."""
    if data is None:
        return {}
    return from_python(data)


# ═══════════════════════════════════════════════════════════════════
#  JSON STRINGS ↔ VALUES
# ═══════════════════════════════════════════════════════════════════

def from_json(text: str) -> Any:
    """Parse a JSON string into a Value."""
    return from_python(json.loads(text))


def to_json(value: Any, **kwargs) -> str:
    """Convert a Value to a JSON string.  Sentinels are not serializable."""
    return json.dumps(value, default=_reject_opaque, **kwargs)


def _reject_opaque(obj: Any) -> Any:
    raise TypeError(f"Value of type {type(obj).__name__} is not JSON serializable: {obj!r}")
