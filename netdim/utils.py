from __future__ import annotations

import math
from enum import Enum
from typing import Any


def sanitize_floats(value: Any) -> Any:
    """Replace ``inf``/``nan`` with ``None`` so the payload is valid JSON.

    Walks mappings, lists and tuples; numpy scalars become Python numbers.
    """
    if isinstance(value, dict):
        return {k: sanitize_floats(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [sanitize_floats(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, bool) or value is None or isinstance(value, str):
        return value
    if hasattr(value, "item"):
        # numpy scalar
        value = value.item()
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value
