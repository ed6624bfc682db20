from __future__ import annotations

from typing import Any

from ..models import ApiResponse
from ..utils import sanitize_floats


def ok(data: Any) -> ApiResponse:
    """Wrap a calculation result in the success envelope."""
    return ApiResponse(data=sanitize_floats(data))
