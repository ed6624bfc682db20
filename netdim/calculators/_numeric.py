"""Floating-point helpers shared by the calculators.

The engine never turns a degenerate numeric result into an exception: a
logarithm of zero is ``-inf``, a division by zero is ``inf`` and an invalid
operation is ``nan``. Python's ``math`` module raises in those cases, so the
calculators work on ``numpy.float64`` scalars with floating-point errors
silenced for the duration of a call.
"""
from __future__ import annotations

import functools
import math
from typing import Any, Callable, TypeVar, Union, cast

import numpy as np

F = TypeVar("F", bound=Callable[..., Any])

Count = Union[int, float]


def ieee754(func: F) -> F:
    """Evaluate ``func`` under ``np.errstate(all="ignore")``."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        with np.errstate(all="ignore"):
            return func(*args, **kwargs)

    return cast(F, wrapper)


def f64(x: Any) -> np.float64:
    return np.float64(x)


def round2(x: Any) -> float:
    """Round to 2 decimals; ``inf`` and ``nan`` pass through unchanged."""
    return round(float(x), 2)


def floor_count(x: Any) -> Count:
    """``floor`` as an ``int``, or the special value itself when not finite."""
    x = float(x)
    if not math.isfinite(x):
        return x
    return int(math.floor(x))


def ceil_count(x: Any) -> Count:
    """``ceil`` as an ``int``, or the special value itself when not finite."""
    x = float(x)
    if not math.isfinite(x):
        return x
    return int(math.ceil(x))
