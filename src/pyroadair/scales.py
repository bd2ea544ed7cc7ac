"""Deterministic value scales for road styling."""

from __future__ import annotations

import bisect
import math
from collections.abc import Sequence
from typing import Generic, TypeVar

from pyroadair._constants import (
    COLOR_DOMAIN,
    COLOR_RAMP,
    FALLBACK_COLOR,
    FALLBACK_WIDTH,
    WIDTH_DOMAIN,
    WIDTH_RANGE,
)

RGB = tuple[int, int, int]
T = TypeVar("T")


class ThresholdScale(Generic[T]):
    """Map a value to the bucket of the highest boundary it reaches.

    ``domain[i]`` is the lower boundary of ``range[i]``.  Values below the
    first boundary fall in the first bucket; values above the last
    boundary fall in the last bucket.
    """

    def __init__(self, domain: Sequence[float], range_: Sequence[T]) -> None:
        if not domain or len(domain) != len(range_):
            raise ValueError("threshold scale needs one range entry per domain boundary")
        if any(later < earlier for earlier, later in zip(domain, domain[1:], strict=False)):
            raise ValueError("threshold scale domain must be sorted ascending")
        self._domain = tuple(domain)
        self._range = tuple(range_)

    def __call__(self, value: float) -> T:
        index = bisect.bisect_right(self._domain, value) - 1
        return self._range[max(0, index)]


class LinearScale:
    """Clamped linear interpolation from a domain onto a range."""

    def __init__(self, domain: tuple[float, float], range_: tuple[float, float]) -> None:
        if domain[0] == domain[1]:
            raise ValueError("linear scale domain must not be empty")
        self._domain = domain
        self._range = range_

    def __call__(self, value: float) -> float:
        d0, d1 = self._domain
        r0, r1 = self._range
        t = (value - d0) / (d1 - d0)
        t = min(1.0, max(0.0, t))
        return r0 + t * (r1 - r0)


COLOR_SCALE: ThresholdScale[RGB] = ThresholdScale(COLOR_DOMAIN, COLOR_RAMP)
WIDTH_SCALE = LinearScale(WIDTH_DOMAIN, WIDTH_RANGE)


def color_of(value: float) -> RGB:
    """Ramp colour for a matched value (fallback grey for NaN)."""
    if math.isnan(value):
        return FALLBACK_COLOR
    return COLOR_SCALE(value)


def width_of(value: float) -> float:
    """Line width in pixels for a matched value (fallback width for NaN)."""
    if math.isnan(value):
        return FALLBACK_WIDTH
    return WIDTH_SCALE(value)
