from __future__ import annotations

import math

import pytest

from pyroadair._constants import COLOR_RAMP, FALLBACK_COLOR, FALLBACK_WIDTH
from pyroadair.scales import LinearScale, ThresholdScale, color_of, width_of


class TestColorOf:
    @pytest.mark.parametrize(
        ("value", "bucket"),
        [
            (-1.0, 0),
            (0.0, 0),
            (0.05, 0),
            (0.1, 1),
            (0.15, 1),
            (0.45, 4),
            (0.5, 5),
            (0.899, 8),
            (0.9, 9),
            (5.0, 9),
        ],
    )
    def test_buckets(self, value: float, bucket: int) -> None:
        assert color_of(value) == COLOR_RAMP[bucket]

    def test_monotone_along_the_ramp(self) -> None:
        values = [i / 100 for i in range(-20, 120)]
        indices = [COLOR_RAMP.index(color_of(v)) for v in values]
        assert indices == sorted(indices)

    def test_ramp_goes_green_to_dark_red(self) -> None:
        low_r, low_g, _ = color_of(0.0)
        high_r, high_g, _ = color_of(1.0)
        assert low_g > low_r
        assert high_r > high_g

    def test_nan_uses_fallback(self) -> None:
        assert color_of(math.nan) == FALLBACK_COLOR


class TestWidthOf:
    @pytest.mark.parametrize(
        ("value", "width"),
        [(-3.0, 10.0), (0.0, 10.0), (0.05, 11.0), (0.25, 15.0), (0.5, 20.0), (0.9, 20.0)],
    )
    def test_linear_and_clamped(self, value: float, width: float) -> None:
        assert width_of(value) == pytest.approx(width)

    def test_monotone(self) -> None:
        widths = [width_of(i / 50) for i in range(-10, 40)]
        assert widths == sorted(widths)

    def test_nan_uses_fallback(self) -> None:
        assert width_of(math.nan) == FALLBACK_WIDTH


def test_threshold_scale_rejects_mismatched_range() -> None:
    with pytest.raises(ValueError):
        ThresholdScale([0.0, 1.0], ["a"])


def test_threshold_scale_rejects_unsorted_domain() -> None:
    with pytest.raises(ValueError):
        ThresholdScale([0.0, 2.0, 1.0], ["a", "b", "c"])


def test_linear_scale_rejects_empty_domain() -> None:
    with pytest.raises(ValueError):
        LinearScale((1.0, 1.0), (0.0, 1.0))
