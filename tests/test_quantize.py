"""Tests for quantize module."""
from __future__ import annotations

import numpy as np
import pytest

from pixel_art.config import InvalidInputError, ReductionLevel
from pixel_art.quantize import quantize_pixels, quantize_step


class TestQuantizeStep:
    """Tests for quantize_step function."""

    def test_steps(self) -> None:
        """Each level should map to its step size."""
        assert quantize_step(ReductionLevel.LOW) == 32
        assert quantize_step(ReductionLevel.MEDIUM) == 64
        assert quantize_step("high") == 128


class TestQuantizePixels:
    """Tests for quantize_pixels function."""

    def test_rounds_to_step(self) -> None:
        """Channels should snap to the nearest multiple of the step."""
        pixels = np.array([[[10, 40, 100, 255]]], dtype=np.uint8)
        result = quantize_pixels(pixels, "medium")
        np.testing.assert_array_equal(result[0, 0], [0, 64, 128, 255])

    def test_half_rounds_up(self) -> None:
        """A value exactly halfway should round up."""
        pixels = np.array([[[32, 96, 16, 255]]], dtype=np.uint8)
        result = quantize_pixels(pixels, "medium")
        np.testing.assert_array_equal(result[0, 0], [64, 128, 0, 255])

    def test_clamps_to_255(self) -> None:
        """Rounding past 255 should clamp."""
        pixels = np.array([[[250, 255, 240, 255]]], dtype=np.uint8)
        for level in ReductionLevel:
            result = quantize_pixels(pixels, level)
            np.testing.assert_array_equal(result[0, 0], [255, 255, 255, 255])

    def test_alpha_unchanged(self) -> None:
        """Alpha should pass through untouched."""
        pixels = np.array([[[10, 20, 30, 0], [10, 20, 30, 77]]], dtype=np.uint8)
        result = quantize_pixels(pixels, "low")
        np.testing.assert_array_equal(result[..., 3], [[0, 77]])

    def test_does_not_mutate_input(self) -> None:
        """Input buffer should be left intact."""
        pixels = np.array([[[10, 20, 30, 255]]], dtype=np.uint8)
        before = pixels.copy()
        result = quantize_pixels(pixels, "high")
        np.testing.assert_array_equal(pixels, before)
        assert result is not pixels

    def test_preserves_shape(self) -> None:
        """Output should keep shape and dtype."""
        pixels = np.zeros((5, 5, 4), dtype=np.uint8)
        result = quantize_pixels(pixels, "low")
        assert result.shape == (5, 5, 4)
        assert result.dtype == np.uint8

    @pytest.mark.parametrize("level", list(ReductionLevel))
    def test_idempotent(self, level: ReductionLevel) -> None:
        """Quantizing twice should equal quantizing once."""
        gen = np.random.default_rng(3)
        pixels = gen.integers(0, 256, size=(16, 16, 4), dtype=np.uint8)
        once = quantize_pixels(pixels, level)
        twice = quantize_pixels(once, level)
        np.testing.assert_array_equal(once, twice)

    @pytest.mark.parametrize("level", list(ReductionLevel))
    def test_values_on_step_grid(self, level: ReductionLevel) -> None:
        """Every output channel should be a step multiple or 255."""
        step = quantize_step(level)
        values = np.arange(256, dtype=np.uint8)
        pixels = np.stack([values, values, values, values], axis=-1)[None, :, :]
        rgb = quantize_pixels(pixels, level)[..., :3]
        assert np.all((rgb % step == 0) | (rgb == 255))

    def test_coarser_level_fewer_values(self) -> None:
        """Higher levels should leave fewer distinct channel values."""
        values = np.arange(256, dtype=np.uint8)
        pixels = np.stack([values, values, values, values], axis=-1)[None, :, :]
        counts = [
            len(np.unique(quantize_pixels(pixels, level)[..., 0]))
            for level in (ReductionLevel.LOW, ReductionLevel.MEDIUM, ReductionLevel.HIGH)
        ]
        assert counts[0] > counts[1] > counts[2]

    def test_rejects_rgb_buffer(self) -> None:
        """Buffers without an alpha channel should be rejected."""
        with pytest.raises(InvalidInputError, match="RGBA"):
            quantize_pixels(np.zeros((2, 2, 3), dtype=np.uint8), "low")
