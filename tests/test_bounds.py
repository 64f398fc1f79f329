"""Tests for the background predicate and content bounds."""
import numpy as np
import pytest

from sketch_score.imaging.bounds import (
    background_mask,
    count_foreground,
    find_content_bounds,
    is_background_pixel,
)
from sketch_score.models import RasterImage


@pytest.mark.parametrize("pixel, expected", [
    ((0, 0, 0, 127), True),        # mostly transparent
    ((0, 0, 0, 128), False),
    ((240, 240, 240, 255), True),  # near-white
    ((239, 240, 240, 255), False),
    ((240, 240, 239, 255), False),
    ((255, 255, 255, 0), True),
    ((12, 200, 90, 255), False),
])
def test_is_background_pixel(pixel, expected):
    assert is_background_pixel(*pixel) is expected


def test_background_mask_matches_scalar_predicate():
    rng = np.random.default_rng(7)
    rgba = rng.integers(0, 256, size=(16, 16, 4), dtype=np.uint8)
    mask = background_mask(rgba)
    for y in range(16):
        for x in range(16):
            assert mask[y, x] == is_background_pixel(*(int(v) for v in rgba[y, x]))


def test_blank_raster_has_no_bounds():
    assert find_content_bounds(RasterImage.blank(32, 32)) is None


def test_transparent_raster_has_no_bounds(rgba_factory):
    rgba = rgba_factory(32, 32, background=(0, 0, 0, 0))
    assert find_content_bounds(RasterImage(32, 32, rgba)) is None


def test_bounds_are_inclusive(rgba_factory):
    rgba = rgba_factory(32, 24)
    rgba[7, 3] = (0, 0, 0, 255)
    rgba[2, 10] = (200, 10, 10, 255)
    bounds = find_content_bounds(RasterImage(32, 24, rgba))
    assert (bounds.min_x, bounds.min_y, bounds.max_x, bounds.max_y) == (3, 2, 10, 7)
    assert bounds.width == 8
    assert bounds.height == 6


def test_single_pixel_bounds(rgba_factory):
    rgba = rgba_factory(10, 10, rects=[(9, 9, 1, 1)])
    bounds = find_content_bounds(RasterImage(10, 10, rgba))
    assert (bounds.min_x, bounds.min_y, bounds.max_x, bounds.max_y) == (9, 9, 9, 9)
    assert bounds.width == bounds.height == 1


def test_custom_thresholds(rgba_factory):
    rgba = rgba_factory(8, 8, rects=[(2, 2, 2, 2)], color=(230, 230, 230, 255))
    raster = RasterImage(8, 8, rgba)
    assert find_content_bounds(raster) is not None
    assert find_content_bounds(raster, near_white=220) is None


def test_count_foreground(rgba_factory):
    rgba = rgba_factory(16, 16, rects=[(0, 0, 3, 5)])
    assert count_foreground(rgba) == 15
