"""Foreground detection and content bounding boxes."""

import numpy as np

from sketch_score.config import BACKGROUND_ALPHA_THRESHOLD, NEAR_WHITE_THRESHOLD
from sketch_score.models import ContentBounds, RasterImage


def is_background_pixel(
    r: int,
    g: int,
    b: int,
    a: int,
    alpha_threshold: int = BACKGROUND_ALPHA_THRESHOLD,
    near_white: int = NEAR_WHITE_THRESHOLD,
) -> bool:
    """Mostly transparent, or near-white on all three channels."""
    if a < alpha_threshold:
        return True
    return r >= near_white and g >= near_white and b >= near_white


def background_mask(
    rgba: np.ndarray,
    alpha_threshold: int = BACKGROUND_ALPHA_THRESHOLD,
    near_white: int = NEAR_WHITE_THRESHOLD,
) -> np.ndarray:
    """Vectorised ``is_background_pixel`` over an ``(H, W, 4)`` buffer."""
    transparent = rgba[..., 3] < alpha_threshold
    near_white_rgb = np.all(rgba[..., :3] >= near_white, axis=-1)
    return transparent | near_white_rgb


def count_foreground(
    rgba: np.ndarray,
    alpha_threshold: int = BACKGROUND_ALPHA_THRESHOLD,
    near_white: int = NEAR_WHITE_THRESHOLD,
) -> int:
    """Number of non-background pixels."""
    return int((~background_mask(rgba, alpha_threshold, near_white)).sum())


def find_content_bounds(
    raster: RasterImage,
    alpha_threshold: int = BACKGROUND_ALPHA_THRESHOLD,
    near_white: int = NEAR_WHITE_THRESHOLD,
) -> ContentBounds | None:
    """
    Tight bounding box of foreground pixels.

    Returns None when every pixel is background. Bounds are inclusive on
    both ends.
    """
    foreground = ~background_mask(raster.rgba, alpha_threshold, near_white)
    rows = np.flatnonzero(foreground.any(axis=1))
    if rows.size == 0:
        return None
    cols = np.flatnonzero(foreground.any(axis=0))
    return ContentBounds(
        min_x=int(cols[0]),
        min_y=int(rows[0]),
        max_x=int(cols[-1]),
        max_y=int(rows[-1]),
    )
