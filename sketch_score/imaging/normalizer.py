"""
Canvas normalization for scoring.

Crops a raster to its drawn content and re-centres that content on a
clean white square canvas, so a small doodle in a corner and the same
doodle in the middle of the page compare equal.
"""

import logging

import numpy as np
from PIL import Image

from sketch_score.config import ScoringConfig, default_config
from sketch_score.imaging.bounds import count_foreground, find_content_bounds
from sketch_score.imaging.decoder import ImageDecoder
from sketch_score.models import ContentBounds, NormalizedImage, RasterImage

logger = logging.getLogger(__name__)

# ITU-R BT.601 luma weights
_LUMA_R = 0.299
_LUMA_G = 0.587
_LUMA_B = 0.114


def centering_offset(size: int, content_width: int, content_height: int) -> tuple[int, int]:
    """Top-left position that centres content on the canvas (floor division)."""
    return (size - content_width) // 2, (size - content_height) // 2


def to_grayscale(rgba: np.ndarray) -> np.ndarray:
    """
    Luminance channel of an RGBA buffer, rounded half-up to uint8.

    Alpha is ignored; callers composite onto white first.
    """
    rgb = rgba[..., :3].astype(np.float64)
    luma = _LUMA_R * rgb[..., 0] + _LUMA_G * rgb[..., 1] + _LUMA_B * rgb[..., 2]
    return np.clip(np.floor(luma + 0.5), 0, 255).astype(np.uint8)


def crop_to_bounds(raster: RasterImage, bounds: ContentBounds) -> RasterImage:
    """Copy of the raster restricted to ``bounds``."""
    cropped = raster.rgba[bounds.min_y:bounds.max_y + 1, bounds.min_x:bounds.max_x + 1].copy()
    return RasterImage(width=bounds.width, height=bounds.height, rgba=cropped)


def center_on_canvas(content: RasterImage, size: int) -> tuple[np.ndarray, tuple[int, int]]:
    """
    Alpha-composite content (source-over) onto an opaque white canvas.

    Returns:
        (canvas RGBA buffer, (offset_x, offset_y))
    """
    offset = centering_offset(size, content.width, content.height)
    canvas = Image.new("RGBA", (size, size), (255, 255, 255, 255))
    canvas.alpha_composite(ImageDecoder.to_image(content), dest=offset)
    return np.array(canvas, dtype=np.uint8), offset


def normalize_raster(raster: RasterImage, config: ScoringConfig | None = None) -> NormalizedImage:
    """
    Crop a raster to its content and centre it on a ``canvas_size`` canvas.

    The active pixel count is taken from the final canvas, after
    compositing, not from the source raster.
    """
    config = config or default_config()
    size = config.canvas_size

    if (raster.width, raster.height) != (size, size):
        raster = ImageDecoder.resize(raster, size)

    bounds = find_content_bounds(raster, config.background_alpha, config.near_white)

    if bounds is None:
        logger.debug("No content found, using blank %dx%d canvas", size, size)
        canvas = RasterImage.blank(size, size).rgba
        return NormalizedImage(
            size=size,
            gray=to_grayscale(canvas),
            rgba=canvas,
            active_pixel_count=0,
        )

    logger.debug(
        "Content bounds (%d, %d) to (%d, %d), %dx%d",
        bounds.min_x, bounds.min_y, bounds.max_x, bounds.max_y, bounds.width, bounds.height,
    )
    cropped = crop_to_bounds(raster, bounds)
    canvas, offset = center_on_canvas(cropped, size)
    active = count_foreground(canvas, config.background_alpha, config.near_white)
    logger.debug("Centering offset %s, %d active pixels", offset, active)

    return NormalizedImage(
        size=size,
        gray=to_grayscale(canvas),
        rgba=canvas,
        active_pixel_count=active,
        bounds=bounds,
        offset=offset,
    )


def normalize_image(image_bytes: bytes, config: ScoringConfig | None = None) -> NormalizedImage:
    """
    Decode encoded image bytes and normalize them for scoring.

    Raises:
        DecodeError: If the bytes are not a readable image
    """
    config = config or default_config()
    raster = ImageDecoder.load_from_bytes(image_bytes, size=config.canvas_size)
    return normalize_raster(raster, config)
