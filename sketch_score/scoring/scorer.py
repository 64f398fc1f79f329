"""
Drawing-vs-logo similarity scoring.

Pipeline:
1. Validate and decode both images, resize to the scoring canvas
2. Crop each to its content and centre it on a white canvas
3. Reject near-empty drawings (content-density gate)
4. Compute pixel (Jaccard), SSIM and Sobel edge (Jaccard) scores
5. Apply pixel leniency and fuse with fixed weights
"""

import logging
from typing import Optional

from sketch_score.config import ScoringConfig, default_config
from sketch_score.imaging.decoder import ImageDecoder
from sketch_score.imaging.normalizer import normalize_image, normalize_raster
from sketch_score.metrics.edges import edge_similarity
from sketch_score.metrics.overlap import pixel_similarity
from sketch_score.metrics.structural import ssim_score
from sketch_score.models import NormalizedImage, ScoringResult
from sketch_score.scoring.cache import TargetCache
from sketch_score.scoring.fusion import (
    apply_leniency,
    fuse_scores,
    insufficient_content_result,
    passes_density_gate,
)
from sketch_score.validation import (
    validate_canvas_size,
    validate_data_url,
    validate_image_payload,
)

logger = logging.getLogger(__name__)


class DrawingScorer:
    """
    Score a freehand drawing against a reference logo (0-100).

    Stateless apart from the optional ``TargetCache``; one instance can be
    shared by every request that uses the same configuration.
    """

    def __init__(
        self,
        config: Optional[ScoringConfig] = None,
        target_cache: Optional[TargetCache] = None,
    ):
        self.config = config or default_config()
        self.target_cache = target_cache

    def score(self, user_image: bytes, target_image: bytes) -> ScoringResult:
        """
        Score encoded drawing bytes against encoded logo bytes.

        Raises:
            InputValidationError: If either payload is missing or empty
            DecodeError: If either payload is not a readable image
        """
        user_bytes = validate_image_payload(user_image, "drawing")
        target_bytes = validate_image_payload(target_image, "target logo")

        user = normalize_image(user_bytes, self.config)
        target = self._normalize_target(target_bytes)
        return self.score_normalized(user, target)

    def score_data_url(self, drawing_data: str, target_image: bytes) -> ScoringResult:
        """Score a base64 data-URL drawing (as sent by the canvas) against logo bytes."""
        drawing_data = validate_data_url(drawing_data, "drawing")
        target_bytes = validate_image_payload(target_image, "target logo")

        raster = ImageDecoder.load_from_data_url(drawing_data, size=self.config.canvas_size)
        user = normalize_raster(raster, self.config)
        target = self._normalize_target(target_bytes)
        return self.score_normalized(user, target)

    def score_normalized(self, user: NormalizedImage, target: NormalizedImage) -> ScoringResult:
        """Gate, measure and fuse two already-normalized canvases."""
        config = self.config
        if user.size != target.size:
            raise ValueError(f"Canvas sizes differ: {user.size} vs {target.size}")

        total_pixels = user.size * user.size
        logger.info(
            "Scoring %dx%d canvas: user content density %.2f%% (%d/%d pixels), minimum %.2f%%",
            user.size, user.size, user.content_density * 100,
            user.active_pixel_count, total_pixels, config.min_content_density * 100,
        )

        if not passes_density_gate(user.active_pixel_count, user.size, config.min_content_density):
            logger.info("Insufficient content, returning minimal score %d", config.insufficient_content_score)
            return insufficient_content_result(config)

        raw_pixel = pixel_similarity(user.gray, target.gray, config.pixel_threshold)
        pixel = apply_leniency(raw_pixel, config.pixel_leniency)
        ssim = ssim_score(user.rgba, target.rgba, config.ssim_window)
        edge = edge_similarity(user.gray, target.gray, config.edge_threshold)

        logger.debug(
            "Pixel %.2f%% raw -> %.2f%% (x%.2f leniency), SSIM %.2f%%, edge %.2f%%",
            raw_pixel, pixel, config.pixel_leniency, ssim, edge,
        )

        result = fuse_scores(pixel, ssim, edge, config)
        b = result.breakdown
        logger.info(
            "Final score %d (pixel %.2f + ssim %.2f + edge %.2f)",
            result.total_score, b.pixel_contribution, b.ssim_contribution, b.edge_contribution,
        )
        return result

    def _normalize_target(self, target_bytes: bytes) -> NormalizedImage:
        if self.target_cache is not None:
            return self.target_cache.get_or_normalize(target_bytes, self.config)
        return normalize_image(target_bytes, self.config)


def score(
    user_image: bytes,
    target_image: bytes,
    size: Optional[int] = None,
    config: Optional[ScoringConfig] = None,
) -> ScoringResult:
    """
    Score a drawing against a reference logo.

    Args:
        user_image: Encoded drawing bytes
        target_image: Encoded reference logo bytes
        size: Canvas side length; overrides ``config.canvas_size``
        config: Thresholds and weights (defaults from environment)

    Returns:
        ScoringResult with ``total_score`` in [0, 100] and a breakdown

    Raises:
        InputValidationError: Missing/empty payloads or a bad size
        DecodeError: If either payload is not a readable image
    """
    config = config or default_config()
    if size is not None:
        config = config.model_copy(update={"canvas_size": validate_canvas_size(size)})
    return DrawingScorer(config).score(user_image, target_image)
