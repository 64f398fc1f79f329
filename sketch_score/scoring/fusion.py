"""
Score fusion for multi-metric drawing similarity.

Combines the pixel, SSIM and edge scores with fixed weights after
applying the pixel leniency factor, and implements the content-density
gate that rejects near-empty drawings.
"""

import math

from sketch_score.config import ScoringConfig
from sketch_score.models import ScoreBreakdown, ScoringResult


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round halves away from zero for non-negative values (0.125 -> 0.13)."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def apply_leniency(raw_score: float, factor: float) -> float:
    """Scale a raw percentage by ``factor``, capped at 100."""
    return min(100.0, raw_score * factor)


def passes_density_gate(active_pixel_count: int, canvas_size: int, min_density: float) -> bool:
    """True when the drawing covers at least ``min_density`` of the canvas."""
    density = active_pixel_count / float(canvas_size * canvas_size)
    return not density < min_density


def insufficient_content_result(config: ScoringConfig) -> ScoringResult:
    """Result for drawings rejected by the density gate."""
    return ScoringResult(
        total_score=config.insufficient_content_score,
        breakdown=ScoreBreakdown.zeroed(),
        insufficient_content=True,
    )


def fuse_scores(
    pixel_score: float,
    ssim_score: float,
    edge_score: float,
    config: ScoringConfig,
) -> ScoringResult:
    """
    Weighted sum fusion of the three metric scores.

    ``pixel_score`` is the post-leniency pixel score. The total is rounded
    to an integer; every breakdown field is rounded to 2 decimals.
    """
    pixel_contribution = config.pixel_weight * pixel_score
    ssim_contribution = config.ssim_weight * ssim_score
    edge_contribution = config.edge_weight * edge_score
    final_score = pixel_contribution + ssim_contribution + edge_contribution

    total = int(round_half_up(min(100.0, max(0.0, final_score))))

    return ScoringResult(
        total_score=total,
        breakdown=ScoreBreakdown(
            pixel_score=round_half_up(pixel_score, 2),
            ssim_score=round_half_up(ssim_score, 2),
            edge_score=round_half_up(edge_score, 2),
            pixel_contribution=round_half_up(pixel_contribution, 2),
            ssim_contribution=round_half_up(ssim_contribution, 2),
            edge_contribution=round_half_up(edge_contribution, 2),
        ),
    )
