"""
Freehand drawing vs. reference logo similarity scoring.

Re-exports the key entry points so consumers can write:
    from sketch_score import score, DrawingScorer, ScoringResult
"""

from sketch_score.config import ScoringConfig
from sketch_score.imaging.decoder import DecodeError, ImageDecoder
from sketch_score.models import (
    ContentBounds,
    NormalizedImage,
    RasterImage,
    ScoreBreakdown,
    ScoringResult,
)
from sketch_score.scoring.cache import TargetCache
from sketch_score.scoring.scorer import DrawingScorer, score
from sketch_score.validation import InputValidationError

__version__ = "0.1.0"

__all__ = [
    "ContentBounds",
    "DecodeError",
    "DrawingScorer",
    "ImageDecoder",
    "InputValidationError",
    "NormalizedImage",
    "RasterImage",
    "ScoreBreakdown",
    "ScoringConfig",
    "ScoringResult",
    "TargetCache",
    "score",
]
