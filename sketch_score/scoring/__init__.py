"""Score aggregation and the top-level scoring entry point."""

from sketch_score.scoring.cache import TargetCache
from sketch_score.scoring.scorer import DrawingScorer, score

__all__ = ["DrawingScorer", "TargetCache", "score"]
