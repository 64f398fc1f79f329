"""
Binary overlap similarity (Jaccard index).

Both images are reduced to boolean "has content" masks and compared with
intersection over union. Pixels that are background in both images do
not count towards the union.
"""

from dataclasses import dataclass

import numpy as np

from sketch_score.config import PIXEL_CONTENT_THRESHOLD


@dataclass(frozen=True)
class OverlapCounts:
    """Confusion counts between a user mask and a target mask."""
    true_positives: int    # both have content
    false_positives: int   # user only
    false_negatives: int   # target only

    @property
    def union(self) -> int:
        return self.true_positives + self.false_positives + self.false_negatives

    @property
    def jaccard_percent(self) -> float:
        """100 * TP / union; two empty masks are an exact match."""
        if self.union == 0:
            return 100.0
        return 100.0 * self.true_positives / self.union


def overlap_counts(user_mask: np.ndarray, target_mask: np.ndarray) -> OverlapCounts:
    """Count TP / FP / FN between two same-shape boolean masks."""
    if user_mask.shape != target_mask.shape:
        raise ValueError(f"Mask shapes differ: {user_mask.shape} vs {target_mask.shape}")
    user_mask = np.asarray(user_mask, dtype=bool)
    target_mask = np.asarray(target_mask, dtype=bool)
    return OverlapCounts(
        true_positives=int(np.count_nonzero(user_mask & target_mask)),
        false_positives=int(np.count_nonzero(user_mask & ~target_mask)),
        false_negatives=int(np.count_nonzero(~user_mask & target_mask)),
    )


def jaccard_similarity(user_mask: np.ndarray, target_mask: np.ndarray) -> float:
    """Jaccard index of two boolean masks as a percentage in [0, 100]."""
    return overlap_counts(user_mask, target_mask).jaccard_percent


def content_mask(gray: np.ndarray, threshold: int = PIXEL_CONTENT_THRESHOLD) -> np.ndarray:
    """Pixels dark enough to count as drawn."""
    return gray < threshold


def pixel_similarity(
    user_gray: np.ndarray,
    target_gray: np.ndarray,
    threshold: int = PIXEL_CONTENT_THRESHOLD,
) -> float:
    """Raw (pre-leniency) pixel score: Jaccard over thresholded grayscale."""
    return jaccard_similarity(content_mask(user_gray, threshold), content_mask(target_gray, threshold))
