"""
Sobel edge similarity.

Edge magnitudes come from the 3x3 Sobel pair

    Gx = [[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]]
    Gy = [[-1, -2, -1], [0, 0, 0], [1, 2, 1]]

capped at 255 and truncated to uint8. The one-pixel border is left at 0.
Edge maps are then compared with the same Jaccard rule as the pixel
metric.
"""

import cv2
import numpy as np

from sketch_score.config import EDGE_THRESHOLD
from sketch_score.metrics.overlap import jaccard_similarity


def sobel_magnitude(gray: np.ndarray) -> np.ndarray:
    """Gradient magnitude map (uint8) of a grayscale image."""
    height, width = gray.shape
    edges = np.zeros((height, width), dtype=np.uint8)
    if height < 3 or width < 3:
        return edges

    src = gray.astype(np.float64)
    grad_x = cv2.Sobel(src, cv2.CV_64F, 1, 0, ksize=3)
    grad_y = cv2.Sobel(src, cv2.CV_64F, 0, 1, ksize=3)
    magnitude = np.minimum(255.0, np.sqrt(grad_x ** 2 + grad_y ** 2))

    edges[1:-1, 1:-1] = magnitude[1:-1, 1:-1].astype(np.uint8)
    return edges


def edge_mask(edges: np.ndarray, threshold: int = EDGE_THRESHOLD) -> np.ndarray:
    """Pixels with a significant edge response."""
    return edges > threshold


def edge_similarity(
    user_gray: np.ndarray,
    target_gray: np.ndarray,
    threshold: int = EDGE_THRESHOLD,
) -> float:
    """Jaccard index of the two Sobel edge maps, as a percentage."""
    user_edges = edge_mask(sobel_magnitude(user_gray), threshold)
    target_edges = edge_mask(sobel_magnitude(target_gray), threshold)
    return jaccard_similarity(user_edges, target_edges)
