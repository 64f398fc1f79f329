"""
Similarity metrics over normalized canvases: pixel overlap, SSIM, Sobel edges.
"""

from sketch_score.metrics.edges import edge_similarity, sobel_magnitude
from sketch_score.metrics.overlap import jaccard_similarity, pixel_similarity
from sketch_score.metrics.structural import ssim_score

__all__ = [
    "edge_similarity",
    "jaccard_similarity",
    "pixel_similarity",
    "sobel_magnitude",
    "ssim_score",
]
