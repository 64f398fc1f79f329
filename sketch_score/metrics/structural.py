"""
Structural similarity (SSIM) between normalized RGBA canvases.

Uses scikit-image's windowed SSIM (Wang et al., 2004) per channel and
reports the mean as a percentage.
"""

import numpy as np
from skimage.metrics import structural_similarity

from sketch_score.config import SSIM_WINDOW_SIZE


def ssim_score(
    user_rgba: np.ndarray,
    target_rgba: np.ndarray,
    window_size: int = SSIM_WINDOW_SIZE,
) -> float:
    """
    Mean SSIM x 100 over all four channels.

    Args:
        user_rgba: (H, W, 4) uint8 canvas
        target_rgba: (H, W, 4) uint8 canvas of the same shape
        window_size: Odd side length of the sliding window; shrunk to fit
            small canvases

    Returns:
        Score in [0, 100]. Negative SSIM (anti-correlated structure) is
        reported as 0.
    """
    if user_rgba.shape != target_rgba.shape:
        raise ValueError(f"Image shapes differ: {user_rgba.shape} vs {target_rgba.shape}")

    side = min(user_rgba.shape[0], user_rgba.shape[1])
    win_size = min(window_size, side if side % 2 else side - 1)

    mssim = structural_similarity(
        user_rgba,
        target_rgba,
        win_size=win_size,
        data_range=255,
        channel_axis=-1,
    )
    return float(np.clip(mssim * 100.0, 0.0, 100.0))
