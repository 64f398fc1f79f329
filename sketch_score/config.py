"""
Configuration and constants for drawing-vs-logo scoring.

Contains:
- Canvas defaults
- Background / content / edge thresholds
- Metric weights and the pixel leniency factor
- Content-density gate

Every value can be overridden through the environment (or a ``.env``
file); ``ScoringConfig`` carries the values through the pipeline.
"""

import os
from typing import Annotated

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

# Load environment variables
load_dotenv()


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    return int(raw) if raw not in (None, "") else default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    return float(raw) if raw not in (None, "") else default


# Canvas
DEFAULT_CANVAS_SIZE = _env_int("SKETCH_SCORE_CANVAS_SIZE", 256)
MIN_CANVAS_SIZE = 3  # smallest canvas with a Sobel interior

# Background predicate (content bounds + active pixel count)
BACKGROUND_ALPHA_THRESHOLD = _env_int("SKETCH_SCORE_BACKGROUND_ALPHA", 128)   # alpha < value
NEAR_WHITE_THRESHOLD = _env_int("SKETCH_SCORE_NEAR_WHITE", 240)               # R, G, B >= value

# Metric thresholds
PIXEL_CONTENT_THRESHOLD = _env_int("SKETCH_SCORE_PIXEL_THRESHOLD", 220)  # gray < value
EDGE_THRESHOLD = _env_int("SKETCH_SCORE_EDGE_THRESHOLD", 15)             # magnitude > value
SSIM_WINDOW_SIZE = _env_int("SKETCH_SCORE_SSIM_WINDOW", 7)

# Aggregation
PIXEL_LENIENCY = _env_float("SKETCH_SCORE_PIXEL_LENIENCY", 1.5)
PIXEL_WEIGHT = _env_float("SKETCH_SCORE_PIXEL_WEIGHT", 0.70)
SSIM_WEIGHT = _env_float("SKETCH_SCORE_SSIM_WEIGHT", 0.00)
EDGE_WEIGHT = _env_float("SKETCH_SCORE_EDGE_WEIGHT", 0.30)

# Content-density gate
MIN_CONTENT_DENSITY = _env_float("SKETCH_SCORE_MIN_CONTENT_DENSITY", 0.005)  # 0.5% of canvas
INSUFFICIENT_CONTENT_SCORE = _env_int("SKETCH_SCORE_MINIMAL_SCORE", 1)

# Target cache
TARGET_CACHE_SIZE = _env_int("SKETCH_SCORE_TARGET_CACHE_SIZE", 32)

_Byte = Annotated[int, Field(ge=0, le=255)]
_Weight = Annotated[float, Field(ge=0.0)]


class ScoringConfig(BaseModel):
    """Tunable parameters for one scoring pipeline."""
    canvas_size: Annotated[int, Field(ge=MIN_CANVAS_SIZE)] = DEFAULT_CANVAS_SIZE
    background_alpha: _Byte = BACKGROUND_ALPHA_THRESHOLD
    near_white: _Byte = NEAR_WHITE_THRESHOLD
    pixel_threshold: _Byte = PIXEL_CONTENT_THRESHOLD
    edge_threshold: _Byte = EDGE_THRESHOLD
    ssim_window: Annotated[int, Field(ge=3)] = SSIM_WINDOW_SIZE
    pixel_leniency: Annotated[float, Field(ge=1.0)] = PIXEL_LENIENCY
    pixel_weight: _Weight = PIXEL_WEIGHT
    ssim_weight: _Weight = SSIM_WEIGHT
    edge_weight: _Weight = EDGE_WEIGHT
    min_content_density: Annotated[float, Field(ge=0.0, le=1.0)] = MIN_CONTENT_DENSITY
    insufficient_content_score: Annotated[int, Field(ge=0, le=100)] = INSUFFICIENT_CONTENT_SCORE

    model_config = {"frozen": True}

    @field_validator("ssim_window")
    @classmethod
    def validate_ssim_window(cls, v: int) -> int:
        """SSIM windows are centred, so the side must be odd."""
        if v % 2 == 0:
            raise ValueError("ssim_window must be odd")
        return v

    @model_validator(mode="after")
    def validate_weights(self) -> "ScoringConfig":
        """A zero total weight would pin every score to 0."""
        if self.pixel_weight + self.ssim_weight + self.edge_weight <= 0:
            raise ValueError("at least one metric weight must be positive")
        return self

    @property
    def weights(self) -> dict[str, float]:
        """Metric weights keyed by metric name."""
        return {
            "pixel": self.pixel_weight,
            "ssim": self.ssim_weight,
            "edge": self.edge_weight,
        }


def default_config() -> ScoringConfig:
    """Build a config from the environment-derived module defaults."""
    return ScoringConfig()
