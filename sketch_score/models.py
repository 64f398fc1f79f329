"""
Value types for the scoring pipeline.

Raster-side types (``RasterImage``, ``ContentBounds``, ``NormalizedImage``)
are frozen dataclasses wrapping numpy buffers; each pipeline stage builds
a new one instead of mutating its input.

Result-side types (``ScoreBreakdown``, ``ScoringResult``) are pydantic
models so they validate their ranges and serialise to the camelCase JSON
consumed by the game client:

    {"totalScore": 87, "breakdown": {"pixelScore": ..., ...}}
"""

from dataclasses import dataclass
from typing import Annotated, Any, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_Percent = Annotated[float, Field(ge=0.0, le=100.0)]


@dataclass(frozen=True, eq=False)
class RasterImage:
    """Decoded RGBA raster, row-major ``(height, width, 4)`` uint8."""
    width: int
    height: int
    rgba: np.ndarray

    def __post_init__(self):
        if self.rgba.shape != (self.height, self.width, 4):
            raise ValueError(
                f"RGBA buffer shape {self.rgba.shape} does not match "
                f"{self.width}x{self.height}x4"
            )
        if self.rgba.dtype != np.uint8:
            raise ValueError(f"RGBA buffer must be uint8, got {self.rgba.dtype}")

    @classmethod
    def blank(cls, width: int, height: int) -> "RasterImage":
        """Opaque white raster."""
        return cls(width, height, np.full((height, width, 4), 255, dtype=np.uint8))

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class ContentBounds:
    """Inclusive bounding box of foreground pixels."""
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1


@dataclass(frozen=True, eq=False)
class NormalizedImage:
    """Content centred on a ``size x size`` white canvas."""
    size: int
    gray: np.ndarray
    rgba: np.ndarray
    active_pixel_count: int
    bounds: Optional[ContentBounds] = None
    offset: Optional[tuple[int, int]] = None

    @property
    def content_density(self) -> float:
        """Fraction of canvas pixels that are foreground."""
        return self.active_pixel_count / float(self.size * self.size)


class ScoreBreakdown(BaseModel):
    """Per-metric scores and their weighted contributions, 2-decimal rounded."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    pixel_score: _Percent = 0.0
    ssim_score: _Percent = 0.0
    edge_score: _Percent = 0.0
    pixel_contribution: Annotated[float, Field(ge=0.0)] = 0.0
    ssim_contribution: Annotated[float, Field(ge=0.0)] = 0.0
    edge_contribution: Annotated[float, Field(ge=0.0)] = 0.0

    @classmethod
    def zeroed(cls) -> "ScoreBreakdown":
        """Breakdown reported for drawings rejected by the density gate."""
        return cls()

    @property
    def is_zeroed(self) -> bool:
        return all(v == 0 for v in self.model_dump().values())


class ScoringResult(BaseModel):
    """Final score (integer 0-100) plus its breakdown."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    total_score: Annotated[int, Field(ge=0, le=100)]
    breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)
    insufficient_content: bool = Field(default=False, exclude=True)

    def to_response(self) -> dict[str, Any]:
        """Payload shape returned to the game client."""
        return {
            "score": self.total_score,
            "breakdown": self.breakdown.model_dump(by_alias=True),
        }
