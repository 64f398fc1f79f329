"""
Input checks run before any decoding.

Rejects missing or empty image payloads and unusable canvas sizes so that
the numeric pipeline only ever sees well-formed requests.
"""

import numbers
from typing import Any

from sketch_score.config import MIN_CANVAS_SIZE


class InputValidationError(ValueError):
    """Raised when a scoring request is missing data or is malformed."""

    def __init__(self, message: str, field: str):
        super().__init__(message)
        self.field = field


def validate_image_payload(payload: Any, field: str) -> bytes:
    """Ensure ``payload`` is a non-empty bytes-like buffer and return it as bytes."""
    if payload is None:
        raise InputValidationError(f"Missing {field}", field=field)
    if isinstance(payload, str):
        raise InputValidationError(
            f"{field} must be raw image bytes, not text (use load_from_data_url for data URLs)",
            field=field,
        )
    if not isinstance(payload, (bytes, bytearray, memoryview)):
        raise InputValidationError(
            f"{field} must be bytes-like, got {type(payload).__name__}",
            field=field,
        )
    data = bytes(payload)
    if not data:
        raise InputValidationError(f"Empty {field}", field=field)
    return data


def validate_data_url(payload: Any, field: str) -> str:
    """Ensure ``payload`` is a non-blank string."""
    if payload is None:
        raise InputValidationError(f"Missing {field}", field=field)
    if not isinstance(payload, str):
        raise InputValidationError(
            f"{field} must be a string, got {type(payload).__name__}",
            field=field,
        )
    if not payload.strip():
        raise InputValidationError(f"Empty {field}", field=field)
    return payload


def validate_canvas_size(size: Any) -> int:
    """Canvas size must be an integer of at least ``MIN_CANVAS_SIZE``."""
    if isinstance(size, bool) or not isinstance(size, numbers.Integral):
        raise InputValidationError(
            f"Canvas size must be an integer, got {size!r}", field="size"
        )
    if size < MIN_CANVAS_SIZE:
        raise InputValidationError(
            f"Canvas size {size} is below minimum {MIN_CANVAS_SIZE}", field="size"
        )
    return int(size)
