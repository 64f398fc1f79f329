"""Explicit LRU cache of normalized target logos."""

from __future__ import annotations

import hashlib
import logging
from collections import OrderedDict
from typing import Dict, Tuple

from sketch_score.config import TARGET_CACHE_SIZE, ScoringConfig, default_config
from sketch_score.imaging.normalizer import normalize_image
from sketch_score.models import NormalizedImage

logger = logging.getLogger(__name__)

CacheKey = Tuple[str, ScoringConfig]


def target_digest(image_bytes: bytes) -> str:
    """Stable content hash of encoded image bytes."""
    return hashlib.sha1(image_bytes).hexdigest()


class TargetCache:
    """
    Normalized reference images keyed by content hash and scoring config.

    Repeated scoring against the same daily logo skips the decode and
    normalization of the target. Owned by whoever creates it; pass it to
    ``DrawingScorer`` to enable caching.
    """

    def __init__(self, capacity: int = TARGET_CACHE_SIZE):
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.capacity = capacity
        self._entries: "OrderedDict[CacheKey, NormalizedImage]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def get_or_normalize(self, image_bytes: bytes, config: ScoringConfig | None = None) -> NormalizedImage:
        """Return the cached normalization of ``image_bytes`` or compute it."""
        config = config or default_config()
        key = (target_digest(image_bytes), config)

        cached = self._entries.get(key)
        if cached is not None:
            self.hits += 1
            self._entries.move_to_end(key)
            return cached

        self.misses += 1
        normalized = normalize_image(image_bytes, config)
        self._entries[key] = normalized
        if len(self._entries) > self.capacity:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted target %s from cache", evicted[0][:12])
        return normalized

    def invalidate(self, image_bytes: bytes) -> int:
        """Drop every entry for ``image_bytes``; returns how many were removed."""
        digest = target_digest(image_bytes)
        stale = [key for key in self._entries if key[0] == digest]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def clear(self) -> None:
        """Remove all entries and reset counters."""
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def stats(self) -> Dict[str, int]:
        """Hit/miss counters and current size."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "size": len(self._entries),
            "capacity": self.capacity,
        }
