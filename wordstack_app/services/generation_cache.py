# File: wordstack_app/services/generation_cache.py
# In-memory TTL cache for LLM-generated content (articles, images).

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Hashable, Optional

from flask import current_app

from ..utils.time_utils import Clock, SystemClock

logger = logging.getLogger(__name__)


class _Miss:
    """Sentinel returned by :meth:`GenerationCache.get` when nothing is cached."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return 'MISS'


MISS = _Miss()


@dataclass
class CacheEntry:
    value: Any
    expires_at: float


class GenerationCache:
    """
    Process-local key/value store with per-entry expiry.

    Entries are evicted lazily: every ``get`` sweeps the whole map before the
    lookup, there is no background timer. Expiry uses the clock's monotonic
    reading so wall clock adjustments do not affect it.
    """

    def __init__(self, name: str = 'default', clock: Optional[Clock] = None):
        self.name = name
        self.clock = clock or SystemClock()
        self._entries: Dict[Hashable, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: Hashable):
        with self._lock:
            self._sweep_locked()
            entry = self._entries.get(key)
            if entry is None:
                return MISS
            return entry.value

    def set(self, key: Hashable, value: Any, ttl_seconds: float) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        with self._lock:
            self._entries[key] = CacheEntry(value=value, expires_at=self.clock.monotonic() + ttl_seconds)

    def sweep_expired(self) -> int:
        with self._lock:
            return self._sweep_locked()

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _sweep_locked(self) -> int:
        now = self.clock.monotonic()
        expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("GenerationCache[%s]: evicted %d expired entries", self.name, len(expired))
        return len(expired)


ARTICLE_CACHE = 'article_cache'
IMAGE_CACHE = 'image_cache'


def init_generation_caches(app, clock: Optional[Clock] = None) -> None:
    """Attach one named cache per use to ``app.extensions``."""
    for name in (ARTICLE_CACHE, IMAGE_CACHE):
        app.extensions[name] = GenerationCache(name=name, clock=clock)


def get_generation_cache(name: str) -> GenerationCache:
    return current_app.extensions[name]
