"""
Image cache keyed by path.

Entries are decoded lazily on first ``load()`` and kept for the rest of the
run: there is no eviction and no invalidation. The engine owns one cache for
backgrounds and one for sprites; rendering code asks them for pixels.
"""
from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Optional

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame  # noqa: E402


logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    surface: Any  # pygame.Surface unless a custom loader says otherwise
    path: str
    width: int = 0
    height: int = 0
    load_time: float = 0.0
    last_access: float = field(default_factory=time.time)
    access_count: int = 0


@dataclass
class CacheStats:
    entries: int = 0
    hits: int = 0
    misses: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


def default_loader(path: str) -> Any:
    """Decode an image file with pygame (no display needed)."""
    return pygame.image.load(path)


class ImageCache:
    """
    Usage:
        cache = ImageCache(base_dir="assets")
        surf = cache.load("bg/classroom.png")
        if cache.has("bg/classroom.png"):
            ...
    """

    def __init__(
        self,
        loader: Optional[Callable[[str], Any]] = None,
        base_dir: Optional[str] = None,
    ) -> None:
        self._loader = loader or default_loader
        self._base_dir = base_dir
        self._cache: Dict[str, CacheEntry] = {}
        self._hits = 0
        self._misses = 0

    def resolve(self, path: str) -> str:
        p = Path(path)
        if self._base_dir and not p.is_absolute():
            return str(Path(self._base_dir) / p)
        return str(p)

    def load(self, path: str) -> Any:
        """Return the decoded image for ``path``, decoding it on first use."""
        entry = self._cache.get(path)
        if entry is not None:
            self._hits += 1
            entry.last_access = time.time()
            entry.access_count += 1
            return entry.surface

        start = time.time()
        resolved = self.resolve(path)
        surf = self._loader(resolved)
        try:
            w, h = surf.get_size()
        except AttributeError:
            w, h = 0, 0
        self._misses += 1
        self._cache[path] = CacheEntry(
            surface=surf,
            path=path,
            width=w,
            height=h,
            load_time=time.time() - start,
            access_count=1,
        )
        logger.debug(f"decoded {resolved} ({w}x{h})")
        return surf

    def has(self, path: str) -> bool:
        return path in self._cache

    def get(self, path: str) -> Optional[Any]:
        """Cached image without decoding, or None."""
        entry = self._cache.get(path)
        return entry.surface if entry else None

    def __contains__(self, path: str) -> bool:
        return self.has(path)

    def __len__(self) -> int:
        return len(self._cache)

    def get_stats(self) -> CacheStats:
        return CacheStats(entries=len(self._cache), hits=self._hits, misses=self._misses)
