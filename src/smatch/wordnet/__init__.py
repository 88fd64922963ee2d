"""WordNet relation cache builder and reader."""

from __future__ import annotations

from .cache import (
    RelationCache,
    WordNetCacheError,
    create_wordnet_caches,
    load_multiwords,
)

__all__ = ["RelationCache", "WordNetCacheError", "create_wordnet_caches", "load_multiwords"]
