"""Pool normalization and caching."""

from traxr.services.pools.cache import PoolCache
from traxr.services.pools.normalizer import normalize_pool

__all__ = [
    "PoolCache",
    "normalize_pool",
]
