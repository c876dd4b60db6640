# pta_dashboard/utils/cache_invalidation.py
"""Cache invalidation utilities."""
from ..core.cache import cache_manager

STATISTICS_KEY = cache_manager.make_key("statistics")


async def invalidate_statistics_cache():
    """Drop the cached dashboard aggregate after any mutation."""
    await cache_manager.delete(STATISTICS_KEY)


async def invalidate_all_cache():
    """Clear every key this service owns."""
    await cache_manager.delete_pattern(cache_manager.make_key("*"))
