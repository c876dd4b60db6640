# pta_dashboard/core/config.py
"""Application configuration using Pydantic."""
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str
    redis_url: str = 'redis://localhost:6379/0'

    app_version: str = '1.0.0'
    environment: str = 'development'
    log_level: str = 'info'
    allowed_origins: List[str] = ['*']

    # Cache
    cache_enabled: bool = True
    statistics_cache_ttl: int = 300

    # Relinking a student that already has a parent: reject or move the link
    link_policy: Literal['fail', 'replace'] = 'fail'
    collection_target: Optional[Decimal] = None

    # PostgreSQL pool
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_pool_recycle: int = 1800

    model_config = {
        'env_file': '.env',
        'extra': 'ignore'
    }


settings = Settings()
