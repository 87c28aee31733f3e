from typing import Optional

from pydantic_settings import BaseSettings


class DatabaseSettings(BaseSettings):
    """
    Database connection settings.
    Loaded automatically from .env with prefix DB_*
    """

    database_url: str = "sqlite+aiosqlite:///./ecommerce.db"

    # Connection pool settings (ignored by SQLite)
    pool_size: int = 10
    max_overflow: int = 20
    pool_timeout: int = 30
    pool_recycle: int = 3600  # 1 hour

    # e.g. "REPEATABLE READ" on PostgreSQL
    isolation_level: Optional[str] = None

    # Echo SQL (for debugging)
    echo_sql: bool = False

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "DB_",
        "extra": "ignore",
    }
