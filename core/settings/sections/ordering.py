from pydantic import Field
from pydantic_settings import BaseSettings


class OrderingSettings(BaseSettings):
    """
    Retry settings for order placement and delivery transitions.
    Loaded automatically from .env with prefix ORDERING_*
    """

    max_attempts: int = Field(default=3, ge=1)
    backoff_seconds: float = Field(default=0.0, ge=0.0)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "ORDERING_",
        "extra": "ignore",
    }
