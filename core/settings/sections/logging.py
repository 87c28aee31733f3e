from pydantic_settings import BaseSettings


class LoggingSettings(BaseSettings):
    """
    Logging settings.
    Loaded automatically from .env with prefix LOG_*
    """

    level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "LOG_",
        "extra": "ignore",
    }
