from pydantic_settings import BaseSettings


class AuthSettings(BaseSettings):
    """
    Bearer token settings.
    Loaded automatically from .env with prefix AUTH_*
    """

    secret_key: str = "change-me"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "AUTH_",
        "extra": "ignore",
    }
