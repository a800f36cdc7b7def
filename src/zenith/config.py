from typing import Literal

from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    session_secret_key: str
    session_algorithm: Literal["HS256"] = "HS256"  # Tokens are signed with the shared secret only
    session_ttl_days: int = 7
    cookie_secure: bool = False  # Set to True in production with HTTPS
    cors_origins: list[str] = []
    progress_sync_delay: float = 1.0  # Seconds of quiet before a day's progress is written
    default_language: str = "es"
    llm_model: str = "gemini/gemini-2.0-flash"
    llm_api_key: str = ""

    model_config = {
        "env_file": [".env"],
        "env_prefix": "ZENITH_",
        "extra": "ignore",
    }
