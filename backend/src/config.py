from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "Filmoteca"
    DATABASE_URL: str

    # TMDB catalog
    TMDB_API_KEY: str
    TMDB_BASE_URL: str = "https://api.themoviedb.org/3"
    TMDB_IMAGE_BASE_URL: str = "https://image.tmdb.org/t/p/w500"
    TMDB_LANGUAGE: str = "pt-PT"
    TMDB_FALLBACK_LANGUAGE: str = "en-US"

    # Hosted identity provider (GoTrue-compatible)
    IDENTITY_URL: str
    IDENTITY_ANON_KEY: str
    IDENTITY_SERVICE_KEY: str
    # Where the emailed recovery link lands; provider default when unset
    PASSWORD_RESET_REDIRECT_URL: Optional[str] = None

    CORS_ORIGINS: list[str] = ["http://localhost:8080"]
    HTTP_TIMEOUT: float = 10.0
    MIN_PASSWORD_LENGTH: int = 6
    AUTH_RATE_LIMIT_PER_MINUTE: int = 10

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
