"""Application configuration."""

from typing import Annotated, Any, Literal
from urllib.parse import urlparse

from pydantic import BeforeValidator, HttpUrl, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


def strip_trailing_slash(v: Any) -> Any:
    if isinstance(v, str):
        return v.strip().rstrip("/")
    return v


BaseURL = Annotated[str, BeforeValidator(strip_trailing_slash)]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Application
    PROJECT_NAME: str = "Aries JSTOR"
    VERSION: str = "1.0.0"
    SERVER_PORT: int = 8080
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: str = "INFO"

    # Sentry
    SENTRY_DSN: HttpUrl | None = None

    # JSTOR Forum (admin catalog)
    JSTOR_URL: BaseURL = "https://forum.jstor.org"
    JSTOR_PROJECT: str = ""
    JSTOR_EMAIL: str = ""
    JSTOR_PASSWORD: str = ""

    # Artstor (public discovery)
    JSTOR_PUBLIC_URL: BaseURL = "https://library.artstor.org"

    # Upstream calls
    UPSTREAM_TIMEOUT_SEC: float = 10.0
    STARTUP_LOGIN_ATTEMPTS: int = 3

    @computed_field
    @property
    def public_host(self) -> str:
        """Host name of the public API, sent as the ``authority`` header."""
        return urlparse(self.JSTOR_PUBLIC_URL).hostname or ""

    def missing_required(self) -> list[str]:
        """Names of required settings that are still empty."""
        return [
            name
            for name in ("JSTOR_PROJECT", "JSTOR_EMAIL", "JSTOR_PASSWORD")
            if not getattr(self, name)
        ]


settings = Settings()
