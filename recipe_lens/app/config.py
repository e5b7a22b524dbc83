from __future__ import annotations

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8-sig",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    GEMINI_API_KEY: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY"),
    )
    GEMINI_MODEL: str = "gemini-2.5-flash"
    MODEL_TIMEOUT_SECONDS: float = Field(default=120.0, gt=0)
    OEMBED_TIMEOUT_SECONDS: float = Field(default=5.0, gt=0)
    STRICT_URL_VALIDATION: bool = False
    APP_ENV: str = "local"
    FRONTEND_CORS_ORIGINS: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:3000"],
    )

    @property
    def gemini_api_key(self) -> str | None:
        if self.GEMINI_API_KEY is None:
            return None
        return self.GEMINI_API_KEY.get_secret_value() or None
