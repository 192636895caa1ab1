from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CLOUDSAVE_",
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    addr: str = "127.0.0.1:9000"
    secure: bool = False
    timeout: float | None = None

    @field_validator("addr", mode="before")
    @classmethod
    def _strip_addr(cls, value: object) -> str:
        text = str(value or "").strip()
        if not text:
            raise ValueError("CLOUDSAVE_ADDR must not be empty")
        return text

    @field_validator("timeout", mode="before")
    @classmethod
    def _parse_timeout(cls, value: object) -> float | None:
        if value is None:
            return None
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
        timeout = float(value)
        if timeout <= 0:
            raise ValueError("CLOUDSAVE_TIMEOUT must be a positive number of seconds")
        return timeout


settings = Settings()
