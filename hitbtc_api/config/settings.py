from __future__ import annotations

import re
from pathlib import Path

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hitbtc_api.core.auth import Credentials
from hitbtc_api.core.client import API_ROOT
from hitbtc_api.core.coin import COIN_TABLES

_VERSIONED_PATH = re.compile(r"/api/(\d+)$")


class Settings(BaseSettings):
    """Central configuration object loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    public_key: str = Field(
        ...,
        alias="HITBTC_PUBLIC_KEY",
        validation_alias=AliasChoices("HITBTC_PUBLIC_KEY", "HITBTC_API_KEY"),
    )
    private_key: SecretStr = Field(
        ...,
        alias="HITBTC_PRIVATE_KEY",
        validation_alias=AliasChoices("HITBTC_PRIVATE_KEY", "HITBTC_SECRET_KEY"),
    )
    # derived from api_version when unset
    base_url: str | None = Field(None, alias="HITBTC_BASE_URL")
    api_version: str = Field("2", alias="HITBTC_API_VERSION")
    timeout: float = Field(10.0, alias="HITBTC_TIMEOUT")

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str | None) -> str | None:
        return value.rstrip("/") if value else None

    @field_validator("api_version")
    @classmethod
    def _known_api_version(cls, value: str) -> str:
        if value not in COIN_TABLES:
            raise ValueError(f"Unsupported API version {value!r}; expected one of {sorted(COIN_TABLES)}")
        return value

    @model_validator(mode="after")
    def _base_url_matches_version(self) -> Settings:
        if self.base_url is None:
            self.base_url = f"{API_ROOT}/{self.api_version}"
            return self
        match = _VERSIONED_PATH.search(self.base_url)
        if match and match.group(1) != self.api_version:
            raise ValueError(
                f"HITBTC_BASE_URL targets API version {match.group(1)} "
                f"but HITBTC_API_VERSION is {self.api_version}"
            )
        return self

    def credentials(self) -> Credentials:
        return Credentials(self.public_key, self.private_key.get_secret_value())


def load_settings(env_path: str | Path | None = None) -> Settings:
    """Load settings from environment variables or .env file.

    Args:
        env_path: Optional path to .env file. If None, uses default .env file.

    Returns:
        Settings instance loaded from environment variables.
    """
    if env_path:
        load_dotenv(dotenv_path=env_path)
    else:
        load_dotenv()
    return Settings()
