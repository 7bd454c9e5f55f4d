"""Configuration system using pydantic-settings with environment variable loading."""

from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import soupsieve
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TelegramSettings(BaseSettings):
    """Telegram bot credentials and destination channel.

    Both the token and the channel id are required; a missing value fails
    validation at startup.
    """

    model_config = SettingsConfigDict(
        env_prefix="TELEGRAM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    bot_token: SecretStr
    channel_id: str
    api_url: str = "https://api.telegram.org"

    @field_validator("bot_token")
    @classmethod
    def _token_not_blank(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("TELEGRAM_BOT_TOKEN must not be empty")
        return value

    @field_validator("channel_id")
    @classmethod
    def _channel_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("TELEGRAM_CHANNEL_ID must not be empty")
        return value


class SourceSettings(BaseSettings):
    """Exchange-rate page location, HTML contract and polling cadence."""

    model_config = SettingsConfigDict(
        env_prefix="SOURCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url: str = "https://www.rico.ge/ka"
    row_selector: str = "table tbody tr"  # first match is the USD row
    cell_class: str = "currency-rate"  # buy cell first, sell cell second
    request_timeout: float = Field(default=10.0, gt=0)  # seconds
    poll_interval: float = Field(default=60.0, gt=0)  # seconds between checks
    timezone: str = "Asia/Tbilisi"

    @field_validator("row_selector")
    @classmethod
    def _valid_selector(cls, value: str) -> str:
        try:
            soupsieve.compile(value)
        except soupsieve.SelectorSyntaxError as exc:
            raise ValueError(f"invalid CSS selector {value!r}: {exc}") from exc
        return value

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown time zone: {value!r}") from exc
        return value

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"
    telegram: TelegramSettings = Field(default_factory=TelegramSettings)
    source: SourceSettings = Field(default_factory=SourceSettings)
