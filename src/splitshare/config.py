from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SPLITSHARE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    log_level: str = Field("INFO")
    currency_symbol: str = Field("€")
    max_amount_cents: int = Field(100_000_000, gt=0)  # 1.000.000,00
    max_participants: int = Field(50, gt=0)
    max_name_length: int = Field(40, gt=0)
    max_group_name_length: int = Field(80, gt=0)
    max_description_length: int = Field(120, ge=0)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
