"""
Configuration management using pydantic-settings.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ckbselect.constants import DEFAULT_FEE_RATE, TOTAL_TRIES


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CKBSELECT_", env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )

    # Shannons per 1000 bytes
    fee_rate: int = Field(default=DEFAULT_FEE_RATE, ge=0)
    # Unset keeps long term fees at 0
    long_term_fee_rate: int | None = Field(default=None, ge=0)

    total_tries: int = Field(default=TOTAL_TRIES, ge=1)

    log_level: str = "INFO"


def get_settings() -> Settings:
    return Settings()
