"""Central configuration loaded from environment variables."""

from __future__ import annotations

from enum import StrEnum

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from chronotp.validation import check_digits, check_time_step


class HashAlgorithm(StrEnum):
    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @property
    def digest_size(self) -> int:
        """HMAC output length in bytes."""
        return _DIGEST_SIZES[self]


_DIGEST_SIZES = {
    HashAlgorithm.SHA1: 20,
    HashAlgorithm.SHA256: 32,
    HashAlgorithm.SHA512: 64,
}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CHRONOTP_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Code generation defaults (Google Authenticator compatible)
    default_time_step_millis: int = 30_000
    default_digits: int = 6
    default_algorithm: HashAlgorithm = HashAlgorithm.SHA1

    # QR rendering service
    qr_chart_url: str = "https://chart.googleapis.com/chart"

    @field_validator("default_digits")
    @classmethod
    def _digits(cls, v: int) -> int:
        return check_digits(v)

    @field_validator("default_time_step_millis")
    @classmethod
    def _time_step(cls, v: int) -> int:
        return check_time_step(v)


settings = Settings()
