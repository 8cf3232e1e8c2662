"""Pydantic models for TOTP parameter sets and provisioning URIs."""

from __future__ import annotations

from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chronotp.config import HashAlgorithm, Settings
from chronotp.validation import check_digits, check_period

URI_PREFIX = "otpauth://totp/"


class TotpParameters(BaseModel):
    """Time step, code length and HMAC algorithm shared by generator and builder.

    Field defaults are fixed at 30000 ms, 6 digits, SHA1. ``from_settings()``
    (used whenever a function receives ``params=None``) reads the
    ``CHRONOTP_*`` overrides instead, so the two only agree while those are unset.
    """

    model_config = ConfigDict(frozen=True)

    time_step_millis: int = Field(default=30_000, gt=0)
    digits: int = 6
    algorithm: HashAlgorithm = HashAlgorithm.SHA1

    @field_validator("digits")
    @classmethod
    def _digits(cls, v: int) -> int:
        return check_digits(v)

    @classmethod
    def from_settings(cls, s: Settings | None = None) -> TotpParameters:
        if s is None:
            from chronotp.config import settings

            s = settings
        return cls(
            time_step_millis=s.default_time_step_millis,
            digits=s.default_digits,
            algorithm=s.default_algorithm,
        )


class ProvisioningUri(BaseModel):
    """An otpauth://totp/ key URI.

    ``secret`` is already base32 text. Optional fields left as None are
    omitted so the authenticator app falls back to its own defaults.
    """

    model_config = ConfigDict(frozen=True)

    label: str
    secret: str
    issuer: str | None = None
    algorithm: HashAlgorithm | None = None
    digits: int | None = None
    period: int | None = None

    @field_validator("digits")
    @classmethod
    def _digits(cls, v: int | None) -> int | None:
        return v if v is None else check_digits(v)

    @field_validator("period")
    @classmethod
    def _period(cls, v: int | None) -> int | None:
        return v if v is None else check_period(v)

    def to_uri(self) -> str:
        # Field order is fixed: secret, issuer, algorithm, digits, period
        parts = [f"secret={self.secret}"]
        if self.issuer is not None:
            parts.append(f"issuer={quote(self.issuer, safe='')}")
        if self.algorithm is not None:
            parts.append(f"algorithm={self.algorithm.value}")
        if self.digits is not None:
            parts.append(f"digits={self.digits}")
        if self.period is not None:
            parts.append(f"period={self.period}")
        return f"{URI_PREFIX}{quote(self.label, safe=':@')}?{'&'.join(parts)}"
