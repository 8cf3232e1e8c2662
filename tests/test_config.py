"""Tests for configuration loading."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from chronotp.config import HashAlgorithm, Settings
from chronotp.models import TotpParameters


def test_settings_defaults():
    s = Settings(_env_file=None)
    assert s.default_time_step_millis == 30_000
    assert s.default_digits == 6
    assert s.default_algorithm == HashAlgorithm.SHA1
    assert s.qr_chart_url == "https://chart.googleapis.com/chart"


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("CHRONOTP_DEFAULT_DIGITS", "8")
    monkeypatch.setenv("CHRONOTP_DEFAULT_ALGORITHM", "SHA512")
    monkeypatch.setenv("CHRONOTP_DEFAULT_TIME_STEP_MILLIS", "60000")
    s = Settings(_env_file=None)
    assert s.default_digits == 8
    assert s.default_algorithm == HashAlgorithm.SHA512
    assert s.default_time_step_millis == 60_000


def test_settings_reject_bad_digits():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, default_digits=7)


def test_settings_reject_zero_time_step():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, default_time_step_millis=0)


def test_parameters_from_settings():
    s = Settings(_env_file=None, default_digits=8, default_algorithm=HashAlgorithm.SHA256)
    p = TotpParameters.from_settings(s)
    assert p == TotpParameters(time_step_millis=30_000, digits=8, algorithm=HashAlgorithm.SHA256)


def test_parameters_from_module_settings(monkeypatch):
    monkeypatch.setattr(
        "chronotp.config.settings",
        Settings(_env_file=None, default_time_step_millis=10_000),
    )
    assert TotpParameters.from_settings().time_step_millis == 10_000


def test_hash_algorithm_enum():
    assert HashAlgorithm.SHA1 == "SHA1"
    assert len(HashAlgorithm) == 3
    assert [a.digest_size for a in HashAlgorithm] == [20, 32, 64]
