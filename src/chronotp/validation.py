"""Parameter checks shared by the generator and the URI builder."""

from __future__ import annotations

ALLOWED_DIGITS = (6, 8)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_valid_digits(digits: int) -> bool:
    return _is_int(digits) and digits in ALLOWED_DIGITS


def check_digits(digits: int) -> int:
    """Return ``digits`` unchanged, or raise ValueError unless it is 6 or 8."""
    if not is_valid_digits(digits):
        raise ValueError("digits must be 6 or 8.")
    return digits


def check_period(period: int) -> int:
    if not _is_int(period):
        raise ValueError("period must be a whole number of seconds.")
    if period <= 0:
        raise ValueError("period must be positive.")
    return period


def check_time_step(time_step_millis: int) -> int:
    if time_step_millis <= 0:
        raise ValueError("time step must be positive.")
    return time_step_millis
