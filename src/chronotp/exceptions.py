"""Errors raised by chronotp."""

from __future__ import annotations


class TotpError(RuntimeError):
    """The runtime cannot compute the requested HMAC (missing algorithm, rejected key)."""
