"""TOTP code generation and verification (RFC 6238 on top of RFC 4226 HOTP).

All functions take the timestamp as an argument except ``generate_now``,
which is the only place the wall clock is read.
"""

from __future__ import annotations

import logging
import struct
import time

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import constant_time, hashes, hmac

from chronotp.config import HashAlgorithm
from chronotp.exceptions import TotpError
from chronotp.models import TotpParameters
from chronotp.validation import check_digits

logger = logging.getLogger(__name__)

_HASHES: dict[HashAlgorithm, type[hashes.HashAlgorithm]] = {
    HashAlgorithm.SHA1: hashes.SHA1,
    HashAlgorithm.SHA256: hashes.SHA256,
    HashAlgorithm.SHA512: hashes.SHA512,
}


_COUNTER_MIN = -(2**63)
_COUNTER_MAX = 2**63 - 1


def _hmac(algorithm: HashAlgorithm, key: bytes, message: bytes) -> bytes:
    hash_cls = _HASHES.get(algorithm)
    if hash_cls is None:
        logger.error("No HMAC binding for algorithm %s", algorithm)
        raise TotpError("Algorithm not found.")
    try:
        mac = hmac.HMAC(key, hash_cls())
    except UnsupportedAlgorithm as e:
        logger.error("HMAC-%s not supported by the crypto backend", algorithm)
        raise TotpError("Algorithm not found.") from e
    except TypeError as e:
        raise TotpError("Invalid key specified.") from e
    mac.update(message)
    return mac.finalize()


def _resolve(params: TotpParameters | None) -> TotpParameters:
    return TotpParameters.from_settings() if params is None else params


def generate(secret: bytes, timestamp_millis: int, params: TotpParameters | None = None) -> str:
    """Compute the code for ``secret`` at ``timestamp_millis`` (Unix epoch, ms).

    Returns a decimal string of exactly ``params.digits`` characters.
    """
    params = _resolve(params)
    digits = check_digits(params.digits)

    # 64-bit big-endian step counter; negative counters wrap as two's complement
    counter = timestamp_millis // params.time_step_millis
    if not _COUNTER_MIN <= counter <= _COUNTER_MAX:
        raise ValueError("timestamp out of range")
    digest = _hmac(params.algorithm, secret, struct.pack(">q", counter))

    # Dynamic truncation: low nibble of the last byte picks 4 bytes, top bit masked
    offset = digest[-1] & 0x0F
    binary = struct.unpack(">I", digest[offset:offset + 4])[0] & 0x7FFFFFFF
    logger.debug("Generated %d-digit %s code for counter %d", digits, params.algorithm, counter)
    return str(binary % 10**digits).zfill(digits)


def generate_now(secret: bytes, params: TotpParameters | None = None) -> str:
    """Compute the code for the current wall-clock time."""
    return generate(secret, time.time_ns() // 1_000_000, params)


def verify(
    secret: bytes,
    code: str,
    timestamp_millis: int,
    params: TotpParameters | None = None,
) -> bool:
    """Check ``code`` against the code for exactly ``timestamp_millis``.

    There is no drift window: to accept the previous or next step, call again
    with a shifted timestamp.
    """
    params = _resolve(params)
    if not isinstance(code, str):
        return False
    candidate = code.strip().replace(" ", "")
    if len(candidate) != params.digits or not (candidate.isascii() and candidate.isdigit()):
        return False
    expected = generate(secret, timestamp_millis, params)
    return constant_time.bytes_eq(expected.encode("ascii"), candidate.encode("ascii"))


class TotpGenerator:
    """Binds one ``TotpParameters`` set to the module-level functions.

    The default instance (30 s, 6 digits, SHA1 unless overridden through
    settings) matches Google Authenticator.
    """

    def __init__(self, params: TotpParameters | None = None) -> None:
        self._params = _resolve(params)

    @property
    def params(self) -> TotpParameters:
        return self._params

    @property
    def time_step_millis(self) -> int:
        return self._params.time_step_millis

    @property
    def digits(self) -> int:
        return self._params.digits

    @property
    def algorithm(self) -> HashAlgorithm:
        return self._params.algorithm

    def generate(self, secret: bytes, timestamp_millis: int) -> str:
        return generate(secret, timestamp_millis, self._params)

    def generate_now(self, secret: bytes) -> str:
        return generate_now(secret, self._params)

    def verify(self, secret: bytes, code: str, timestamp_millis: int) -> bool:
        return verify(secret, code, timestamp_millis, self._params)

    def __repr__(self) -> str:
        p = self._params
        return f"TotpGenerator(time_step_millis={p.time_step_millis}, digits={p.digits}, algorithm={p.algorithm})"
