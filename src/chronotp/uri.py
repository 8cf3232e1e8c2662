"""Builder for otpauth://totp/ provisioning URIs and QR code links.

Follows the Google Authenticator Key URI format
(https://github.com/google/google-authenticator/wiki/Key-Uri-Format).
"""

from __future__ import annotations

import base64
import logging
from urllib.parse import quote

from chronotp.config import HashAlgorithm
from chronotp.models import ProvisioningUri, TotpParameters
from chronotp.validation import check_digits, check_period

logger = logging.getLogger(__name__)

# chld=M|0 with the pipe percent-encoded
QR_CODE_QUERY = "chs=200x200&chld=M%7C0&cht=qr&chl={uri}"


def encode_secret(secret: bytes) -> str:
    """Base32-encode raw key bytes for a key URI (RFC 4648, no padding)."""
    return base64.b32encode(secret).decode("ascii").rstrip("=")


def create_qr_code_url(uri: str, chart_url: str | None = None) -> str:
    """Wrap an already-built URI in a link to the QR chart service.

    Nothing is fetched; the caller renders or downloads the image.
    """
    if chart_url is None:
        from chronotp.config import settings

        chart_url = settings.qr_chart_url
    return f"{chart_url}?{QR_CODE_QUERY.format(uri=quote(uri, safe=''))}"


class TotpUriBuilder:
    """Accumulates key URI fields; every setter validates and returns the builder.

    Usage::

        uri = (
            TotpUriBuilder.create("Example:alice@example.com", secret)
            .configure(TotpParameters())
            .build()
        )
    """

    def __init__(self, label: str, secret: str) -> None:
        self._label = label
        self._secret = secret
        self._issuer: str | None = None
        self._algorithm: HashAlgorithm | None = None
        self._digits: int | None = None
        self._period: int | None = None

    @classmethod
    def create(cls, label: str, secret: bytes | bytearray | str) -> TotpUriBuilder:
        """Start a builder from a label and either raw key bytes or base32 text.

        A label of the form ``"<issuer>:<account>"`` sets the issuer to the part
        before the first colon; ``set_issuer`` overrides it.
        """
        if label is None:
            raise ValueError("label must be not null.")
        if secret is None:
            raise ValueError("secret must be not null.")
        if isinstance(secret, (bytes, bytearray)):
            secret = encode_secret(bytes(secret))
        elif not isinstance(secret, str):
            raise TypeError(f"secret must be bytes or str, not {type(secret).__name__}")

        builder = cls(label, secret)
        prefix, sep, _ = label.partition(":")
        if sep:
            logger.debug("Using label prefix %r as issuer", prefix)
            builder.set_issuer(prefix)
        return builder

    @property
    def label(self) -> str:
        return self._label

    @property
    def secret(self) -> str:
        return self._secret

    def set_issuer(self, issuer: str | None) -> TotpUriBuilder:
        """Provider or service name; should match the label prefix."""
        self._issuer = issuer
        return self

    def set_algorithm(self, algorithm: HashAlgorithm | str | None) -> TotpUriBuilder:
        # Ignored by Google Authenticator, honoured by most other apps
        self._algorithm = None if algorithm is None else HashAlgorithm(algorithm)
        return self

    def set_digits(self, digits: int | None) -> TotpUriBuilder:
        self._digits = None if digits is None else check_digits(digits)
        return self

    def set_period(self, period: int | None) -> TotpUriBuilder:
        """Seconds a code stays valid."""
        self._period = None if period is None else check_period(period)
        return self

    def configure(self, params: TotpParameters) -> TotpUriBuilder:
        """Copy period (ms truncated to whole seconds), digits and algorithm."""
        return (
            self.set_period(params.time_step_millis // 1000)
            .set_digits(params.digits)
            .set_algorithm(params.algorithm)
        )

    def to_provisioning_uri(self) -> ProvisioningUri:
        return ProvisioningUri(
            label=self._label,
            secret=self._secret,
            issuer=self._issuer,
            algorithm=self._algorithm,
            digits=self._digits,
            period=self._period,
        )

    def build(self) -> str:
        return self.to_provisioning_uri().to_uri()

    def build_qr_code_url(self) -> str:
        return create_qr_code_url(self.build())

    create_qr_code_url = staticmethod(create_qr_code_url)
