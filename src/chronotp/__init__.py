"""chronotp: RFC 6238 time-based one-time passwords and otpauth:// provisioning URIs."""

from chronotp.exceptions import TotpError
from chronotp.models import HashAlgorithm, ProvisioningUri, TotpParameters
from chronotp.totp import TotpGenerator, generate, generate_now, verify
from chronotp.uri import TotpUriBuilder, create_qr_code_url

__version__ = "0.1.0"

__all__ = [
    "HashAlgorithm",
    "ProvisioningUri",
    "TotpError",
    "TotpGenerator",
    "TotpParameters",
    "TotpUriBuilder",
    "create_qr_code_url",
    "generate",
    "generate_now",
    "verify",
]
