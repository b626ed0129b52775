"""
Credential signing for outbound QWeather requests.

QWeather authenticates API calls with a JWT signed by the project's Ed25519
key. A token is minted for every request and never reused, even while an
earlier one would still be valid.
"""
import logging
import time
from typing import Optional

from authlib.jose import JsonWebToken

from ..config import QWeatherConfig
from ..errors import SigningError

logger = logging.getLogger(__name__)

ALGORITHM = "EdDSA"
CLOCK_SKEW_SECONDS = 30
TOKEN_LIFETIME_SECONDS = 900

_jwt = JsonWebToken([ALGORITHM])


def mint(subject: str, key_id: str, private_key: str, now: Optional[float] = None) -> str:
    """Sign a short-lived bearer token.

    The token is backdated by ``CLOCK_SKEW_SECONDS`` and expires
    ``TOKEN_LIFETIME_SECONDS`` after its issue time.

    Args:
        subject: QWeather project ID, sent as ``sub``
        key_id: credential ID, sent as the ``kid`` header
        private_key: Ed25519 private key in PKCS#8 PEM form
        now: current Unix time; defaults to the system clock

    Returns:
        The compact serialized JWT

    Raises:
        SigningError: if the key cannot be loaded or signing fails
    """
    if not private_key:
        raise SigningError("No private key configured")

    if now is None:
        now = time.time()
    issued_at = int(now) - CLOCK_SKEW_SECONDS

    header = {"alg": ALGORITHM, "kid": key_id}
    payload = {
        "sub": subject,
        "iat": issued_at,
        "exp": issued_at + TOKEN_LIFETIME_SECONDS,
    }

    try:
        token = _jwt.encode(header, payload, private_key, check=False)
    except Exception as e:
        logger.error(f"Error generating JWT: {e!r}")
        raise SigningError(f"Failed to sign credential: {e}") from e

    return token.decode("ascii") if isinstance(token, bytes) else token


class CredentialSigner:
    """Mints a fresh credential from the configured key on every call."""

    def __init__(self, config: QWeatherConfig):
        self.config = config

    def mint(self, now: Optional[float] = None) -> str:
        return mint(
            subject=self.config.project_id,
            key_id=self.config.key_id,
            private_key=self.config.private_key,
            now=now,
        )
