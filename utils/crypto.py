"""
Hashing and signed-token helpers.

Emails and IP addresses are only ever stored as one-way hashes so duplicate
detection and rate limiting work without keeping the raw values. Review
verification links carry a signed, time-limited token.
"""
import base64
import binascii
import hashlib
import hmac
import logging
import secrets
import time
from dataclasses import dataclass
from typing import Optional

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)

TOKEN_MAX_AGE_MS = 24 * 60 * 60 * 1000


@dataclass(frozen=True)
class SignedTokenPayload:
    record_id: str
    email: str
    issued_at_ms: int

    def is_expired(self, now_ms: Optional[int] = None) -> bool:
        current = _now_ms() if now_ms is None else now_ms
        return current - self.issued_at_ms > TOKEN_MAX_AGE_MS


def hash_email(email: str) -> str:
    """SHA-256 of the trimmed, lower-cased email."""
    return hashlib.sha256(email.strip().lower().encode('utf-8')).hexdigest()


def hash_ip(ip: str) -> str:
    """SHA-256 of the trimmed IP address."""
    return hashlib.sha256(ip.strip().encode('utf-8')).hexdigest()


def generate_verification_token() -> str:
    return secrets.token_hex(32)


def _signing_secret() -> bytes:
    secret = getattr(settings, 'REVIEW_VERIFICATION_SECRET', '')
    if not secret:
        raise ImproperlyConfigured('REVIEW_VERIFICATION_SECRET is not set')
    return secret.encode('utf-8')


def _sign(payload: str) -> str:
    return hmac.new(_signing_secret(), payload.encode('utf-8'), hashlib.sha256).hexdigest()


def _now_ms() -> int:
    return int(time.time() * 1000)


def create_signed_token(record_id, email: str, now_ms: Optional[int] = None) -> str:
    """
    Build ``base64(record_id:email:timestamp_ms).hexsignature``.

    The base64 alphabet is URL-safe so the token can be dropped into a query
    string as-is.
    """
    timestamp = _now_ms() if now_ms is None else now_ms
    payload = f"{record_id}:{email}:{timestamp}"
    encoded = base64.urlsafe_b64encode(payload.encode('utf-8')).decode('ascii')
    return f"{encoded}.{_sign(payload)}"


def verify_signed_token(
    token: str, now_ms: Optional[int] = None, check_expiry: bool = True
) -> Optional[SignedTokenPayload]:
    """
    Return the payload of a valid token, otherwise ``None``.

    Malformed, tampered and expired tokens all return ``None`` so callers
    cannot tell which check failed. With ``check_expiry=False`` a correctly
    signed but expired token is returned; use ``payload.is_expired()``.
    """
    if not token or token.count('.') != 1:
        return None

    encoded, signature = token.split('.')
    if not encoded or not signature:
        return None

    try:
        raw = base64.b64decode(encoded.encode('ascii'), altchars=b'-_', validate=True)
        payload = raw.decode('utf-8')
    except (binascii.Error, UnicodeError, ValueError):
        return None

    # Non-canonical encodings decode to the same bytes; only accept the exact form we issue.
    if base64.urlsafe_b64encode(raw).decode('ascii') != encoded:
        return None

    record_id, sep, rest = payload.partition(':')
    email, sep2, timestamp = rest.rpartition(':')
    if not sep or not sep2 or not record_id or not email or not timestamp:
        return None

    if not hmac.compare_digest(signature.encode('utf-8'), _sign(payload).encode('ascii')):
        return None

    try:
        issued_at = int(timestamp)
    except ValueError:
        return None

    token_payload = SignedTokenPayload(record_id=record_id, email=email, issued_at_ms=issued_at)
    if check_expiry and token_payload.is_expired(now_ms):
        return None
    return token_payload
