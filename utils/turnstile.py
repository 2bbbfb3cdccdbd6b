"""
Cloudflare Turnstile verification.

Turnstile does not return a score, so the trust score recorded with a
submission is derived from how the check went. When the check cannot be
performed (widget blocked client-side, secret missing, Cloudflare unreachable)
the submission is allowed through with a lower score rather than blocked.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

import requests
from django.conf import settings

from utils.error_reporting import report_error, report_warning

logger = logging.getLogger(__name__)

# Sent by the review form when the Turnstile widget failed to load.
CLIENT_UNAVAILABLE_TOKEN = 'unavailable'

VERIFIED_SCORE = 0.9
DEGRADED_SCORE = 0.5
CLIENT_UNAVAILABLE_SCORE = 0.3


@dataclass
class BotCheckResult:
    success: bool
    trust_score: float = 0.0
    error_codes: List[str] = field(default_factory=list)
    degraded: bool = False


def verify_bot_token(token: str, remote_ip: Optional[str] = None) -> BotCheckResult:
    if not token:
        return BotCheckResult(success=False, error_codes=['missing-input-response'])

    if token == CLIENT_UNAVAILABLE_TOKEN:
        report_warning("Client reported Turnstile unavailable", 'turnstile')
        return BotCheckResult(success=True, trust_score=CLIENT_UNAVAILABLE_SCORE, degraded=True)

    secret = getattr(settings, 'TURNSTILE_SECRET_KEY', '')
    if not secret:
        report_warning("TURNSTILE_SECRET_KEY not configured; skipping bot verification", 'turnstile')
        return BotCheckResult(success=True, trust_score=DEGRADED_SCORE, degraded=True)

    data = {'secret': secret, 'response': token}
    if remote_ip:
        data['remoteip'] = remote_ip

    try:
        response = requests.post(
            settings.TURNSTILE_VERIFY_URL,
            data=data,
            timeout=getattr(settings, 'TURNSTILE_TIMEOUT', 10),
        )
        response.raise_for_status()
        outcome = response.json()
    except (requests.RequestException, ValueError) as e:
        report_error(e, 'turnstile', include_traceback=False)
        return BotCheckResult(success=True, trust_score=DEGRADED_SCORE, degraded=True)

    if outcome.get('success'):
        return BotCheckResult(success=True, trust_score=VERIFIED_SCORE)

    error_codes = list(outcome.get('error-codes') or [])
    logger.info(f"Turnstile rejected token: {error_codes}")
    return BotCheckResult(success=False, error_codes=error_codes)
