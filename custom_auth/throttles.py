"""Throttles for anonymous public write endpoints."""

from rest_framework.throttling import SimpleRateThrottle

from utils.request_meta import get_client_ip


class PublicSubmitThrottle(SimpleRateThrottle):
    """Short-term burst control for public form posts, keyed by client IP.

    Read-only methods are ignored so profile fetches do not hit the bucket.
    The per-hour limits on reviews and inquiries are enforced separately in
    the database; this only absorbs bursts before they reach it.
    """

    scope = "public_submit"

    def get_cache_key(self, request, view):
        if request.method in ("GET", "HEAD", "OPTIONS"):  # skip read-only
            return None

        return self.cache_format % {"scope": self.scope, "ident": get_client_ip(request)}
