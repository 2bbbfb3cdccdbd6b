"""Helpers that read request metadata once, at the view boundary."""

DEFAULT_CLIENT_IP = '127.0.0.1'


def get_client_ip(request) -> str:
    """First address in X-Forwarded-For, then X-Real-IP, then REMOTE_ADDR."""
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR', '')
    if forwarded:
        first = forwarded.split(',')[0].strip()
        if first:
            return first
    return (
        request.META.get('HTTP_X_REAL_IP')
        or request.META.get('REMOTE_ADDR')
        or DEFAULT_CLIENT_IP
    )


def get_user_agent(request) -> str:
    return request.META.get('HTTP_USER_AGENT', '')


def get_referrer(request) -> str:
    return request.META.get('HTTP_REFERER', '')
