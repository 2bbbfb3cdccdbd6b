"""
Path-keyed caching for public read endpoints.

Public pages (home listing, chef profile) are cached per request path and
explicitly revalidated by the write paths that change what they show.
"""
import logging
from functools import wraps

from django.core.cache import cache

logger = logging.getLogger(__name__)

PAGE_CACHE_TIMEOUT = 60 * 10
_KEY_PREFIX = 'page'


def page_key(path: str) -> str:
    return f"{_KEY_PREFIX}:{path.rstrip('/') or '/'}"


def revalidate_path(*paths: str) -> None:
    keys = [page_key(p) for p in paths]
    cache.delete_many(keys)
    logger.debug(f"Revalidated {', '.join(paths)}")


def cached_page(path_func):
    """
    Cache the payload a view builds under the public page path it backs.

    ``path_func`` receives the view's kwargs and returns the site path
    (e.g. ``/chef/<id>``) so write paths can invalidate it by name.
    """
    def decorator(build):
        @wraps(build)
        def _wrapped(**kwargs):
            key = page_key(path_func(**kwargs))
            payload = cache.get(key)
            if payload is None:
                payload = build(**kwargs)
                if payload is not None:
                    cache.set(key, payload, PAGE_CACHE_TIMEOUT)
            return payload
        return _wrapped
    return decorator
