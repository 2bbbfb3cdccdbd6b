"""
Custom middleware for request processing.
"""
import logging

from asgiref.sync import iscoroutinefunction
from django.http import HttpResponse
from django.utils.decorators import sync_and_async_middleware

logger = logging.getLogger(__name__)

HEALTH_PATHS = ('/healthz/', '/healthz')


def _process_health_probe(request):
    """
    Answer load-balancer health probes before host validation runs.
    Returns HttpResponse if handled, None to continue.
    """
    if request.path in HEALTH_PATHS:
        logger.debug("HealthProbeMiddleware: health check path detected, returning 200 OK")
        return HttpResponse('ok', content_type='text/plain')
    return None


@sync_and_async_middleware
def HealthProbeMiddleware(get_response):
    """
    Short-circuit ``/healthz/`` so probes from internal addresses that are not
    in ALLOWED_HOSTS still get a 200.

    This middleware MUST be placed BEFORE django.middleware.security.SecurityMiddleware
    """
    if iscoroutinefunction(get_response):
        async def middleware(request):
            response = _process_health_probe(request)
            if response:
                return response
            return await get_response(request)
    else:
        def middleware(request):
            response = _process_health_probe(request)
            if response:
                return response
            return get_response(request)

    return middleware
