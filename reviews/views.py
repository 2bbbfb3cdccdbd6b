import logging

from django.http import HttpResponse, HttpResponseRedirect
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from custom_auth.throttles import PublicSubmitThrottle
from utils.request_meta import get_client_ip

from . import services

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    services.ERR_DUPLICATE: status.HTTP_409_CONFLICT,
    services.ERR_RATE_LIMIT: status.HTTP_429_TOO_MANY_REQUESTS,
    services.ERR_CHEF: status.HTTP_404_NOT_FOUND,
    services.ERR_SECRET: status.HTTP_500_INTERNAL_SERVER_ERROR,
    services.ERR_EMAIL_SEND: status.HTTP_502_BAD_GATEWAY,
    services.ERR_GENERIC: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([PublicSubmitThrottle])
def submit_chef_review(request, chef_id):
    """Create an unpublished review and mail the reviewer a verification link."""
    data = request.data
    result = services.submit_review(
        chef_id=chef_id,
        rating=data.get('rating'),
        comment=data.get('comment', ''),
        email=data.get('email', ''),
        bot_token=data.get('bot_token', ''),
        client_ip=get_client_ip(request),
    )
    if result.success:
        return Response(result.as_dict(), status=status.HTTP_201_CREATED)
    return Response(result.as_dict(), status=ERROR_STATUS.get(result.error, status.HTTP_400_BAD_REQUEST))


@csrf_exempt
@require_http_methods(['GET', 'OPTIONS'])
def verify_review(request):
    # Some email clients preflight links before following them.
    if request.method == 'OPTIONS':
        response = HttpResponse(status=200)
        response['Access-Control-Allow-Origin'] = '*'
        response['Access-Control-Allow-Methods'] = 'GET, OPTIONS'
        response['Access-Control-Allow-Headers'] = 'Content-Type'
        return response

    return HttpResponseRedirect(services.verify_review_link(request.GET.get('token', '')))
