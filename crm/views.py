from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from crm import service
from crm.serializers import ContactClickSerializer
from custom_auth.throttles import PublicSubmitThrottle
from utils.request_meta import get_client_ip, get_referrer, get_user_agent

ERROR_STATUS = {
    service.ERR_CHEF: status.HTTP_404_NOT_FOUND,
    service.ERR_RATE_LIMIT: status.HTTP_429_TOO_MANY_REQUESTS,
    service.ERR_GENERIC: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@api_view(["POST"])
@permission_classes([AllowAny])
@throttle_classes([PublicSubmitThrottle])
def contact_chef(request, chef_id):
    result = service.submit_contact_inquiry(chef_id, request.data, get_client_ip(request))
    if result.success:
        return Response(result.as_dict())
    return Response(result.as_dict(), status=ERROR_STATUS.get(result.error, status.HTTP_400_BAD_REQUEST))


@api_view(["POST"])
@permission_classes([AllowAny])
@throttle_classes([PublicSubmitThrottle])
def contact_click(request, chef_id):
    serializer = ContactClickSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    recorded = service.track_contact_click(
        chef_id,
        serializer.validated_data["source"],
        user_agent=get_user_agent(request),
        referrer=get_referrer(request),
    )
    return Response({"success": recorded})
