from rest_framework import status
from rest_framework.decorators import api_view, parser_classes, permission_classes, throttle_classes
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from custom_auth.throttles import PublicSubmitThrottle

from .fields import visible_descriptors
from .serializers import UploadSerializer
from .services import ERR_GENERIC, submit_application
from .storage import store_upload


@api_view(['GET'])
@permission_classes([AllowAny])
def application_questions(request):
    """The visible application questions, in display order."""
    return Response([d.as_dict() for d in visible_descriptors()])


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([PublicSubmitThrottle])
def submit_chef_application(request):
    data = request.data
    answers = data.get('answers', data)
    result = submit_application(
        answers,
        file_uploads=data.get('file_uploads'),
        application_id=data.get('application_id'),
    )
    if result.success:
        return Response(result.as_dict(), status=status.HTTP_201_CREATED)
    if result.error == ERR_GENERIC:
        return Response(result.as_dict(), status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response(result.as_dict(), status=status.HTTP_400_BAD_REQUEST)


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([PublicSubmitThrottle])
@parser_classes([MultiPartParser, FormParser])
def upload_application_file(request):
    serializer = UploadSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    result = store_upload(
        serializer.validated_data['file'],
        serializer.validated_data['application_id'],
        serializer.validated_data['kind'],
    )
    if not result.success:
        return Response({'success': False, 'error': result.error}, status=status.HTTP_400_BAD_REQUEST)
    return Response({'success': True, **result.as_reference()}, status=status.HTTP_201_CREATED)
