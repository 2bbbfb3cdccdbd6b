from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from applications.storage import KIND_FOOD, store_upload
from custom_auth.permissions import IsAdminRole

from . import services


def _respond(result, success_status=status.HTTP_200_OK):
    if result.success:
        return Response(result.as_dict(), status=success_status)
    if result.error and result.error.endswith('not found'):
        return Response(result.as_dict(), status=status.HTTP_404_NOT_FOUND)
    return Response(result.as_dict(), status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET'])
@permission_classes([IsAdminRole])
def dashboard(request):
    """Chefs, applications and reviews for the back-office overview."""
    return _respond(services.fetch_admin_data())


@api_view(['POST'])
@permission_classes([IsAdminRole])
def approve_application(request, application_id):
    return _respond(services.approve_application(application_id, admin_user=request.user))


@api_view(['POST'])
@permission_classes([IsAdminRole])
def reject_application(request, application_id):
    reason = request.data.get('reason', '')
    return _respond(services.reject_application(application_id, reason, admin_user=request.user))


@api_view(['POST'])
@permission_classes([IsAdminRole])
def application_notes(request, application_id):
    return _respond(services.update_application_notes(application_id, request.data.get('notes', '')))


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAdminRole])
def chef_detail(request, chef_id):
    if request.method == 'PATCH':
        return _respond(services.update_chef_profile(chef_id, request.data, admin_user=request.user))
    if request.method == 'DELETE':
        return _respond(services.delete_chef_permanently(chef_id, admin_user=request.user))
    return _respond(services.fetch_admin_chef(chef_id))


@api_view(['PUT'])
@permission_classes([IsAdminRole])
def chef_cuisines(request, chef_id):
    return _respond(services.update_chef_cuisines(chef_id, request.data.get('cuisines', []), admin_user=request.user))


@api_view(['POST'])
@permission_classes([IsAdminRole])
def chef_status(request, chef_id):
    return _respond(services.update_chef_status(chef_id, request.data.get('status'), admin_user=request.user))


@api_view(['POST'])
@permission_classes([IsAdminRole])
def soft_delete_chef(request, chef_id):
    return _respond(services.soft_delete_chef(chef_id, admin_user=request.user))


@api_view(['POST'])
@permission_classes([IsAdminRole])
def add_chef_photo(request, chef_id):
    """Attach a food photo, either an uploaded image or an existing URL."""
    photo_url = request.data.get('photo_url', '')
    upload = request.FILES.get('file')
    if upload is not None:
        stored = store_upload(upload, f"chefs/{chef_id}", KIND_FOOD)
        if not stored.success:
            return Response({'success': False, 'error': stored.error}, status=status.HTTP_400_BAD_REQUEST)
        photo_url = stored.file_url
    return _respond(
        services.add_chef_photo(chef_id, photo_url, admin_user=request.user),
        success_status=status.HTTP_201_CREATED,
    )


@api_view(['DELETE'])
@permission_classes([IsAdminRole])
def delete_chef_photo(request, chef_id, photo_id):
    return _respond(services.delete_chef_photo(photo_id, chef_id, admin_user=request.user))


@api_view(['POST'])
@permission_classes([IsAdminRole])
def publish_review(request, review_id):
    return _respond(services.publish_review(review_id))


@api_view(['POST'])
@permission_classes([IsAdminRole])
def delete_review(request, review_id):
    return _respond(services.delete_review(review_id))
