from django.http import Http404
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from utils.page_cache import cached_page

from .models import Chef
from .serializers import ChefDetailSerializer, ChefListSerializer


@cached_page(lambda: '/')
def _chef_list_payload():
    chefs = Chef.objects.public().select_related('rating_stats').prefetch_related('cuisines')
    return ChefListSerializer(chefs, many=True).data


@cached_page(lambda chef_id: f'/chef/{chef_id}')
def _chef_detail_payload(chef_id):
    chef = (
        Chef.objects.public()
        .select_related('rating_stats')
        .prefetch_related('cuisines', 'food_photos', 'videos')
        .filter(pk=chef_id)
        .first()
    )
    if chef is None:
        return None
    return ChefDetailSerializer(chef).data


@api_view(['GET'])
@permission_classes([AllowAny])
def chef_list(request):
    """Published, verified chefs for the home page."""
    return Response(_chef_list_payload())


@api_view(['GET'])
@permission_classes([AllowAny])
def chef_detail(request, chef_id):
    payload = _chef_detail_payload(chef_id=chef_id)
    if payload is None:
        raise Http404("Chef not found")
    return Response(payload)
