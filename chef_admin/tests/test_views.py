import pytest
from django.urls import reverse
from rest_framework.test import APIClient

from chefs.models import Chef
from tests.factories import make_user

pytestmark = pytest.mark.django_db


def _forbidden_for(client, chef):
    assert client.get(reverse('chef_admin:dashboard')).status_code == 403
    response = client.post(
        reverse('chef_admin:chef_status', kwargs={'chef_id': chef.id}), {'status': 'unpublished'}, format='json'
    )
    assert response.status_code == 403


def test_anonymous_is_forbidden(chef):
    _forbidden_for(APIClient(), chef)
    chef.refresh_from_db()
    assert chef.status == Chef.Status.PUBLISHED


def test_customer_role_is_forbidden(chef):
    client = APIClient()
    client.force_authenticate(user=make_user('shopper'))
    _forbidden_for(client, chef)


def test_dashboard(admin_client, chef):
    response = admin_client.get(reverse('chef_admin:dashboard'))
    assert response.status_code == 200
    assert response.data['success'] is True
    assert response.data['chefs'][0]['id'] == str(chef.id)


def test_status_change(admin_client, chef):
    response = admin_client.post(
        reverse('chef_admin:chef_status', kwargs={'chef_id': chef.id}), {'status': 'unpublished'}, format='json'
    )
    assert response.status_code == 200
    chef.refresh_from_db()
    assert chef.status == Chef.Status.UNPUBLISHED


def test_unknown_chef_is_404(admin_client):
    url = reverse('chef_admin:chef_detail', kwargs={'chef_id': '6f1c1c4e-0d7b-4a43-9d59-1f6a7c8b2e11'})
    assert admin_client.get(url).status_code == 404


def test_patch_and_delete_chef(admin_client, chef):
    url = reverse('chef_admin:chef_detail', kwargs={'chef_id': chef.id})

    assert admin_client.patch(url, {'location_label': 'Bradford'}, format='json').status_code == 200
    chef.refresh_from_db()
    assert chef.location_label == 'Bradford'

    assert admin_client.delete(url).status_code == 200
    assert not Chef.objects.filter(pk=chef.pk).exists()


def test_add_photo_by_url(admin_client, chef):
    response = admin_client.post(
        reverse('chef_admin:add_chef_photo', kwargs={'chef_id': chef.id}),
        {'photo_url': '/media/x.jpg'},
        format='json',
    )
    assert response.status_code == 201
    photo_id = response.data['photo_id']

    response = admin_client.delete(
        reverse('chef_admin:delete_chef_photo', kwargs={'chef_id': chef.id, 'photo_id': photo_id})
    )
    assert response.status_code == 200


def test_invalid_status_is_400(admin_client, chef):
    response = admin_client.post(
        reverse('chef_admin:chef_status', kwargs={'chef_id': chef.id}), {'status': 'deleted'}, format='json'
    )
    assert response.status_code == 400
