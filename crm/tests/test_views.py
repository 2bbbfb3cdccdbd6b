from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from crm.models import ContactClickEvent, CustomerInquiry
from tests.factories import make_chef


class ContactViewsTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.chef = make_chef()

    def test_contact_returns_whatsapp_url(self):
        response = self.client.post(
            reverse("crm:contact_chef", kwargs={"chef_id": self.chef.id}),
            {"email": "sam@example.com", "service_type": "one_time"},
            format="json",
        )
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.data["whatsapp_url"].startswith("https://wa.me/"))
        self.assertEqual(CustomerInquiry.objects.count(), 1)

    def test_contact_unknown_chef_is_404(self):
        response = self.client.post(
            reverse("crm:contact_chef", kwargs={"chef_id": "00000000-0000-0000-0000-000000000000"}),
            {"email": "sam@example.com", "service_type": "one_time"},
            format="json",
        )
        self.assertEqual(response.status_code, 404)

    def test_click_tracking_uses_request_headers(self):
        response = self.client.post(
            reverse("crm:contact_click", kwargs={"chef_id": self.chef.id}),
            {"source": "skip_form"},
            format="json",
            HTTP_USER_AGENT="TestAgent/1.0",
            HTTP_REFERER="http://testserver/chef/x",
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, {"success": True})
        event = ContactClickEvent.objects.get()
        self.assertEqual(event.user_agent, "TestAgent/1.0")

    def test_click_with_bad_source_is_400(self):
        response = self.client.post(
            reverse("crm:contact_click", kwargs={"chef_id": self.chef.id}), {"source": "x"}, format="json"
        )
        self.assertEqual(response.status_code, 400)
