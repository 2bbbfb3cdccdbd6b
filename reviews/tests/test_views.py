from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from reviews import services
from reviews.models import Review
from tests.factories import make_chef, make_review


class SubmitReviewViewTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.chef = make_chef()
        self.url = reverse('reviews:submit_chef_review', kwargs={'chef_id': self.chef.id})

    def test_post_creates_pending_review(self):
        response = self.client.post(
            self.url,
            {'rating': 4, 'comment': 'Lovely dal', 'email': 'a@example.com', 'bot_token': 'tok'},
            format='json',
            HTTP_X_FORWARDED_FOR='203.0.113.5',
        )
        self.assertEqual(response.status_code, 201)
        self.assertTrue(response.data['success'])
        self.assertEqual(Review.objects.get().rating, 4)

    def test_validation_error_is_400(self):
        response = self.client.post(self.url, {'rating': 9, 'email': 'a@example.com', 'bot_token': 'tok'}, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data, {'success': False, 'error': services.ERR_RATING})

    def test_duplicate_is_409(self):
        make_review(self.chef, email='a@example.com')
        response = self.client.post(
            self.url, {'rating': 4, 'email': 'a@example.com', 'bot_token': 'tok'}, format='json'
        )
        self.assertEqual(response.status_code, 409)


class VerifyReviewViewTests(TestCase):
    def setUp(self):
        self.chef = make_chef()

    def test_get_redirects_to_chef_page(self):
        review = make_review(self.chef)
        response = self.client.get(f'/api/verify-review?token={review.verification_token}')
        self.assertEqual(response.status_code, 302)
        self.assertEqual(response['Location'], f'/chef/{self.chef.id}?success=review-published')

    def test_missing_token_redirects_home(self):
        response = self.client.get('/api/verify-review')
        self.assertEqual(response.status_code, 302)
        self.assertEqual(response['Location'], '/?error=missing-token')

    def test_options_preflight(self):
        response = self.client.options('/api/verify-review')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Access-Control-Allow-Origin'], '*')
        self.assertIn('GET', response['Access-Control-Allow-Methods'])

    def test_post_not_allowed(self):
        response = self.client.post('/api/verify-review')
        self.assertEqual(response.status_code, 405)
