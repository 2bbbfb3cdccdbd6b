from datetime import timedelta
from unittest.mock import patch

import pytest
from django.core import mail
from django.db import IntegrityError
from django.test import TestCase, override_settings
from django.utils import timezone

from chefs.models import Chef
from reviews import services
from reviews.models import Review, ReviewEvent
from tests.factories import make_chef, make_review
from utils.crypto import hash_email, hash_ip
from utils.turnstile import CLIENT_UNAVAILABLE_SCORE, BotCheckResult

IP = '203.0.113.5'


class SubmitReviewTests(TestCase):
    def setUp(self):
        self.chef = make_chef()

    def submit(self, **overrides):
        kwargs = {
            'chef_id': str(self.chef.id),
            'rating': 5,
            'comment': 'Great food',
            'email': 'a@example.com',
            'bot_token': 'client-token',
            'client_ip': IP,
        }
        kwargs.update(overrides)
        return services.submit_review(**kwargs)

    def test_successful_submission_stores_pending_review_and_emails_link(self):
        result = self.submit()

        self.assertTrue(result.success)
        self.assertEqual(result.message, services.MSG_SUBMITTED)
        review = Review.objects.get(chef=self.chef)
        self.assertEqual(review.status, Review.Status.AWAITING_EMAIL)
        self.assertEqual(review.email_hash, hash_email('a@example.com'))
        self.assertEqual(review.ip_hash, hash_ip(IP))
        self.assertEqual(review.trust_score, 0.9)
        self.assertGreater(review.verification_expires_at, timezone.now() + timedelta(hours=23))

        event = review.events.get()
        self.assertIsNone(event.from_status)
        self.assertEqual(event.to_status, Review.Status.AWAITING_EMAIL)
        self.assertEqual(event.actor, ReviewEvent.Actor.USER)

        self.assertEqual(len(mail.outbox), 1)
        self.assertIn(
            f"http://testserver/api/verify-review?token={review.verification_token}",
            mail.outbox[0].alternatives[0][0],
        )

    def test_raw_email_and_ip_are_not_stored(self):
        self.submit()
        review = Review.objects.get()
        stored = ' '.join(str(getattr(review, f.attname)) for f in Review._meta.concrete_fields)
        self.assertNotIn('a@example.com', stored)
        self.assertNotIn(IP, stored)

    def test_validation_messages_in_order(self):
        cases = [
            ({'rating': 0, 'email': 'bad'}, services.ERR_RATING),
            ({'rating': 6}, services.ERR_RATING),
            ({'rating': 'five'}, services.ERR_RATING),
            ({'rating': True}, services.ERR_RATING),
            ({'email': 'not-an-email', 'comment': 'x' * 300}, services.ERR_EMAIL),
            ({'comment': 'x' * 281}, services.ERR_COMMENT),
        ]
        for overrides, expected in cases:
            with self.subTest(overrides=overrides):
                result = self.submit(**overrides)
                self.assertFalse(result.success)
                self.assertEqual(result.error, expected)
        self.assertFalse(Review.objects.exists())

    def test_comment_of_exactly_280_characters_is_accepted(self):
        self.assertTrue(self.submit(comment='x' * 280).success)

    def test_rejected_bot_token(self):
        with patch('reviews.services.verify_bot_token', return_value=BotCheckResult(success=False, error_codes=['x'])):
            result = self.submit()
        self.assertEqual(result.error, services.ERR_BOT)
        self.assertFalse(Review.objects.exists())

    def test_unavailable_bot_check_records_lower_trust(self):
        degraded = BotCheckResult(success=True, trust_score=CLIENT_UNAVAILABLE_SCORE, degraded=True)
        with patch('reviews.services.verify_bot_token', return_value=degraded):
            result = self.submit(bot_token='unavailable')
        self.assertTrue(result.success)
        self.assertEqual(Review.objects.get().trust_score, CLIENT_UNAVAILABLE_SCORE)

    def test_duplicate_email_for_same_chef(self):
        self.assertTrue(self.submit().success)
        result = self.submit(email='  A@Example.com ', client_ip='198.51.100.9')
        self.assertEqual(result.error, services.ERR_DUPLICATE)
        self.assertEqual(Review.objects.count(), 1)

    def test_same_email_may_review_another_chef(self):
        other = make_chef(name='Other Chef')
        self.assertTrue(self.submit().success)
        self.assertTrue(self.submit(chef_id=str(other.id)).success)

    def test_fourth_review_in_an_hour_from_same_ip_is_rate_limited(self):
        for n in range(3):
            chef = make_chef(name=f'Chef {n}')
            self.assertTrue(self.submit(chef_id=str(chef.id), email=f'r{n}@example.com').success)

        result = self.submit(email='r4@example.com')
        self.assertEqual(result.error, services.ERR_RATE_LIMIT)
        self.assertEqual(Review.objects.count(), 3)

    def test_old_reviews_do_not_count_toward_rate_limit(self):
        for n in range(3):
            make_review(
                make_chef(name=f'Chef {n}'),
                email=f'old{n}@example.com',
                ip=IP,
                created_at=timezone.now() - timedelta(minutes=61),
            )
        self.assertTrue(self.submit().success)

    @override_settings(REVIEW_RATE_LIMIT_PER_HOUR=10)
    def test_rate_limit_is_configurable(self):
        for n in range(3):
            make_review(make_chef(name=f'Chef {n}'), email=f'old{n}@example.com', ip=IP)
        self.assertTrue(self.submit().success)

    def test_unpublished_unverified_or_missing_chef(self):
        unpublished = make_chef(name='Hidden', status=Chef.Status.UNPUBLISHED)
        unverified = make_chef(name='New', verified=False)
        for chef_id in (unpublished.id, unverified.id, '00000000-0000-0000-0000-000000000000', 'not-a-uuid'):
            with self.subTest(chef_id=chef_id):
                result = self.submit(chef_id=str(chef_id))
                self.assertEqual(result.error, services.ERR_CHEF)
        self.assertFalse(Review.objects.exists())

    @override_settings(REVIEW_VERIFICATION_SECRET='')
    def test_missing_secret_fails_before_any_write(self):
        result = self.submit()
        self.assertEqual(result.error, services.ERR_SECRET)
        self.assertFalse(Review.objects.exists())
        self.assertEqual(len(mail.outbox), 0)

    def test_email_failure_deletes_the_review(self):
        with patch('reviews.services.send_review_verification_email', return_value=False):
            result = self.submit()
        self.assertEqual(result.error, services.ERR_EMAIL_SEND)
        self.assertFalse(Review.objects.exists())
        self.assertFalse(ReviewEvent.objects.exists())

    def test_concurrent_duplicate_insert_is_reported_as_duplicate(self):
        with patch('reviews.services.Review.objects.create', side_effect=IntegrityError('unique')):
            result = self.submit()
        self.assertEqual(result.error, services.ERR_DUPLICATE)

    def test_unexpected_error_is_generic(self):
        with patch('reviews.services.reviews_in_last_hour', side_effect=RuntimeError('db down')):
            result = self.submit()
        self.assertFalse(result.success)
        self.assertEqual(result.error, services.ERR_GENERIC)


@pytest.mark.real_turnstile
def test_missing_bot_token_is_rejected_without_calling_turnstile(chef):
    with patch('utils.turnstile.requests.post') as post:
        result = services.submit_review(
            chef_id=str(chef.id), rating=5, comment='', email='a@example.com', bot_token='', client_ip=IP
        )

    assert result.error == services.ERR_BOT
    post.assert_not_called()
    assert not Review.objects.exists()


@pytest.mark.real_turnstile
def test_turnstile_failure_codes_reject_submission(chef):
    with patch('utils.turnstile.requests.post') as post:
        post.return_value.json.return_value = {'success': False, 'error-codes': ['invalid-input-response']}
        result = services.submit_review(
            chef_id=str(chef.id), rating=5, comment='', email='a@example.com', bot_token='forged', client_ip=IP
        )

    assert result.error == services.ERR_BOT
    assert post.call_args.kwargs['data']['remoteip'] == IP
