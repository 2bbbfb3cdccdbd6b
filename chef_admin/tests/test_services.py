from unittest.mock import patch

from django.core import mail
from django.core.cache import cache
from django.test import TestCase
from django.utils import timezone

from applications.models import ChefApplication
from chef_admin import services
from chefs.models import Chef, ChefAuditLog, ChefRatingStats, FoodPhoto
from reviews.models import Review, ReviewEvent
from tests.factories import make_admin, make_chef, make_review
from utils.page_cache import page_key


def make_application(**answers):
    values = {
        'full_name': 'Anita Patel',
        'email': 'anita@example.com',
        'phone': '+44 7700 900555',
        'location': 'Leicester',
        'bio': 'Gujarati home cooking',
        'best_dishes': 'Dhokla, Undhiyu, Thepla',
        'hourly_rate': 22.5,
        'experience_years': 7,
        'languages': 'English, Gujarati',
    }
    values.update(answers)
    return ChefApplication.objects.create(
        answers=values,
        file_uploads={
            'profile_photos': [{'file_url': '/media/a/profile/me.jpg', 'file_name': 'me.jpg'}],
            'food_photos': [
                {'file_url': '/media/a/food/1.jpg', 'file_name': '1.jpg'},
                {'file_url': '/media/a/food/2.jpg', 'file_name': '2.jpg'},
            ],
            'introduction_videos': [{'file_url': '/media/a/video/hi.mp4', 'file_name': 'hi.mp4'}],
        },
    )


class ApplicationActionTests(TestCase):
    def setUp(self):
        self.admin = make_admin()

    def test_approve_creates_published_chef(self):
        application = make_application()
        cache.set(page_key('/'), 'stale')

        result = services.approve_application(application.id, admin_user=self.admin)

        self.assertTrue(result.success)
        chef = Chef.objects.get(pk=result.data['chef_id'])
        self.assertEqual(chef.name, 'Anita Patel')
        self.assertTrue(chef.verified)
        self.assertEqual(chef.status, Chef.Status.PUBLISHED)
        self.assertEqual(str(chef.hourly_rate), '22.50')
        self.assertEqual(chef.experience, '7 years')
        self.assertEqual(chef.languages, ['English', 'Gujarati'])
        self.assertEqual(chef.photo_url, '/media/a/profile/me.jpg')
        self.assertEqual(chef.cuisine_names, ['Dhokla', 'Undhiyu', 'Thepla'])
        self.assertEqual(list(chef.food_photos.values_list('display_order', flat=True)), [0, 1])
        self.assertEqual(chef.videos.get().video_url, '/media/a/video/hi.mp4')

        application.refresh_from_db()
        self.assertEqual(application.status, ChefApplication.Status.APPROVED)
        self.assertEqual(application.chef, chef)
        self.assertIsNotNone(application.approved_at)

        audit = chef.audit_log.get()
        self.assertEqual(audit.action, ChefAuditLog.Action.CREATED)
        self.assertEqual(audit.admin_user, self.admin)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ['anita@example.com'])
        self.assertIsNone(cache.get(page_key('/')))

    def test_approve_twice_fails(self):
        application = make_application()
        services.approve_application(application.id)

        result = services.approve_application(application.id)

        self.assertEqual(result.error, "Application has already been processed")
        self.assertEqual(Chef.objects.count(), 1)

    def test_approval_stands_when_email_fails(self):
        application = make_application()
        with patch('chef_admin.services.send_application_approval_email', return_value=False):
            result = services.approve_application(application.id)
        self.assertTrue(result.success)
        self.assertEqual(Chef.objects.count(), 1)

    def test_approve_unknown_application(self):
        result = services.approve_application('6f1c1c4e-0d7b-4a43-9d59-1f6a7c8b2e11')
        self.assertEqual(result.error, "Application not found")

    def test_reject_records_reason_and_emails(self):
        application = make_application()

        result = services.reject_application(application.id, reason='Incomplete', admin_user=self.admin)

        self.assertTrue(result.success)
        application.refresh_from_db()
        self.assertEqual(application.status, ChefApplication.Status.REJECTED)
        self.assertEqual(application.admin_notes, 'Incomplete')
        self.assertIsNotNone(application.rejected_at)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(services.reject_application(application.id).error, "Application has already been processed")

    def test_update_notes(self):
        application = make_application()
        self.assertTrue(services.update_application_notes(application.id, 'Called on Monday').success)
        application.refresh_from_db()
        self.assertEqual(application.admin_notes, 'Called on Monday')
        self.assertEqual(application.status, ChefApplication.Status.PENDING)


class ChefActionTests(TestCase):
    def setUp(self):
        self.admin = make_admin()
        self.chef = make_chef()

    def test_update_profile(self):
        result = services.update_chef_profile(
            self.chef.id,
            {'bio': ' New bio ', 'hourly_rate': '30', 'languages': 'English, Urdu', 'verified': False},
            admin_user=self.admin,
        )

        self.assertTrue(result.success)
        self.chef.refresh_from_db()
        self.assertEqual(self.chef.bio, 'New bio')
        self.assertEqual(str(self.chef.hourly_rate), '30.00')
        self.assertEqual(self.chef.languages, ['English', 'Urdu'])
        self.assertTrue(self.chef.verified)
        self.assertEqual(self.chef.updated_by, self.admin)
        audit = self.chef.audit_log.get()
        self.assertEqual(audit.metadata['fields'], ['bio', 'hourly_rate', 'languages'])

    def test_update_profile_validation(self):
        self.assertEqual(services.update_chef_profile(self.chef.id, {'name': ' '}).error, "Name is required")
        self.assertEqual(services.update_chef_profile(self.chef.id, {'hourly_rate': 'abc'}).error, "Invalid amount: abc")
        self.assertEqual(services.update_chef_profile('nope', {}).error, "Chef not found")

    def test_replace_cuisines(self):
        result = services.update_chef_cuisines(self.chef.id, ['Dal', ' ', 'Roti'], admin_user=self.admin)
        self.assertTrue(result.success)
        self.assertEqual(self.chef.cuisine_names, ['Dal', 'Roti'])
        self.assertEqual(self.chef.audit_log.get().metadata['new_value'], ['Dal', 'Roti'])

    def test_unpublish_and_publish_keep_verified_in_sync(self):
        self.assertTrue(services.update_chef_status(self.chef.id, 'unpublished', admin_user=self.admin).success)
        self.chef.refresh_from_db()
        self.assertEqual(self.chef.status, Chef.Status.UNPUBLISHED)
        self.assertFalse(self.chef.verified)

        self.assertTrue(services.update_chef_status(self.chef.id, 'published').success)
        self.chef.refresh_from_db()
        self.assertTrue(self.chef.verified)

        actions = list(self.chef.audit_log.order_by('id').values_list('action', 'metadata'))
        self.assertEqual(actions[0], ('unpublished', {'previous_status': 'published'}))
        self.assertEqual(actions[1], ('published', {'previous_status': 'unpublished'}))

    def test_status_must_be_publish_or_unpublish(self):
        result = services.update_chef_status(self.chef.id, 'deleted')
        self.assertEqual(result.error, "Status must be published or unpublished")

    def test_publishing_already_published_chef_fails(self):
        result = services.update_chef_status(self.chef.id, 'published')
        self.assertFalse(result.success)

    def test_soft_delete_hides_chef(self):
        result = services.soft_delete_chef(self.chef.id, admin_user=self.admin)

        self.assertTrue(result.success)
        self.chef.refresh_from_db()
        self.assertEqual(self.chef.status, Chef.Status.DELETED)
        self.assertFalse(Chef.objects.public().exists())
        self.assertEqual(self.chef.audit_log.get().metadata['deletion_type'], 'soft')

    def test_photos(self):
        first = services.add_chef_photo(self.chef.id, '/media/1.jpg', admin_user=self.admin)
        second = services.add_chef_photo(self.chef.id, '/media/2.jpg', admin_user=self.admin)
        self.assertEqual(FoodPhoto.objects.get(pk=second.data['photo_id']).display_order, 1)

        other = make_chef(name='Other')
        self.assertEqual(services.delete_chef_photo(first.data['photo_id'], other.id).error, "Photo not found")

        self.assertTrue(services.delete_chef_photo(first.data['photo_id'], self.chef.id).success)
        self.assertEqual(list(self.chef.food_photos.values_list('photo_url', flat=True)), ['/media/2.jpg'])
        self.assertEqual(services.add_chef_photo(self.chef.id, '').error, "Photo URL is required")

    def test_permanent_delete_keeps_audit_trail(self):
        make_review(self.chef)

        result = services.delete_chef_permanently(self.chef.id, admin_user=self.admin)

        self.assertTrue(result.success)
        self.assertFalse(Chef.objects.filter(pk=self.chef.pk).exists())
        self.assertFalse(Review.objects.exists())
        audit = ChefAuditLog.objects.get()
        self.assertIsNone(audit.chef)
        self.assertEqual(audit.chef_name, 'Priya Sharma')
        self.assertEqual(audit.metadata, {'deletion_type': 'permanent'})

    def test_unexpected_error_is_reported_not_raised(self):
        with patch('chef_admin.services.record_chef_audit', side_effect=RuntimeError('db down')):
            result = services.soft_delete_chef(self.chef.id)
        self.assertEqual(result.error, "Failed to delete chef")
        self.chef.refresh_from_db()
        self.assertEqual(self.chef.status, Chef.Status.PUBLISHED)


class ReviewActionTests(TestCase):
    def setUp(self):
        self.chef = make_chef()

    def test_publish_pending_review(self):
        review = make_review(self.chef, rating=4)

        self.assertTrue(services.publish_review(review.id).success)

        review.refresh_from_db()
        self.assertEqual(review.status, Review.Status.PUBLISHED)
        self.assertEqual(ChefRatingStats.objects.get(pk=self.chef.pk).review_count, 1)
        event = review.events.get()
        self.assertEqual(event.actor, ReviewEvent.Actor.ADMIN)

    def test_publish_requires_pending(self):
        review = make_review(self.chef, status=Review.Status.SPAM)
        self.assertEqual(
            services.publish_review(review.id).error,
            "Review cannot be published from status: spam",
        )

    def test_delete_published_review_refreshes_stats(self):
        review = make_review(self.chef, status=Review.Status.PUBLISHED, published_at=timezone.now())
        ChefRatingStats.refresh_for(self.chef.id)

        self.assertTrue(services.delete_review(review.id).success)

        review.refresh_from_db()
        self.assertEqual(review.status, Review.Status.SPAM)
        self.assertEqual(ChefRatingStats.objects.get(pk=self.chef.pk).review_count, 0)
        self.assertEqual(services.delete_review(review.id).error, "Review is already deleted")


class DashboardTests(TestCase):
    def test_fetch_admin_data_excludes_deleted_chefs(self):
        chef = make_chef()
        make_chef(name='Gone', status=Chef.Status.DELETED, verified=False)
        make_review(chef)
        make_application()

        result = services.fetch_admin_data()

        self.assertTrue(result.success)
        self.assertEqual([c['id'] for c in result.data['chefs']], [str(chef.id)])
        self.assertEqual(result.data['chefs'][0]['reviews'], 1)
        self.assertEqual(len(result.data['applications']), 1)
        self.assertEqual(result.data['reviews'][0]['chef_name'], 'Priya Sharma')

    def test_fetch_admin_chef_includes_audit_log(self):
        chef = make_chef()
        services.update_chef_cuisines(chef.id, 'Dal')

        result = services.fetch_admin_chef(chef.id)

        self.assertEqual(result.data['chef']['name'], 'Priya Sharma')
        self.assertEqual(len(result.data['audit_log']), 1)
