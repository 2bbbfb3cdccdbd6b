from unittest.mock import patch

from django.core.cache import cache
from django.test import TestCase

from applications import services
from applications.models import ChefApplication, ChefQuestion
from tests.factories import application_answers as valid_answers
from utils.page_cache import page_key


def upload_ref(n):
    return {'file_url': f'/media/app/food/{n}.jpg', 'file_name': f'app/food/{n}.jpg'}


class SubmitApplicationTests(TestCase):
    def test_creates_pending_application(self):
        cache.set(page_key('/admin'), 'stale')

        result = services.submit_application(valid_answers(experience_years=7))

        self.assertTrue(result.success)
        application = ChefApplication.objects.get(pk=result.application_id)
        self.assertEqual(application.status, ChefApplication.Status.PENDING)
        self.assertEqual(application.applicant_name, 'Anita Patel')
        self.assertEqual(application.answers['hourly_rate'], 22.5)
        self.assertEqual(application.answers['experience_years'], 7)
        self.assertNotIn('availability', application.answers)
        self.assertEqual(application.file_uploads['food_photos'], [])
        self.assertIsNone(cache.get(page_key('/admin')))

    def test_name_and_email_are_required_first(self):
        result = services.submit_application({'email': 'anita@example.com'})
        self.assertEqual(result.error, services.ERR_REQUIRED)

        result = services.submit_application(valid_answers(email='not-an-email'))
        self.assertEqual(result.error, services.ERR_EMAIL)

    def test_missing_required_question_reports_label(self):
        result = services.submit_application(valid_answers(bio=''))

        self.assertFalse(result.success)
        self.assertTrue(result.error.startswith('Bio/About You: '))
        self.assertIn('bio', result.field_errors)
        self.assertFalse(ChefApplication.objects.exists())

    def test_hidden_required_question_is_not_enforced(self):
        ChefQuestion.objects.filter(field_key='bio').update(is_visible=False)
        self.assertTrue(services.submit_application(valid_answers(bio='')).success)

    def test_negative_rate_rejected(self):
        result = services.submit_application(valid_answers(hourly_rate='-1'))
        self.assertTrue(result.error.startswith('Hourly Rate'))

    def test_upload_references_are_stored_by_slot(self):
        uploads = {
            'profile_photos': [{'file_url': '/media/app/profile/me.jpg', 'file_name': 'me.jpg', 'extra': 'x'}],
            'food_photos': [upload_ref(1), upload_ref(2)],
        }
        draft_id = '6f1c1c4e-0d7b-4a43-9d59-1f6a7c8b2e11'

        result = services.submit_application(valid_answers(), file_uploads=uploads, application_id=draft_id)

        self.assertEqual(result.application_id, draft_id)
        application = ChefApplication.objects.get(pk=draft_id)
        self.assertEqual(application.uploads('profile_photos'), [{'file_url': '/media/app/profile/me.jpg', 'file_name': 'me.jpg'}])
        self.assertEqual(len(application.uploads('food_photos')), 2)
        self.assertEqual(application.uploads('introduction_videos'), [])

    def test_too_many_files(self):
        uploads = {'food_photos': [upload_ref(n) for n in range(11)]}
        result = services.submit_application(valid_answers(), file_uploads=uploads)
        self.assertEqual(result.error, services.ERR_TOO_MANY_FILES)

    def test_malformed_upload_references(self):
        result = services.submit_application(valid_answers(), file_uploads={'food_photos': ['nope']})
        self.assertEqual(result.error, services.ERR_BAD_UPLOADS)

    def test_unexpected_error_is_generic(self):
        with patch('applications.services.build_application_form', side_effect=RuntimeError('boom')):
            result = services.submit_application(valid_answers())
        self.assertEqual(result.error, services.ERR_GENERIC)
