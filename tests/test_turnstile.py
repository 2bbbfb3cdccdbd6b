from unittest.mock import Mock, patch

import requests
from django.test import SimpleTestCase, override_settings

from utils.turnstile import (
    CLIENT_UNAVAILABLE_SCORE,
    CLIENT_UNAVAILABLE_TOKEN,
    DEGRADED_SCORE,
    VERIFIED_SCORE,
    verify_bot_token,
)


def _response(payload):
    response = Mock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


class VerifyBotTokenTests(SimpleTestCase):
    def test_missing_token_fails(self):
        result = verify_bot_token('')
        self.assertFalse(result.success)
        self.assertEqual(result.error_codes, ['missing-input-response'])

    @patch('utils.turnstile.requests.post')
    def test_client_unavailable_is_degraded_pass(self, mock_post):
        result = verify_bot_token(CLIENT_UNAVAILABLE_TOKEN)
        self.assertTrue(result.success)
        self.assertTrue(result.degraded)
        self.assertEqual(result.trust_score, CLIENT_UNAVAILABLE_SCORE)
        mock_post.assert_not_called()

    @override_settings(TURNSTILE_SECRET_KEY='')
    @patch('utils.turnstile.requests.post')
    def test_missing_secret_is_degraded_pass(self, mock_post):
        result = verify_bot_token('client-token')
        self.assertTrue(result.success)
        self.assertEqual(result.trust_score, DEGRADED_SCORE)
        mock_post.assert_not_called()

    @patch('utils.turnstile.requests.post')
    def test_verified_token(self, mock_post):
        mock_post.return_value = _response({'success': True})
        result = verify_bot_token('client-token', remote_ip='203.0.113.5')
        self.assertTrue(result.success)
        self.assertFalse(result.degraded)
        self.assertEqual(result.trust_score, VERIFIED_SCORE)
        sent = mock_post.call_args.kwargs['data']
        self.assertEqual(sent['response'], 'client-token')
        self.assertEqual(sent['remoteip'], '203.0.113.5')
        self.assertEqual(sent['secret'], 'test-turnstile-secret')

    @patch('utils.turnstile.requests.post')
    def test_rejected_token_reports_error_codes(self, mock_post):
        mock_post.return_value = _response({'success': False, 'error-codes': ['invalid-input-response']})
        result = verify_bot_token('forged')
        self.assertFalse(result.success)
        self.assertEqual(result.error_codes, ['invalid-input-response'])

    @patch('utils.turnstile.requests.post', side_effect=requests.ConnectionError('down'))
    def test_network_failure_is_degraded_pass(self, mock_post):
        result = verify_bot_token('client-token')
        self.assertTrue(result.success)
        self.assertTrue(result.degraded)
        self.assertEqual(result.trust_score, DEGRADED_SCORE)
