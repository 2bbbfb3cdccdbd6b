import os

import pytest
from django.core.cache import cache

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'tastes_like_home.test_settings')


@pytest.fixture(autouse=True)
def clear_cache():
    """Page cache and throttle buckets live in the local-memory cache; start each test empty."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def turnstile_passes(request):
    """
    Treat every bot-verification call as a pass unless the test opts out
    with ``@pytest.mark.real_turnstile``.
    """
    if request.node.get_closest_marker('real_turnstile'):
        yield None
        return

    from unittest.mock import patch

    from utils.turnstile import VERIFIED_SCORE, BotCheckResult

    with patch(
        'reviews.services.verify_bot_token',
        return_value=BotCheckResult(success=True, trust_score=VERIFIED_SCORE),
    ) as mocked:
        yield mocked


@pytest.fixture
def chef(db):
    from tests.factories import make_chef

    return make_chef()


@pytest.fixture
def admin_user(db):
    from tests.factories import make_admin

    return make_admin()


@pytest.fixture
def admin_client(admin_user):
    from rest_framework.test import APIClient

    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client
