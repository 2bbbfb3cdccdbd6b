"""
Review submission and email verification.

A review is written as ``awaiting_email`` and only becomes visible once the
reviewer follows the link mailed to them. Emails and IPs are stored hashed.
"""
import logging
import re
import uuid
from datetime import timedelta
from urllib.parse import urlencode

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from chefs.models import Chef
from chefs.services import refresh_chef_rating_stats_quietly
from reviews.models import Review, ReviewEvent
from utils.crypto import generate_verification_token, hash_email, hash_ip, verify_signed_token
from utils.email import send_review_verification_email
from utils.error_reporting import report_error
from utils.page_cache import revalidate_path
from utils.results import ActionResult
from utils.transitions import StaleStatus, transition
from utils.turnstile import verify_bot_token

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

ERR_RATING = "Please select a rating from 1-5 stars"
ERR_EMAIL = "Please enter a valid email address"
ERR_COMMENT = f"Comment must be {Review.MAX_COMMENT_LENGTH} characters or less"
ERR_BOT = "Security verification failed. Please try again."
ERR_DUPLICATE = "You have already reviewed this chef"
ERR_RATE_LIMIT = "Too many reviews from your location. Please try again later."
ERR_CHEF = "Chef not found or not available for reviews"
ERR_SECRET = "Server configuration error - missing verification secret"
ERR_EMAIL_SEND = "We couldn't send your verification email. Please try again."
ERR_GENERIC = "Something went wrong. Please try again."
MSG_SUBMITTED = "Review submitted successfully! Please check your email to verify and publish your review."


def _parse_uuid(value):
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


def _parse_rating(value):
    if isinstance(value, bool):
        return None
    try:
        rating = int(value)
    except (TypeError, ValueError):
        return None
    if isinstance(value, float) and value != rating:
        return None
    return rating if 1 <= rating <= 5 else None


def reviews_in_last_hour(ip_digest, now=None):
    since = (now or timezone.now()) - timedelta(hours=1)
    return Review.objects.filter(ip_hash=ip_digest, created_at__gte=since).count()


def verification_url(token):
    return f"{settings.SITE_URL}/api/verify-review?{urlencode({'token': token})}"


def submit_review(chef_id, rating, comment, email, bot_token, client_ip) -> ActionResult:
    try:
        return _submit_review(chef_id, rating, comment, email, bot_token, client_ip)
    except Exception as e:
        report_error(e, 'submit_review', extra_context={'chef_id': str(chef_id)})
        return ActionResult.fail(ERR_GENERIC)


def _submit_review(chef_id, rating, comment, email, bot_token, client_ip) -> ActionResult:
    rating = _parse_rating(rating)
    if rating is None:
        return ActionResult.fail(ERR_RATING)

    email = (email or '').strip()
    if not EMAIL_RE.match(email):
        return ActionResult.fail(ERR_EMAIL)

    comment = (comment or '').strip()
    if len(comment) > Review.MAX_COMMENT_LENGTH:
        return ActionResult.fail(ERR_COMMENT)

    bot_check = verify_bot_token(bot_token, remote_ip=client_ip)
    if not bot_check.success:
        logger.info(f"Review rejected by bot check: {bot_check.error_codes}")
        return ActionResult.fail(ERR_BOT)

    chef_uuid = _parse_uuid(chef_id)
    email_digest = hash_email(email)
    if chef_uuid and Review.objects.filter(chef_id=chef_uuid, email_hash=email_digest).exists():
        return ActionResult.fail(ERR_DUPLICATE)

    ip_digest = hash_ip(client_ip or '')
    if reviews_in_last_hour(ip_digest) >= settings.REVIEW_RATE_LIMIT_PER_HOUR:
        logger.info(f"Review rate limit reached for ip hash {ip_digest[:12]}")
        return ActionResult.fail(ERR_RATE_LIMIT)

    chef = Chef.objects.public().filter(pk=chef_uuid).first() if chef_uuid else None
    if chef is None:
        return ActionResult.fail(ERR_CHEF)

    if not getattr(settings, 'REVIEW_VERIFICATION_SECRET', ''):
        logger.error("REVIEW_VERIFICATION_SECRET is not configured")
        return ActionResult.fail(ERR_SECRET)

    now = timezone.now()
    token = generate_verification_token()
    try:
        with transaction.atomic():
            review = Review.objects.create(
                chef=chef,
                rating=rating,
                comment=comment,
                email_hash=email_digest,
                ip_hash=ip_digest,
                status=Review.Status.AWAITING_EMAIL,
                verification_token=token,
                verification_expires_at=now + timedelta(hours=settings.REVIEW_TOKEN_MAX_AGE_HOURS),
                trust_score=bot_check.trust_score,
                created_at=now,
            )
            ReviewEvent.record(
                review,
                from_status=None,
                to_status=Review.Status.AWAITING_EMAIL,
                actor=ReviewEvent.Actor.USER,
                notes='Review submitted',
            )
    except IntegrityError:
        # A concurrent submission for the same chef and email won the insert.
        return ActionResult.fail(ERR_DUPLICATE)

    if not send_review_verification_email(email, chef.name, verification_url(token)):
        # The one place events are removed: the review never became reachable.
        review.delete()
        logger.warning(f"Deleted review {review.id} after verification email failed")
        return ActionResult.fail(ERR_EMAIL_SEND)

    logger.info(f"Review {review.id} awaiting email verification for chef {chef.id}")
    return ActionResult.ok(MSG_SUBMITTED)


def _find_review_by_token(token, now):
    """Return ``(review, link_expired)`` for a stored or signed token."""
    review = Review.objects.select_related('chef').filter(verification_token=token).first()
    if review is not None:
        return review, review.verification_expired(now)
    if '.' not in token:
        return None, False

    # Signed links carry the review id and the reviewer's email.
    payload = verify_signed_token(token, check_expiry=False)
    if payload is None or _parse_uuid(payload.record_id) is None:
        return None, False
    review = Review.objects.select_related('chef').filter(
        pk=payload.record_id,
        email_hash=hash_email(payload.email),
    ).first()
    return review, payload.is_expired(int(now.timestamp() * 1000))


def verify_review_link(token, now=None) -> str:
    """Handle a click on a verification link and return where to redirect."""
    if not token:
        return '/?error=missing-token'
    try:
        return _verify_review_link(token, now or timezone.now())
    except Exception as e:
        report_error(e, 'verify_review')
        return '/?error=verification-failed'


def _verify_review_link(token, now) -> str:
    review, link_expired = _find_review_by_token(token, now)
    if review is None:
        return '/?error=invalid-token'

    chef_path = f'/chef/{review.chef_id}'

    if review.status == Review.Status.PUBLISHED:
        return f'{chef_path}?info=already-verified'

    if review.status != Review.Status.AWAITING_EMAIL:
        return f'{chef_path}?error=verification-failed'

    if link_expired:
        ReviewEvent.record(
            review,
            from_status=Review.Status.AWAITING_EMAIL,
            to_status=Review.Status.AWAITING_EMAIL,
            actor=ReviewEvent.Actor.USER,
            notes='Verification attempted with expired token',
        )
        return f'{chef_path}?error=link-expired'

    try:
        with transaction.atomic():
            transition(review, Review.Status.PUBLISHED, verified_at=now, published_at=now)
            ReviewEvent.record(
                review,
                from_status=Review.Status.AWAITING_EMAIL,
                to_status=Review.Status.PUBLISHED,
                actor=ReviewEvent.Actor.USER,
                notes='Email verified',
            )
    except StaleStatus:
        # A second click raced this one.
        review.refresh_from_db(fields=['status'])
        if review.status == Review.Status.PUBLISHED:
            return f'{chef_path}?info=already-verified'
        return f'{chef_path}?error=verification-failed'

    refresh_chef_rating_stats_quietly(review.chef_id)
    revalidate_path(chef_path, '/')
    logger.info(f"Review {review.id} published for chef {review.chef_id}")
    return f'{chef_path}?success=review-published'
