"""
Back-office actions.

Every action returns an ``ActionResult``. Chef edits write a ``ChefAuditLog``
entry and revalidate the cached pages that show the chef. Emails sent after an
approval or rejection are best effort: the database change stands even if the
email does not go out.
"""
import logging
import uuid
from decimal import Decimal, InvalidOperation
from functools import wraps

from django.db import transaction
from django.db.models import Max
from django.utils import timezone

from applications.models import ChefApplication
from applications.serializers import ChefApplicationSerializer
from chefs.models import Chef, ChefAuditLog, ChefCuisine, ChefVideo, FoodPhoto
from chefs.serializers import AdminChefSerializer, ChefAuditLogSerializer
from chefs.services import chef_paths, record_chef_audit, refresh_chef_rating_stats_quietly
from reviews.models import Review, ReviewEvent
from reviews.serializers import AdminReviewSerializer
from utils.email import send_application_approval_email, send_application_rejection_email
from utils.error_reporting import report_error, report_warning
from utils.page_cache import revalidate_path
from utils.results import ActionResult
from utils.transitions import InvalidTransition, StaleStatus, transition

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ('name', 'bio', 'phone', 'email', 'hourly_rate', 'location_label', 'experience', 'languages')


def admin_action(failure_message):
    """Report unexpected errors and return ``failure_message`` instead of raising."""
    def decorator(func):
        @wraps(func)
        def _wrapped(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                report_error(e, func.__name__)
                return ActionResult.fail(failure_message)
        return _wrapped
    return decorator


UUID_MODELS = (Chef, Review, ChefApplication)


def _get(model, pk, **filters):
    try:
        pk = uuid.UUID(str(pk)) if model in UUID_MODELS else int(pk)
    except (TypeError, ValueError):
        return None
    return model.objects.filter(pk=pk, **filters).first()


def _actor(admin_user):
    return admin_user if getattr(admin_user, 'is_authenticated', False) else None


def _to_decimal(value):
    if value in (None, ''):
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {value}")


def _split_list(value):
    if isinstance(value, (list, tuple)):
        items = value
    else:
        items = str(value or '').split(',')
    return [item.strip() for item in items if str(item).strip()]


def _touch(chef, admin_user):
    Chef.objects.filter(pk=chef.pk).update(updated_at=timezone.now(), updated_by=_actor(admin_user))


# -- Applications -----------------------------------------------------------

@admin_action("Failed to approve application")
def approve_application(application_id, admin_user=None) -> ActionResult:
    """Turn a pending application into a published, verified chef profile."""
    application = _get(ChefApplication, application_id)
    if application is None:
        return ActionResult.fail("Application not found")
    if application.status != ChefApplication.Status.PENDING:
        return ActionResult.fail("Application has already been processed")

    profile_photos = application.uploads('profile_photos')
    experience = application.answer('experience_years')

    try:
        with transaction.atomic():
            chef = Chef.objects.create(
                name=application.applicant_name,
                bio=application.answer('bio'),
                phone=str(application.answer('phone')),
                email=application.applicant_email,
                hourly_rate=_to_decimal(application.answer('hourly_rate', None)),
                location_label=application.answer('location'),
                experience=f"{experience} years" if isinstance(experience, (int, float)) else str(experience),
                languages=_split_list(application.answer('languages')),
                photo_url=profile_photos[0]['file_url'] if profile_photos else '',
                verified=True,
                status=Chef.Status.PUBLISHED,
                updated_by=_actor(admin_user),
            )
            ChefCuisine.objects.bulk_create(
                ChefCuisine(chef=chef, cuisine=dish) for dish in _split_list(application.answer('best_dishes'))
            )
            FoodPhoto.objects.bulk_create(
                FoodPhoto(chef=chef, photo_url=ref['file_url'], display_order=index)
                for index, ref in enumerate(application.uploads('food_photos'))
            )
            ChefVideo.objects.bulk_create(
                ChefVideo(chef=chef, video_url=ref['file_url'], display_order=index)
                for index, ref in enumerate(application.uploads('introduction_videos'))
            )
            record_chef_audit(chef, ChefAuditLog.Action.CREATED, admin_user, application_id=str(application.id))
            transition(application, ChefApplication.Status.APPROVED, approved_at=timezone.now(), chef=chef)
    except StaleStatus:
        return ActionResult.fail("Application has already been processed")

    if application.applicant_email and not send_application_approval_email(
        application.applicant_email, chef.name, chef.id
    ):
        report_warning("Approval email not sent", 'approve_application', {'application_id': str(application.id)})

    revalidate_path('/admin', '/')
    logger.info(f"Application {application.id} approved as chef {chef.id}")
    return ActionResult.ok(chef_id=str(chef.id))


@admin_action("Failed to reject application")
def reject_application(application_id, reason='', admin_user=None) -> ActionResult:
    application = _get(ChefApplication, application_id)
    if application is None:
        return ActionResult.fail("Application not found")

    try:
        transition(
            application,
            ChefApplication.Status.REJECTED,
            rejected_at=timezone.now(),
            admin_notes=reason or '',
        )
    except (InvalidTransition, StaleStatus):
        return ActionResult.fail("Application has already been processed")

    if application.applicant_email and not send_application_rejection_email(
        application.applicant_email, application.applicant_name
    ):
        report_warning("Rejection email not sent", 'reject_application', {'application_id': str(application.id)})

    revalidate_path('/admin')
    logger.info(f"Application {application.id} rejected")
    return ActionResult.ok()


@admin_action("Failed to update notes")
def update_application_notes(application_id, notes) -> ActionResult:
    application = _get(ChefApplication, application_id)
    if application is None:
        return ActionResult.fail("Application not found")
    application.admin_notes = notes or ''
    application.save(update_fields=['admin_notes', 'updated_at'])
    revalidate_path('/admin')
    return ActionResult.ok()


# -- Chefs ------------------------------------------------------------------

@admin_action("Failed to update chef profile")
def update_chef_profile(chef_id, data, admin_user=None) -> ActionResult:
    chef = _get(Chef, chef_id)
    if chef is None:
        return ActionResult.fail("Chef not found")

    changed = [name for name in PROFILE_FIELDS if name in data]
    if 'name' in data and not str(data['name'] or '').strip():
        return ActionResult.fail("Name is required")

    for name in changed:
        value = data[name]
        if name == 'hourly_rate':
            try:
                value = _to_decimal(value)
            except ValueError as e:
                return ActionResult.fail(str(e))
        elif name == 'languages':
            value = _split_list(value)
        else:
            value = str(value or '').strip()
        setattr(chef, name, value)
    chef.updated_by = _actor(admin_user)

    with transaction.atomic():
        chef.save()
        record_chef_audit(chef, ChefAuditLog.Action.UPDATED, admin_user, fields=changed)

    revalidate_path(*chef_paths(chef.id))
    return ActionResult.ok()


@admin_action("Failed to update chef cuisines")
def update_chef_cuisines(chef_id, cuisines, admin_user=None) -> ActionResult:
    chef = _get(Chef, chef_id)
    if chef is None:
        return ActionResult.fail("Chef not found")

    cuisines = _split_list(cuisines)
    with transaction.atomic():
        chef.cuisines.all().delete()
        ChefCuisine.objects.bulk_create(ChefCuisine(chef=chef, cuisine=c) for c in cuisines)
        _touch(chef, admin_user)
        record_chef_audit(chef, ChefAuditLog.Action.UPDATED, admin_user, field='cuisines', new_value=cuisines)

    revalidate_path(*chef_paths(chef.id))
    return ActionResult.ok()


def _move_chef(chef, to_status, action, admin_user, **metadata):
    previous = chef.status
    try:
        with transaction.atomic():
            transition(
                chef,
                to_status,
                verified=(to_status == Chef.Status.PUBLISHED),
                updated_by=_actor(admin_user),
            )
            record_chef_audit(chef, action, admin_user, previous_status=previous, **metadata)
    except InvalidTransition:
        return ActionResult.fail(f"Chef cannot move from {previous} to {to_status}")
    except StaleStatus:
        return ActionResult.fail("Chef was changed by someone else. Please reload and try again.")

    revalidate_path(*chef_paths(chef.id))
    logger.info(f"Chef {chef.id}: {previous} -> {to_status}")
    return ActionResult.ok()


@admin_action("Failed to update chef status")
def update_chef_status(chef_id, status, admin_user=None) -> ActionResult:
    """Publish or unpublish a chef; ``verified`` follows the status."""
    if status not in (Chef.Status.PUBLISHED, Chef.Status.UNPUBLISHED):
        return ActionResult.fail("Status must be published or unpublished")
    chef = _get(Chef, chef_id)
    if chef is None:
        return ActionResult.fail("Chef not found")
    action = ChefAuditLog.Action.PUBLISHED if status == Chef.Status.PUBLISHED else ChefAuditLog.Action.UNPUBLISHED
    return _move_chef(chef, status, action, admin_user)


@admin_action("Failed to delete chef")
def soft_delete_chef(chef_id, admin_user=None) -> ActionResult:
    chef = _get(Chef, chef_id)
    if chef is None:
        return ActionResult.fail("Chef not found")
    return _move_chef(chef, Chef.Status.DELETED, ChefAuditLog.Action.DELETED, admin_user, deletion_type='soft')


@admin_action("Failed to add photo")
def add_chef_photo(chef_id, photo_url, admin_user=None) -> ActionResult:
    chef = _get(Chef, chef_id)
    if chef is None:
        return ActionResult.fail("Chef not found")
    if not photo_url:
        return ActionResult.fail("Photo URL is required")

    with transaction.atomic():
        last = chef.food_photos.aggregate(last=Max('display_order'))['last']
        photo = FoodPhoto.objects.create(
            chef=chef,
            photo_url=photo_url,
            display_order=0 if last is None else last + 1,
        )
        _touch(chef, admin_user)
        record_chef_audit(chef, ChefAuditLog.Action.UPDATED, admin_user, field='food_photo_added', photo_url=photo_url)

    revalidate_path(*chef_paths(chef.id))
    return ActionResult.ok(photo_id=photo.id)


@admin_action("Failed to delete photo")
def delete_chef_photo(photo_id, chef_id, admin_user=None) -> ActionResult:
    chef = _get(Chef, chef_id)
    photo = _get(FoodPhoto, photo_id, chef=chef) if chef else None
    if photo is None:
        return ActionResult.fail("Photo not found")

    with transaction.atomic():
        photo.delete()
        _touch(chef, admin_user)
        record_chef_audit(
            chef, ChefAuditLog.Action.UPDATED, admin_user, field='food_photo_deleted', photo_url=photo.photo_url
        )

    revalidate_path(*chef_paths(chef.id))
    return ActionResult.ok()


@admin_action("Failed to delete chef")
def delete_chef_permanently(chef_id, admin_user=None) -> ActionResult:
    """Remove the chef row; photos, videos, cuisines and reviews go with it."""
    chef = _get(Chef, chef_id)
    if chef is None:
        return ActionResult.fail("Chef not found")

    with transaction.atomic():
        record_chef_audit(chef, ChefAuditLog.Action.DELETED, admin_user, deletion_type='permanent')
        chef.delete()

    revalidate_path(*chef_paths(chef_id))
    logger.info(f"Chef {chef_id} permanently deleted")
    return ActionResult.ok()


# -- Reviews ----------------------------------------------------------------

def _after_review_change(review, refresh_stats):
    if refresh_stats:
        refresh_chef_rating_stats_quietly(review.chef_id)
    revalidate_path('/admin', f'/chef/{review.chef_id}', '/')


@admin_action("Failed to publish review")
def publish_review(review_id) -> ActionResult:
    review = _get(Review, review_id)
    if review is None:
        return ActionResult.fail("Review not found")
    if review.status != Review.Status.AWAITING_EMAIL:
        return ActionResult.fail(f"Review cannot be published from status: {review.status}")

    try:
        with transaction.atomic():
            transition(review, Review.Status.PUBLISHED, published_at=timezone.now())
            ReviewEvent.record(
                review,
                from_status=Review.Status.AWAITING_EMAIL,
                to_status=Review.Status.PUBLISHED,
                actor=ReviewEvent.Actor.ADMIN,
                notes='Published by admin',
            )
    except StaleStatus:
        return ActionResult.fail("Review was changed by someone else. Please reload and try again.")

    _after_review_change(review, refresh_stats=True)
    return ActionResult.ok()


@admin_action("Failed to delete review")
def delete_review(review_id) -> ActionResult:
    """Mark a review as spam; it stays in the database with its history."""
    review = _get(Review, review_id)
    if review is None:
        return ActionResult.fail("Review not found")
    if review.status == Review.Status.SPAM:
        return ActionResult.fail("Review is already deleted")

    previous = review.status
    try:
        with transaction.atomic():
            transition(review, Review.Status.SPAM)
            ReviewEvent.record(
                review,
                from_status=previous,
                to_status=Review.Status.SPAM,
                actor=ReviewEvent.Actor.ADMIN,
                notes='Deleted by admin',
            )
    except StaleStatus:
        return ActionResult.fail("Review was changed by someone else. Please reload and try again.")

    _after_review_change(review, refresh_stats=(previous == Review.Status.PUBLISHED))
    return ActionResult.ok()


# -- Dashboard ----------------------------------------------------------------

@admin_action("An unexpected error occurred while loading data")
def fetch_admin_data() -> ActionResult:
    chefs = (
        Chef.objects.not_deleted()
        .select_related('rating_stats')
        .prefetch_related('cuisines', 'food_photos', 'videos', 'reviews')
    )
    applications = ChefApplication.objects.all()
    reviews = Review.objects.select_related('chef').prefetch_related('events')
    return ActionResult.ok(
        chefs=AdminChefSerializer(chefs, many=True).data,
        applications=ChefApplicationSerializer(applications, many=True).data,
        reviews=AdminReviewSerializer(reviews, many=True).data,
    )


@admin_action("An unexpected error occurred while loading data")
def fetch_admin_chef(chef_id) -> ActionResult:
    chef = _get(Chef, chef_id)
    if chef is None:
        return ActionResult.fail("Chef not found")
    return ActionResult.ok(
        chef=AdminChefSerializer(chef).data,
        audit_log=ChefAuditLogSerializer(chef.audit_log.select_related('admin_user'), many=True).data,
    )
