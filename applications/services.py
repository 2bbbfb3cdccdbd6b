import logging
import re
import uuid
from dataclasses import asdict, dataclass
from typing import Optional

from django.db import IntegrityError, transaction

from utils.error_reporting import report_error
from utils.page_cache import revalidate_path

from .fields import build_application_form, to_json_value, visible_descriptors
from .models import ChefApplication, empty_file_uploads
from .storage import MAX_FILES_PER_APPLICATION

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

ERR_REQUIRED = "Full name and email are required"
ERR_EMAIL = "Please enter a valid email address"
ERR_TOO_MANY_FILES = f"You can upload at most {MAX_FILES_PER_APPLICATION} files"
ERR_BAD_UPLOADS = "Uploaded file references are invalid"
ERR_GENERIC = "An unexpected error occurred. Please try again."


@dataclass
class ApplicationResult:
    success: bool
    error: Optional[str] = None
    application_id: Optional[str] = None
    field_errors: Optional[dict] = None

    def as_dict(self):
        return {k: v for k, v in asdict(self).items() if v is not None}


def _text(data, key):
    value = data.get(key)
    return value.strip() if isinstance(value, str) else ''


def normalize_file_uploads(file_uploads):
    """Keep only ``{file_url, file_name}`` references in the known slots."""
    normalized = empty_file_uploads()
    if not file_uploads:
        return normalized
    if not isinstance(file_uploads, dict):
        raise ValueError("file_uploads must be an object")

    for slot in normalized:
        for item in file_uploads.get(slot) or []:
            if not isinstance(item, dict) or not item.get('file_url'):
                raise ValueError(f"Invalid reference in {slot}")
            normalized[slot].append({
                'file_url': str(item['file_url']),
                'file_name': str(item.get('file_name') or ''),
            })
    return normalized


def submit_application(data, file_uploads=None, application_id=None) -> ApplicationResult:
    """
    Validate answers against the visible questions and store a pending application.

    ``data`` is keyed by question ``field_key``. ``application_id`` is the
    draft id the applicant's uploads were stored under, when they uploaded any.
    """
    try:
        return _submit_application(data, file_uploads, application_id)
    except Exception as e:
        report_error(e, 'submit_application')
        return ApplicationResult(success=False, error=ERR_GENERIC)


def _submit_application(data, file_uploads, application_id) -> ApplicationResult:
    full_name = _text(data, 'full_name')
    email = _text(data, 'email')
    if not full_name or not email:
        return ApplicationResult(success=False, error=ERR_REQUIRED)
    if not EMAIL_RE.match(email):
        return ApplicationResult(success=False, error=ERR_EMAIL)

    form = build_application_form(visible_descriptors(), data)
    if not form.is_valid():
        field_errors = {key: [str(e) for e in errors] for key, errors in form.errors.items()}
        first_key = next(iter(form.errors))
        label = form.fields[first_key].label if first_key in form.fields else first_key
        return ApplicationResult(
            success=False,
            error=f"{label}: {form.errors[first_key][0]}",
            field_errors=field_errors,
        )

    try:
        uploads = normalize_file_uploads(file_uploads)
    except ValueError:
        return ApplicationResult(success=False, error=ERR_BAD_UPLOADS)
    if sum(len(refs) for refs in uploads.values()) > MAX_FILES_PER_APPLICATION:
        return ApplicationResult(success=False, error=ERR_TOO_MANY_FILES)

    answers = {'full_name': full_name, 'email': email}
    for key, value in form.cleaned_data.items():
        value = to_json_value(value)
        if value not in (None, ''):
            answers[key] = value

    fields = {'answers': answers, 'file_uploads': uploads}
    if application_id:
        try:
            fields['id'] = uuid.UUID(str(application_id))
        except ValueError:
            return ApplicationResult(success=False, error=ERR_BAD_UPLOADS)

    try:
        with transaction.atomic():
            application = ChefApplication.objects.create(**fields)
    except IntegrityError:
        return ApplicationResult(success=False, error=ERR_GENERIC)

    revalidate_path('/admin')
    logger.info(f"Chef application {application.id} submitted")
    return ApplicationResult(success=True, application_id=str(application.id))
