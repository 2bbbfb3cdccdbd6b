"""
Uploaded files for chef applications.

Files are written through Django's default storage under
``{application_id}/{kind}/{timestamp}_{name}`` and referenced from the
application as ``{file_url, file_name}`` pairs.
"""
import logging
import re
import time
from dataclasses import dataclass
from typing import Optional

from django.core.files.storage import default_storage
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

MAX_IMAGE_SIZE = 10 * 1024 * 1024
MAX_VIDEO_SIZE = 50 * 1024 * 1024
ALLOWED_IMAGE_TYPES = ('image/jpeg', 'image/png', 'image/webp')
ALLOWED_VIDEO_TYPES = ('video/mp4', 'video/webm')
MAX_FILES_PER_APPLICATION = 10

# Pillow format names for the allowed image content types.
IMAGE_FORMATS = {'JPEG', 'PNG', 'WEBP'}

KIND_PROFILE = 'profile'
KIND_FOOD = 'food'
KIND_VIDEO = 'video'
UPLOAD_KINDS = (KIND_PROFILE, KIND_FOOD, KIND_VIDEO)

# file_uploads slot for each upload kind
KIND_SLOTS = {
    KIND_PROFILE: 'profile_photos',
    KIND_FOOD: 'food_photos',
    KIND_VIDEO: 'introduction_videos',
}


@dataclass
class UploadResult:
    success: bool
    file_url: Optional[str] = None
    file_name: Optional[str] = None
    error: Optional[str] = None

    def as_reference(self):
        return {'file_url': self.file_url, 'file_name': self.file_name}


def validate_upload(upload, kind) -> Optional[str]:
    """Return an error message, or None if the file may be stored."""
    is_video = kind == KIND_VIDEO
    max_size = MAX_VIDEO_SIZE if is_video else MAX_IMAGE_SIZE
    if upload.size > max_size:
        return f"File size must be less than {max_size // (1024 * 1024)}MB for {'videos' if is_video else 'images'}"

    allowed = ALLOWED_VIDEO_TYPES if is_video else ALLOWED_IMAGE_TYPES
    if getattr(upload, 'content_type', '') not in allowed:
        return f"{'video' if is_video else 'image'} type must be one of: {', '.join(allowed)}"

    if not is_video and not _looks_like_image(upload):
        return "File is not a valid image"
    return None


def _looks_like_image(upload) -> bool:
    try:
        with Image.open(upload) as image:
            fmt = image.format
            image.verify()
    except (UnidentifiedImageError, OSError, SyntaxError):
        return False
    finally:
        upload.seek(0)
    return fmt in IMAGE_FORMATS


def sanitize_file_name(original_name: str) -> str:
    return re.sub(r'[^a-zA-Z0-9.-]', '_', original_name).lower()


def generate_file_name(original_name: str, application_id, kind: str, now_ms: Optional[int] = None) -> str:
    timestamp = int(time.time() * 1000) if now_ms is None else now_ms
    return f"{application_id}/{kind}/{timestamp}_{sanitize_file_name(original_name)}"


def store_upload(upload, application_id, kind) -> UploadResult:
    if kind not in UPLOAD_KINDS:
        return UploadResult(success=False, error=f"Unknown upload type: {kind}")

    error = validate_upload(upload, kind)
    if error:
        return UploadResult(success=False, error=error)

    try:
        saved_name = default_storage.save(generate_file_name(upload.name, application_id, kind), upload)
        file_url = default_storage.url(saved_name)
    except OSError as e:
        logger.error(f"Storage upload failed for application {application_id}: {e}")
        return UploadResult(success=False, error="Failed to upload file. Please try again.")

    logger.info(f"Stored {kind} upload for application {application_id} at {saved_name}")
    return UploadResult(success=True, file_url=file_url, file_name=saved_name)
