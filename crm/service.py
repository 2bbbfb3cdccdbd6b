from __future__ import annotations

import logging
import re
import uuid
from dataclasses import asdict, dataclass
from datetime import timedelta
from typing import Any, Dict
from urllib.parse import quote

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from chefs.models import Chef
from crm.models import ContactClickEvent, CustomerContact, CustomerInquiry
from utils.crypto import hash_email, hash_ip
from utils.error_reporting import report_error
from utils.page_cache import revalidate_path

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
CLICK_FIELD_LIMIT = 255
# Characters encodeURIComponent leaves unescaped.
URI_COMPONENT_SAFE = "-_.!~*'()"

ERR_EMAIL = "Please enter a valid email address"
ERR_SERVICE_TYPE = "Please select a service type"
ERR_BUDGET_RANGE = "Please select a valid budget range"
ERR_MESSAGE = f"Message must be {CustomerInquiry.MAX_MESSAGE_LENGTH} characters or less"
ERR_CHEF = "Chef not found or not available for contact"
ERR_RATE_LIMIT = "Too many inquiries from your location. Please try again later."
ERR_GENERIC = "An unexpected error occurred. Please try again."
MSG_ALREADY_CONTACTED = "You have already contacted this chef. Redirecting to WhatsApp..."

SERVICE_PHRASES = {
    CustomerInquiry.ServiceType.WEEKLY_COOKING: "weekly home cooking",
    CustomerInquiry.ServiceType.SPECIAL_EVENT: "special event catering",
    CustomerInquiry.ServiceType.ONE_TIME: "one-time cooking service",
    CustomerInquiry.ServiceType.OTHER: "cooking services",
}

BUDGET_PHRASES = {
    CustomerInquiry.BudgetRange.UNDER_30: "Under £30",
    CustomerInquiry.BudgetRange.FROM_30_TO_50: "£30-50",
    CustomerInquiry.BudgetRange.FROM_50_TO_80: "£50-80",
    CustomerInquiry.BudgetRange.FROM_80_TO_100: "£80-100",
    CustomerInquiry.BudgetRange.OVER_100: "£100+",
}


@dataclass
class InquiryResult:
    success: bool
    error: str | None = None
    message: str | None = None
    whatsapp_url: str | None = None

    def as_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


def generate_whatsapp_url(chef_phone: str, chef_name: str, service_type: str, budget_range: str | None = None) -> str:
    """Build a wa.me link with a pre-filled opening message to the chef."""
    digits = re.sub(r"\D", "", chef_phone or "")
    first_name = (chef_name or "").split(" ")[0]
    service = SERVICE_PHRASES.get(service_type, SERVICE_PHRASES[CustomerInquiry.ServiceType.OTHER])
    budget = f", Budget: {BUDGET_PHRASES.get(budget_range, budget_range)}" if budget_range else ""
    text = (
        f"Hi {first_name}, I found you on Tastes Like Home and I'm interested in "
        f"{service}{budget}. Could we discuss this further?"
    )
    return f"https://wa.me/{digits}?text={quote(text, safe=URI_COMPONENT_SAFE)}"


def _validate(payload: Dict[str, Any]) -> str | None:
    if not EMAIL_RE.match(payload["email"]):
        return ERR_EMAIL
    if payload["service_type"] not in CustomerInquiry.ServiceType.values:
        return ERR_SERVICE_TYPE
    if payload["budget_range"] and payload["budget_range"] not in CustomerInquiry.BudgetRange.values:
        return ERR_BUDGET_RANGE
    if len(payload["message"]) > CustomerInquiry.MAX_MESSAGE_LENGTH:
        return ERR_MESSAGE
    return None


def _clean_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    def text(key):
        return str(payload.get(key) or "").strip()

    return {
        "email": text("email").lower(),
        "phone": text("phone"),
        "name": text("name"),
        "service_type": text("service_type"),
        "budget_range": text("budget_range"),
        "message": text("message"),
    }


def _upsert_contact(cleaned: Dict[str, Any], now) -> CustomerContact:
    contact, created = CustomerContact.objects.get_or_create(
        email_hash=hash_email(cleaned["email"]),
        defaults={
            "email": cleaned["email"],
            "phone": cleaned["phone"],
            "name": cleaned["name"],
            "marketing_opt_in": True,
            "consent_timestamp": now,
            "consent_source": CustomerContact.ConsentSource.CONTACT_FORM,
        },
    )
    if not created:
        contact.marketing_opt_in = True
        contact.consent_timestamp = now
        contact.consent_source = CustomerContact.ConsentSource.CONTACT_FORM
        # Fill in details the customer did not give last time.
        if not contact.phone and cleaned["phone"]:
            contact.phone = cleaned["phone"]
        if not contact.name and cleaned["name"]:
            contact.name = cleaned["name"]
        contact.save()
    return contact


def submit_contact_inquiry(chef_id, payload: Dict[str, Any], client_ip: str) -> InquiryResult:
    """Record a customer's interest in a chef and hand them off to WhatsApp.

    Contact details are upserted by email hash so a customer has a single
    contact row. A repeat inquiry to the same chef is not stored again but
    still returns the WhatsApp link.
    """
    try:
        return _submit_contact_inquiry(chef_id, payload, client_ip)
    except Exception as e:
        report_error(e, "submit_contact_inquiry", extra_context={"chef_id": str(chef_id)})
        return InquiryResult(success=False, error=ERR_GENERIC)


def _submit_contact_inquiry(chef_id, payload: Dict[str, Any], client_ip: str) -> InquiryResult:
    cleaned = _clean_payload(payload or {})
    error = _validate(cleaned)
    if error:
        return InquiryResult(success=False, error=error)

    try:
        chef = Chef.objects.public().filter(pk=uuid.UUID(str(chef_id))).first()
    except ValueError:
        chef = None
    if chef is None:
        return InquiryResult(success=False, error=ERR_CHEF)

    now = timezone.now()
    ip_digest = hash_ip(client_ip or "")
    recent = CustomerInquiry.objects.from_ip_since(ip_digest, now - timedelta(hours=1)).count()
    if recent >= settings.CONTACT_RATE_LIMIT_PER_HOUR:
        logger.info(f"Contact rate limit reached for ip hash {ip_digest[:12]}")
        return InquiryResult(success=False, error=ERR_RATE_LIMIT)

    whatsapp_url = generate_whatsapp_url(chef.phone, chef.name, cleaned["service_type"], cleaned["budget_range"])

    try:
        with transaction.atomic():
            contact = _upsert_contact(cleaned, now)
            inquiry, created = CustomerInquiry.objects.get_or_create(
                chef=chef,
                customer=contact,
                defaults={
                    "service_type": cleaned["service_type"],
                    "budget_range": cleaned["budget_range"],
                    "message": cleaned["message"],
                    "ip_hash": ip_digest,
                    "created_at": now,
                },
            )
    except IntegrityError:
        # Lost a race with an identical submission.
        created = False

    if not created:
        return InquiryResult(success=True, message=MSG_ALREADY_CONTACTED, whatsapp_url=whatsapp_url)

    revalidate_path("/admin")
    logger.info(f"Inquiry {inquiry.id} recorded for chef {chef.id}")
    return InquiryResult(success=True, whatsapp_url=whatsapp_url)


def track_contact_click(chef_id, source: str, user_agent: str = "", referrer: str = "") -> bool:
    """Store an anonymous click on a contact button. Returns False if nothing was recorded."""
    if source not in ContactClickEvent.Source.values:
        return False
    try:
        chef = Chef.objects.not_deleted().filter(pk=uuid.UUID(str(chef_id))).first()
    except ValueError:
        chef = None
    if chef is None:
        return False

    try:
        ContactClickEvent.objects.create(
            chef=chef,
            source=source,
            user_agent=(user_agent or "")[:CLICK_FIELD_LIMIT],
            referrer=(referrer or "")[:CLICK_FIELD_LIMIT],
        )
    except Exception as e:
        report_error(e, "track_contact_click", extra_context={"chef_id": str(chef_id)})
        return False
    return True
