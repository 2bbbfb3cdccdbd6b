"""
Email utility module for sending HTML emails via Django's email framework.

Every transactional message the site sends (review verification, application
approval/rejection) goes through ``send_html_email`` so the plain-text
fallback and logging stay consistent.
"""
import logging
from datetime import datetime
from typing import List, Optional, Union

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.utils.html import escape
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

BRAND_NAME = "Tastes Like Home"


def send_html_email(
    subject: str,
    html_content: str,
    recipient_email: Union[str, List[str]],
    from_email: Optional[str] = None,
    reply_to: Optional[List[str]] = None,
    fail_silently: bool = False,
) -> bool:
    """
    Send an HTML email with automatic plain-text fallback.

    Args:
        subject: Email subject line
        html_content: HTML content of the email
        recipient_email: Single email address or list of addresses
        from_email: Sender email (defaults to DEFAULT_FROM_EMAIL)
        reply_to: Optional list of reply-to addresses
        fail_silently: If True, don't raise exceptions on failure

    Returns:
        bool: True if email was sent successfully, False otherwise
    """
    try:
        sender = from_email or settings.DEFAULT_FROM_EMAIL

        plain_text = BeautifulSoup(html_content, 'html.parser').get_text(separator='\n')
        plain_text = '\n'.join(line.strip() for line in plain_text.split('\n') if line.strip())

        if isinstance(recipient_email, str):
            recipients = [recipient_email]
        else:
            recipients = list(recipient_email)

        email = EmailMultiAlternatives(
            subject=subject,
            body=plain_text,
            from_email=sender,
            to=recipients,
            reply_to=reply_to,
        )
        email.attach_alternative(html_content, "text/html")
        email.send(fail_silently=False)

        logger.info(f"Email sent with subject: {subject[:50]}...")
        return True

    except Exception as e:
        logger.exception(f"Failed to send email with subject {subject[:50]!r}: {e}")
        if not fail_silently:
            raise
        return False


def _wrap(title: str, body_html: str) -> str:
    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
        <title>{title}</title>
    </head>
    <body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
        <div style="text-align: center; margin-bottom: 30px;">
            <h1 style="color: #ea580c; margin: 0; font-size: 28px;">{BRAND_NAME}</h1>
            <p style="color: #666; margin: 5px 0 0 0; font-size: 14px;">Authentic home cooking</p>
        </div>
        <div style="background: #f9fafb; padding: 30px; border-radius: 8px; border: 1px solid #e5e7eb;">
            {body_html}
        </div>
        <div style="text-align: center; margin-top: 30px; padding-top: 20px; border-top: 1px solid #e5e7eb;">
            <p style="color: #9ca3af; font-size: 12px; margin: 0;">
                &copy; {datetime.now().year} {BRAND_NAME}. Bringing authentic home cooking to your table.
            </p>
        </div>
    </body>
    </html>
    """


def _button(url: str, label: str) -> str:
    return f"""
    <div style="text-align: center; margin: 30px 0;">
        <a href="{url}"
           style="background: #ea580c; color: white; padding: 15px 30px; text-decoration: none; border-radius: 8px; display: inline-block; font-weight: 600;">
            {label}
        </a>
    </div>
    """


def send_review_verification_email(to_email: str, chef_name: str, verification_url: str) -> bool:
    """
    Email the reviewer a link that publishes their review.

    Returns:
        bool: True if the message was handed to the mail backend
    """
    name = escape(chef_name)
    url = escape(verification_url)
    body = f"""
        <h2 style="color: #111827; margin: 0 0 20px 0;">Thanks for reviewing {name}!</h2>
        <p>Your review helps other food lovers discover amazing home chefs. Click the button below to publish your review:</p>
        {_button(url, "Publish My Review")}
        <p>Or copy and paste this link into your browser:</p>
        <p style="word-break: break-all; color: #ea580c;">{url}</p>
        <p style="color: #6b7280; font-size: 14px;"><strong>This link expires in 24 hours.</strong></p>
        <p style="color: #6b7280; font-size: 14px;">If you didn't write this review, you can safely ignore this email.</p>
    """
    return send_html_email(
        subject=f"Confirm your review for {chef_name}",
        html_content=_wrap("Confirm Your Review", body),
        recipient_email=to_email,
        fail_silently=True,
    )


def send_application_approval_email(to_email: str, chef_name: str, chef_id) -> bool:
    """Tell an applicant their profile is live and where to find it."""
    profile_url = f"{settings.SITE_URL}/chef/{chef_id}"
    body = f"""
        <h2 style="color: #111827; margin: 0 0 20px 0;">Welcome aboard, {escape(chef_name)}!</h2>
        <p>Your application has been approved and your chef profile is now live.
        Customers can find you, read your reviews and contact you on WhatsApp.</p>
        {_button(escape(profile_url), "View My Profile")}
        <p style="color: #6b7280; font-size: 14px;">Need to change something on your profile? Just reply to this email.</p>
    """
    return send_html_email(
        subject=f"You're approved! Welcome to {BRAND_NAME}",
        html_content=_wrap("Application Approved", body),
        recipient_email=to_email,
        reply_to=[settings.SUPPORT_EMAIL],
        fail_silently=True,
    )


def send_application_rejection_email(to_email: str, chef_name: str) -> bool:
    body = f"""
        <h2 style="color: #111827; margin: 0 0 20px 0;">Hi {escape(chef_name)},</h2>
        <p>Thank you for applying to cook with {BRAND_NAME}. After reviewing your application
        we aren't able to list your profile at the moment.</p>
        <p>Circumstances change, and you're welcome to apply again in the future.</p>
    """
    return send_html_email(
        subject=f"Your {BRAND_NAME} application",
        html_content=_wrap("Application Update", body),
        recipient_email=to_email,
        reply_to=[settings.SUPPORT_EMAIL],
        fail_silently=True,
    )
