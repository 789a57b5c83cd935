"""
No-show notification e-mails.

Delivery goes through the e-mail HTTP API configured by EMAIL_API_URL and is
best-effort: every failure is logged and reported as False, never raised.
"""

import logging
from typing import Optional

import httpx

from .config import EMAIL_API_URL, EMAIL_API_KEY, SHOP_NAME

logger = logging.getLogger(__name__)

EMAIL_TIMEOUT_SECONDS = 10.0

BLOCKED_SUBJECT = "Notice: your account has been blocked from new bookings"
FIRST_NOTICE_SUBJECT = "Notice: you missed your appointment"

BLOCKED_TEMPLATE = """Hello {client_name},

We noticed you did not show up for your appointment with {barber_name} at {shop_name}.

This is the second notice. Unfortunately, after repeated absences without prior notice, you will no longer be able to book appointments at our barbershop.

If you would like to explain the reason for your absence or talk to us about it, please get in touch.

Best regards,
{shop_name}"""

FIRST_NOTICE_TEMPLATE = """Hello {client_name},

We noticed you did not show up for your appointment with {barber_name} at {shop_name}.

We would like to know why you could not make it so we can improve our service. If something came up or you need to reschedule, please get in touch.

Best regards,
{shop_name}"""


def build_no_show_email(client_name: str, barber_name: str, no_show_count: int) -> dict:
    """Subject and body for a no-show; from the second one on, the blocked-account text."""
    is_blocked = no_show_count >= 2
    template = BLOCKED_TEMPLATE if is_blocked else FIRST_NOTICE_TEMPLATE
    text = template.format(client_name=client_name, barber_name=barber_name, shop_name=SHOP_NAME)
    return {
        "subject": BLOCKED_SUBJECT if is_blocked else FIRST_NOTICE_SUBJECT,
        "text": text,
        "html": text.replace("\n", "<br>"),
    }


def send_no_show_email(
    client_email: Optional[str],
    client_name: str,
    barber_name: str,
    no_show_count: int,
) -> bool:
    if not client_email:
        logger.warning("No-show email skipped: client email is missing")
        return False
    if not EMAIL_API_URL:
        logger.warning("No-show email skipped: EMAIL_API_URL not configured")
        return False

    content = build_no_show_email(client_name, barber_name, no_show_count)
    try:
        response = httpx.post(
            f"{EMAIL_API_URL.rstrip('/')}/email/send",
            json={"to": client_email, **content},
            headers={"Authorization": f"Bearer {EMAIL_API_KEY}"},
            timeout=EMAIL_TIMEOUT_SECONDS,
        )
    except httpx.HTTPError as e:
        logger.error(f"Error sending no-show email to {client_email}: {e}")
        return False

    if response.is_error:
        logger.warning(f"Failed to send no-show email ({response.status_code})")
        return False

    logger.info(f"No-show email sent to {client_email} (count={no_show_count})")
    return True
