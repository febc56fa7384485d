import logging
from dataclasses import dataclass

import resend

from app.config import settings
from app.core.catalog import field_name, slot_label

logger = logging.getLogger(__name__)


@dataclass
class NewReservationEmail:
    customer_name: str
    date: str
    field: str
    time_slot: str


def send_email(to_email: str, subject: str, message: str, html_content: str = None) -> bool:
    """
    Sends an email through the Resend API. Never raises.
    """
    if not settings.RESEND_API_KEY:
        logger.warning("⚠️ RESEND_API_KEY is not set, email not sent")
        return False

    try:
        resend.api_key = settings.RESEND_API_KEY
        params = {
            "from": settings.SENDER_EMAIL,
            "to": [to_email],
            "subject": subject,
            "text": message,
        }
        if html_content:
            params["html"] = html_content

        email = resend.Emails.send(params)
        logger.info(f"✅ [RESEND] Email sent. ID: {email['id']}")
        return True

    except Exception as e:
        logger.error(f"❌ [RESEND] Error: {e}")
        return False


def send_new_reservation_email(data: NewReservationEmail) -> bool:
    """Tells the admin a new request is waiting. Best effort, runs after the reservation is saved."""
    if not settings.ADMIN_EMAIL:
        logger.warning("⚠️ ADMIN_EMAIL is not set, email not sent")
        return False

    admin_link = f"{settings.FRONTEND_BASE_URL.rstrip('/')}/admin"
    field_label = field_name(data.field)
    time_label = slot_label(data.time_slot)

    logger.info(f"📧 Notifying admin: {data.customer_name} {data.date} {data.field} {data.time_slot}")

    message = (
        f"New reservation request\n\n"
        f"Customer: {data.customer_name}\n"
        f"Date: {data.date}\n"
        f"Field: {field_label}\n"
        f"Time: {time_label}\n\n"
        f"Review it in the admin panel: {admin_link}"
    )
    html_content = f"""
    <!DOCTYPE html>
    <html>
    <head><meta charset="UTF-8"></head>
    <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
        <h2>Yeni Rezervasyon Talebi</h2>
        <p><strong>Ad Soyad:</strong> {data.customer_name}</p>
        <p><strong>Tarih:</strong> {data.date}</p>
        <p><strong>Saha:</strong> {field_label}</p>
        <p><strong>Saat:</strong> {time_label}</p>
        <p><a href="{admin_link}">Admin paneline git</a></p>
    </body>
    </html>
    """
    return send_email(
        settings.ADMIN_EMAIL,
        f"New reservation: {data.date} {time_label}",
        message,
        html_content,
    )
