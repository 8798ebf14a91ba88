"""Booking confirmation emails sent over SMTP."""

import logging
import smtplib
from email.message import EmailMessage

from starlette.concurrency import run_in_threadpool

from stayhub.config import settings
from stayhub.models.booking import Booking
from stayhub.models.room import Room
from stayhub.models.user import User

logger = logging.getLogger(__name__)


def build_booking_confirmation(booking: Booking, room: Room, user: User) -> EmailMessage:
    """Compose the HTML confirmation email for a new booking."""
    msg = EmailMessage()
    msg["Subject"] = "Hotel Booking Details"
    msg["From"] = settings.sender_email
    msg["To"] = user.email

    hotel = room.hotel
    body = f"""
<h2>Your Booking Details</h2>
<p>Dear {user.username or user.email},</p>
<p>Thank you for your booking! Here are your details:</p>
<ul>
  <li><strong>Booking ID:</strong> {booking.id}</li>
  <li><strong>Hotel Name:</strong> {hotel.name}</li>
  <li><strong>Location:</strong> {hotel.address}</li>
  <li><strong>Check-in:</strong> {booking.check_in_date:%a %b %d %Y}</li>
  <li><strong>Check-out:</strong> {booking.check_out_date:%a %b %d %Y}</li>
  <li><strong>Booking Amount:</strong> {settings.currency} {booking.total_price}</li>
</ul>
<p>We look forward to welcoming you!</p>
<p>If you need to make any changes, feel free to contact us.</p>
"""
    msg.set_content(f"Booking {booking.id} at {hotel.name} is confirmed.")
    msg.add_alternative(body, subtype="html")
    return msg


def _deliver(msg: EmailMessage) -> None:
    with smtplib.SMTP(settings.smtp_host, settings.smtp_port) as server:
        server.starttls()
        if settings.smtp_user:
            server.login(settings.smtp_user, settings.smtp_password)
        server.send_message(msg)


async def send_booking_confirmation(booking: Booking, room: Room, user: User) -> bool:
    """Send the confirmation email. Returns False when SMTP is not configured.

    SMTP errors propagate; callers decide whether a failed email matters.
    """
    if not settings.smtp_configured:
        logger.info("SMTP not configured, skipping confirmation email for booking %s", booking.id)
        return False

    msg = build_booking_confirmation(booking, room, user)
    await run_in_threadpool(_deliver, msg)
    logger.info("Confirmation email sent to %s for booking %s", user.email, booking.id)
    return True
