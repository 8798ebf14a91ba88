"""Stripe webhook event handlers — settle booking payments."""

import logging
import uuid

import stripe
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.services.bookings import mark_booking_paid

logger = logging.getLogger(__name__)


def _get_booking_id(session) -> uuid.UUID | None:
    """Extract the booking UUID stored in the checkout session metadata."""
    metadata = getattr(session, "metadata", None) or {}
    raw = metadata.get("booking_id")
    if not raw:
        return None
    try:
        return uuid.UUID(raw)
    except ValueError:
        return None


async def handle_checkout_session_completed(db: AsyncSession, event: stripe.Event) -> None:
    """Handle checkout.session.completed — mark the booking as paid."""
    session = event.data.object
    booking_id = _get_booking_id(session)

    if booking_id is None:
        logger.warning("Checkout session %s has no booking_id metadata, skipping", session.id)
        return

    if getattr(session, "payment_status", "paid") != "paid":
        logger.info(
            "Checkout session %s completed with payment_status=%s, waiting for payment",
            session.id,
            session.payment_status,
        )
        return

    booking = await mark_booking_paid(db, booking_id)
    if booking is None:
        logger.warning("No booking %s found for checkout session %s", booking_id, session.id)
        return

    logger.info("Checkout completed: booking %s paid via session %s", booking_id, session.id)


async def handle_checkout_session_expired(db: AsyncSession, event: stripe.Event) -> None:
    """Handle checkout.session.expired — the booking stays unpaid."""
    session = event.data.object
    logger.info(
        "Checkout session %s expired for booking %s",
        session.id,
        _get_booking_id(session),
    )
