"""Async Stripe API wrapper for StayHub payments."""

import logging
from decimal import Decimal

import stripe
from stripe import StripeClient

from stayhub.config import settings
from stayhub.models.booking import Booking

logger = logging.getLogger(__name__)


def get_stripe_client() -> StripeClient:
    """Create a StripeClient instance with async HTTP support."""
    return StripeClient(
        settings.stripe_secret_key,
        http_client=stripe.HTTPXClient(),
    )


def to_minor_units(amount: Decimal) -> int:
    """Convert a decimal amount to the smallest currency unit (e.g. paise)."""
    return int((Decimal(amount) * 100).quantize(Decimal("1")))


async def create_booking_checkout_session(
    booking: Booking,
    hotel_name: str,
    success_url: str,
    cancel_url: str,
) -> stripe.checkout.Session:
    """Create a one-time Stripe Checkout Session paying for a booking."""
    client = get_stripe_client()
    logger.info(
        "Creating checkout session for booking %s (amount=%s %s)",
        booking.id,
        booking.total_price,
        settings.currency_code,
    )
    return await client.v1.checkout.sessions.create_async(
        params={
            "mode": "payment",
            "line_items": [
                {
                    "price_data": {
                        "currency": settings.currency_code,
                        "product_data": {"name": hotel_name},
                        "unit_amount": to_minor_units(booking.total_price),
                    },
                    "quantity": 1,
                }
            ],
            "success_url": success_url,
            "cancel_url": cancel_url,
            "metadata": {"booking_id": str(booking.id)},
        }
    )


def construct_webhook_event(payload: bytes, sig_header: str) -> stripe.Event:
    """Verify and construct a Stripe webhook event (synchronous)."""
    client = get_stripe_client()
    return client.construct_event(payload, sig_header, settings.stripe_webhook_secret)
