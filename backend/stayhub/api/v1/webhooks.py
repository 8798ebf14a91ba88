"""Webhook endpoints — Stripe payments and identity-provider user sync."""

import logging

import stripe
from fastapi import APIRouter, HTTPException, Request, status
from svix.webhooks import WebhookVerificationError

from stayhub.auth.webhooks import EVENT_HANDLERS as USER_EVENT_HANDLERS
from stayhub.auth.webhooks import verify_webhook
from stayhub.billing.stripe_client import construct_webhook_event
from stayhub.billing.webhooks import (
    handle_checkout_session_completed,
    handle_checkout_session_expired,
)
from stayhub.database import async_session_factory

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/webhooks", tags=["webhooks"])

# Map event types to handler functions
EVENT_HANDLERS = {
    "checkout.session.completed": handle_checkout_session_completed,
    "checkout.session.expired": handle_checkout_session_expired,
}


@router.post("/stripe")
async def stripe_webhook(request: Request) -> dict[str, str]:
    """Receive and process Stripe webhook events."""
    # Raw bytes are required for signature verification
    payload = await request.body()
    sig_header = request.headers.get("stripe-signature", "")

    try:
        event = construct_webhook_event(payload, sig_header)
    except stripe.SignatureVerificationError as e:
        logger.warning("Stripe webhook signature verification failed")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid signature",
        ) from e
    except ValueError as e:
        logger.warning("Invalid Stripe webhook payload")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid payload",
        ) from e

    handler = EVENT_HANDLERS.get(event.type)
    if handler is None:
        logger.debug("Unhandled Stripe event type: %s", event.type)
        return {"status": "ignored"}

    logger.info("Processing Stripe event: %s (id=%s)", event.type, event.id)

    # Webhooks have no auth context, so they open their own session
    async with async_session_factory() as db:
        try:
            await handler(db, event)
            await db.commit()
        except Exception as e:
            await db.rollback()
            logger.exception("Error processing Stripe event %s", event.id)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Webhook processing failed",
            ) from e

    return {"status": "processed"}


@router.post("/clerk")
async def clerk_webhook(request: Request) -> dict:
    """Receive user lifecycle events from the identity provider."""
    payload = await request.body()
    headers = {
        "svix-id": request.headers.get("svix-id", ""),
        "svix-timestamp": request.headers.get("svix-timestamp", ""),
        "svix-signature": request.headers.get("svix-signature", ""),
    }

    try:
        event = verify_webhook(payload, headers)
    except WebhookVerificationError as e:
        logger.warning("Identity webhook signature verification failed")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid signature",
        ) from e

    event_type = event.get("type")
    data = event.get("data") or {}
    handler = USER_EVENT_HANDLERS.get(event_type)
    if handler is None or not data.get("id"):
        logger.debug("Unhandled identity event type: %s", event_type)
        return {"success": True, "message": "Webhook received"}

    async with async_session_factory() as db:
        try:
            await handler(db, data)
            await db.commit()
        except Exception as e:
            await db.rollback()
            logger.exception("Error processing identity event %s for user %s", event_type, data.get("id"))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Webhook processing failed",
            ) from e

    return {"success": True, "message": "Webhook received"}
