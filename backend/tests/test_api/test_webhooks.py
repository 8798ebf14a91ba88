"""Tests for the Stripe and identity-provider webhook endpoints."""

import uuid
from datetime import date
from types import SimpleNamespace
from unittest.mock import patch

import pytest
import stripe
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from svix.webhooks import WebhookVerificationError

from stayhub.models.room import Room
from stayhub.models.user import User
from stayhub.services.bookings import create_booking

pytestmark = pytest.mark.asyncio


def _stripe_event(event_type: str, **session) -> SimpleNamespace:
    return SimpleNamespace(
        type=event_type,
        id=f"evt_test_{uuid.uuid4().hex[:8]}",
        data=SimpleNamespace(object=SimpleNamespace(id="cs_test_123", **session)),
    )


def _clerk_user(user_id: str, **overrides) -> dict:
    data = {
        "id": user_id,
        "first_name": "Asha",
        "last_name": "Rao",
        "email_addresses": [{"email_address": "asha@example.com"}],
        "image_url": "https://img.example/asha.png",
    }
    data.update(overrides)
    return data


# ---------------------------------------------------------------------------
# POST /api/v1/webhooks/stripe
# ---------------------------------------------------------------------------


class TestStripeWebhook:
    async def test_completed_checkout_marks_booking_paid(
        self, client: AsyncClient, db_session: AsyncSession, session_factory, test_user: User, test_room: Room
    ) -> None:
        booking = (
            await create_booking(db_session, test_user.id, test_room.id, date(2026, 4, 1), date(2026, 4, 2))
        ).booking
        event = _stripe_event(
            "checkout.session.completed", payment_status="paid", metadata={"booking_id": str(booking.id)}
        )

        with (
            patch("stayhub.api.v1.webhooks.construct_webhook_event", return_value=event),
            patch("stayhub.api.v1.webhooks.async_session_factory", session_factory),
        ):
            response = await client.post(
                "/api/v1/webhooks/stripe", content=b"{}", headers={"stripe-signature": "t=1,v1=sig"}
            )

        assert response.status_code == 200
        assert response.json() == {"status": "processed"}
        assert booking.is_paid is True
        assert booking.status == "confirmed"

    async def test_invalid_signature(self, client: AsyncClient) -> None:
        with patch(
            "stayhub.api.v1.webhooks.construct_webhook_event",
            side_effect=stripe.SignatureVerificationError("bad", "t=1,v1=sig"),
        ):
            response = await client.post("/api/v1/webhooks/stripe", content=b"{}")

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid signature"

    async def test_invalid_payload(self, client: AsyncClient) -> None:
        with patch("stayhub.api.v1.webhooks.construct_webhook_event", side_effect=ValueError("bad json")):
            response = await client.post("/api/v1/webhooks/stripe", content=b"not json")

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid payload"

    async def test_unhandled_event_type(self, client: AsyncClient) -> None:
        event = _stripe_event("invoice.paid")
        with patch("stayhub.api.v1.webhooks.construct_webhook_event", return_value=event):
            response = await client.post("/api/v1/webhooks/stripe", content=b"{}")

        assert response.json() == {"status": "ignored"}


# ---------------------------------------------------------------------------
# POST /api/v1/webhooks/clerk
# ---------------------------------------------------------------------------


class TestClerkWebhook:
    async def _post(self, client: AsyncClient, session_factory, event: dict):
        with (
            patch("stayhub.api.v1.webhooks.verify_webhook", return_value=event),
            patch("stayhub.api.v1.webhooks.async_session_factory", session_factory),
        ):
            return await client.post(
                "/api/v1/webhooks/clerk",
                content=b"{}",
                headers={"svix-id": "msg_1", "svix-timestamp": "1700000000", "svix-signature": "v1,sig"},
            )

    async def test_user_created(self, client: AsyncClient, db_session: AsyncSession, session_factory) -> None:
        response = await self._post(
            client, session_factory, {"type": "user.created", "data": _clerk_user("user_clerk_1")}
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Webhook received"}
        user = await db_session.get(User, "user_clerk_1")
        assert user.username == "Asha Rao"
        assert user.email == "asha@example.com"
        assert user.role == "user"

    async def test_user_updated(
        self, client: AsyncClient, db_session: AsyncSession, session_factory, test_user: User
    ) -> None:
        await self._post(
            client,
            session_factory,
            {"type": "user.updated", "data": _clerk_user(test_user.id, first_name="Ravi", last_name=None)},
        )
        assert test_user.username == "Ravi"

    async def test_user_deleted(
        self, client: AsyncClient, db_session: AsyncSession, session_factory, test_user: User
    ) -> None:
        user_id = test_user.id
        await self._post(client, session_factory, {"type": "user.deleted", "data": {"id": user_id}})
        assert await db_session.get(User, user_id) is None

    async def test_unknown_event_acknowledged(self, client: AsyncClient, session_factory) -> None:
        response = await self._post(client, session_factory, {"type": "session.created", "data": {"id": "sess_1"}})
        assert response.json() == {"success": True, "message": "Webhook received"}

    async def test_invalid_signature(self, client: AsyncClient) -> None:
        with patch("stayhub.api.v1.webhooks.verify_webhook", side_effect=WebhookVerificationError("bad")):
            response = await client.post("/api/v1/webhooks/clerk", content=b"{}")

        assert response.status_code == 400
