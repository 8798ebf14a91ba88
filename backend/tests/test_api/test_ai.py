"""Tests for the booking assistant endpoints (chat, book, payment)."""

import json
import uuid
from datetime import date
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.agent.chat import CONNECTION_MESSAGE, GENERIC_MESSAGE
from stayhub.agent.errors import LLMConnectionError
from stayhub.agent.nodes import LOGIN_REQUIRED_MESSAGE
from stayhub.models.room import Room
from stayhub.models.user import User
from stayhub.services.bookings import create_booking, mark_booking_paid

pytestmark = pytest.mark.asyncio


def _model_reply(intent: str, response: str = "Model reply", **extracted) -> AsyncMock:
    return AsyncMock(
        return_value=json.dumps(
            {"intent": intent, "extractedData": extracted, "needsClarification": [], "response": response}
        )
    )


# ---------------------------------------------------------------------------
# POST /api/v1/ai/chat
# ---------------------------------------------------------------------------


class TestChat:
    async def test_empty_message(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/ai/chat", json={"message": "   "})
        assert response.status_code == 200
        assert response.json() == {"success": False, "message": "Message is required", "actionData": None, "intent": None}

    async def test_search_anonymous(self, client: AsyncClient, test_room: Room) -> None:
        with patch("stayhub.agent.graph.generate_with_fallback", new=_model_reply("search", city="Mumbai")):
            response = await client.post("/api/v1/ai/chat", json={"message": "Rooms in Mumbai?"})

        data = response.json()
        assert data["success"] is True
        assert data["intent"] == "search"
        assert data["message"].startswith("I found 1 room(s) for you:")
        assert data["actionData"]["rooms"][0]["id"] == str(test_room.id)

    async def test_history_is_forwarded(self, client: AsyncClient) -> None:
        generate = _model_reply("question", "Sure.")
        with patch("stayhub.agent.graph.generate_with_fallback", new=generate):
            response = await client.post(
                "/api/v1/ai/chat",
                json={
                    "message": "And in Goa?",
                    "conversationHistory": [
                        {"role": "user", "content": "Rooms in Mumbai?"},
                        {"role": "assistant", "content": "Here you go."},
                    ],
                },
            )

        assert response.json()["message"] == "Sure."
        prompt = generate.await_args.args[0]
        assert "User: Rooms in Mumbai?\nAssistant: Here you go." in prompt

    async def test_book_requires_login(self, client: AsyncClient, test_room: Room) -> None:
        reply = _model_reply("book", roomId=str(test_room.id), checkInDate="2026-03-02", checkOutDate="2026-03-04")
        with patch("stayhub.agent.graph.generate_with_fallback", new=reply):
            response = await client.post("/api/v1/ai/chat", json={"message": "Book it"})

        assert response.json()["message"] == LOGIN_REQUIRED_MESSAGE
        assert response.json()["actionData"] is None

    async def test_book_signed_in(self, client: AsyncClient, test_room: Room, auth_headers: dict) -> None:
        reply = _model_reply("book", roomId=str(test_room.id), checkInDate="2026-03-02", checkOutDate="2026-03-04")
        with patch("stayhub.agent.graph.generate_with_fallback", new=reply):
            response = await client.post("/api/v1/ai/chat", json={"message": "Book it"}, headers=auth_headers)

        action = response.json()["actionData"]
        assert action["type"] == "booking_confirmation"
        assert action["totalPrice"] == 3000.0

    async def test_connection_error_message(self, client: AsyncClient) -> None:
        generate = AsyncMock(side_effect=LLMConnectionError("fetch failed"))
        with patch("stayhub.agent.graph.generate_with_fallback", new=generate):
            response = await client.post("/api/v1/ai/chat", json={"message": "hi"})

        assert response.status_code == 200
        assert response.json()["success"] is False
        assert response.json()["message"] == CONNECTION_MESSAGE

    async def test_invalid_json_reply(self, client: AsyncClient) -> None:
        with patch("stayhub.agent.graph.generate_with_fallback", new=AsyncMock(return_value="oops")):
            response = await client.post("/api/v1/ai/chat", json={"message": "hi"})

        assert response.json() == {"success": False, "message": GENERIC_MESSAGE, "actionData": None, "intent": None}


# ---------------------------------------------------------------------------
# POST /api/v1/ai/book
# ---------------------------------------------------------------------------


class TestAgentBook:
    async def test_creates_booking(self, client: AsyncClient, test_room: Room, auth_headers: dict) -> None:
        response = await client.post(
            "/api/v1/ai/book",
            json={"roomId": str(test_room.id), "checkInDate": "2026-03-02", "checkOutDate": "2026-03-04", "guests": 2},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Booking created successfully!"
        booking = data["booking"]
        assert booking["id"] == booking["bookingId"]
        assert booking["hotelName"] == "Seaside Retreat"
        assert booking["checkInDate"] == "Mon Mar 02 2026"
        assert booking["checkOutDate"] == "Wed Mar 04 2026"
        assert booking["totalPrice"] == 3000.0
        assert booking["nights"] == 2

    async def test_requires_auth(self, client: AsyncClient, test_room: Room) -> None:
        response = await client.post(
            "/api/v1/ai/book",
            json={"roomId": str(test_room.id), "checkInDate": "2026-03-02", "checkOutDate": "2026-03-04"},
        )
        assert response.status_code == 401

    async def test_unavailable_room(self, client: AsyncClient, test_room: Room, auth_headers: dict) -> None:
        body = {"roomId": str(test_room.id), "checkInDate": "2026-03-02", "checkOutDate": "2026-03-04"}
        await client.post("/api/v1/ai/book", json=body, headers=auth_headers)

        response = await client.post("/api/v1/ai/book", json=body, headers=auth_headers)
        assert response.json() == {"success": False, "message": "Room is not available for the selected dates"}

    async def test_unknown_room(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.post(
            "/api/v1/ai/book",
            json={"roomId": str(uuid.uuid4()), "checkInDate": "2026-03-02", "checkOutDate": "2026-03-04"},
            headers=auth_headers,
        )
        assert response.json() == {"success": False, "message": "Room not found"}

    async def test_bad_dates(self, client: AsyncClient, test_room: Room, auth_headers: dict) -> None:
        response = await client.post(
            "/api/v1/ai/book",
            json={"roomId": str(test_room.id), "checkInDate": "2026-03-04", "checkOutDate": "2026-03-04"},
            headers=auth_headers,
        )
        assert response.json()["success"] is False

    async def test_email_failure_does_not_fail_booking(
        self, client: AsyncClient, test_room: Room, auth_headers: dict
    ) -> None:
        with patch(
            "stayhub.api.v1.ai.send_booking_confirmation",
            new=AsyncMock(side_effect=OSError("smtp down")),
        ) as send:
            response = await client.post(
                "/api/v1/ai/book",
                json={"roomId": str(test_room.id), "checkInDate": "2026-03-02", "checkOutDate": "2026-03-04"},
                headers=auth_headers,
            )

        assert response.json()["success"] is True
        send.assert_awaited_once()


# ---------------------------------------------------------------------------
# POST /api/v1/ai/payment
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def pending_booking(db_session: AsyncSession, test_user: User, test_room: Room):
    result = await create_booking(db_session, test_user.id, test_room.id, date(2026, 3, 2), date(2026, 3, 4))
    return result.booking


class TestPayment:
    async def test_returns_checkout_url(
        self, client: AsyncClient, pending_booking, auth_headers: dict
    ) -> None:
        session = SimpleNamespace(id="cs_test_123", url="https://checkout.stripe.test/cs_test_123")
        with patch(
            "stayhub.api.v1.ai.create_booking_checkout_session", new=AsyncMock(return_value=session)
        ) as create_session:
            response = await client.post(
                "/api/v1/ai/payment", json={"bookingId": str(pending_booking.id)}, headers=auth_headers
            )

        assert response.json() == {"success": True, "url": "https://checkout.stripe.test/cs_test_123"}
        kwargs = create_session.await_args.kwargs
        assert kwargs["hotel_name"] == "Seaside Retreat"
        assert kwargs["success_url"].endswith("/loader/my-bookings")
        assert kwargs["cancel_url"].endswith("/my-bookings")

    async def test_unknown_booking(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.post(
            "/api/v1/ai/payment", json={"bookingId": str(uuid.uuid4())}, headers=auth_headers
        )
        assert response.json() == {"success": False, "message": "Booking not found"}

    async def test_other_users_booking(
        self, client: AsyncClient, pending_booking, make_user, auth_headers_for
    ) -> None:
        stranger = await make_user()
        response = await client.post(
            "/api/v1/ai/payment",
            json={"bookingId": str(pending_booking.id)},
            headers=auth_headers_for(stranger),
        )
        assert response.json() == {"success": False, "message": "Booking not found"}

    async def test_already_paid(
        self, client: AsyncClient, db_session: AsyncSession, pending_booking, auth_headers: dict
    ) -> None:
        await mark_booking_paid(db_session, pending_booking.id)
        response = await client.post(
            "/api/v1/ai/payment", json={"bookingId": str(pending_booking.id)}, headers=auth_headers
        )
        assert response.json() == {"success": False, "message": "Booking is already paid"}

    async def test_stripe_failure(self, client: AsyncClient, pending_booking, auth_headers: dict) -> None:
        with patch(
            "stayhub.api.v1.ai.create_booking_checkout_session",
            new=AsyncMock(side_effect=RuntimeError("stripe down")),
        ):
            response = await client.post(
                "/api/v1/ai/payment", json={"bookingId": str(pending_booking.id)}, headers=auth_headers
            )
        assert response.json() == {"success": False, "message": "Payment Failed"}

    async def test_requires_auth(self, client: AsyncClient, pending_booking) -> None:
        response = await client.post("/api/v1/ai/payment", json={"bookingId": str(pending_booking.id)})
        assert response.status_code == 401
