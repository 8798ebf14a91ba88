"""Booking assistant API router.

POST /api/v1/ai/chat      — Analyse a chat message and answer (auth optional)
POST /api/v1/ai/book      — Create the booking the assistant prepared
POST /api/v1/ai/payment   — Start a hosted checkout for a booking

These endpoints always answer 200 with ``{"success": bool, "message": ...}``
so the chat client can show the message inline.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.agent import describe_chat_error, run_chat
from stayhub.agent.formatting import format_date
from stayhub.api.deps import get_current_user, get_db, get_optional_user
from stayhub.billing.stripe_client import create_booking_checkout_session
from stayhub.config import settings
from stayhub.models.user import User
from stayhub.schemas.agent import (
    AgentBookRequest,
    AgentBookResponse,
    BookingSummary,
    ChatRequest,
    ChatResponse,
    PaymentRequest,
    PaymentResponse,
)
from stayhub.services.availability import parse_stay_date
from stayhub.services.bookings import create_booking, get_user_booking
from stayhub.services.email import send_booking_confirmation
from stayhub.services.errors import BookingError, BookingNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/ai", tags=["ai"])


@router.post("/chat", response_model=ChatResponse)
async def chat(
    body: ChatRequest,
    db: AsyncSession = Depends(get_db),
    user: User | None = Depends(get_optional_user),
) -> ChatResponse:
    """Classify the message with the language model and run the matching action."""
    if not body.message.strip():
        return ChatResponse(success=False, message="Message is required")

    history = [entry.model_dump() for entry in body.conversation_history]
    try:
        result = await run_chat(db, body.message, history, user=user)
    except Exception as e:
        logger.exception("AI agent error (user=%s)", user.id if user else None)
        return ChatResponse(success=False, message=describe_chat_error(e))

    return ChatResponse(
        success=True,
        message=result.message,
        action_data=result.action_data,
        intent=result.intent,
    )


@router.post("/book", response_model=AgentBookResponse, response_model_exclude_none=True)
async def book(
    body: AgentBookRequest,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
) -> AgentBookResponse:
    """Create the booking confirmed in chat and email the details."""
    try:
        check_in = parse_stay_date(body.check_in_date)
        check_out = parse_stay_date(body.check_out_date)
        result = await create_booking(db, user.id, body.room_id, check_in, check_out, guests=body.guests)
    except BookingError as e:
        return AgentBookResponse(success=False, message=e.message)
    except Exception:
        logger.exception("AI booking error (user=%s, room=%s)", user.id, body.room_id)
        await db.rollback()
        return AgentBookResponse(success=False, message="Failed to create booking. Please try again.")

    booking = result.booking
    try:
        await send_booking_confirmation(booking, result.room, result.user)
    except Exception:
        logger.exception("Email sending error for booking %s", booking.id)

    return AgentBookResponse(
        success=True,
        message="Booking created successfully!",
        booking=BookingSummary(
            id=str(booking.id),
            booking_id=str(booking.id),
            hotel_name=result.room.hotel.name,
            check_in_date=format_date(check_in),
            check_out_date=format_date(check_out),
            total_price=float(booking.total_price),
            nights=result.nights,
        ),
    )


@router.post("/payment", response_model=PaymentResponse, response_model_exclude_none=True)
async def payment(
    body: PaymentRequest,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
) -> PaymentResponse:
    """Create a hosted checkout session for one of the user's bookings."""
    try:
        booking = await get_user_booking(db, body.booking_id, user.id)
    except BookingNotFoundError as e:
        return PaymentResponse(success=False, message=e.message)

    if booking.is_paid:
        return PaymentResponse(success=False, message="Booking is already paid")

    try:
        session = await create_booking_checkout_session(
            booking,
            hotel_name=booking.hotel.name,
            success_url=f"{settings.frontend_url}/loader/my-bookings",
            cancel_url=f"{settings.frontend_url}/my-bookings",
        )
    except Exception:
        logger.exception("Payment initiation failed for booking %s", booking.id)
        return PaymentResponse(success=False, message="Payment Failed")

    return PaymentResponse(success=True, url=session.url)
