"""Assistant nodes and intent routing for the LangGraph graph."""

import logging
from collections.abc import Awaitable, Callable
from typing import Literal

from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.agent.formatting import (
    format_availability,
    format_booking_summary,
    format_rooms,
    room_card,
)
from stayhub.agent.parsing import parse_analysis
from stayhub.agent.prompts import GREETING, build_analysis_prompt
from stayhub.agent.state import ChatState
from stayhub.config import settings
from stayhub.models.user import User
from stayhub.services.availability import (
    check_availability,
    compute_total_price,
    count_nights,
    parse_stay_date,
)
from stayhub.services.errors import InvalidStayDatesError
from stayhub.services.rooms import get_room, record_searched_city, search_rooms

logger = logging.getLogger(__name__)

Generate = Callable[[str], Awaitable[str]]

UNAVAILABLE_MESSAGE = (
    "I'm sorry, but this room is not available for the selected dates. "
    "Would you like me to search for alternative rooms?"
)
LOGIN_REQUIRED_MESSAGE = "You need to be logged in to make a booking. Please log in first."
ROOM_NOT_FOUND_MESSAGE = "I couldn't find that room. Please check the room ID or search for rooms first."
INVALID_DATES_MESSAGE = (
    "Those dates don't look right. Please give check-in and check-out dates as YYYY-MM-DD, "
    "with check-out after check-in."
)

Route = Literal["search", "check_availability", "book", "greeting", "clarify"]

# Intents with their own handler node; everything else goes to clarify.
INTENT_NODES = ("search", "check_availability", "book", "greeting")


def route_intent(state: ChatState) -> Route:
    """Pick the handler node for the analysed intent.

    Questions and unknown intents go straight to ``clarify`` and keep the
    model's own reply.
    """
    intent = state["analysis"].intent
    if intent in INTENT_NODES:
        return intent
    return "clarify"


def create_analyze_node(generate: Generate):
    """Create the node that asks the model to classify the message."""

    async def analyze_node(state: ChatState) -> dict:
        prompt = build_analysis_prompt(
            state["message"],
            state.get("history", []),
            window=settings.llm_history_window,
        )
        text = await generate(prompt)
        analysis = parse_analysis(text)
        logger.info(
            "Intent %r (clarification needed: %s)",
            analysis.intent,
            ", ".join(analysis.needs_clarification) or "none",
        )
        return {"analysis": analysis, "response": analysis.response, "action_data": None}

    return analyze_node


def create_search_node(db: AsyncSession, user: User | None):
    """Create the room search node."""

    async def search_node(state: ChatState) -> dict:
        analysis = state["analysis"]
        if analysis.needs_clarification:
            return {}

        data = analysis.extracted_data
        price_range = data.price_range
        rooms = await search_rooms(
            db,
            city=data.city,
            room_type=data.room_type,
            price_min=price_range.min if price_range else None,
            price_max=price_range.max if price_range else None,
            amenities=data.amenities,
        )
        if user is not None and data.city:
            await record_searched_city(db, user, data.city)

        return {
            "response": format_rooms(rooms),
            "action_data": {"type": "search_results", "rooms": [room_card(r) for r in rooms]},
        }

    return search_node


def create_availability_node(db: AsyncSession):
    """Create the node that checks a room for a date range."""

    async def availability_node(state: ChatState) -> dict:
        data = state["analysis"].extracted_data
        if not (data.room_id and data.check_in_date and data.check_out_date):
            return {}

        try:
            check_in = parse_stay_date(data.check_in_date)
            check_out = parse_stay_date(data.check_out_date)
            nights = count_nights(check_in, check_out)
        except InvalidStayDatesError:
            return {"response": INVALID_DATES_MESSAGE}

        room = await get_room(db, data.room_id)
        if room is None:
            return {"response": ROOM_NOT_FOUND_MESSAGE}

        if not await check_availability(db, room.id, check_in, check_out):
            return {
                "response": UNAVAILABLE_MESSAGE,
                "action_data": {"type": "availability_check", "isAvailable": False},
            }

        total = compute_total_price(room.price_per_night, nights)
        return {
            "response": format_availability(room, check_in, check_out, nights, total),
            "action_data": {
                "type": "availability_check",
                "isAvailable": True,
                "roomId": str(room.id),
                "hotelName": room.hotel.name,
                "checkInDate": data.check_in_date,
                "checkOutDate": data.check_out_date,
                "totalPrice": float(total),
                "nights": nights,
            },
        }

    return availability_node


def create_book_node(db: AsyncSession, user: User | None):
    """Create the node that prepares (but does not store) a booking.

    The client turns the resulting ``booking_confirmation`` action into a
    confirm button that calls the booking endpoint.
    """

    async def book_node(state: ChatState) -> dict:
        if user is None:
            return {"response": LOGIN_REQUIRED_MESSAGE}

        analysis = state["analysis"]
        data = analysis.extracted_data
        if analysis.needs_clarification or not (data.room_id and data.check_in_date and data.check_out_date):
            return {}

        try:
            check_in = parse_stay_date(data.check_in_date)
            check_out = parse_stay_date(data.check_out_date)
            nights = count_nights(check_in, check_out)
        except InvalidStayDatesError:
            return {"response": INVALID_DATES_MESSAGE}

        room = await get_room(db, data.room_id)
        if room is None:
            return {}

        if not await check_availability(db, room.id, check_in, check_out):
            return {
                "response": UNAVAILABLE_MESSAGE,
                "action_data": {"type": "availability_check", "isAvailable": False},
            }

        guests = data.guests if data.guests and data.guests > 0 else 1
        total = compute_total_price(room.price_per_night, nights)
        return {
            "response": format_booking_summary(room, check_in, check_out, guests, total),
            "action_data": {
                "type": "booking_confirmation",
                "roomId": str(room.id),
                "hotelName": room.hotel.name,
                "checkInDate": data.check_in_date,
                "checkOutDate": data.check_out_date,
                "guests": guests,
                "totalPrice": float(total),
            },
        }

    return book_node


async def greeting_node(state: ChatState) -> dict:
    return {"response": GREETING}


async def clarify_node(state: ChatState) -> dict:
    """Append the list of missing details the model asked for."""
    missing = state["analysis"].needs_clarification
    if not missing:
        return {}
    return {"response": f"{state.get('response', '')}\n\nI need a bit more information: {', '.join(missing)}"}
