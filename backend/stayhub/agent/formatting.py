"""User-facing text and action payloads produced by the assistant."""

from datetime import date
from decimal import Decimal

from stayhub.config import settings
from stayhub.models.room import Room


def format_amount(amount: Decimal | float | int) -> str:
    """Render a price without trailing ``.00`` for whole amounts."""
    value = Decimal(str(amount))
    if value == value.to_integral_value():
        return str(value.quantize(Decimal("1")))
    return str(value.quantize(Decimal("0.01")))


def format_date(value: date) -> str:
    """Human-readable date, e.g. ``Mon Mar 02 2026``."""
    return value.strftime("%a %b %d %Y")


def format_rooms(rooms: list[Room]) -> str:
    """List search results as Markdown-ish text."""
    if not rooms:
        return "No hotels or rooms found matching your criteria."

    parts = [f"I found {len(rooms)} room(s) for you:\n\n"]
    for index, room in enumerate(rooms, start=1):
        parts.append(
            f"{index}. **{room.hotel.name}**\n"
            f"   - Location: {room.hotel.address}, {room.hotel.city}\n"
            f"   - Room Type: {room.room_type}\n"
            f"   - Price: {settings.currency}{format_amount(room.price_per_night)}/night\n"
            f"   - Amenities: {', '.join(room.amenities or [])}\n"
            f"   - Room ID: {room.id}\n\n"
        )
    parts.append("Would you like to check availability or book any of these rooms?")
    return "".join(parts)


def room_card(room: Room) -> dict:
    """Compact room payload for the client's search-result cards."""
    return {
        "id": str(room.id),
        "hotelName": room.hotel.name,
        "address": room.hotel.address,
        "city": room.hotel.city,
        "roomType": room.room_type,
        "pricePerNight": float(room.price_per_night),
        "amenities": list(room.amenities or []),
        "images": list(room.images or []),
    }


def format_availability(room: Room, check_in: date, check_out: date, nights: int, total: Decimal) -> str:
    return (
        "Great news! The room is available for those dates.\n\n"
        f"**{room.hotel.name}** - {room.room_type}\n"
        f"Check-in: {format_date(check_in)}\n"
        f"Check-out: {format_date(check_out)}\n"
        f"Nights: {nights}\n"
        f"Total Price: {settings.currency}{format_amount(total)}\n\n"
        "Would you like to proceed with the booking?"
    )


def format_booking_summary(room: Room, check_in: date, check_out: date, guests: int, total: Decimal) -> str:
    return (
        "Perfect! I can help you book this room.\n\n"
        "**Booking Summary:**\n"
        f"Hotel: {room.hotel.name}\n"
        f"Room Type: {room.room_type}\n"
        f"Check-in: {format_date(check_in)}\n"
        f"Check-out: {format_date(check_out)}\n"
        f"Guests: {guests}\n"
        f"Total Price: {settings.currency}{format_amount(total)}\n\n"
        "Should I proceed with the booking?"
    )
