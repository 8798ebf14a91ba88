"""Room search and lookup."""

import logging
import uuid
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.models.hotel import Hotel
from stayhub.models.room import Room
from stayhub.models.user import User

logger = logging.getLogger(__name__)

SEARCH_RESULT_LIMIT = 10
RECENT_CITIES_LIMIT = 3


def _coerce_uuid(value: uuid.UUID | str) -> uuid.UUID | None:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


async def search_rooms(
    db: AsyncSession,
    city: str | None = None,
    room_type: str | None = None,
    price_min: Decimal | float | None = None,
    price_max: Decimal | float | None = None,
    amenities: list[str] | None = None,
    limit: int = SEARCH_RESULT_LIMIT,
) -> list[Room]:
    """Search available rooms.

    Args:
        city: Case-insensitive substring match on the hotel's city.
        room_type: Case-insensitive substring match on the room type.
        price_min: Inclusive lower bound on the nightly rate.
        price_max: Inclusive upper bound on the nightly rate.
        amenities: A room matches if it offers ANY of these amenities.
        limit: Maximum number of rooms returned.

    Returns:
        Matching rooms with their hotel loaded, newest first.
    """
    query = select(Room).join(Hotel, Room.hotel_id == Hotel.id).where(Room.is_available.is_(True))

    if city:
        query = query.where(Hotel.city.ilike(f"%{city}%"))
    if room_type:
        query = query.where(Room.room_type.ilike(f"%{room_type}%"))
    if price_min is not None:
        query = query.where(Room.price_per_night >= price_min)
    if price_max is not None:
        query = query.where(Room.price_per_night <= price_max)

    query = query.order_by(Room.created_at.desc())

    # Amenities live in a JSON list, so they are matched after the query.
    if not amenities:
        result = await db.execute(query.limit(limit))
        return list(result.scalars().all())

    wanted = {a.lower() for a in amenities}
    result = await db.execute(query)
    rooms = [r for r in result.scalars().all() if wanted & {a.lower() for a in r.amenities or []}]
    return rooms[:limit]


async def get_room(db: AsyncSession, room_id: uuid.UUID | str) -> Room | None:
    """Fetch a room with its hotel. Malformed ids return None."""
    parsed = _coerce_uuid(room_id)
    if parsed is None:
        return None
    result = await db.execute(select(Room).where(Room.id == parsed))
    return result.scalar_one_or_none()


async def record_searched_city(db: AsyncSession, user: User, city: str) -> None:
    """Remember the user's most recently searched cities (latest last)."""
    cities = [c for c in (user.recent_searched_cities or []) if c.lower() != city.lower()]
    cities.append(city)
    user.recent_searched_cities = cities[-RECENT_CITIES_LIMIT:]
    db.add(user)
    await db.flush()
    logger.debug("Recorded searched city %r for user %s", city, user.id)
