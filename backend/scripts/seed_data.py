"""Seed the database with sample hotels, rooms, and a demo guest.

Creates the tables if they do not exist, then (re)creates the demo owner's
hotels and rooms. Users normally arrive through the identity-provider
webhook; the demo users here use fixed ids so they can be matched to test
accounts.

Run:
    python -m scripts.seed_data
"""

import asyncio
import sys
from decimal import Decimal
from pathlib import Path

# Add backend to path so imports work when run as a script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import delete, select

from stayhub.database import Base, async_session_factory, engine
from stayhub.models.booking import Booking
from stayhub.models.hotel import Hotel
from stayhub.models.room import Room
from stayhub.models.user import User

# ---------------------------------------------------------------------------
# Seed data definitions
# ---------------------------------------------------------------------------

DEMO_OWNER = {
    "id": "user_demo_owner",
    "username": "Demo Owner",
    "email": "owner@stayhub.example",
    "role": "hotelOwner",
}

DEMO_GUEST = {
    "id": "user_demo_guest",
    "username": "Demo Guest",
    "email": "guest@stayhub.example",
    "role": "user",
}

HOTELS = [
    {
        "name": "Urbanza Suites",
        "address": "Main Road 123 Street, 23 Colony",
        "contact": "+0123456789",
        "city": "New York",
        "rooms": [
            {
                "room_type": "Double Bed",
                "price_per_night": Decimal("399.00"),
                "amenities": ["Room Service", "Mountain View", "Pool Access"],
            },
            {
                "room_type": "Single Bed",
                "price_per_night": Decimal("199.00"),
                "amenities": ["Free WiFi", "Free Breakfast", "Room Service"],
            },
        ],
    },
    {
        "name": "Seaside Retreat",
        "address": "12 Marine Drive",
        "contact": "+919876543210",
        "city": "Mumbai",
        "rooms": [
            {
                "room_type": "Luxury Room",
                "price_per_night": Decimal("2999.00"),
                "amenities": ["Free WiFi", "Pool Access", "Mountain View"],
            },
            {
                "room_type": "Family Suite",
                "price_per_night": Decimal("4499.00"),
                "amenities": ["Free WiFi", "Free Breakfast", "Room Service", "Pool Access"],
            },
        ],
    },
    {
        "name": "Heritage Haveli",
        "address": "7 Amer Road",
        "contact": "+919812345678",
        "city": "Jaipur",
        "rooms": [
            {
                "room_type": "Double Bed",
                "price_per_night": Decimal("1799.00"),
                "amenities": ["Free Breakfast", "Room Service"],
            },
        ],
    },
]


# ---------------------------------------------------------------------------
# Main seed function
# ---------------------------------------------------------------------------


async def seed() -> None:
    """Populate the database with sample listings.

    Idempotent: deletes the demo owner's hotels, rooms and their bookings and
    re-creates them.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as session:
        for user_data in (DEMO_OWNER, DEMO_GUEST):
            user = await session.get(User, user_data["id"])
            if user is None:
                session.add(User(recent_searched_cities=[], **user_data))
        await session.flush()

        owned_hotels = select(Hotel.id).where(Hotel.owner_id == DEMO_OWNER["id"])
        await session.execute(delete(Booking).where(Booking.hotel_id.in_(owned_hotels)))
        await session.execute(delete(Room).where(Room.hotel_id.in_(owned_hotels)))
        await session.execute(delete(Hotel).where(Hotel.owner_id == DEMO_OWNER["id"]))
        await session.flush()

        room_count = 0
        for hotel_data in HOTELS:
            rooms = hotel_data["rooms"]
            hotel = Hotel(owner_id=DEMO_OWNER["id"], **{k: v for k, v in hotel_data.items() if k != "rooms"})
            session.add(hotel)
            await session.flush()
            print(f"   🏨 {hotel.name} — {hotel.city}")

            for room_data in rooms:
                session.add(Room(hotel_id=hotel.id, images=[], is_available=True, **room_data))
                room_count += 1

        await session.commit()

        print()
        print("=" * 60)
        print("📊 Seed Summary")
        print("=" * 60)
        print(f"   Users:  2 ({DEMO_OWNER['id']}, {DEMO_GUEST['id']})")
        print(f"   Hotels: {len(HOTELS)}")
        print(f"   Rooms:  {room_count}")
        print("=" * 60)


if __name__ == "__main__":
    asyncio.run(seed())
