"""SQLAlchemy models for StayHub.

All models are imported here so that ``Base.metadata`` knows every table
before ``create_all`` runs. If you add a new model, import it in this file.
"""

from stayhub.models.booking import Booking
from stayhub.models.hotel import Hotel
from stayhub.models.room import Room
from stayhub.models.user import User

__all__ = [
    "Booking",
    "Hotel",
    "Room",
    "User",
]
