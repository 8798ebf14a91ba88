"""User model — mirrored from the identity provider."""

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from stayhub.database import Base, TimestampMixin


class User(TimestampMixin, Base):
    """A guest or hotel owner.

    The primary key is the identity provider's user id (e.g. ``user_2abc…``),
    so rows are created by the provider's webhook rather than by sign-up.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    image: Mapped[str | None] = mapped_column(String(512), nullable=True)
    role: Mapped[str] = mapped_column(String(50), default="user", nullable=False)  # user, hotelOwner
    recent_searched_cities: Mapped[list] = mapped_column(JSON, default=list)

    def __repr__(self) -> str:
        return f"<User id={self.id!r} email={self.email!r} role={self.role!r}>"
