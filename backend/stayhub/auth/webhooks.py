"""Identity-provider webhook handlers — keep local users in sync."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession
from svix.webhooks import Webhook

from stayhub.config import settings
from stayhub.models.user import User

logger = logging.getLogger(__name__)

DEFAULT_EMAIL = "unknown@example.com"
DEFAULT_USERNAME = "Unknown User"
DEFAULT_AVATAR = "https://example.com/default-avatar.png"


def verify_webhook(payload: bytes, headers: dict[str, str]) -> dict:
    """Verify the svix signature headers and return the decoded event.

    Raises:
        svix.webhooks.WebhookVerificationError: If the signature is invalid.
    """
    return Webhook(settings.clerk_webhook_secret).verify(payload, headers)


def user_fields_from_payload(data: dict) -> dict:
    """Map the provider's user object onto local User columns."""
    emails = data.get("email_addresses") or []
    email = (emails[0] or {}).get("email_address") if emails else None
    username = f"{data.get('first_name') or ''} {data.get('last_name') or ''}".strip()
    return {
        "email": email or DEFAULT_EMAIL,
        "username": username or DEFAULT_USERNAME,
        "image": data.get("image_url") or DEFAULT_AVATAR,
    }


async def handle_user_created(db: AsyncSession, data: dict) -> None:
    """Handle user.created — upsert so redelivered events are harmless."""
    fields = user_fields_from_payload(data)
    user = await db.get(User, data["id"])
    if user is None:
        user = User(id=data["id"], role="user", recent_searched_cities=[], **fields)
        db.add(user)
    else:
        for key, value in fields.items():
            setattr(user, key, value)
    await db.flush()
    logger.info("User %s created", data["id"])


async def handle_user_updated(db: AsyncSession, data: dict) -> None:
    """Handle user.updated — refresh profile fields of a known user."""
    user = await db.get(User, data["id"])
    if user is None:
        logger.warning("user.updated for unknown user %s, skipping", data["id"])
        return
    for key, value in user_fields_from_payload(data).items():
        setattr(user, key, value)
    await db.flush()
    logger.info("User %s updated", data["id"])


async def handle_user_deleted(db: AsyncSession, data: dict) -> None:
    """Handle user.deleted — remove the local user."""
    user = await db.get(User, data["id"])
    if user is None:
        logger.info("user.deleted for unknown user %s, nothing to do", data["id"])
        return
    await db.delete(user)
    await db.flush()
    logger.info("User %s deleted", data["id"])


EVENT_HANDLERS = {
    "user.created": handle_user_created,
    "user.updated": handle_user_updated,
    "user.deleted": handle_user_deleted,
}
