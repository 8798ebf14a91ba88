"""FastAPI authentication dependencies for route protection."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.auth.tokens import decode_session_token
from stayhub.database import get_db
from stayhub.models.user import User

# Optional bearer: returns None if no token provided; required routes raise 401 themselves
_bearer_scheme_optional = HTTPBearer(auto_error=False)


async def _resolve_user(token: str, db: AsyncSession) -> User | None:
    try:
        payload = decode_session_token(token)
    except JWTError:
        return None

    sub: str | None = payload.get("sub")
    if not sub:
        return None

    return await db.get(User, sub)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme_optional),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Validate the Bearer session token and return the authenticated user.

    Raises:
        HTTPException 401: If the token is missing, invalid, expired, or the user is unknown.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await _resolve_user(credentials.credentials, db)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme_optional),
    db: AsyncSession = Depends(get_db),
) -> User | None:
    """Optionally authenticate a user from a Bearer token.

    Returns ``None`` instead of raising when no valid token is provided.
    Used by the chat endpoint, which works anonymously but only lets
    signed-in users prepare bookings.
    """
    if credentials is None:
        return None
    return await _resolve_user(credentials.credentials, db)
