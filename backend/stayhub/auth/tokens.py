"""Verification of identity-provider session tokens."""

from jose import jwt

from stayhub.config import settings


def decode_session_token(token: str) -> dict:
    """Decode and verify a session JWT issued by the identity provider.

    The key is the provider's signing key (a PEM public key for RS256, or a
    shared secret for HMAC algorithms). The ``sub`` claim holds the user id.

    Raises:
        jose.JWTError: If the token is invalid, expired, or malformed.
    """
    return jwt.decode(
        token,
        settings.clerk_jwt_key,
        algorithms=settings.clerk_jwt_algorithms,
        options={"verify_aud": False},
    )
