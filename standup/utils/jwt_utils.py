from datetime import datetime, timedelta, timezone

import jwt
from django.conf import settings

from standup.constants.messages import AuthErrorMessages
from standup.exceptions.auth_exceptions import TokenExpiredError, TokenInvalidError

ISSUER = "standup-auth"
SESSION_TOKEN_TYPE = "session"
MAGIC_TOKEN_TYPE = "magic"


def _secret() -> str:
    secret = settings.AUTH_CONFIG.get("SECRET")
    if not secret:
        raise TokenInvalidError(AuthErrorMessages.MISSING_AUTH_SECRET)
    return secret


def _encode(payload: dict, lifetime_seconds: int) -> str:
    now = datetime.now(timezone.utc)
    expiry = now + timedelta(seconds=lifetime_seconds)
    payload = {
        "iss": ISSUER,
        "exp": int(expiry.timestamp()),
        "iat": int(now.timestamp()),
        **payload,
    }
    return jwt.encode(payload=payload, key=_secret(), algorithm=settings.AUTH_CONFIG.get("ALGORITHM"))


def _decode(token: str, token_type: str) -> dict:
    if not token or not token.strip():
        raise TokenInvalidError()

    try:
        payload = jwt.decode(
            jwt=token,
            key=_secret(),
            algorithms=[settings.AUTH_CONFIG.get("ALGORITHM")],
            issuer=ISSUER,
        )
    except jwt.ExpiredSignatureError:
        raise TokenExpiredError()
    except jwt.InvalidTokenError as e:
        raise TokenInvalidError(f"{AuthErrorMessages.TOKEN_INVALID}: {str(e)}")

    if payload.get("token_type") != token_type:
        raise TokenInvalidError(AuthErrorMessages.TOKEN_INVALID)
    return payload


def generate_session_token(user_id: str, email: str) -> str:
    return _encode(
        {"sub": user_id, "user_id": user_id, "email": email, "token_type": SESSION_TOKEN_TYPE},
        settings.AUTH_CONFIG.get("SESSION_LIFETIME"),
    )


def validate_session_token(token: str) -> dict:
    payload = _decode(token, SESSION_TOKEN_TYPE)
    if not payload.get("user_id"):
        raise TokenInvalidError(AuthErrorMessages.TOKEN_INVALID)
    return payload


def generate_magic_token(email: str) -> str:
    return _encode(
        {"sub": email.strip().lower(), "email": email.strip().lower(), "token_type": MAGIC_TOKEN_TYPE},
        settings.AUTH_CONFIG.get("MAGIC_LINK_LIFETIME"),
    )


def validate_magic_token(token: str) -> dict:
    """
    Returns the payload of a magic-link token.

    Raises:
        TokenExpiredError: If the link is older than MAGIC_LINK_LIFETIME
        TokenInvalidError: If the token is malformed, tampered with or not a magic-link token
    """
    payload = _decode(token, MAGIC_TOKEN_TYPE)
    if not payload.get("email"):
        raise TokenInvalidError(AuthErrorMessages.TOKEN_INVALID)
    return payload
