from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel, ValidationError as ClaimsValidationError

from agenda.core import config
from agenda.core.errors import InvalidTokenError


class TokenClaims(BaseModel):
    """Identity carried by a bearer token; the role is trusted until expiry."""

    id: int
    username: str
    role: str


def create_access_token(
    user_id: int,
    username: str,
    role: str,
    expires_minutes: int | None = None,
) -> str:
    expire_minutes = expires_minutes or config.JWT_EXPIRES_MINUTES
    issued_at = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "id": user_id,
        "username": username,
        "role": role,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=expire_minutes),
    }
    return jwt.encode(payload, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> TokenClaims:
    try:
        payload = jwt.decode(
            token,
            config.JWT_SECRET_KEY,
            algorithms=[config.JWT_ALGORITHM],
            options={"require": ["exp", "iat", "sub"]},
        )
        return TokenClaims.model_validate(payload)
    except (jwt.PyJWTError, ClaimsValidationError) as exc:
        raise InvalidTokenError() from exc
