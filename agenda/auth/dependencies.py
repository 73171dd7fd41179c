import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from agenda.auth import jwt_handler
from agenda.auth.jwt_handler import TokenClaims
from agenda.core.errors import InsufficientRoleError, InvalidTokenError, MissingTokenError
from agenda.models.user import UserRole

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def _has_credential(authorization: str | None) -> bool:
    _scheme, _, credential = (authorization or '').strip().partition(' ')
    return bool(credential.strip())


def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> TokenClaims:
    if credentials is None or not credentials.credentials:
        # A credential under another scheme ("Token abc", "Basic ...") is supplied but unusable.
        if _has_credential(request.headers.get('Authorization')):
            logger.info('Rejected non-bearer authorization header')
            raise InvalidTokenError()
        raise MissingTokenError()

    try:
        return jwt_handler.decode_access_token(credentials.credentials)
    except InvalidTokenError:
        logger.info('Rejected invalid or expired bearer token')
        raise


def require_admin(current_user: TokenClaims = Depends(get_current_user)) -> TokenClaims:
    # Role comes from the token; a role change applies once a new token is issued.
    if current_user.role != UserRole.ADMIN.value:
        logger.info('User %s denied admin access', current_user.id)
        raise InsufficientRoleError()
    return current_user
