"""Domain errors and their JSON rendering.

Every failure leaves the API as ``{"error": <message>}`` with the status code
carried by the exception. Store failures are logged once, where they are
caught, and replaced by a generic message so no SQL or stack trace reaches
the client.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

GENERIC_STORE_MESSAGE = 'Internal server error'


class AgendaError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = GENERIC_STORE_MESSAGE

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AgendaError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Invalid request'


class ConflictError(AgendaError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Username or email already exists'


class AuthError(AgendaError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = 'Not authorized'


class MissingTokenError(AuthError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = 'Access token required'


class InvalidTokenError(AuthError):
    default_message = 'Invalid token'


class InsufficientRoleError(AuthError):
    default_message = 'Admin access required'


class InvalidCredentialsError(AuthError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = 'Invalid credentials'


class NotFoundError(AgendaError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = 'Not found'


class StoreError(AgendaError):
    pass


def error_response(status_code: int, message) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'error': message})


def validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return 'Invalid request'

    first = errors[0]
    if first.get('type') == 'value_error':
        raised = (first.get('ctx') or {}).get('error')
        if raised is not None:
            return str(raised)

    location = [str(part) for part in first.get('loc', ()) if part not in ('body', 'query', 'path')]
    field = '.'.join(location)
    if not field:
        return 'Request body is required'
    if first.get('type') == 'missing':
        return f'{field} is required'
    return f"{field}: {first.get('msg', 'invalid value')}"


async def _agenda_error_handler(request: Request, exc: AgendaError) -> JSONResponse:
    # Store errors were already logged with their traceback where they were translated.
    if isinstance(exc, StoreError):
        return error_response(exc.status_code, GENERIC_STORE_MESSAGE)
    return error_response(exc.status_code, exc.message)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, validation_message(exc))


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={'error': exc.detail},
        headers=getattr(exc, 'headers', None),
    )


async def _sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception('Unhandled database error on %s %s', request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_STORE_MESSAGE)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AgendaError, _agenda_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, _sqlalchemy_error_handler)
