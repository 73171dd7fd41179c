import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from agenda.auth import jwt_handler
from agenda.auth.dependencies import get_current_user
from agenda.auth.jwt_handler import TokenClaims
from agenda.core.errors import InvalidCredentialsError
from agenda.database import get_db
from agenda.models.user import User
from agenda.schemas.auth import (
    AuthResponse,
    AuthUser,
    ChangePasswordRequest,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)
from agenda.schemas.common import MessageResponse
from agenda.services import user_service

router = APIRouter(tags=['auth'])

logger = logging.getLogger(__name__)


def build_auth_response(user: User, message: str) -> AuthResponse:
    token = jwt_handler.create_access_token(user_id=user.id, username=user.username, role=user.role)
    return AuthResponse(
        message=message,
        token=token,
        user=AuthUser.model_validate(user),
    )


@router.post('/register', response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    user = user_service.register_user(db, data)
    return build_auth_response(user, 'User created successfully')


@router.post('/login', response_model=AuthResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    try:
        user = user_service.authenticate_user(db, data.username, data.password)
    except InvalidCredentialsError:
        logger.info('Failed login attempt for username %r', data.username)
        raise
    return build_auth_response(user, 'Login successful')


@router.get('/me', response_model=UserResponse)
def me(current_user: TokenClaims = Depends(get_current_user), db: Session = Depends(get_db)):
    return user_service.get_user(db, current_user.id)


@router.put('/change-password', response_model=MessageResponse)
def change_password(
    data: ChangePasswordRequest,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    user_service.change_password(db, current_user.id, data.current_password, data.new_password)
    return MessageResponse(message='Password updated successfully')
