"""Credential store operations: registration, login and password changes."""

import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from agenda.auth.passwords import burn_verification, hash_password, verify_password
from agenda.core.errors import ConflictError, InvalidCredentialsError, NotFoundError
from agenda.models.user import User, UserRole
from agenda.schemas.auth import RegisterRequest
from agenda.services.store import translate_store_errors

logger = logging.getLogger(__name__)

DUPLICATE_USER_MESSAGE = 'Username or email already exists'


def _insert_user(db: Session, username: str, email: str, password: str, role: UserRole) -> User:
    user = User(
        username=username,
        email=email,
        password=hash_password(password),
        role=role.value,
    )
    with translate_store_errors(db, 'creating a user'):
        try:
            db.add(user)
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise ConflictError(DUPLICATE_USER_MESSAGE) from exc
        db.refresh(user)

    logger.info('Registered user %s with role %s', user.id, user.role)
    return user


def register_user(db: Session, data: RegisterRequest) -> User:
    return _insert_user(db, data.username, data.email, data.password, UserRole.USER)


def authenticate_user(db: Session, username: str, password: str) -> User:
    with translate_store_errors(db, 'loading a user'):
        user = db.scalars(select(User).where(User.username == username)).first()

    if user is None:
        burn_verification(password)
        raise InvalidCredentialsError()
    if not verify_password(password, user.password):
        raise InvalidCredentialsError()
    return user


def get_user(db: Session, user_id: int) -> User:
    with translate_store_errors(db, 'loading a user'):
        user = db.get(User, user_id)
    if user is None:
        raise NotFoundError('User not found')
    return user


def change_password(db: Session, user_id: int, current_password: str, new_password: str) -> None:
    user = get_user(db, user_id)
    if not verify_password(current_password, user.password):
        raise InvalidCredentialsError('Current password is incorrect')

    with translate_store_errors(db, 'changing a password'):
        result = db.execute(
            update(User)
            .where(User.id == user_id)
            .values(password=hash_password(new_password))
            .execution_options(synchronize_session=False)
        )
        db.commit()

    if result.rowcount == 0:
        raise NotFoundError('User not found')
    logger.info('User %s changed their password', user_id)


def ensure_admin(db: Session, username: str, email: str, password: str) -> tuple[User, bool]:
    """Promote ``username`` to admin, creating the account when it does not exist."""
    with translate_store_errors(db, 'promoting a user'):
        promoted = db.scalars(
            update(User)
            .where(User.username == username)
            .values(role=UserRole.ADMIN.value)
            .returning(User)
        ).first()
        db.commit()

    if promoted is not None:
        db.refresh(promoted)
        logger.info('Promoted existing user %s to admin', promoted.id)
        return promoted, False

    return _insert_user(db, username, email, password, UserRole.ADMIN), True
