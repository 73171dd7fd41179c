import logging

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from agenda.core.errors import NotFoundError, ValidationError
from agenda.models.school_class import SchoolClass
from agenda.models.task import Task
from agenda.models.user import User, UserRole
from agenda.schemas.admin import INVALID_ROLE_MESSAGE
from agenda.services.store import translate_store_errors

logger = logging.getLogger(__name__)


def list_users(db: Session) -> list[User]:
    with translate_store_errors(db, 'listing users'):
        return list(db.scalars(select(User).order_by(User.created_at.desc(), User.id.desc())))


def _count(db: Session, model) -> int:
    return db.scalar(select(func.count()).select_from(model)) or 0


def get_stats(db: Session) -> dict[str, int]:
    with translate_store_errors(db, 'counting rows'):
        return {
            'totalUsers': _count(db, User),
            'totalClasses': _count(db, SchoolClass),
            'totalTasks': _count(db, Task),
        }


def set_role(db: Session, user_id: int, role: str) -> User:
    if role not in {member.value for member in UserRole}:
        raise ValidationError(INVALID_ROLE_MESSAGE)

    with translate_store_errors(db, 'updating a role'):
        user = db.scalars(
            update(User)
            .where(User.id == user_id)
            .values(role=role)
            .returning(User)
        ).first()
        db.commit()

    if user is None:
        raise NotFoundError('User not found')

    # Tokens already issued to this user keep the old role until they expire.
    logger.info('User %s role set to %s', user_id, role)
    return user
