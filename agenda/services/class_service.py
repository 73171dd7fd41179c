"""Owner-scoped operations on the weekly class schedule.

Every mutation is one statement whose WHERE clause carries both the class id
and the caller's id, so a class owned by someone else behaves exactly like a
missing one.
"""

import logging

from sqlalchemy import case, delete, select, update
from sqlalchemy.orm import Session

from agenda.core.errors import NotFoundError
from agenda.models.school_class import WEEKDAYS, SchoolClass
from agenda.schemas.classes import ClassPayload
from agenda.services.store import translate_store_errors

logger = logging.getLogger(__name__)

CLASS_NOT_FOUND_MESSAGE = 'Class not found'

_weekday_order = case(
    {day: index for index, day in enumerate(WEEKDAYS)},
    value=SchoolClass.day,
    else_=len(WEEKDAYS),
)


def list_classes(db: Session, user_id: int) -> list[SchoolClass]:
    with translate_store_errors(db, 'listing classes'):
        return list(
            db.scalars(
                select(SchoolClass)
                .where(SchoolClass.user_id == user_id)
                .order_by(_weekday_order, SchoolClass.start_time, SchoolClass.id)
            )
        )


def create_class(db: Session, user_id: int, data: ClassPayload) -> SchoolClass:
    school_class = SchoolClass(user_id=user_id, **data.model_dump())
    with translate_store_errors(db, 'creating a class'):
        db.add(school_class)
        db.commit()
        db.refresh(school_class)

    logger.info('User %s created class %s', user_id, school_class.id)
    return school_class


def update_class(db: Session, user_id: int, class_id: int, data: ClassPayload) -> SchoolClass:
    with translate_store_errors(db, 'updating a class'):
        school_class = db.scalars(
            update(SchoolClass)
            .where(SchoolClass.id == class_id, SchoolClass.user_id == user_id)
            .values(**data.model_dump())
            .returning(SchoolClass)
        ).first()
        db.commit()

    if school_class is None:
        raise NotFoundError(CLASS_NOT_FOUND_MESSAGE)
    return school_class


def delete_class(db: Session, user_id: int, class_id: int) -> None:
    # Linked tasks keep existing; the schema clears their class_id.
    with translate_store_errors(db, 'deleting a class'):
        result = db.execute(
            delete(SchoolClass)
            .where(SchoolClass.id == class_id, SchoolClass.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        db.commit()

    if result.rowcount == 0:
        raise NotFoundError(CLASS_NOT_FOUND_MESSAGE)
    logger.info('User %s deleted class %s', user_id, class_id)
