"""Owner-scoped task operations, including the completion toggle."""

import logging

from sqlalchemy import delete, not_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from agenda.core.errors import NotFoundError, ValidationError
from agenda.models.school_class import SchoolClass
from agenda.models.task import Task
from agenda.schemas.tasks import TaskPayload, TaskResponse
from agenda.services.store import translate_store_errors

logger = logging.getLogger(__name__)

TASK_NOT_FOUND_MESSAGE = 'Task not found'
UNKNOWN_CLASS_MESSAGE = 'Class not found'


def _to_response(task: Task, class_name: str | None) -> TaskResponse:
    return TaskResponse.model_validate(task).model_copy(update={'class_name': class_name})


def _ensure_class_owned(db: Session, user_id: int, class_id: int | None) -> None:
    if class_id is None:
        return

    with translate_store_errors(db, 'checking a class link'):
        owned = db.scalar(
            select(SchoolClass.id).where(SchoolClass.id == class_id, SchoolClass.user_id == user_id)
        )
    if owned is None:
        raise ValidationError(UNKNOWN_CLASS_MESSAGE)


def list_tasks(db: Session, user_id: int, class_id: int | None = None) -> list[TaskResponse]:
    query = (
        select(Task, SchoolClass.name)
        .outerjoin(SchoolClass, Task.class_id == SchoolClass.id)
        .where(Task.user_id == user_id)
    )
    if class_id is not None:
        query = query.where(Task.class_id == class_id)

    # Undated tasks sort after dated ones.
    query = query.order_by(Task.due_date.is_(None), Task.due_date, Task.created_at, Task.id)

    with translate_store_errors(db, 'listing tasks'):
        rows = db.execute(query).all()
    return [_to_response(task, class_name) for task, class_name in rows]


def create_task(db: Session, user_id: int, data: TaskPayload) -> Task:
    _ensure_class_owned(db, user_id, data.class_id)

    task = Task(user_id=user_id, **data.model_dump())
    with translate_store_errors(db, 'creating a task'):
        try:
            db.add(task)
            db.commit()
        except IntegrityError as exc:
            # The linked class was deleted after the ownership check.
            db.rollback()
            raise ValidationError(UNKNOWN_CLASS_MESSAGE) from exc
        db.refresh(task)

    logger.info('User %s created task %s', user_id, task.id)
    return task


def update_task(db: Session, user_id: int, task_id: int, data: TaskPayload) -> Task:
    _ensure_class_owned(db, user_id, data.class_id)

    with translate_store_errors(db, 'updating a task'):
        try:
            task = db.scalars(
                update(Task)
                .where(Task.id == task_id, Task.user_id == user_id)
                .values(**data.model_dump())
                .returning(Task)
            ).first()
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise ValidationError(UNKNOWN_CLASS_MESSAGE) from exc

    if task is None:
        raise NotFoundError(TASK_NOT_FOUND_MESSAGE)
    return task


def toggle_task(db: Session, user_id: int, task_id: int) -> bool:
    """Flip ``completed`` in one conditioned UPDATE and return the new value."""
    with translate_store_errors(db, 'toggling a task'):
        completed = db.execute(
            update(Task)
            .where(Task.id == task_id, Task.user_id == user_id)
            .values(completed=not_(Task.completed))
            .returning(Task.completed)
            .execution_options(synchronize_session=False)
        ).scalar_one_or_none()
        db.commit()

    if completed is None:
        raise NotFoundError(TASK_NOT_FOUND_MESSAGE)
    return completed


def delete_task(db: Session, user_id: int, task_id: int) -> None:
    with translate_store_errors(db, 'deleting a task'):
        result = db.execute(
            delete(Task)
            .where(Task.id == task_id, Task.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        db.commit()

    if result.rowcount == 0:
        raise NotFoundError(TASK_NOT_FOUND_MESSAGE)
    logger.info('User %s deleted task %s', user_id, task_id)
