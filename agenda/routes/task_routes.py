from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from agenda.auth.dependencies import get_current_user
from agenda.auth.jwt_handler import TokenClaims
from agenda.core.errors import ValidationError
from agenda.database import get_db
from agenda.schemas.common import CreatedResponse, MessageResponse, blank_to_none
from agenda.schemas.tasks import TaskPayload, TaskResponse, ToggleResponse
from agenda.services import task_service

router = APIRouter(tags=['tasks'])


def parse_class_filter(raw: str | None) -> int | None:
    # An empty ?classId= means no filter.
    value = blank_to_none(raw)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise ValidationError('classId must be an integer') from exc


@router.get('', response_model=list[TaskResponse])
def list_tasks(
    class_id: str | None = Query(default=None, alias='classId'),
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return task_service.list_tasks(db, current_user.id, parse_class_filter(class_id))


@router.post('', response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    data: TaskPayload,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    task = task_service.create_task(db, current_user.id, data)
    return CreatedResponse(id=task.id, message='Task created successfully')


@router.put('/{task_id}', response_model=MessageResponse)
def update_task(
    task_id: int,
    data: TaskPayload,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    task_service.update_task(db, current_user.id, task_id, data)
    return MessageResponse(message='Task updated successfully')


@router.patch('/{task_id}/toggle', response_model=ToggleResponse)
def toggle_task(
    task_id: int,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    completed = task_service.toggle_task(db, current_user.id, task_id)
    return ToggleResponse(completed=completed, message='Task status updated successfully')


@router.delete('/{task_id}', response_model=MessageResponse)
def delete_task(
    task_id: int,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    task_service.delete_task(db, current_user.id, task_id)
    return MessageResponse(message='Task deleted successfully')
