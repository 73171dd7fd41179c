from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from agenda.auth.dependencies import require_admin
from agenda.database import get_db
from agenda.schemas.admin import RoleUpdateRequest, RoleUpdateResponse, StatsResponse
from agenda.schemas.auth import UserResponse
from agenda.services import admin_service

# Every route here requires an admin token; the role claim is not re-read from the store.
router = APIRouter(tags=['admin'], dependencies=[Depends(require_admin)])


@router.get('/users', response_model=list[UserResponse])
def list_users(db: Session = Depends(get_db)):
    return admin_service.list_users(db)


@router.get('/stats', response_model=StatsResponse)
def get_stats(db: Session = Depends(get_db)):
    return admin_service.get_stats(db)


@router.put('/users/{user_id}/role', response_model=RoleUpdateResponse)
def update_user_role(user_id: int, data: RoleUpdateRequest, db: Session = Depends(get_db)):
    user = admin_service.set_role(db, user_id, data.role)
    return RoleUpdateResponse(message='User role updated successfully', user=UserResponse.model_validate(user))
