from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from agenda.auth.dependencies import get_current_user
from agenda.auth.jwt_handler import TokenClaims
from agenda.database import get_db
from agenda.schemas.classes import ClassPayload, ClassResponse
from agenda.schemas.common import CreatedResponse, MessageResponse
from agenda.services import class_service

router = APIRouter(tags=['classes'])


@router.get('', response_model=list[ClassResponse])
def list_classes(current_user: TokenClaims = Depends(get_current_user), db: Session = Depends(get_db)):
    return class_service.list_classes(db, current_user.id)


@router.post('', response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_class(
    data: ClassPayload,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    school_class = class_service.create_class(db, current_user.id, data)
    return CreatedResponse(id=school_class.id, message='Class created successfully')


@router.put('/{class_id}', response_model=MessageResponse)
def update_class(
    class_id: int,
    data: ClassPayload,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    class_service.update_class(db, current_user.id, class_id, data)
    return MessageResponse(message='Class updated successfully')


@router.delete('/{class_id}', response_model=MessageResponse)
def delete_class(
    class_id: int,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    class_service.delete_class(db, current_user.id, class_id)
    return MessageResponse(message='Class deleted successfully')
