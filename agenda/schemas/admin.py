from pydantic import BaseModel, Field, field_validator

from agenda.models.user import UserRole
from agenda.schemas.auth import UserResponse

INVALID_ROLE_MESSAGE = 'Invalid role. Must be "user" or "admin"'


class RoleUpdateRequest(BaseModel):
    role: str | None = Field(default=None, validate_default=True)

    @field_validator('role')
    @classmethod
    def validate_role(cls, value: str | None) -> str:
        if value not in {role.value for role in UserRole}:
            raise ValueError(INVALID_ROLE_MESSAGE)
        return value


class StatsResponse(BaseModel):
    totalUsers: int
    totalClasses: int
    totalTasks: int


class RoleUpdateResponse(BaseModel):
    message: str
    user: UserResponse
