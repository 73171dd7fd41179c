from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from agenda.schemas.common import blank_to_none


class RegisterRequest(BaseModel):
    username: str | None = None
    email: str | None = None
    password: str | None = None

    @field_validator('username', 'email', mode='before')
    @classmethod
    def strip_identity(cls, value):
        return blank_to_none(value)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value: str | None) -> str | None:
        if value is None:
            return None
        normalized = value.lower()
        local, _, domain = normalized.partition('@')
        if not local or not domain:
            raise ValueError('Email address is invalid')
        return normalized

    @model_validator(mode='after')
    def require_all_fields(self):
        if not self.username or not self.email or not self.password:
            raise ValueError('All fields are required')
        return self


class LoginRequest(BaseModel):
    username: str | None = None
    password: str | None = None

    @field_validator('username', mode='before')
    @classmethod
    def strip_username(cls, value):
        return blank_to_none(value)

    @model_validator(mode='after')
    def require_credentials(self):
        if not self.username or not self.password:
            raise ValueError('Username and password are required')
        return self


class ChangePasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_password: str | None = Field(default=None, alias='currentPassword')
    new_password: str | None = Field(default=None, alias='newPassword')

    @model_validator(mode='after')
    def require_both_passwords(self):
        if not self.current_password or not self.new_password:
            raise ValueError('Current password and new password are required')
        return self


class AuthUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    role: str


class UserResponse(AuthUser):
    created_at: datetime | None = None


class AuthResponse(BaseModel):
    message: str
    token: str
    user: AuthUser
