from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from agenda.schemas.common import MessageResponse, blank_to_none


class TaskPayload(BaseModel):
    title: str | None = None
    description: str | None = None
    due_date: date | None = None
    class_id: int | None = None

    @field_validator('title', 'description', 'due_date', mode='before')
    @classmethod
    def strip_text(cls, value):
        return blank_to_none(value)

    @field_validator('class_id', mode='before')
    @classmethod
    def unlinked_class(cls, value):
        # Forms send "" or 0 for "no class".
        value = blank_to_none(value)
        if value in (0, '0'):
            return None
        return value

    @model_validator(mode='after')
    def require_title(self):
        if not self.title:
            raise ValueError('Title is required')
        return self


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    class_id: int | None = None
    class_name: str | None = None
    title: str
    description: str | None = None
    due_date: date | None = None
    completed: bool
    created_at: datetime | None = None


class ToggleResponse(MessageResponse):
    completed: bool
