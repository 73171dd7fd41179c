from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from agenda.models.school_class import WEEKDAYS
from agenda.schemas.common import blank_to_none

_WEEKDAY_LOOKUP = {day.lower(): day for day in WEEKDAYS}


def normalize_clock_time(value: str) -> str:
    """Return ``HH:MM`` for inputs like ``9:00``, ``09:00`` or ``09:00:00``."""
    parts = value.split(':')
    if len(parts) not in (2, 3) or not all(part.isdigit() for part in parts):
        raise ValueError('Times must use the HH:MM format')

    hour, minute = int(parts[0]), int(parts[1])
    if not (0 <= hour < 24 and 0 <= minute < 60) or len(parts[1]) != 2:
        raise ValueError('Times must use the HH:MM format')
    return f'{hour:02d}:{minute:02d}'


class ClassPayload(BaseModel):
    name: str | None = None
    professor: str | None = None
    day: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    classroom: str | None = None

    @field_validator('name', 'professor', 'day', 'start_time', 'end_time', 'classroom', mode='before')
    @classmethod
    def strip_text(cls, value):
        return blank_to_none(value)

    @field_validator('day')
    @classmethod
    def validate_day(cls, value: str | None) -> str | None:
        if value is None:
            return None
        day = _WEEKDAY_LOOKUP.get(value.lower())
        if day is None:
            raise ValueError('Day must be a weekday name (Monday through Sunday)')
        return day

    @field_validator('start_time', 'end_time')
    @classmethod
    def validate_time(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return normalize_clock_time(value)

    @model_validator(mode='after')
    def require_schedule_fields(self):
        if not (self.name and self.day and self.start_time and self.end_time):
            raise ValueError('Name, day, start time, and end time are required')
        return self


class ClassResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    professor: str | None = None
    day: str
    start_time: str
    end_time: str
    classroom: str | None = None
    created_at: datetime | None = None
