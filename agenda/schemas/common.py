from pydantic import BaseModel


def blank_to_none(value):
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class MessageResponse(BaseModel):
    message: str


class CreatedResponse(BaseModel):
    id: int
    message: str
