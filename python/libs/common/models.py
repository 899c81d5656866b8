"""Shared Pydantic models used across Python services."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Tag

KNOWN_FIELD_TYPES = ("text", "number", "gender")
UNKNOWN_FIELD_TYPE = "unknown"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class TextProfileField(BaseModel):
    field_type: Literal["text"] = "text"
    name: str
    value: str


class NumberProfileField(BaseModel):
    field_type: Literal["number"] = "number"
    name: str
    value: Union[int, float]


class GenderProfileField(BaseModel):
    field_type: Literal["gender"] = "gender"
    name: str
    value: Gender


class UnknownProfileField(BaseModel):
    """Catch-all for a field_type this service does not understand.

    Keeps the raw payload so the field can be reported per item instead of
    rejecting the whole request body.
    """

    model_config = ConfigDict(extra="allow")

    field_type: Any = None


def profile_field_tag(value: Any) -> str:
    if isinstance(value, dict):
        tag = value.get("field_type")
    else:
        tag = getattr(value, "field_type", None)
    tag = getattr(tag, "value", tag)
    if tag in KNOWN_FIELD_TYPES:
        return tag
    return UNKNOWN_FIELD_TYPE


ProfileField = Annotated[
    Union[
        Annotated[TextProfileField, Tag("text")],
        Annotated[NumberProfileField, Tag("number")],
        Annotated[GenderProfileField, Tag("gender")],
        Annotated[UnknownProfileField, Tag(UNKNOWN_FIELD_TYPE)],
    ],
    Discriminator(profile_field_tag),
]


class UserBase(BaseModel):
    name: str
    email: str
    profile_fields: Optional[list[ProfileField]] = None


class User(UserBase):
    id: int
    created_at: datetime
    updated_at: datetime


class CreateUserRequest(UserBase):
    pass


class UpdateUserRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    profile_fields: Optional[list[ProfileField]] = None


class ErrorResponse(BaseModel):
    message: str
    code: Optional[str] = None


class HelloResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str
    service: str
