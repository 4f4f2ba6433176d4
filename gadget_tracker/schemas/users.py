from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class UserType(str, Enum):
    admin = "admin"
    user = "user"


USER_TEXT_FIELDS = ("nik", "name", "position", "unit", "location")


class UserBase(BaseModel):
    nik: str = Field(min_length=1)
    name: str = Field(min_length=1)
    position: str = Field(min_length=1)
    unit: str = Field(min_length=1)
    location: str = Field(min_length=1)
    user_type: UserType = UserType.user

    @field_validator(*USER_TEXT_FIELDS, mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class UserCreate(UserBase):
    pass


class UserUpdate(BaseModel):
    nik: Optional[str] = Field(default=None, min_length=1)
    name: Optional[str] = Field(default=None, min_length=1)
    position: Optional[str] = Field(default=None, min_length=1)
    unit: Optional[str] = Field(default=None, min_length=1)
    location: Optional[str] = Field(default=None, min_length=1)
    user_type: Optional[UserType] = None

    @field_validator(*USER_TEXT_FIELDS, "user_type", mode="before")
    @classmethod
    def reject_null(cls, v):
        # Every user field is mandatory, so an explicit null is never a valid change
        if v is None:
            raise ValueError("field is required and cannot be cleared")
        return v.strip() if isinstance(v, str) else v


class UserResponse(UserBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
