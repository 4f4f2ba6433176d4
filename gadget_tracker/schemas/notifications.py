from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class NotificationType(str, Enum):
    warranty_expiring = "warranty_expiring"
    repair_reminder = "repair_reminder"
    general = "general"


class NotificationCreate(BaseModel):
    title: str = Field(min_length=1)
    message: str = Field(min_length=1)
    type: NotificationType = NotificationType.general
    # Nullable on input so the service can reject it with a clear error
    asset_id: Optional[int] = None

    @field_validator("title", "message", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class NotificationResponse(BaseModel):
    id: int
    title: str
    message: str
    type: NotificationType
    asset_id: int
    is_read: bool
    created_at: datetime

    class Config:
        from_attributes = True


class GenerationResult(BaseModel):
    created: int


class MarkReadResult(BaseModel):
    success: bool
    id: int


class MarkAllReadResult(BaseModel):
    success: bool
    updated_count: int


class UnreadCount(BaseModel):
    count: int
