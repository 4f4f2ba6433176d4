from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from ..db import get_db
from ..schemas.notifications import (
    GenerationResult,
    MarkAllReadResult,
    MarkReadResult,
    NotificationCreate,
    NotificationResponse,
    UnreadCount,
)
from ..services import notifications as notification_service


router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=List[NotificationResponse])
def list_notifications(unread_only: bool = False, db: Session = Depends(get_db)):
    return notification_service.list_notifications(db, unread_only=unread_only)


@router.get("/unread", response_model=List[NotificationResponse])
def list_unread(db: Session = Depends(get_db)):
    return notification_service.list_notifications(db, unread_only=True)


@router.get("/unread-count", response_model=UnreadCount)
def unread_count(db: Session = Depends(get_db)):
    return UnreadCount(count=notification_service.count_unread(db))


@router.post("", response_model=NotificationResponse)
def create_notification(payload: NotificationCreate, db: Session = Depends(get_db)):
    return notification_service.create_notification(db, payload)


@router.post("/mark-all-read", response_model=MarkAllReadResult)
def mark_all_read(db: Session = Depends(get_db)):
    updated = notification_service.mark_all_read(db)
    return MarkAllReadResult(success=True, updated_count=updated)


@router.post("/{notification_id}/read", response_model=MarkReadResult)
def mark_read(notification_id: int, db: Session = Depends(get_db)):
    # Unknown ids are not an error: the notice may already be gone with its asset
    notification_service.mark_read(db, notification_id)
    return MarkReadResult(success=True, id=notification_id)


@router.post("/generate/warranty", response_model=GenerationResult)
def generate_warranty(db: Session = Depends(get_db)):
    """Create warranty-expiring notices for assets not yet notified (cron trigger)."""
    return GenerationResult(created=notification_service.generate_warranty_notifications(db))


@router.post("/generate/repair-reminders", response_model=GenerationResult)
def generate_repair_reminders(db: Session = Depends(get_db)):
    return GenerationResult(created=notification_service.generate_repair_reminders(db))
