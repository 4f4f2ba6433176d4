"""
Notification service.

Besides manual notices, two generators scan the asset table and emit
notifications idempotently:

- warranty: one ``warranty_expiring`` notice per asset whose warranty ends
  within the configured window, never repeated for that asset;
- repair: a ``repair_reminder`` for assets left in repair status without an
  update for a week, at most once per week per asset.

Neither generator schedules itself; an external trigger (cron, see
``scripts/run_notification_jobs.py``) calls them.
"""
from datetime import date, datetime, timedelta
from typing import List, Optional

import structlog
from sqlalchemy.orm import Session

from ..config import settings
from ..errors import InvalidArgument
from ..models.models import Asset, Notification, utcnow
from ..schemas.assets import AssetStatus
from ..schemas.notifications import NotificationCreate, NotificationType
from .assets import warranty_expiring_clause


logger = structlog.get_logger(__name__)

WARRANTY_TITLE = "Warranty Expiring Soon"
REPAIR_TITLE = "Repair Status Reminder"


def create_notification(db: Session, data: NotificationCreate) -> Notification:
    if data.asset_id is None:
        raise InvalidArgument("asset_id is required: every notification must reference an asset")
    if not db.query(Asset.id).filter(Asset.id == data.asset_id).first():
        raise InvalidArgument(f"asset_id {data.asset_id} does not reference an existing asset")

    row = Notification(
        title=data.title,
        message=data.message,
        type=data.type.value,
        asset_id=data.asset_id,
        is_read=False,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("notification_created", notification_id=row.id, type=row.type, asset_id=row.asset_id)
    return row


def list_notifications(db: Session, unread_only: bool = False) -> List[Notification]:
    query = db.query(Notification)
    if unread_only:
        query = query.filter(Notification.is_read.is_(False))
    return query.order_by(Notification.created_at.desc(), Notification.id.desc()).all()


def count_unread(db: Session) -> int:
    return db.query(Notification).filter(Notification.is_read.is_(False)).count()


def mark_read(db: Session, notification_id: int) -> None:
    """Idempotent: an unknown id is not an error."""
    db.query(Notification).filter(Notification.id == notification_id).update(
        {Notification.is_read: True}, synchronize_session=False
    )
    db.commit()


def mark_all_read(db: Session) -> int:
    updated = (
        db.query(Notification)
        .filter(Notification.is_read.is_(False))
        .update({Notification.is_read: True}, synchronize_session=False)
    )
    db.commit()
    return updated


def _equipment_label(asset: Asset) -> str:
    return asset.equipment_type or "Unknown"


def warranty_message(asset: Asset) -> str:
    return f"Asset {asset.asset_number} ({_equipment_label(asset)}) warranty expires on {asset.warranty_date}"


def repair_message(asset: Asset) -> str:
    since = asset.updated_at.date().isoformat()
    return (
        f"Asset {asset.asset_number} ({_equipment_label(asset)}) has been in repair status since {since}. "
        "Please update repair progress."
    )


def _insert_all(db: Session, rows: List[Notification], event: str) -> int:
    """Insert the whole batch in one commit so a run is all-or-nothing."""
    if not rows:
        logger.info(event, created=0)
        return 0
    try:
        db.add_all(rows)
        db.commit()
    except Exception:
        db.rollback()
        logger.error(f"{event}_failed", pending=len(rows), exc_info=True)
        raise
    logger.info(event, created=len(rows))
    return len(rows)


def generate_warranty_notifications(db: Session, today: Optional[date] = None) -> int:
    expiring = db.query(Asset).filter(warranty_expiring_clause(today)).order_by(Asset.id).all()
    if not expiring:
        return _insert_all(db, [], "warranty_notifications_generated")

    asset_ids = [a.id for a in expiring]
    already_notified = {
        asset_id
        for (asset_id,) in db.query(Notification.asset_id).filter(
            Notification.type == NotificationType.warranty_expiring.value,
            Notification.asset_id.in_(asset_ids),
        )
    }

    created_at = utcnow()
    rows = [
        Notification(
            title=WARRANTY_TITLE,
            message=warranty_message(asset),
            type=NotificationType.warranty_expiring.value,
            asset_id=asset.id,
            is_read=False,
            created_at=created_at,
        )
        for asset in expiring
        if asset.id not in already_notified
    ]
    return _insert_all(db, rows, "warranty_notifications_generated")


def generate_repair_reminders(db: Session, now: Optional[datetime] = None) -> int:
    now = now or utcnow()
    cutoff = now - timedelta(days=settings.repair_reminder_days)

    stuck = (
        db.query(Asset)
        .filter(
            Asset.status == AssetStatus.perbaikan.value,
            Asset.updated_at <= cutoff,
        )
        .order_by(Asset.id)
        .all()
    )
    if not stuck:
        return _insert_all(db, [], "repair_reminders_generated")

    asset_ids = [a.id for a in stuck]
    recently_reminded = {
        asset_id
        for (asset_id,) in db.query(Notification.asset_id).filter(
            Notification.type == NotificationType.repair_reminder.value,
            Notification.asset_id.in_(asset_ids),
            Notification.created_at >= cutoff,
        )
    }

    rows = [
        Notification(
            title=REPAIR_TITLE,
            message=repair_message(asset),
            type=NotificationType.repair_reminder.value,
            asset_id=asset.id,
            is_read=False,
            created_at=now,
        )
        for asset in stuck
        if asset.id not in recently_reminded
    ]
    return _insert_all(db, rows, "repair_reminders_generated")
