"""
Asset repository: create, lookup, search, partial update and delete of gadgets.
"""
import uuid
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple

import pytz
import structlog
from sqlalchemy import and_, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import settings
from ..errors import ConstraintViolation, NotFound
from ..models.models import Asset, Notification, utcnow
from ..schemas.assets import AssetCreate, AssetSearchFilters, AssetUpdate


logger = structlog.get_logger(__name__)

QR_CODE_PREFIX = "QR_"
QR_CODE_ATTEMPTS = 3
MAX_SEARCH_LIMIT = 100
DEFAULT_SEARCH_LIMIT = 20


def generate_qr_code() -> str:
    return f"{QR_CODE_PREFIX}{uuid.uuid4()}"


def local_today() -> date:
    return datetime.now(pytz.timezone(settings.tz_default)).date()


def warranty_window(today: Optional[date] = None) -> Tuple[str, str]:
    """Inclusive [today, today + N days] bounds as YYYY-MM-DD strings."""
    today = today or local_today()
    end = today + timedelta(days=settings.warranty_window_days)
    return today.isoformat(), end.isoformat()


def warranty_expiring_clause(today: Optional[date] = None):
    # Fixed-width ISO dates order the same way as strings
    start, end = warranty_window(today)
    return and_(
        Asset.warranty_date.isnot(None),
        Asset.warranty_date >= start,
        Asset.warranty_date <= end,
    )


def _raise_constraint(e: IntegrityError) -> None:
    message = str(getattr(e, "orig", e)).lower()
    if "asset_number" in message:
        raise ConstraintViolation("asset_number already exists") from e
    if "qr_code" in message:
        raise ConstraintViolation("qr_code already exists") from e
    raise ConstraintViolation("asset violates a uniqueness constraint") from e


def create_asset(db: Session, data: AssetCreate) -> Asset:
    values = data.model_dump(mode="json")
    for attempt in range(1, QR_CODE_ATTEMPTS + 1):
        row = Asset(**values, qr_code=generate_qr_code())
        db.add(row)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            if "qr_code" in str(getattr(e, "orig", e)).lower() and attempt < QR_CODE_ATTEMPTS:
                logger.warning("qr_code_collision", attempt=attempt)
                continue
            _raise_constraint(e)
        db.refresh(row)
        logger.info("asset_created", asset_id=row.id, asset_number=row.asset_number)
        return row
    raise ConstraintViolation("could not allocate a unique qr_code")


def get_asset(db: Session, asset_id: int) -> Optional[Asset]:
    return db.query(Asset).filter(Asset.id == asset_id).first()


def get_asset_by_qr_code(db: Session, qr_code: str) -> Optional[Asset]:
    if not qr_code:
        return None
    return db.query(Asset).filter(Asset.qr_code == qr_code).first()


def list_assets(db: Session) -> List[Asset]:
    return (
        db.query(Asset)
        .order_by(Asset.created_at.desc(), Asset.id.desc())
        .limit(settings.asset_list_cap)
        .all()
    )


def _search_conditions(filters: AssetSearchFilters) -> list:
    conditions = []
    if filters.search_term:
        like = f"%{filters.search_term}%"
        conditions.append(or_(
            Asset.asset_number.ilike(like),
            Asset.user_name.ilike(like),
            Asset.user_nik.ilike(like),
            Asset.equipment_brand.ilike(like),
            Asset.equipment_type.ilike(like),
            Asset.inventory_number.ilike(like),
            Asset.serial_number.ilike(like),
            Asset.notes.ilike(like),
        ))
    if filters.category:
        conditions.append(Asset.category == filters.category.value)
    if filters.status:
        conditions.append(Asset.status == filters.status.value)
    if filters.user_unit:
        conditions.append(Asset.user_unit.ilike(f"%{filters.user_unit}%"))
    if filters.user_location:
        conditions.append(Asset.user_location.ilike(f"%{filters.user_location}%"))
    if filters.equipment_brand:
        conditions.append(Asset.equipment_brand.ilike(f"%{filters.equipment_brand}%"))
    return conditions


def search_assets(
    db: Session,
    filters: Optional[AssetSearchFilters] = None,
    page: int = 1,
    limit: int = DEFAULT_SEARCH_LIMIT,
) -> Dict[str, Any]:
    page = max(1, page)
    limit = max(1, min(MAX_SEARCH_LIMIT, limit))
    offset = (page - 1) * limit

    query = db.query(Asset)
    conditions = _search_conditions(filters or AssetSearchFilters())
    if conditions:
        query = query.filter(and_(*conditions))

    total = query.count()
    items = query.order_by(Asset.created_at.desc(), Asset.id.desc()).offset(offset).limit(limit).all()
    return {"items": items, "total": total, "page": page, "limit": limit}


def update_asset(db: Session, asset_id: int, changes: AssetUpdate) -> Asset:
    row = get_asset(db, asset_id)
    if not row:
        raise NotFound(f"Asset with id {asset_id} not found")

    # exclude_unset keeps explicit nulls and drops omitted fields
    for field, value in changes.model_dump(exclude_unset=True, mode="json").items():
        setattr(row, field, value)

    now = utcnow()
    if row.updated_at is not None and now <= row.updated_at:
        now = row.updated_at + timedelta(microseconds=1)
    row.updated_at = now

    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        _raise_constraint(e)
    db.refresh(row)
    logger.info("asset_updated", asset_id=row.id, fields=sorted(changes.model_fields_set))
    return row


def delete_asset(db: Session, asset_id: int) -> None:
    row = get_asset(db, asset_id)
    if not row:
        raise NotFound(f"Asset with id {asset_id} not found")

    try:
        # Notifications first so no reference outlives the asset
        removed = (
            db.query(Notification)
            .filter(Notification.asset_id == asset_id)
            .delete(synchronize_session=False)
        )
        db.delete(row)
        db.commit()
    except Exception:
        db.rollback()
        logger.error("asset_delete_failed", asset_id=asset_id, exc_info=True)
        raise
    logger.info("asset_deleted", asset_id=asset_id, notifications_removed=removed)
