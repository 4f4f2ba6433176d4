from datetime import date
from typing import Dict, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..models.models import Asset
from ..schemas.assets import AssetStatus
from ..schemas.reports import DashboardStats
from .assets import warranty_expiring_clause


def _count_by(db: Session, column, skip_null: bool = False) -> Dict[str, int]:
    query = db.query(column, func.count(Asset.id))
    if skip_null:
        query = query.filter(column.isnot(None))
    return {key: count for key, count in query.group_by(column).all() if key is not None}


def compute_stats(db: Session, today: Optional[date] = None) -> DashboardStats:
    """Aggregate counts over the asset table, issued back-to-back on one session."""
    total_assets = db.query(func.count(Asset.id)).scalar() or 0
    by_category = _count_by(db, Asset.category)
    by_status = _count_by(db, Asset.status)
    by_location = _count_by(db, Asset.user_location, skip_null=True)
    warranty_expiring_soon = (
        db.query(func.count(Asset.id)).filter(warranty_expiring_clause(today)).scalar() or 0
    )
    assets_in_repair = (
        db.query(func.count(Asset.id)).filter(Asset.status == AssetStatus.perbaikan.value).scalar() or 0
    )

    return DashboardStats(
        total_assets=total_assets,
        assets_by_category=by_category,
        assets_by_status=by_status,
        assets_by_location=by_location,
        warranty_expiring_soon=warranty_expiring_soon,
        assets_in_repair=assets_in_repair,
    )
