from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    String,
    DateTime,
    Boolean,
    ForeignKey,
    Integer,
    Text,
    Index,
)
from sqlalchemy.orm import Mapped, mapped_column

from ..db import Base


def utcnow() -> datetime:
    """Naive UTC timestamp, the representation stored in every DateTime column."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(Base):
    """Employees that gadgets can be assigned to"""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nik: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[str] = mapped_column(String(255), nullable=False)
    unit: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    user_type: Mapped[str] = mapped_column(String(20), nullable=False, default="user")  # admin|user
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        Index('idx_users_created', 'created_at'),
    )


class Asset(Base):
    """Gadgets under management.

    The user_* columns are a point-in-time copy of the assignee, not a
    reference: editing or deleting the User row never changes them.
    """
    __tablename__ = "assets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Assignee snapshot
    user_nik: Mapped[Optional[str]] = mapped_column(String(50), index=True)
    user_name: Mapped[Optional[str]] = mapped_column(String(255))
    user_position: Mapped[Optional[str]] = mapped_column(String(255))
    user_unit: Mapped[Optional[str]] = mapped_column(String(255))
    user_location: Mapped[Optional[str]] = mapped_column(String(255), index=True)

    # Identifiers
    asset_number: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    inventory_number: Mapped[Optional[str]] = mapped_column(String(100))
    imei_number: Mapped[Optional[str]] = mapped_column(String(100))
    serial_number: Mapped[Optional[str]] = mapped_column(String(255))
    wifi_mac_address: Mapped[Optional[str]] = mapped_column(String(50))

    purchase_date: Mapped[Optional[str]] = mapped_column(String(10))  # YYYY-MM-DD
    warranty_date: Mapped[Optional[str]] = mapped_column(String(10), index=True)  # YYYY-MM-DD
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)  # smartphone|tablet|laptop|...|other
    equipment_brand: Mapped[Optional[str]] = mapped_column(String(100))
    equipment_type: Mapped[Optional[str]] = mapped_column(String(255))
    supplier: Mapped[Optional[str]] = mapped_column(String(255))

    # Field application identifiers (harvesting/upkeep/nursery/replanting)
    apk_harv: Mapped[Optional[str]] = mapped_column(String(255))
    apk_upk: Mapped[Optional[str]] = mapped_column(String(255))
    apk_nurs: Mapped[Optional[str]] = mapped_column(String(255))
    uuid_harvesting: Mapped[Optional[str]] = mapped_column(String(255))
    uuid_upkeep: Mapped[Optional[str]] = mapped_column(String(255))
    uuid_nursery: Mapped[Optional[str]] = mapped_column(String(255))
    code_harvesting: Mapped[Optional[str]] = mapped_column(String(100))
    code_upkeep: Mapped[Optional[str]] = mapped_column(String(100))
    code_nursery: Mapped[Optional[str]] = mapped_column(String(100))
    code_replanting: Mapped[Optional[str]] = mapped_column(String(100))
    user_id_efact: Mapped[Optional[str]] = mapped_column(String(100))

    status: Mapped[str] = mapped_column(String(20), nullable=False, index=True)  # baik|rusak|perbaikan|hilang
    notes: Mapped[Optional[str]] = mapped_column(Text)
    repair_location: Mapped[Optional[str]] = mapped_column(String(255))
    sent_to_regmis: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    sent_to_jkto: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    recommendation_number: Mapped[Optional[str]] = mapped_column(String(100))
    gadget_usage: Mapped[Optional[str]] = mapped_column(Text)
    qr_code: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        Index('idx_assets_status_updated', 'status', 'updated_at'),
        Index('idx_assets_created', 'created_at'),
    )


class Notification(Base):
    """Warranty, repair and general notices attached to an asset"""
    __tablename__ = "notifications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(30), nullable=False)  # warranty_expiring|repair_reminder|general
    # Rows are removed by the asset delete service, not by a store cascade
    asset_id: Mapped[int] = mapped_column(Integer, ForeignKey("assets.id"), nullable=False, index=True)
    is_read: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        Index('idx_notifications_type_asset', 'type', 'asset_id'),
        Index('idx_notifications_read_created', 'is_read', 'created_at'),
    )
