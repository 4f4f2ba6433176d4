"""
Seed the local database with sample users and gadgets.

Usage:
  python scripts/seed_test_data.py

This script is idempotent: running it multiple times keeps one row per
unique field (nik for users, asset_number for assets).
"""
import sys
import os
from datetime import date, timedelta

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from gadget_tracker.db import SessionLocal, Base, engine
from gadget_tracker.models.models import Asset, User
from gadget_tracker.services.assets import generate_qr_code


USERS = [
    {"nik": "1001", "name": "Budi Santoso", "position": "IT Support", "unit": "IT", "location": "Jakarta", "user_type": "admin"},
    {"nik": "1002", "name": "Siti Rahma", "position": "Mandor Panen", "unit": "Kebun A", "location": "Riau", "user_type": "user"},
    {"nik": "1003", "name": "Andi Wijaya", "position": "Asisten Kebun", "unit": "Kebun B", "location": "Jambi", "user_type": "user"},
]


def ensure_user(session, data: dict) -> User:
    user = session.query(User).filter(User.nik == data["nik"]).first()
    if user:
        for key, value in data.items():
            setattr(user, key, value)
        return user
    user = User(**data)
    session.add(user)
    session.flush()
    return user


def ensure_asset(session, asset_number: str, owner: User, **fields) -> Asset:
    asset = session.query(Asset).filter(Asset.asset_number == asset_number).first()
    if not asset:
        asset = Asset(asset_number=asset_number, qr_code=generate_qr_code())
        session.add(asset)
    # Snapshot of the assignee at seeding time
    asset.user_nik = owner.nik
    asset.user_name = owner.name
    asset.user_position = owner.position
    asset.user_unit = owner.unit
    asset.user_location = owner.location
    for key, value in fields.items():
        setattr(asset, key, value)
    session.flush()
    return asset


def main():
    Base.metadata.create_all(bind=engine)
    today = date.today()
    session = SessionLocal()
    try:
        users = [ensure_user(session, data) for data in USERS]
        ensure_asset(
            session, "AST-0001", users[0],
            category="laptop", status="baik", equipment_brand="Lenovo", equipment_type="ThinkPad T14",
            purchase_date=(today - timedelta(days=700)).isoformat(),
            warranty_date=(today + timedelta(days=20)).isoformat(),
        )
        ensure_asset(
            session, "AST-0002", users[1],
            category="smartphone", status="perbaikan", equipment_brand="Samsung", equipment_type="Galaxy A54",
            repair_location="Service Center Pekanbaru",
            warranty_date=(today + timedelta(days=200)).isoformat(),
        )
        ensure_asset(
            session, "AST-0003", users[2],
            category="tablet", status="rusak", equipment_brand="Samsung", equipment_type="Galaxy Tab A8",
            notes="Layar retak",
        )
        session.commit()
        print(f"Seeded {len(users)} users and 3 assets")
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


if __name__ == "__main__":
    main()
