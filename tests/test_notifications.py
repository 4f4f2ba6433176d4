"""
Notification engine: manual notices, read state, and the two generators.
"""
from datetime import date, timedelta

import pytest

from gadget_tracker.errors import InvalidArgument
from gadget_tracker.models.models import Asset, Notification, utcnow
from gadget_tracker.schemas.notifications import NotificationCreate
from gadget_tracker.services import notifications as notification_service


TODAY = date(2030, 1, 1)


def _backdate(db, asset_id, days):
    db.query(Asset).filter(Asset.id == asset_id).update(
        {Asset.updated_at: utcnow() - timedelta(days=days)}, synchronize_session=False
    )
    db.commit()


class TestManualNotifications:

    def test_create_and_read_state(self, db, make_asset):
        asset = make_asset()
        row = notification_service.create_notification(
            db, NotificationCreate(title="Cek", message="Cek kondisi", asset_id=asset.id)
        )
        assert row.type == "general"
        assert row.is_read is False
        assert notification_service.count_unread(db) == 1

        notification_service.mark_read(db, row.id)
        assert notification_service.count_unread(db) == 0
        assert notification_service.list_notifications(db, unread_only=True) == []
        assert len(notification_service.list_notifications(db)) == 1

    def test_null_asset_is_rejected(self, db):
        with pytest.raises(InvalidArgument):
            notification_service.create_notification(db, NotificationCreate(title="t", message="m"))

    def test_unknown_asset_is_rejected(self, db):
        with pytest.raises(InvalidArgument):
            notification_service.create_notification(
                db, NotificationCreate(title="t", message="m", asset_id=404)
            )

    def test_mark_read_missing_id_is_noop(self, db):
        notification_service.mark_read(db, 12345)

    def test_mark_all_read_returns_count(self, db, make_asset):
        asset = make_asset()
        for i in range(3):
            notification_service.create_notification(
                db, NotificationCreate(title=f"t{i}", message="m", asset_id=asset.id)
            )
        assert notification_service.mark_all_read(db) == 3
        assert notification_service.mark_all_read(db) == 0


class TestWarrantyGenerator:

    def test_window_is_inclusive_on_both_ends(self, db, make_asset):
        start = make_asset(warranty_date=TODAY.isoformat())
        end = make_asset(warranty_date=(TODAY + timedelta(days=30)).isoformat())
        make_asset(warranty_date=(TODAY + timedelta(days=31)).isoformat())
        make_asset(warranty_date=(TODAY - timedelta(days=1)).isoformat())
        make_asset(warranty_date=None)

        created = notification_service.generate_warranty_notifications(db, today=TODAY)

        assert created == 2
        rows = db.query(Notification).order_by(Notification.asset_id).all()
        assert [n.asset_id for n in rows] == [start.id, end.id]
        assert all(n.type == "warranty_expiring" for n in rows)
        assert rows[0].title == "Warranty Expiring Soon"

    def test_generation_is_idempotent(self, db, make_asset):
        make_asset(warranty_date=(TODAY + timedelta(days=10)).isoformat())
        assert notification_service.generate_warranty_notifications(db, today=TODAY) == 1
        assert notification_service.generate_warranty_notifications(db, today=TODAY) == 0
        assert db.query(Notification).count() == 1

    def test_message_format(self, db, make_asset):
        make_asset(
            asset_number="AST-9",
            equipment_type="ThinkPad T14",
            warranty_date=(TODAY + timedelta(days=5)).isoformat(),
        )
        make_asset(asset_number="AST-10", warranty_date=(TODAY + timedelta(days=5)).isoformat())
        notification_service.generate_warranty_notifications(db, today=TODAY)
        messages = sorted(n.message for n in db.query(Notification).all())
        assert messages == [
            "Asset AST-10 (Unknown) warranty expires on 2030-01-06",
            "Asset AST-9 (ThinkPad T14) warranty expires on 2030-01-06",
        ]

    def test_nothing_expiring(self, db, make_asset):
        make_asset(warranty_date="2040-01-01")
        assert notification_service.generate_warranty_notifications(db, today=TODAY) == 0


class TestRepairReminders:

    def test_only_stale_repairs_are_reminded(self, db, make_asset):
        stale = make_asset(status="perbaikan")
        fresh = make_asset(status="perbaikan")
        other = make_asset(status="rusak")
        stale_id, other_id = stale.id, other.id
        _backdate(db, stale_id, 10)
        _backdate(db, other_id, 10)

        created = notification_service.generate_repair_reminders(db)

        assert created == 1
        row = db.query(Notification).one()
        assert row.asset_id == stale_id
        assert row.type == "repair_reminder"
        assert row.title == "Repair Status Reminder"
        assert row.message.endswith("Please update repair progress.")
        assert fresh.id != row.asset_id

    def test_not_repeated_within_a_week(self, db, make_asset):
        asset = make_asset(status="perbaikan")
        asset_id = asset.id
        _backdate(db, asset_id, 10)

        assert notification_service.generate_repair_reminders(db) == 1
        assert notification_service.generate_repair_reminders(db) == 0
        assert notification_service.generate_repair_reminders(db, now=utcnow() + timedelta(days=3)) == 0

        # A week later the asset is still stuck in repair
        assert notification_service.generate_repair_reminders(db, now=utcnow() + timedelta(days=8)) == 1
        assert db.query(Notification).filter(Notification.asset_id == asset_id).count() == 2
