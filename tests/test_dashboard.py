from datetime import date, timedelta

from gadget_tracker.services.dashboard import compute_stats


TODAY = date(2030, 6, 1)


class TestDashboard:

    def test_empty_inventory(self, db):
        stats = compute_stats(db, today=TODAY)
        assert stats.total_assets == 0
        assert stats.assets_by_category == {}
        assert stats.assets_by_status == {}
        assert stats.assets_by_location == {}
        assert stats.warranty_expiring_soon == 0
        assert stats.assets_in_repair == 0

    def test_counts(self, db, make_asset):
        make_asset(category="laptop", status="baik", user_location="Jakarta",
                   warranty_date=(TODAY + timedelta(days=3)).isoformat())
        make_asset(category="laptop", status="perbaikan", user_location="Jakarta")
        make_asset(category="tablet", status="perbaikan", user_location=None,
                   warranty_date=(TODAY + timedelta(days=60)).isoformat())

        stats = compute_stats(db, today=TODAY)

        assert stats.total_assets == 3
        assert stats.assets_by_category == {"laptop": 2, "tablet": 1}
        assert stats.assets_by_status == {"baik": 1, "perbaikan": 2}
        # Assets without a location are not bucketed
        assert stats.assets_by_location == {"Jakarta": 2}
        assert stats.warranty_expiring_soon == 1
        assert stats.assets_in_repair == 2

    def test_warranty_window_boundaries(self, db, make_asset):
        make_asset(warranty_date=TODAY.isoformat())
        make_asset(warranty_date=(TODAY + timedelta(days=30)).isoformat())
        make_asset(warranty_date=(TODAY + timedelta(days=31)).isoformat())
        make_asset(warranty_date=(TODAY - timedelta(days=1)).isoformat())
        make_asset(warranty_date=None)

        stats = compute_stats(db, today=TODAY)
        assert stats.total_assets == 5
        assert stats.warranty_expiring_soon == 2

    def test_categories_without_assets_are_absent(self, db, make_asset):
        make_asset(category="laptop")
        make_asset(category="laptop")
        stats = compute_stats(db, today=TODAY)
        assert stats.assets_by_category == {"laptop": 2}
