"""
CSV and HTML exports of the asset table.
"""
import csv
import io
from datetime import datetime

from gadget_tracker.services import exports as export_service
from gadget_tracker.storage.local_provider import LocalStorageProvider


class TestAssetsCsv:

    def test_empty_export_is_header_only(self, db):
        content = export_service.render_assets_csv([])
        lines = content.splitlines()
        assert len(lines) == 1
        assert lines[0].startswith("ID,Nomor Aset,")
        assert "Kategori" in lines[0]
        assert "Nama Pengguna" in lines[0]

    def test_rows_use_display_labels(self, db, make_asset):
        make_asset(asset_number="AST-1", category="access_point", status="perbaikan", sent_to_jkto=True)
        content = export_service.render_assets_csv(export_service._all_assets(db))
        rows = list(csv.DictReader(io.StringIO(content)))
        assert len(rows) == 1
        assert rows[0]["Nomor Aset"] == "AST-1"
        assert rows[0]["Kategori"] == "Access Point"
        assert rows[0]["Status"] == "Dalam Perbaikan"
        assert rows[0]["Dikirim ke JKTO"] == "Ya"
        assert rows[0]["Dikirim ke RegMis"] == "Tidak"
        assert rows[0]["Catatan"] == ""

    def test_quotes_and_commas_are_escaped(self, db, make_asset):
        make_asset(notes='Test with "quotes" and, commas')
        content = export_service.render_assets_csv(export_service._all_assets(db))
        assert '"Test with ""quotes"" and, commas"' in content
        rows = list(csv.DictReader(io.StringIO(content)))
        assert rows[0]["Catatan"] == 'Test with "quotes" and, commas'

    def test_export_writes_file_with_unique_name(self, db, make_asset, tmp_path):
        make_asset()
        storage = LocalStorageProvider(base_dir=str(tmp_path), url_prefix="/downloads")
        first = export_service.export_assets_csv(db, storage=storage)
        second = export_service.export_assets_csv(db, storage=storage)

        assert first != second
        assert first.startswith("/downloads/assets_export_")
        assert first.endswith(".csv")
        files = sorted(p.name for p in tmp_path.iterdir())
        assert len(files) == 2


class TestAssetsReport:

    def test_empty_report(self, db):
        html = export_service.render_assets_report([], datetime(2030, 1, 2, 3, 4, 5))
        assert "LAPORAN DATA ASET" in html
        assert "RINGKASAN" in html
        assert "DETAIL ASET" in html
        assert "Total Aset: 0" in html
        assert "<tbody>" in html
        assert "02/01/2030 03:04:05" in html

    def test_report_summarizes_assets(self, db, make_asset):
        make_asset(asset_number="AST-1", category="laptop", status="baik", user_name="Budi")
        make_asset(asset_number="AST-2", category="laptop", status="hilang")
        html = export_service.render_assets_report(export_service._all_assets(db), datetime(2030, 1, 1))
        assert "Total Aset: 2" in html
        assert "Laptop: 2" in html
        assert "Baik: 1" in html
        assert "Hilang: 1" in html
        assert "AST-1" in html and "AST-2" in html
        assert "Budi" in html

    def test_values_are_html_escaped(self, db, make_asset):
        make_asset(user_name="<script>alert(1)</script>")
        html = export_service.render_assets_report(export_service._all_assets(db), datetime(2030, 1, 1))
        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_download_url_only_for_written_files(self, tmp_path):
        storage = LocalStorageProvider(base_dir=str(tmp_path), url_prefix="/downloads/")
        assert storage.get_download_url("missing.csv") is None
        storage.save("laporan aset.csv", b"ID\n")
        assert storage.get_download_url("laporan aset.csv") == "/downloads/laporan%20aset.csv"
        assert (tmp_path / "laporan aset.csv").read_bytes() == b"ID\n"

    def test_export_report_file(self, db, tmp_path):
        storage = LocalStorageProvider(base_dir=str(tmp_path), url_prefix="/downloads")
        url = export_service.export_assets_report(db, storage=storage)
        assert url.startswith("/downloads/assets_report_")
        assert url.endswith(".html")
        (written,) = list(tmp_path.iterdir())
        assert "Total Aset: 0" in written.read_text(encoding="utf-8")
