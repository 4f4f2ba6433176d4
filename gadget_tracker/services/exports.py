"""
Asset exports: a CSV sheet of every column and an HTML summary report.

Both artifacts are written through the export storage provider under a
time-stamped, randomly suffixed name so successive exports never collide.
"""
import csv
import io
import secrets
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import pytz
from jinja2 import Environment, FileSystemLoader, select_autoescape
from sqlalchemy.orm import Session

from ..config import settings
from ..models.models import Asset
from ..storage.local_provider import get_storage
from ..storage.provider import StorageProvider


STATUS_LABELS = {
    "baik": "Baik",
    "rusak": "Rusak",
    "perbaikan": "Dalam Perbaikan",
    "hilang": "Hilang",
}

CATEGORY_LABELS = {
    "smartphone": "Smartphone",
    "tablet": "Tablet",
    "laptop": "Laptop",
    "desktop": "Desktop",
    "printer": "Printer",
    "scanner": "Scanner",
    "router": "Router",
    "switch": "Switch",
    "access_point": "Access Point",
    "other": "Lainnya",
}

# (header label, Asset attribute)
CSV_COLUMNS = [
    ("ID", "id"),
    ("Nomor Aset", "asset_number"),
    ("Nomor Inventaris", "inventory_number"),
    ("Kategori", "category"),
    ("Merek", "equipment_brand"),
    ("Tipe", "equipment_type"),
    ("Supplier", "supplier"),
    ("Nomor IMEI", "imei_number"),
    ("Nomor Seri", "serial_number"),
    ("MAC Address WiFi", "wifi_mac_address"),
    ("Tanggal Pembelian", "purchase_date"),
    ("Tanggal Garansi", "warranty_date"),
    ("NIK Pengguna", "user_nik"),
    ("Nama Pengguna", "user_name"),
    ("Jabatan Pengguna", "user_position"),
    ("Unit Pengguna", "user_unit"),
    ("Lokasi Pengguna", "user_location"),
    ("APK Harvesting", "apk_harv"),
    ("APK Upkeep", "apk_upk"),
    ("APK Nursery", "apk_nurs"),
    ("UUID Harvesting", "uuid_harvesting"),
    ("UUID Upkeep", "uuid_upkeep"),
    ("UUID Nursery", "uuid_nursery"),
    ("Kode Harvesting", "code_harvesting"),
    ("Kode Upkeep", "code_upkeep"),
    ("Kode Nursery", "code_nursery"),
    ("Kode Replanting", "code_replanting"),
    ("User ID eFACT", "user_id_efact"),
    ("Status", "status"),
    ("Catatan", "notes"),
    ("Lokasi Perbaikan", "repair_location"),
    ("Dikirim ke RegMis", "sent_to_regmis"),
    ("Dikirim ke JKTO", "sent_to_jkto"),
    ("Nomor Rekomendasi", "recommendation_number"),
    ("Penggunaan Gadget", "gadget_usage"),
    ("Kode QR", "qr_code"),
    ("Dibuat Pada", "created_at"),
    ("Diperbarui Pada", "updated_at"),
]

_templates = Environment(
    loader=FileSystemLoader(str(Path(__file__).resolve().parent.parent / "templates")),
    autoescape=select_autoescape(["html"]),
)


def status_label(value: Optional[str]) -> str:
    return STATUS_LABELS.get(value, value or "")


def category_label(value: Optional[str]) -> str:
    return CATEGORY_LABELS.get(value, value or "")


def _display(attr: str, value) -> str:
    if value is None:
        return ""
    if attr == "status":
        return status_label(value)
    if attr == "category":
        return category_label(value)
    if isinstance(value, bool):
        return "Ya" if value else "Tidak"
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    return str(value)


def _all_assets(db: Session) -> List[Asset]:
    return db.query(Asset).order_by(Asset.id.asc()).all()


def _local_now() -> datetime:
    return datetime.now(pytz.timezone(settings.tz_default))


def _artifact_name(prefix: str, extension: str, now: datetime) -> str:
    return f"{prefix}_{now.strftime('%Y%m%d_%H%M%S')}_{secrets.token_hex(3)}.{extension}"


def render_assets_csv(assets: List[Asset]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow([label for label, _ in CSV_COLUMNS])
    for asset in assets:
        writer.writerow([_display(attr, getattr(asset, attr)) for _, attr in CSV_COLUMNS])
    return buf.getvalue()


def render_assets_report(assets: List[Asset], generated_at: datetime) -> str:
    by_status = Counter(status_label(a.status) for a in assets)
    by_category = Counter(category_label(a.category) for a in assets)
    rows = [
        {
            "asset_number": a.asset_number,
            "category": category_label(a.category),
            "brand": a.equipment_brand or "",
            "type": a.equipment_type or "",
            "user_name": a.user_name or "",
            "unit": a.user_unit or "",
            "location": a.user_location or "",
            "status": status_label(a.status),
            "status_key": a.status,
            "warranty_date": a.warranty_date or "",
        }
        for a in assets
    ]
    template = _templates.get_template("assets_report.html")
    return template.render(
        generated_at=generated_at.strftime("%d/%m/%Y %H:%M:%S"),
        total=len(assets),
        by_status=sorted(by_status.items()),
        by_category=sorted(by_category.items()),
        rows=rows,
    )


def export_assets_csv(db: Session, storage: Optional[StorageProvider] = None) -> str:
    """Write every asset to a CSV file and return its download URL."""
    storage = storage or get_storage()
    key = _artifact_name("assets_export", "csv", _local_now())
    storage.save(key, render_assets_csv(_all_assets(db)).encode("utf-8"))
    return storage.get_download_url(key)


def export_assets_report(db: Session, storage: Optional[StorageProvider] = None) -> str:
    """Write the HTML summary report and return its download URL."""
    storage = storage or get_storage()
    now = _local_now()
    key = _artifact_name("assets_report", "html", now)
    storage.save(key, render_assets_report(_all_assets(db), now).encode("utf-8"))
    return storage.get_download_url(key)
