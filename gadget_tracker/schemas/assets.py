import re
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class AssetCategory(str, Enum):
    smartphone = "smartphone"
    tablet = "tablet"
    laptop = "laptop"
    desktop = "desktop"
    printer = "printer"
    scanner = "scanner"
    router = "router"
    switch = "switch"
    access_point = "access_point"
    other = "other"


class AssetStatus(str, Enum):
    baik = "baik"            # good
    rusak = "rusak"          # damaged
    perbaikan = "perbaikan"  # in repair
    hilang = "hilang"        # lost


NULLABLE_TEXT_FIELDS = (
    "user_nik",
    "user_name",
    "user_position",
    "user_unit",
    "user_location",
    "inventory_number",
    "imei_number",
    "serial_number",
    "wifi_mac_address",
    "equipment_brand",
    "equipment_type",
    "supplier",
    "apk_harv",
    "apk_upk",
    "apk_nurs",
    "uuid_harvesting",
    "uuid_upkeep",
    "uuid_nursery",
    "code_harvesting",
    "code_upkeep",
    "code_nursery",
    "code_replanting",
    "user_id_efact",
    "notes",
    "repair_location",
    "recommendation_number",
    "gadget_usage",
)

DATE_FIELDS = ("purchase_date", "warranty_date")

REQUIRED_ON_UPDATE = ("asset_number", "category", "status", "sent_to_regmis", "sent_to_jkto")

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def empty_str_to_none(v):
    if v is None:
        return None
    v = str(v).strip()
    return v or None


def iso_date_or_none(v):
    """Normalize a calendar date to the fixed-width YYYY-MM-DD form used for range comparisons."""
    if v is None:
        return None
    if isinstance(v, datetime):
        return v.date().isoformat()
    if isinstance(v, date):
        return v.isoformat()
    v = str(v).strip()
    if not v:
        return None
    if not _ISO_DATE.match(v):
        raise ValueError("date must use the YYYY-MM-DD format")
    try:
        date.fromisoformat(v)
    except ValueError:
        raise ValueError(f"{v} is not a valid calendar date")
    return v


class AssetBase(BaseModel):
    user_nik: Optional[str] = None
    user_name: Optional[str] = None
    user_position: Optional[str] = None
    user_unit: Optional[str] = None
    user_location: Optional[str] = None
    asset_number: str = Field(min_length=1)
    inventory_number: Optional[str] = None
    imei_number: Optional[str] = None
    serial_number: Optional[str] = None
    wifi_mac_address: Optional[str] = None
    purchase_date: Optional[str] = None
    warranty_date: Optional[str] = None
    category: AssetCategory
    equipment_brand: Optional[str] = None
    equipment_type: Optional[str] = None
    supplier: Optional[str] = None
    apk_harv: Optional[str] = None
    apk_upk: Optional[str] = None
    apk_nurs: Optional[str] = None
    uuid_harvesting: Optional[str] = None
    uuid_upkeep: Optional[str] = None
    uuid_nursery: Optional[str] = None
    code_harvesting: Optional[str] = None
    code_upkeep: Optional[str] = None
    code_nursery: Optional[str] = None
    code_replanting: Optional[str] = None
    user_id_efact: Optional[str] = None
    status: AssetStatus
    notes: Optional[str] = None
    repair_location: Optional[str] = None
    sent_to_regmis: bool = False
    sent_to_jkto: bool = False
    recommendation_number: Optional[str] = None
    gadget_usage: Optional[str] = None

    @field_validator(*NULLABLE_TEXT_FIELDS, mode="before")
    @classmethod
    def blank_to_none(cls, v):
        return empty_str_to_none(v)

    @field_validator(*DATE_FIELDS, mode="before")
    @classmethod
    def normalize_date(cls, v):
        return iso_date_or_none(v)

    @field_validator("asset_number", mode="before")
    @classmethod
    def strip_asset_number(cls, v):
        return v.strip() if isinstance(v, str) else v


class AssetCreate(AssetBase):
    pass


class AssetUpdate(BaseModel):
    """Partial update: omitted fields are left alone, explicit nulls clear the field."""
    user_nik: Optional[str] = None
    user_name: Optional[str] = None
    user_position: Optional[str] = None
    user_unit: Optional[str] = None
    user_location: Optional[str] = None
    asset_number: Optional[str] = Field(default=None, min_length=1)
    inventory_number: Optional[str] = None
    imei_number: Optional[str] = None
    serial_number: Optional[str] = None
    wifi_mac_address: Optional[str] = None
    purchase_date: Optional[str] = None
    warranty_date: Optional[str] = None
    category: Optional[AssetCategory] = None
    equipment_brand: Optional[str] = None
    equipment_type: Optional[str] = None
    supplier: Optional[str] = None
    apk_harv: Optional[str] = None
    apk_upk: Optional[str] = None
    apk_nurs: Optional[str] = None
    uuid_harvesting: Optional[str] = None
    uuid_upkeep: Optional[str] = None
    uuid_nursery: Optional[str] = None
    code_harvesting: Optional[str] = None
    code_upkeep: Optional[str] = None
    code_nursery: Optional[str] = None
    code_replanting: Optional[str] = None
    user_id_efact: Optional[str] = None
    status: Optional[AssetStatus] = None
    notes: Optional[str] = None
    repair_location: Optional[str] = None
    sent_to_regmis: Optional[bool] = None
    sent_to_jkto: Optional[bool] = None
    recommendation_number: Optional[str] = None
    gadget_usage: Optional[str] = None

    @field_validator(*REQUIRED_ON_UPDATE, mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("field is required and cannot be cleared")
        return v.strip() if isinstance(v, str) else v

    @field_validator(*NULLABLE_TEXT_FIELDS, mode="before")
    @classmethod
    def blank_to_none(cls, v):
        return empty_str_to_none(v)

    @field_validator(*DATE_FIELDS, mode="before")
    @classmethod
    def normalize_date(cls, v):
        return iso_date_or_none(v)


class AssetResponse(AssetBase):
    id: int
    qr_code: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AssetSearchFilters(BaseModel):
    """Optional search options; every option that is set narrows the result (AND)."""
    search_term: Optional[str] = None
    category: Optional[AssetCategory] = None
    status: Optional[AssetStatus] = None
    user_unit: Optional[str] = None
    user_location: Optional[str] = None
    equipment_brand: Optional[str] = None

    @field_validator("search_term", "user_unit", "user_location", "equipment_brand", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        return empty_str_to_none(v)


class AssetSearchResponse(BaseModel):
    items: List[AssetResponse]
    total: int
    page: int
    limit: int


class QrCodeScanRequest(BaseModel):
    qr_code: str = Field(min_length=1)

    @field_validator("qr_code", mode="before")
    @classmethod
    def strip_code(cls, v):
        return v.strip() if isinstance(v, str) else v
