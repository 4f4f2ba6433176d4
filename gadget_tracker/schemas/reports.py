from typing import Dict

from pydantic import BaseModel


class DashboardStats(BaseModel):
    total_assets: int
    assets_by_category: Dict[str, int]
    assets_by_status: Dict[str, int]
    assets_by_location: Dict[str, int]
    warranty_expiring_soon: int
    assets_in_repair: int


class ExportResult(BaseModel):
    file_url: str
