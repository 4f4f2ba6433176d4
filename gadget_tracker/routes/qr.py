from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session
from typing import Optional
from urllib.parse import quote

from ..db import get_db
from ..errors import NotFound
from ..schemas.assets import AssetResponse, QrCodeScanRequest
from ..services import assets as asset_service
from ..services.qr_labels import render_qr_png


router = APIRouter(prefix="/qr", tags=["qr"])


def label_disposition(asset_id: int, asset_number: str) -> str:
    # Header values must stay latin-1; the asset number travels percent-encoded
    encoded = quote(f"{asset_number}.png", safe="")
    return f"inline; filename=\"asset-{asset_id}.png\"; filename*=UTF-8''{encoded}"


@router.post("/scan", response_model=Optional[AssetResponse])
def scan(payload: QrCodeScanRequest, db: Session = Depends(get_db)):
    """Resolve a scanned QR token to its asset; null when nothing matches."""
    return asset_service.get_asset_by_qr_code(db, payload.qr_code)


@router.get("/assets/{asset_id}/label.png")
def asset_label(asset_id: int, size: int = 300, db: Session = Depends(get_db)):
    row = asset_service.get_asset(db, asset_id)
    if not row:
        raise NotFound(f"Asset with id {asset_id} not found")
    size = max(100, min(1000, size))
    png = render_qr_png(row.qr_code, size=size)
    return Response(
        content=png,
        media_type="image/png",
        headers={"Content-Disposition": label_disposition(row.id, row.asset_number)},
    )
