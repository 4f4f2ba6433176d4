from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas.reports import ExportResult
from ..services import exports as export_service


router = APIRouter(prefix="/exports", tags=["exports"])


@router.post("/assets/csv", response_model=ExportResult)
def export_csv(db: Session = Depends(get_db)):
    return ExportResult(file_url=export_service.export_assets_csv(db))


@router.post("/assets/report", response_model=ExportResult)
def export_report(db: Session = Depends(get_db)):
    return ExportResult(file_url=export_service.export_assets_report(db))
