"""
Domain errors raised by the inventory services and their HTTP mapping.
"""
import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


logger = structlog.get_logger(__name__)


class InventoryError(Exception):
    status_code = 500
    kind = "Internal Server Error"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFound(InventoryError):
    """Operation targets an id that does not exist."""
    status_code = 404
    kind = "Not Found"


class ConstraintViolation(InventoryError):
    """Uniqueness clash on nik, asset_number or qr_code."""
    status_code = 409
    kind = "Constraint Violation"


class InvalidArgument(InventoryError):
    status_code = 400
    kind = "Invalid Argument"


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(InventoryError)
    async def inventory_error(request: Request, exc: InventoryError):
        logger.info("request_rejected", path=request.url.path, error=exc.kind, detail=exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"ok": False, "error": exc.kind, "detail": exc.detail},
        )
