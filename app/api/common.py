import logging
from typing import Callable, Optional

from fastapi import Response

from app.database import SheetsBackend
from app.schemas.common import ErrorResponse, ExistsResponse

logger = logging.getLogger(__name__)

NO_STORE = "no-store, no-cache, must-revalidate"

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Validation error or duplicate key"},
    404: {"model": ErrorResponse, "description": "Record not found"},
    409: {"model": ErrorResponse, "description": "The sheet changed during the operation, retry"},
    500: {"model": ErrorResponse, "description": "Spreadsheet error"},
}


def no_store(response: Response) -> None:
    """Listings must always reflect the spreadsheet, never a cached copy."""
    response.headers["Cache-Control"] = NO_STORE


def exists_or_false(backend: Optional[SheetsBackend], check: Callable[[SheetsBackend], bool]) -> ExistsResponse:
    """
    Run an existence check for interactive form validation.

    Any failure answers ``exists: false`` so the form never blocks on it.
    """
    if backend is None:
        return ExistsResponse(exists=False)
    try:
        return ExistsResponse(exists=check(backend))
    except Exception as e:
        logger.warning(f"Existence check failed, answering false: {e}")
        return ExistsResponse(exists=False)
