from typing import Optional

from fastapi import APIRouter, Depends

from app.config import Settings, get_settings
from app.database import SheetsBackend, try_get_backend
from app.exceptions import InventoryError

router = APIRouter(prefix="/health", tags=["Health"])


@router.get(
    "/",
    summary="Health check",
    description="Basic health check endpoint."
)
def health_check():
    """Simple health check."""
    return {"status": "healthy"}


@router.get(
    "/ready",
    summary="Readiness check",
    description="Check that the spreadsheet is configured, reachable and has every tab."
)
def readiness_check(
    backend: Optional[SheetsBackend] = Depends(try_get_backend),
    settings: Settings = Depends(get_settings)
):
    """
    Readiness check for the spreadsheet.

    Returns status of:
    - Credentials and spreadsheet access
    - Presence of each expected tab
    """
    checks = {
        "spreadsheet": False,
        "tabs": {}
    }

    if backend is None:
        checks["spreadsheet_error"] = "Spreadsheet not configured or unreachable"
        return {"status": "not_ready", "checks": checks}

    try:
        titles = {title.strip().lower() for title in backend.tab_titles()}
        checks["spreadsheet"] = True
    except InventoryError as e:
        checks["spreadsheet_error"] = str(e)
        return {"status": "not_ready", "checks": checks}

    for tab in (
        settings.ARTICLES_TAB,
        settings.SALES_TAB,
        settings.PURCHASES_TAB,
        settings.CLIENTS_TAB,
        settings.SUPPLIERS_TAB,
    ):
        checks["tabs"][tab] = tab.strip().lower() in titles

    all_ready = checks["spreadsheet"] and all(checks["tabs"].values())

    return {
        "status": "ready" if all_ready else "not_ready",
        "checks": checks
    }
