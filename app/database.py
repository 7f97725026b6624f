import logging
from functools import lru_cache, wraps
from typing import Any, Iterable, List, Optional, Sequence, Tuple

import gspread
from fastapi import Depends
from google.auth.exceptions import GoogleAuthError
from gspread.exceptions import GSpreadException
from gspread.utils import rowcol_to_a1

from app.config import Settings, get_settings
from app.exceptions import BackendError, ConfigurationError, SchemaError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_URI = "https://oauth2.googleapis.com/token"
VALUE_INPUT_OPTION = "USER_ENTERED"


def backend_call(func):
    """
    Decorator converting gspread and transport failures into BackendError.

    Network errors raised by ``requests`` derive from ``OSError``; rejected
    credentials and failed token refreshes raise ``GoogleAuthError``.
    """
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except (GSpreadException, GoogleAuthError, OSError) as e:
            logger.error(f"Spreadsheet call {func.__name__}{args!r} failed: {e}")
            raise BackendError(f"Error de Google Sheets: {e}") from e
    return wrapper


class SheetsBackend:
    """
    Row-oriented access to the tabs of one Google spreadsheet.

    Every tab is a flat table whose first row holds the headers. Row and
    column numbers are 1-based, as in the spreadsheet UI. Nothing is cached:
    every read goes to the API so callers always see the latest values.
    """

    def __init__(self, spreadsheet: gspread.Spreadsheet):
        self.spreadsheet = spreadsheet

    def _worksheet(self, tab: str) -> gspread.Worksheet:
        """Find a tab by case-insensitive title."""
        wanted = tab.strip().lower()
        for worksheet in self.spreadsheet.worksheets():
            if worksheet.title.strip().lower() == wanted:
                return worksheet
        raise SchemaError(f"No se encontró la hoja {tab}")

    @backend_call
    def tab_titles(self) -> List[str]:
        return [worksheet.title for worksheet in self.spreadsheet.worksheets()]

    @backend_call
    def get_values(self, tab: str) -> List[List[str]]:
        """Read the whole tab, header row included."""
        return self._worksheet(tab).get_all_values()

    @backend_call
    def get_row(self, tab: str, row_number: int) -> List[str]:
        return self._worksheet(tab).row_values(row_number)

    @backend_call
    def append_row(self, tab: str, values: Sequence[Any]) -> None:
        self._worksheet(tab).append_row(
            list(values),
            value_input_option=VALUE_INPUT_OPTION,
            insert_data_option="INSERT_ROWS",
        )

    @backend_call
    def update_row(self, tab: str, row_number: int, values: Sequence[Any]) -> None:
        """Overwrite one row starting at column A."""
        if not values:
            return
        start = rowcol_to_a1(row_number, 1)
        end = rowcol_to_a1(row_number, len(values))
        self._worksheet(tab).update(
            range_name=f"{start}:{end}",
            values=[list(values)],
            value_input_option=VALUE_INPUT_OPTION,
        )

    @backend_call
    def update_cells(self, tab: str, cells: Iterable[Tuple[int, int, Any]]) -> None:
        """Write several single cells in one batched request."""
        data = [
            {"range": rowcol_to_a1(row, col), "values": [[value]]}
            for row, col, value in cells
        ]
        if not data:
            return
        self._worksheet(tab).batch_update(data, value_input_option=VALUE_INPUT_OPTION)

    @backend_call
    def delete_row(self, tab: str, row_number: int) -> None:
        """Physically remove a row; every row below it moves up by one."""
        self._worksheet(tab).delete_rows(row_number)


@lru_cache
def connect(spreadsheet_id: str, client_email: str, private_key: str) -> SheetsBackend:
    """
    Authenticate with the service account and open the spreadsheet.

    Cached per credential set, so the OAuth handshake happens once per process.
    """
    info = {
        "type": "service_account",
        "client_email": client_email,
        "private_key": private_key,
        "token_uri": TOKEN_URI,
    }
    try:
        client = gspread.service_account_from_dict(info, scopes=SCOPES)
        spreadsheet = client.open_by_key(spreadsheet_id)
    except (GSpreadException, GoogleAuthError, OSError, ValueError) as e:
        logger.error(f"Could not open spreadsheet {spreadsheet_id}: {e}")
        raise BackendError(f"No se pudo abrir la hoja de cálculo: {e}") from e

    logger.info(f"Connected to spreadsheet {spreadsheet_id} as {client_email}")
    return SheetsBackend(spreadsheet)


def get_backend(settings: Settings = Depends(get_settings)) -> SheetsBackend:
    """
    Dependency returning the spreadsheet backend.

    Missing credentials surface here, on the first request that needs the
    spreadsheet, rather than at startup.
    """
    missing = settings.missing_credentials()
    if missing:
        raise ConfigurationError(
            "Faltan credenciales de Google. Configura " + ", ".join(missing)
        )
    return connect(
        settings.spreadsheet_id,
        settings.GOOGLE_SERVICE_ACCOUNT_EMAIL.strip(),
        settings.private_key,
    )


def try_get_backend(settings: Settings = Depends(get_settings)) -> Optional[SheetsBackend]:
    """
    Dependency for endpoints that must answer even without a spreadsheet
    (existence checks, readiness probe): returns None instead of raising.
    """
    try:
        return get_backend(settings)
    except (ConfigurationError, BackendError) as e:
        logger.warning(f"Spreadsheet unavailable: {e}")
        return None
