import re
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables (or a .env file).

    The spreadsheet credentials are not validated here: a missing value is
    reported by the first request that needs the spreadsheet.
    """
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "Inventario Sheets API"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # Google Sheets
    GOOGLE_SHEET_ID: str = ""
    GOOGLE_SERVICE_ACCOUNT_EMAIL: str = ""
    GOOGLE_PRIVATE_KEY: str = ""

    # Tab names
    ARTICLES_TAB: str = "articulos"
    SALES_TAB: str = "ventas"
    PURCHASES_TAB: str = "compras"
    CLIENTS_TAB: str = "clientes"
    SUPPLIERS_TAB: str = "proveedores"

    # Re-read stock cells right before writing them and refuse the write
    # if another request changed them in between.
    STOCK_WRITE_CHECK: bool = True

    @property
    def spreadsheet_id(self) -> str:
        """Spreadsheet key, extracted from a full URL when one is configured."""
        raw = self.GOOGLE_SHEET_ID.strip()
        match = re.search(r"/d/([a-zA-Z0-9-_]+)", raw)
        return match.group(1) if match else raw

    @property
    def private_key(self) -> str:
        return parse_private_key(self.GOOGLE_PRIVATE_KEY)

    def missing_credentials(self) -> List[str]:
        """Names of the required Google variables that are not set."""
        missing = []
        if not self.spreadsheet_id:
            missing.append("GOOGLE_SHEET_ID")
        if not self.GOOGLE_SERVICE_ACCOUNT_EMAIL.strip():
            missing.append("GOOGLE_SERVICE_ACCOUNT_EMAIL")
        if not self.private_key:
            missing.append("GOOGLE_PRIVATE_KEY")
        return missing


def parse_private_key(raw: str) -> str:
    """
    Normalize a PEM private key copied into an environment variable.

    Hosting dashboards often store the key with literal ``\\n`` sequences
    or wrapped in an extra pair of quotes.
    """
    if not raw or not raw.strip():
        return ""
    key = raw.replace("\\n", "\n").replace("\r\n", "\n").replace("\r", "\n").strip()
    if len(key) >= 2 and key[0] == key[-1] and key[0] in ("'", '"'):
        key = key[1:-1].replace("\\n", "\n").strip()
    return key


@lru_cache
def get_settings() -> Settings:
    return Settings()
