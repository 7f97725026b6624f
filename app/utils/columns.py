"""Header-driven column lookup for spreadsheet tabs."""
import math
import unicodedata
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Dict, Mapping, Optional, Sequence

from app.exceptions import SchemaError

# Day zero of spreadsheet serial dates.
SERIAL_DATE_EPOCH = date(1899, 12, 30)


def normalize_header(value: Any) -> str:
    """Lower-case, trim and strip accents so "Dirección" matches "direccion"."""
    text = str(value if value is not None else "").strip().lower()
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


@dataclass(frozen=True)
class Column:
    """
    A logical field and the header names accepted for it.

    The first alias is the canonical header, used when a tab has to be
    initialised from scratch.
    """
    field: str
    aliases: tuple
    required: bool = False

    @property
    def header(self) -> str:
        return self.aliases[0]


def default_headers(columns: Sequence[Column]) -> list:
    return [column.header for column in columns]


class ColumnResolver:
    """
    Maps logical field names to column indexes of one tab.

    Columns may be missing or in any order; only fields flagged as required
    make the resolver fail, and only when they are actually used.
    """

    def __init__(self, headers: Sequence[Any], columns: Sequence[Column], tab: str = ""):
        self.tab = tab
        self.headers = [str(h if h is not None else "").strip() for h in headers]
        self._normalized = [normalize_header(h) for h in self.headers]
        self.columns: Dict[str, Column] = {column.field: column for column in columns}
        self._indexes = {
            column.field: self.resolve_column(column.aliases) for column in columns
        }

    @property
    def width(self) -> int:
        return len(self.headers)

    def resolve_column(self, aliases: Sequence[str]) -> Optional[int]:
        """Index of the first header matching any alias, in alias order; None if absent."""
        for alias in aliases:
            key = normalize_header(alias)
            if key in self._normalized:
                return self._normalized.index(key)
        return None

    def index(self, field: str) -> Optional[int]:
        return self._indexes.get(field)

    def require(self, field: str) -> int:
        """Index of a column that must exist; raises SchemaError otherwise."""
        idx = self._indexes.get(field)
        if idx is None:
            column = self.columns.get(field)
            wanted = "/".join(column.aliases) if column else field
            raise SchemaError(
                f"Columna {wanted} no encontrada en {self.tab or 'la hoja'}. "
                f"Columnas disponibles: {self.headers}"
            )
        return idx

    @staticmethod
    def get_cell(row: Sequence[Any], index: Optional[int]) -> str:
        if index is None or index < 0 or index >= len(row) or row[index] is None:
            return ""
        return str(row[index]).strip()

    @classmethod
    def get_numeric_cell(cls, row: Sequence[Any], index: Optional[int]) -> float:
        """Cell as a number, 0 when blank or unparsable. A decimal comma is accepted."""
        text = cls.get_cell(row, index)
        if not text:
            return 0.0
        for candidate in (text, text.replace(",", ".")):
            try:
                number = float(candidate)
            except ValueError:
                continue
            return number if math.isfinite(number) else 0.0
        return 0.0

    @classmethod
    def get_int_cell(cls, row: Sequence[Any], index: Optional[int]) -> int:
        return int(round(cls.get_numeric_cell(row, index)))

    @classmethod
    def get_date_cell(cls, row: Sequence[Any], index: Optional[int]) -> str:
        """
        Cell as a date string. Serial numbers (days since 1899-12-30) are
        converted to ISO format, anything else is returned as written.
        """
        text = cls.get_cell(row, index)
        try:
            serial = float(text)
        except ValueError:
            return text
        if not math.isfinite(serial):
            return text
        return (SERIAL_DATE_EPOCH + timedelta(days=int(serial))).isoformat()

    def value(self, row: Sequence[Any], field: str) -> str:
        return self.get_cell(row, self.index(field))

    def number(self, row: Sequence[Any], field: str) -> float:
        return self.get_numeric_cell(row, self.index(field))

    def integer(self, row: Sequence[Any], field: str) -> int:
        return self.get_int_cell(row, self.index(field))

    def has(self, field: str) -> bool:
        return self.index(field) is not None

    def build_row(self, values: Mapping[str, Any], base: Sequence[Any] = None) -> list:
        """
        Lay field values out in header order.

        Cells of ``base`` in columns this resolver does not know are kept, so
        rewriting a record never wipes extra columns added by hand.
        """
        row = list(base or [])
        width = max(self.width, len(row))
        row.extend([""] * (width - len(row)))
        for field, value in values.items():
            idx = self.index(field)
            if idx is None:
                column = self.columns.get(field)
                if column is not None and column.required:
                    self.require(field)
                continue
            row[idx] = "" if value is None else value
        return row
