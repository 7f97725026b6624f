"""
Storage of multi-line records (sales, purchases) in a single row.

The lines live as a JSON array in the ``articulos`` column. Rows written
before that column existed describe one article through plain columns and
are read as single-line records.
"""
import json
from typing import Any, List, Optional, Sequence

from app.exceptions import SchemaError
from app.utils.columns import ColumnResolver

LINES_ALIASES = ("articulos", "detalle", "items")


def encode_lines(lines: List[dict]) -> str:
    return json.dumps(lines, ensure_ascii=False)


def decode_lines(text: str) -> Optional[List[dict]]:
    """Lines stored in a cell, or None when the cell holds no JSON array of objects."""
    if not text or not text.strip().startswith("["):
        return None
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        return None
    return data


def to_text(value: Any) -> str:
    return str(value if value is not None else "").strip()


def to_number(value: Any) -> float:
    return ColumnResolver.get_numeric_cell([value], 0)


def to_int(value: Any) -> int:
    return ColumnResolver.get_int_cell([value], 0)


def check_lines_column(resolver: ColumnResolver, lines: Sequence[Any]) -> None:
    """A record with several lines cannot be flattened into the legacy columns."""
    if len(lines) > 1 and not resolver.has("lines"):
        raise SchemaError(
            f"La hoja {resolver.tab} necesita una columna 'articulos' para guardar "
            f"varios artículos. Columnas disponibles: {resolver.headers}"
        )
