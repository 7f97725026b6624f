import dataclasses
import logging
from typing import Any, Dict, Generic, List, Mapping, NamedTuple, Optional, Sequence, Tuple, TypeVar

from app.database import SheetsBackend
from app.exceptions import ConflictError, NotFoundError
from app.utils.columns import Column, ColumnResolver, default_headers

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Located(NamedTuple):
    """A record together with where it was found."""
    resolver: ColumnResolver
    row_number: int
    row: List[str]
    entity: Any


def same_key(a: str, b: str) -> bool:
    """Case-insensitive, whitespace-insensitive key comparison."""
    wanted = (b or "").strip().lower()
    return bool(wanted) and (a or "").strip().lower() == wanted


def numeric_id(value: Any) -> Optional[int]:
    """Integer value of an id cell ("7", "7.0", " 7 "), None when not numeric."""
    text = str(value if value is not None else "").strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        try:
            number = float(text)
        except ValueError:
            return None
        return int(number) if number.is_integer() else None


class SheetRepository(Generic[T]):
    """
    Base class for one tab used as a table.

    Subclasses declare the tab's columns, which of them is the key, and how a
    row converts to and from a record. Every call reads the whole tab: the
    spreadsheet is the only source of truth and nothing is cached between
    calls.

    Writes carry no uniqueness check; callers check ``exists`` first.
    """

    columns: Tuple[Column, ...] = ()
    key_field: str = "id"
    not_found_message: str = "Registro no encontrado"

    def __init__(self, backend: SheetsBackend, tab: str):
        self.backend = backend
        self.tab = tab

    # Row <-> record conversion

    def from_row(self, resolver: ColumnResolver, row: Sequence[str]) -> T:
        raise NotImplementedError

    def to_fields(self, entity: T) -> Dict[str, Any]:
        """Field values to write, keyed by column field name."""
        return dataclasses.asdict(entity)

    def build_row(self, resolver: ColumnResolver, entity: T, base: Sequence[Any] = None) -> list:
        return resolver.build_row(self.to_fields(entity), base=base)

    def key_of(self, entity: T) -> str:
        return getattr(entity, self.key_field)

    # Reads

    def read(self) -> Tuple[ColumnResolver, List[List[str]]]:
        values = self.backend.get_values(self.tab)
        headers = values[0] if values else []
        return ColumnResolver(headers, self.columns, self.tab), values

    def list_all(self) -> List[T]:
        """Every record of the tab; empty when the tab has no data rows."""
        resolver, values = self.read()
        if len(values) <= 1:
            return []
        return [
            self.from_row(resolver, row)
            for row in values[1:]
            if any(str(cell).strip() for cell in row)
        ]

    def exists(self, key: str) -> bool:
        return any(same_key(self.key_of(entity), key) for entity in self.list_all())

    def locate(self, key: str) -> Located:
        """Scan the tab for the row holding ``key``."""
        resolver, values = self.read()
        if len(values) <= 1:
            raise NotFoundError(self.not_found_message)
        key_index = resolver.require(self.key_field)
        for row_number, row in enumerate(values[1:], start=2):
            if same_key(resolver.get_cell(row, key_index), key):
                return Located(resolver, row_number, row, self.from_row(resolver, row))
        raise NotFoundError(self.not_found_message)

    def get(self, key: str) -> T:
        return self.locate(key).entity

    def next_id(self) -> str:
        """Next sequential id: highest numeric key plus one."""
        highest = 0
        for entity in self.list_all():
            number = numeric_id(self.key_of(entity))
            if number is not None and number > highest:
                highest = number
        return str(highest + 1)

    # Writes

    def insert(self, entity: T) -> T:
        """Append a record. An empty tab gets its header row first."""
        resolver, values = self.read()
        if not values or not any(str(h).strip() for h in values[0]):
            headers = default_headers(self.columns)
            logger.info(f"Tab '{self.tab}' has no header row, writing {headers}")
            self.backend.append_row(self.tab, headers)
            resolver = ColumnResolver(headers, self.columns, self.tab)

        self.backend.append_row(self.tab, self.build_row(resolver, entity))
        logger.info(f"Inserted {self.key_of(entity)!r} into '{self.tab}'")
        return entity

    def update(self, key: str, changes: Mapping[str, Any]) -> T:
        """
        Merge ``changes`` over the current record and overwrite its row.

        Columns the repository does not know keep their current content.
        """
        located = self.locate(key)
        updated = dataclasses.replace(located.entity, **dict(changes))
        row = self.build_row(located.resolver, updated, base=located.row)
        self.backend.update_row(self.tab, located.row_number, row)
        logger.info(f"Updated {key!r} in '{self.tab}' (row {located.row_number})")
        return updated

    def delete(self, key: str) -> T:
        """Remove the record's row. Rows below it shift up by one."""
        located = self._confirm_position(self.locate(key), key)
        self.backend.delete_row(self.tab, located.row_number)
        logger.info(f"Deleted {key!r} from '{self.tab}' (row {located.row_number})")
        return located.entity

    def _confirm_position(self, located: Located, key: str) -> Located:
        """
        Check that the row about to be deleted still holds ``key``.

        Row deletion is positional, so a concurrent insert or delete between
        the scan and the delete would remove the wrong record. One rescan is
        attempted before giving up.
        """
        for attempt in range(2):
            key_index = located.resolver.require(self.key_field)
            current = self.backend.get_row(self.tab, located.row_number)
            if same_key(located.resolver.get_cell(current, key_index), key):
                return located
            logger.warning(
                f"Row {located.row_number} of '{self.tab}' no longer holds {key!r}, rescanning"
            )
            if attempt == 0:
                located = self.locate(key)
        raise ConflictError(
            f"La hoja {self.tab} cambió durante la operación, inténtalo de nuevo"
        )
