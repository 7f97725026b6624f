"""In-memory spreadsheet used by the tests in place of Google Sheets."""
import copy

from app.exceptions import BackendError, SchemaError


ARTICLE_HEADERS = ["codbarra", "idarticulo", "nombre", "descripcion", "precio", "stock", "categoria"]
SALE_HEADERS = ["idventa", "fecha", "cliente", "idarticulo", "nombre", "cantidad", "preciounitario", "total", "articulos"]
PURCHASE_HEADERS = ["idcompra", "fecha", "proveedor", "idarticulo", "articulo", "cantidad", "precio", "total", "articulos"]
CLIENT_HEADERS = ["idcliente", "nombre", "telefono", "email", "direccion", "fechacreacion"]
SUPPLIER_HEADERS = ["idproveedor", "nombre", "telefono", "email", "direccion", "contacto"]


def _text(value):
    return "" if value is None else str(value)


class FakeSheetsBackend:
    """
    In-memory stand-in for SheetsBackend.

    Tabs are lists of rows of strings, header row first, 1-based like the
    real thing. ``fail_on`` makes every later call of one operation on one tab
    raise BackendError.
    """

    def __init__(self, tabs=None):
        self.tabs = {}
        self.failures = set()
        self.calls = []
        for title, rows in (tabs or {}).items():
            self.tabs[title] = [[_text(v) for v in row] for row in rows]

    def fail_on(self, operation, tab):
        self.failures.add((operation, tab.lower()))

    def _rows(self, operation, tab):
        self.calls.append((operation, tab))
        if (operation, tab.lower()) in self.failures:
            raise BackendError(f"Error de Google Sheets: {operation} on {tab} failed")
        for title, rows in self.tabs.items():
            if title.strip().lower() == tab.strip().lower():
                return rows
        raise SchemaError(f"No se encontró la hoja {tab}")

    def tab_titles(self):
        if ("tab_titles", "*") in self.failures:
            raise BackendError("Error de Google Sheets: unreachable")
        return list(self.tabs)

    def get_values(self, tab):
        return copy.deepcopy(self._rows("get_values", tab))

    def get_row(self, tab, row_number):
        rows = self._rows("get_row", tab)
        if row_number > len(rows):
            return []
        row = list(rows[row_number - 1])
        while row and row[-1] == "":
            row.pop()
        return row

    def append_row(self, tab, values):
        self._rows("append_row", tab).append([_text(v) for v in values])

    def update_row(self, tab, row_number, values):
        rows = self._rows("update_row", tab)
        row = rows[row_number - 1]
        row.extend([""] * (len(values) - len(row)))
        for idx, value in enumerate(values):
            row[idx] = _text(value)

    def update_cells(self, tab, cells):
        rows = self._rows("update_cells", tab)
        for row_number, col_number, value in cells:
            row = rows[row_number - 1]
            row.extend([""] * (col_number - len(row)))
            row[col_number - 1] = _text(value)

    def delete_row(self, tab, row_number):
        del self._rows("delete_row", tab)[row_number - 1]

    # Test helpers

    def records(self, tab):
        """Data rows of a tab as dicts keyed by header."""
        rows = self.tabs[tab]
        headers = rows[0]
        return [
            {header: (row[i] if i < len(row) else "") for i, header in enumerate(headers)}
            for row in rows[1:]
        ]

    def article(self, article_id):
        for record in self.records("articulos"):
            if record["idarticulo"] == article_id:
                return record
        return None

    def stock_of(self, article_id):
        return int(float(self.article(article_id)["stock"]))

    def price_of(self, article_id):
        return float(self.article(article_id)["precio"])

    def set_stock(self, article_id, stock):
        rows = self.tabs["articulos"]
        key = rows[0].index("idarticulo")
        column = rows[0].index("stock")
        for row in rows[1:]:
            if row[key] == article_id:
                row[column] = str(stock)


def seeded_tabs():
    return {
        "articulos": [
            ARTICLE_HEADERS,
            ["7791", "A", "Arroz", "Largo fino", "100", "5", "Almacen"],
            ["7792", "B", "Fideos", "", "50", "10", ""],
            ["", "C", "Yerba", "", "80", "0", ""],
        ],
        "ventas": [SALE_HEADERS],
        "compras": [PURCHASE_HEADERS],
        "clientes": [
            CLIENT_HEADERS,
            ["1", "Ana", "111", "ana@example.com", "Calle 1", "2024-01-10"],
        ],
        "proveedores": [
            SUPPLIER_HEADERS,
            ["P1", "Distribuidora Norte", "222", "", "", "Luis"],
        ],
    }
