"""Tests for the tab repositories."""
import pytest

from app.exceptions import ConflictError, NotFoundError, SchemaError
from app.models.article import Article
from app.models.sale import Sale, SaleLine
from app.repositories.articles import ArticleRepository
from app.repositories.clients import ClientRepository
from app.repositories.purchases import PurchaseRepository
from app.repositories.sales import SaleRepository
from tests.fakes import FakeSheetsBackend, SALE_HEADERS


def test_list_skips_blank_rows(backend):
    backend.tabs["articulos"].append(["", "", "", "", "", "", ""])
    repo = ArticleRepository(backend, "articulos")

    articles = repo.list_all()

    assert [a.article_id for a in articles] == ["A", "B", "C"]
    assert articles[0].price == 100.0
    assert articles[0].stock == 5
    assert articles[0].category == "Almacen"


def test_empty_tab_lists_nothing():
    backend = FakeSheetsBackend({"articulos": []})

    assert ArticleRepository(backend, "articulos").list_all() == []


def test_tab_lookup_is_case_insensitive(backend):
    repo = ArticleRepository(backend, "ARTICULOS")

    assert repo.exists("a")


def test_missing_tab_raises_schema_error(backend):
    with pytest.raises(SchemaError):
        ArticleRepository(backend, "inexistente").list_all()


def test_missing_key_column_raises_schema_error():
    backend = FakeSheetsBackend({"articulos": [["nombre"], ["Arroz"]]})

    with pytest.raises(SchemaError):
        ArticleRepository(backend, "articulos").get("A")


def test_locate_unknown_key(backend):
    with pytest.raises(NotFoundError):
        ArticleRepository(backend, "articulos").locate("Z")


def test_insert_into_empty_tab_writes_headers():
    backend = FakeSheetsBackend({"articulos": []})
    repo = ArticleRepository(backend, "articulos")

    repo.insert(Article(article_id="A", name="Arroz", price=10, stock=2))

    assert backend.tabs["articulos"][0][:3] == ["codbarra", "idarticulo", "nombre"]
    assert backend.article("A")["stock"] == "2"


def test_update_preserves_unknown_columns():
    backend = FakeSheetsBackend({
        "articulos": [
            ["idarticulo", "nombre", "notas", "stock"],
            ["A", "Arroz", "fragil", "5"],
        ]
    })
    repo = ArticleRepository(backend, "articulos")

    repo.update("A", {"name": "Arroz largo"})

    assert backend.tabs["articulos"][1] == ["A", "Arroz largo", "fragil", "5"]


def test_category_is_never_written(backend):
    ArticleRepository(backend, "articulos").update("A", {"category": "Otra"})

    assert backend.article("A")["categoria"] == "Almacen"


def test_next_id_ignores_non_numeric_keys():
    backend = FakeSheetsBackend({
        "clientes": [["idcliente", "nombre"], ["3", "Ana"], ["x", "Bob"], ["7.0", "Eva"]]
    })

    assert ClientRepository(backend, "clientes").next_id() == "8"


def test_delete_rescans_when_row_moved(backend):
    repo = ArticleRepository(backend, "articulos")
    located = repo.locate("B")
    # Another request deletes the row above between the scan and the delete
    del backend.tabs["articulos"][1]

    repo._confirm_position(located, "B")
    repo.delete("B")

    assert [r["idarticulo"] for r in backend.records("articulos")] == ["C"]


def test_delete_conflict_when_row_cannot_be_confirmed(backend, monkeypatch):
    repo = ArticleRepository(backend, "articulos")
    monkeypatch.setattr(backend, "get_row", lambda tab, row_number: ["x", "OTHER"])

    with pytest.raises(ConflictError):
        repo.delete("A")
    assert backend.article("A") is not None


def test_client_serial_dates_read_as_iso():
    backend = FakeSheetsBackend({
        "clientes": [["id", "nombre", "fecha alta"], ["1", "Ana", "45000"]]
    })

    client = ClientRepository(backend, "clientes").get("1")

    assert client.created_at == "2023-03-15"


def test_legacy_sale_row_read_as_single_line():
    backend = FakeSheetsBackend({
        "ventas": [
            ["idventa", "fecha", "idarticulo", "nombre", "cantidad", "total"],
            ["1", "2024-01-01", "A", "Arroz", "2", "200"],
        ]
    })

    sale = SaleRepository(backend, "ventas").get("1")

    assert len(sale.lines) == 1
    assert sale.lines[0].article_id == "A"
    assert sale.lines[0].quantity == 2
    assert sale.unit_price == 100.0


def test_multi_line_sale_round_trips_through_json_column():
    backend = FakeSheetsBackend({"ventas": [SALE_HEADERS]})
    repo = SaleRepository(backend, "ventas")
    repo.insert(Sale(
        sale_id="1",
        date="2024-01-01",
        lines=[SaleLine("A", "Arroz", 2, 200), SaleLine("B", "Fideos", 1, 50)],
        total=250,
    ))

    sale = repo.get("1")

    assert [(l.article_id, l.quantity) for l in sale.lines] == [("A", 2), ("B", 1)]
    assert sale.unit_price is None
    assert backend.records("ventas")[0]["idarticulo"] == ""


def test_multi_line_sale_needs_lines_column():
    backend = FakeSheetsBackend({"ventas": [["idventa", "fecha", "idarticulo", "cantidad", "total"]]})
    repo = SaleRepository(backend, "ventas")

    with pytest.raises(SchemaError):
        repo.insert(Sale(sale_id="1", lines=[SaleLine("A", quantity=1), SaleLine("B", quantity=1)]))
    assert len(backend.tabs["ventas"]) == 1


def test_legacy_purchase_total_computed_when_blank():
    backend = FakeSheetsBackend({
        "compras": [
            ["idcompra", "fecha", "proveedor", "idarticulo", "articulo", "cantidad", "precio"],
            ["1", "2024-01-01", "P1", "A", "Arroz", "3", "20"],
        ]
    })

    purchase = PurchaseRepository(backend, "compras").get("1")

    assert purchase.total == 60.0
    assert purchase.lines[0].name == "Arroz"
