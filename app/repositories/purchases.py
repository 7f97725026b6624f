from typing import Any, Dict, Sequence

from app.models.purchase import Purchase, PurchaseLine
from app.repositories.base import SheetRepository
from app.repositories.line_items import (
    LINES_ALIASES,
    check_lines_column,
    decode_lines,
    encode_lines,
    to_int,
    to_number,
    to_text,
)
from app.utils.columns import Column, ColumnResolver

PURCHASE_COLUMNS = (
    Column("purchase_id", ("idcompra", "id compra", "id"), required=True),
    Column("date", ("fecha",)),
    Column("supplier", ("proveedor",)),
    Column("article_id", ("idarticulo", "id articulo", "articuloid")),
    Column("name", ("articulo", "nombre", "articulonombre")),
    Column("quantity", ("cantidad",)),
    Column("price", ("precio", "preciounitario")),
    Column("total", ("total",)),
    Column("lines", LINES_ALIASES),
)


def purchase_total(lines) -> float:
    return sum(line.quantity * line.price for line in lines)


class PurchaseRepository(SheetRepository[Purchase]):
    columns = PURCHASE_COLUMNS
    key_field = "purchase_id"
    not_found_message = "Compra no encontrada"

    def from_row(self, resolver: ColumnResolver, row: Sequence[str]) -> Purchase:
        stored = decode_lines(resolver.value(row, "lines"))
        if stored is not None:
            lines = [
                PurchaseLine(
                    article_id=to_text(item.get("idarticulo")),
                    name=to_text(item.get("articulo", item.get("nombre"))),
                    quantity=to_int(item.get("cantidad")),
                    price=to_number(item.get("precio")),
                )
                for item in stored
            ]
        else:
            article_id = resolver.value(row, "article_id")
            lines = []
            if article_id:
                lines.append(
                    PurchaseLine(
                        article_id=article_id,
                        name=resolver.value(row, "name"),
                        quantity=resolver.integer(row, "quantity"),
                        price=resolver.number(row, "price"),
                    )
                )

        if resolver.value(row, "total"):
            total = resolver.number(row, "total")
        else:
            total = purchase_total(lines)

        return Purchase(
            purchase_id=resolver.value(row, "purchase_id"),
            date=resolver.value(row, "date"),
            supplier=resolver.value(row, "supplier"),
            lines=lines,
            total=total,
        )

    def to_fields(self, entity: Purchase) -> Dict[str, Any]:
        single = entity.lines[0] if len(entity.lines) == 1 else None
        return {
            "purchase_id": entity.purchase_id,
            "date": entity.date,
            "supplier": entity.supplier,
            "article_id": single.article_id if single else "",
            "name": single.name if single else "",
            "quantity": single.quantity if single else "",
            "price": single.price if single else "",
            "total": entity.total,
            "lines": encode_lines([
                {
                    "idarticulo": line.article_id,
                    "articulo": line.name,
                    "cantidad": line.quantity,
                    "precio": line.price,
                }
                for line in entity.lines
            ]),
        }

    def build_row(self, resolver: ColumnResolver, entity: Purchase, base: Sequence[Any] = None) -> list:
        check_lines_column(resolver, entity.lines)
        return super().build_row(resolver, entity, base=base)
