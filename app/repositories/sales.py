from typing import Any, Dict, Sequence

from app.models.sale import Sale, SaleLine
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

SALE_COLUMNS = (
    Column("sale_id", ("idventa", "id venta", "id"), required=True),
    Column("date", ("fecha",)),
    Column("client", ("cliente",)),
    Column("article_id", ("idarticulo", "articuloid", "id articulo")),
    Column("name", ("nombre", "articulonombre")),
    Column("quantity", ("cantidad",)),
    Column("unit_price", ("preciounitario", "precio unitario", "precio")),
    Column("total", ("total",)),
    Column("lines", LINES_ALIASES),
)


class SaleRepository(SheetRepository[Sale]):
    columns = SALE_COLUMNS
    key_field = "sale_id"
    not_found_message = "Venta no encontrada"

    def from_row(self, resolver: ColumnResolver, row: Sequence[str]) -> Sale:
        stored = decode_lines(resolver.value(row, "lines"))
        if stored is not None:
            lines = [
                SaleLine(
                    article_id=to_text(item.get("idarticulo")),
                    name=to_text(item.get("nombre")),
                    quantity=to_int(item.get("cantidad")),
                    total=to_number(item.get("total")),
                )
                for item in stored
            ]
        else:
            article_id = resolver.value(row, "article_id")
            lines = []
            if article_id:
                lines.append(
                    SaleLine(
                        article_id=article_id,
                        name=resolver.value(row, "name"),
                        quantity=resolver.integer(row, "quantity"),
                        total=resolver.number(row, "total"),
                    )
                )

        unit_price = None
        if len(lines) == 1:
            if resolver.value(row, "unit_price"):
                unit_price = resolver.number(row, "unit_price")
            elif lines[0].quantity > 0:
                unit_price = lines[0].total / lines[0].quantity
            else:
                unit_price = 0.0

        return Sale(
            sale_id=resolver.value(row, "sale_id"),
            date=resolver.value(row, "date"),
            client=resolver.value(row, "client"),
            lines=lines,
            total=resolver.number(row, "total"),
            unit_price=unit_price,
        )

    def to_fields(self, entity: Sale) -> Dict[str, Any]:
        single = entity.lines[0] if len(entity.lines) == 1 else None
        unit_price = ""
        if single is not None:
            if entity.unit_price is not None:
                unit_price = entity.unit_price
            elif single.quantity > 0:
                unit_price = single.total / single.quantity
        return {
            "sale_id": entity.sale_id,
            "date": entity.date,
            "client": entity.client,
            "article_id": single.article_id if single else "",
            "name": single.name if single else "",
            "quantity": single.quantity if single else "",
            "unit_price": unit_price,
            "total": entity.total,
            "lines": encode_lines([
                {
                    "idarticulo": line.article_id,
                    "nombre": line.name,
                    "cantidad": line.quantity,
                    "total": line.total,
                }
                for line in entity.lines
            ]),
        }

    def build_row(self, resolver: ColumnResolver, entity: Sale, base: Sequence[Any] = None) -> list:
        check_lines_column(resolver, entity.lines)
        return super().build_row(resolver, entity, base=base)
