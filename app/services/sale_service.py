import logging
from typing import List, Sequence

from app.config import get_settings
from app.database import SheetsBackend
from app.exceptions import ValidationError
from app.models.sale import Sale, SaleLine
from app.repositories.sales import SaleRepository
from app.schemas.sale import SaleIn, SaleLineIn
from app.services.compensation import CompensationStack, best_effort
from app.services.stock_service import StockService
from app.utils.text import clean

logger = logging.getLogger(__name__)


class SaleService:
    """
    Service class for sales and the stock movements they imply.

    STOCK CONSISTENCY:
    ==================
    A sale takes its quantities out of stock before its row is written.
    Each stock change that succeeds records its inverse on a
    CompensationStack; if a later change or the row write fails, the
    inverses run in reverse order and the original error is raised.

    Editing a sale first puts the old quantities back (best-effort: an
    article deleted since the sale must not block the edit), then takes
    the new ones out. A failure restores the pre-edit stock.
    """

    def __init__(self, backend: SheetsBackend, stock: StockService = None):
        self.sales = SaleRepository(backend, get_settings().SALES_TAB)
        self.stock = stock or StockService(backend)

    def list_sales(self) -> List[Sale]:
        return self.sales.list_all()

    def exists(self, sale_id: str) -> bool:
        if not clean(sale_id):
            return False
        return self.sales.exists(sale_id)

    def create_sale(self, data: SaleIn) -> Sale:
        """
        Create a sale and take its quantities out of stock.

        Raises:
            ValidationError: If the date or the lines are missing or invalid
            NotFoundError: If a line references an unknown article
            InsufficientStockError: If a line asks for more than the stock
        """
        sale_date = clean(data.date)
        if not sale_date:
            raise ValidationError("Fecha es obligatoria")
        lines = _parse_lines(data.lines)
        total = data.total if data.total is not None else _lines_total(lines)

        sale = Sale(
            sale_id=self.sales.next_id(),
            date=sale_date,
            client=clean(data.client),
            lines=lines,
            total=total,
        )

        with CompensationStack(f"create sale {sale.sale_id}") as saga:
            self._take_out(saga, lines)
            self.sales.insert(sale)

        logger.info(f"Sale #{sale.sale_id} created with {len(lines)} line(s), total {total}")
        return sale

    def update_sale(self, sale_id: str, data: SaleIn) -> Sale:
        """
        Edit a sale. Omitted fields keep their value; new lines replace the
        old ones and move stock by the difference.

        Raises:
            NotFoundError: If the sale doesn't exist
            ValidationError: If a given field is invalid
            InsufficientStockError: If the new lines ask for more than the stock
        """
        key = clean(sale_id)
        if not key:
            raise ValidationError("ID de venta es obligatorio")
        current = self.sales.get(key)

        changes = {}
        if data.date is not None:
            if not clean(data.date):
                raise ValidationError("Fecha es obligatoria")
            changes["date"] = clean(data.date)
        if data.client is not None:
            changes["client"] = clean(data.client)

        new_lines = None
        if data.lines is not None:
            new_lines = _parse_lines(data.lines)
            changes["lines"] = new_lines
            changes["unit_price"] = None
        if data.total is not None:
            changes["total"] = data.total
        elif new_lines is not None:
            changes["total"] = _lines_total(new_lines)

        with CompensationStack(f"edit sale {key}") as saga:
            if new_lines is not None:
                self._put_back(saga, current.lines)
                self._take_out(saga, new_lines)
            updated = self.sales.update(key, changes)

        logger.info(f"Sale #{key} updated")
        return updated

    def delete_sale(self, sale_id: str) -> Sale:
        """Delete a sale, putting its quantities back into stock first."""
        key = clean(sale_id)
        if not key:
            raise ValidationError("ID de venta es obligatorio")
        sale = self.sales.get(key)

        with CompensationStack(f"delete sale {key}") as saga:
            self._put_back(saga, sale.lines)
            self.sales.delete(key)

        logger.info(f"Sale #{key} deleted")
        return sale

    def _take_out(self, saga: CompensationStack, lines: Sequence[SaleLine]) -> None:
        for line in lines:
            self.stock.discount(line.article_id, line.quantity)
            saga.push(
                f"replenish {line.article_id} x{line.quantity}",
                self.stock.replenish,
                line.article_id,
                line.quantity,
            )

    def _put_back(self, saga: CompensationStack, lines: Sequence[SaleLine]) -> None:
        """Best-effort replenish; only the changes that happened get an undo."""
        for line in lines:
            replenished = best_effort(
                f"replenish {line.article_id} x{line.quantity}",
                self.stock.replenish,
                line.article_id,
                line.quantity,
            )
            if replenished:
                saga.push(
                    f"discount {line.article_id} x{line.quantity}",
                    self.stock.discount,
                    line.article_id,
                    line.quantity,
                )


def _parse_lines(items: Sequence[SaleLineIn]) -> List[SaleLine]:
    if not items:
        raise ValidationError("Debe incluir al menos un artículo")
    lines = []
    for item in items:
        article_id = clean(item.article_id)
        if not article_id:
            raise ValidationError("Cada artículo debe indicar su idarticulo")
        if item.quantity is None or item.quantity <= 0:
            raise ValidationError(f"La cantidad de {article_id} debe ser positiva")
        lines.append(
            SaleLine(
                article_id=article_id,
                name=clean(item.name),
                quantity=item.quantity,
                total=item.total or 0.0,
            )
        )
    return lines


def _lines_total(lines: Sequence[SaleLine]) -> float:
    return sum(line.total for line in lines)
