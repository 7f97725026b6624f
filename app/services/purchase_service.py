import logging
from datetime import date
from typing import List, Optional, Sequence

from app.config import get_settings
from app.database import SheetsBackend
from app.exceptions import ValidationError
from app.models.purchase import Purchase, PurchaseLine
from app.repositories.purchases import PurchaseRepository, purchase_total
from app.schemas.purchase import PurchaseIn
from app.services.compensation import CompensationStack, best_effort
from app.services.stock_service import StockService
from app.utils.text import clean

logger = logging.getLogger(__name__)


class PurchaseService:
    """
    Service class for purchases.

    A purchase adds its quantities to stock and sets each article's price to
    the purchase price (last purchase wins). Deleting a purchase takes the
    quantities back out but leaves prices alone. Multi-step changes are
    undone through a CompensationStack, as for sales.
    """

    def __init__(self, backend: SheetsBackend, stock: StockService = None):
        self.purchases = PurchaseRepository(backend, get_settings().PURCHASES_TAB)
        self.stock = stock or StockService(backend)

    def list_purchases(self) -> List[Purchase]:
        return self.purchases.list_all()

    def exists(self, purchase_id: str) -> bool:
        if not clean(purchase_id):
            return False
        return self.purchases.exists(purchase_id)

    def create_purchase(self, data: PurchaseIn) -> Purchase:
        """
        Create a purchase, adding stock and updating prices.

        Raises:
            ValidationError: If the supplier or the lines are missing or invalid
            NotFoundError: If a line references an unknown article
        """
        supplier = clean(data.supplier)
        if not supplier:
            raise ValidationError("Proveedor es obligatorio")
        lines = _parse_lines(data)
        if not lines:
            raise ValidationError("Debe incluir al menos un artículo")

        purchase = Purchase(
            purchase_id=self.purchases.next_id(),
            date=clean(data.date) or date.today().isoformat(),
            supplier=supplier,
            lines=lines,
            total=purchase_total(lines),
        )

        with CompensationStack(f"create purchase {purchase.purchase_id}") as saga:
            self._add(saga, lines)
            self.purchases.insert(purchase)

        logger.info(f"Purchase #{purchase.purchase_id} created with {len(lines)} line(s)")
        return purchase

    def update_purchase(self, purchase_id: str, data: PurchaseIn) -> Purchase:
        """
        Edit a purchase. Omitted fields keep their value. When the lines
        change, the old quantities are taken out of stock (best-effort) and
        the new ones added at the new prices.
        """
        key = clean(purchase_id)
        if not key:
            raise ValidationError("ID de compra es obligatorio")
        current = self.purchases.get(key)

        changes = {}
        if data.date is not None:
            changes["date"] = clean(data.date) or current.date
        if data.supplier is not None:
            if not clean(data.supplier):
                raise ValidationError("Proveedor es obligatorio")
            changes["supplier"] = clean(data.supplier)

        new_lines = _parse_lines(data, current=current)
        if new_lines is not None:
            if not new_lines:
                raise ValidationError("Debe incluir al menos un artículo")
            changes["lines"] = new_lines
            changes["total"] = purchase_total(new_lines)

        with CompensationStack(f"edit purchase {key}") as saga:
            if new_lines is not None:
                self._take_back(saga, current.lines)
                self._add(saga, new_lines)
            updated = self.purchases.update(key, changes)

        logger.info(f"Purchase #{key} updated")
        return updated

    def delete_purchase(self, purchase_id: str) -> Purchase:
        """Delete a purchase, taking its quantities back out of stock first."""
        key = clean(purchase_id)
        if not key:
            raise ValidationError("ID de compra es obligatorio")
        purchase = self.purchases.get(key)

        with CompensationStack(f"delete purchase {key}") as saga:
            self._take_back(saga, purchase.lines)
            self.purchases.delete(key)

        logger.info(f"Purchase #{key} deleted")
        return purchase

    def _add(self, saga: CompensationStack, lines: Sequence[PurchaseLine]) -> None:
        for line in lines:
            previous_price = self.stock.set_price_and_add_stock(line.article_id, line.price, line.quantity)
            saga.push(
                f"remove {line.article_id} x{line.quantity}, price back to {previous_price}",
                self.stock.set_price_and_add_stock,
                line.article_id,
                previous_price,
                -line.quantity,
            )

    def _take_back(self, saga: CompensationStack, lines: Sequence[PurchaseLine]) -> None:
        """Best-effort restore; only the changes that happened get an undo."""
        for line in lines:
            if not line.article_id or line.quantity <= 0:
                continue
            restored = best_effort(
                f"restore {line.article_id} x{line.quantity}",
                self.stock.restore,
                line.article_id,
                line.quantity,
            )
            if restored:
                saga.push(
                    f"replenish {line.article_id} x{line.quantity}",
                    self.stock.replenish,
                    line.article_id,
                    line.quantity,
                )


def _parse_lines(data: PurchaseIn, current: Optional[Purchase] = None) -> Optional[List[PurchaseLine]]:
    """
    Lines of a purchase body, or None when the body carries none.

    Single-line fields given on edit are merged over the current line, so a
    body with only ``cantidad`` changes just the quantity.
    """
    if data.lines is not None:
        items = data.lines
        base = None
    elif data.has_single_line_fields():
        items = [data]
        base = current.lines[0] if current is not None and len(current.lines) == 1 else None
    else:
        return None

    lines = []
    for item in items:
        article_id = clean(item.article_id) or (base.article_id if base else "")
        name = clean(item.name) or (base.name if base else "")
        quantity = item.quantity if item.quantity is not None else (base.quantity if base else 0)
        price = item.price if item.price is not None else (base.price if base else 0.0)
        if not article_id or quantity <= 0 or price < 0:
            raise ValidationError("ID artículo, cantidad (positiva) y precio son obligatorios")
        lines.append(PurchaseLine(article_id=article_id, name=name, quantity=quantity, price=price))
    return lines
