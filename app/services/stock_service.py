import logging
from typing import Optional

from app.config import get_settings
from app.database import SheetsBackend
from app.exceptions import ConflictError, InsufficientStockError, NotFoundError
from app.repositories.articles import ArticleRepository
from app.repositories.base import Located, same_key

logger = logging.getLogger(__name__)


class StockService:
    """
    Stock and price changes on the articles tab.

    Every operation rescans the tab right before writing, so it works on the
    article's current row and stock rather than on a position or value
    remembered from an earlier call.

    CONCURRENCY:
    ============
    A change is a read followed by a write with no lock in between. Two
    requests selling the same article can both read stock=5 and both write
    3, losing one sale. With ``check_writes`` enabled the row is read once
    more just before the write and the write is refused with ConflictError
    if the stock or the row position changed. This narrows the window; it
    does not close it.

    A blank article id or a non-positive quantity is a no-op.
    """

    def __init__(self, backend: SheetsBackend, tab: str = None, check_writes: bool = None):
        settings = get_settings()
        self.articles = ArticleRepository(backend, tab or settings.ARTICLES_TAB)
        self.check_writes = settings.STOCK_WRITE_CHECK if check_writes is None else check_writes

    @property
    def backend(self) -> SheetsBackend:
        return self.articles.backend

    def discount(self, article_id: str, quantity: int) -> None:
        """
        Take ``quantity`` units out of stock.

        Raises:
            NotFoundError: If the article doesn't exist
            InsufficientStockError: If stock would go below zero (nothing is written)
        """
        if not _applies(article_id, quantity):
            return
        located = self.articles.locate(article_id)
        current = located.entity.stock
        if current - quantity < 0:
            raise InsufficientStockError(located.entity.article_id, current, quantity)
        self._write(located, current - quantity)
        logger.info(f"Stock of {located.entity.article_id}: {current} -> {current - quantity} (discount {quantity})")

    def replenish(self, article_id: str, quantity: int) -> bool:
        """
        Put ``quantity`` units back into stock.

        An article that no longer exists is skipped silently: this is how
        sales referencing deleted articles get reverted.

        Returns:
            True if the stock was changed
        """
        if not _applies(article_id, quantity):
            return False
        try:
            located = self.articles.locate(article_id)
        except NotFoundError:
            logger.info(f"Replenish skipped, article {article_id!r} no longer exists")
            return False
        current = located.entity.stock
        self._write(located, current + quantity)
        logger.info(f"Stock of {located.entity.article_id}: {current} -> {current + quantity} (replenish {quantity})")
        return True

    def restore(self, article_id: str, quantity: int) -> None:
        """
        Take back the units a purchase added.

        Unlike a clamp to zero, going negative means the sheet no longer
        agrees with the purchase history, so it is reported.

        Raises:
            NotFoundError: If the article doesn't exist
            InsufficientStockError: If stock would go below zero
        """
        if not _applies(article_id, quantity):
            return
        located = self.articles.locate(article_id)
        current = located.entity.stock
        if current - quantity < 0:
            raise InsufficientStockError(
                located.entity.article_id,
                current,
                quantity,
                message=f"Stock insuficiente para revertir {located.entity.article_id}. Disponible: {current}",
            )
        self._write(located, current - quantity)
        logger.info(f"Stock of {located.entity.article_id}: {current} -> {current - quantity} (restore {quantity})")

    def set_price_and_add_stock(self, article_id: str, new_price: float, quantity_to_add: int) -> Optional[float]:
        """
        Apply a purchase: add units and overwrite the price in one batched write.

        Returns:
            The price the article had before, or None for a blank article id

        Raises:
            NotFoundError: If the article doesn't exist
        """
        if not (article_id or "").strip():
            return None
        located = self.articles.locate(article_id)
        current = located.entity.stock
        new_stock = current + quantity_to_add
        if new_stock < 0:
            raise InsufficientStockError(located.entity.article_id, current, -quantity_to_add)
        self._write(located, new_stock, new_price=new_price)
        logger.info(
            f"Stock of {located.entity.article_id}: {current} -> {new_stock}, "
            f"price {located.entity.price} -> {new_price}"
        )
        return located.entity.price

    def _write(self, located: Located, new_stock: int, new_price: float = None) -> None:
        resolver = located.resolver
        cells = []
        if new_price is not None:
            cells.append((located.row_number, resolver.require("price") + 1, new_price))
        cells.append((located.row_number, resolver.require("stock") + 1, new_stock))

        if self.check_writes:
            self._check_unchanged(located)
        self.backend.update_cells(self.articles.tab, cells)

    def _check_unchanged(self, located: Located) -> None:
        """Refuse to write if the row moved or its stock changed since it was read."""
        resolver = located.resolver
        row = self.backend.get_row(self.articles.tab, located.row_number)
        key = resolver.get_cell(row, resolver.require("article_id"))
        stock = resolver.get_int_cell(row, resolver.require("stock"))
        if not same_key(key, located.entity.article_id) or stock != located.entity.stock:
            logger.warning(
                f"Article {located.entity.article_id} changed concurrently "
                f"(row {located.row_number}: {key!r}, stock {stock} != {located.entity.stock})"
            )
            raise ConflictError(
                f"El artículo {located.entity.article_id} fue modificado por otra operación, inténtalo de nuevo"
            )


def _applies(article_id: str, quantity: int) -> bool:
    return bool((article_id or "").strip()) and quantity > 0
