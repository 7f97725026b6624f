from typing import Any, Dict, Optional, Sequence

from app.models.article import Article
from app.repositories.base import SheetRepository, same_key
from app.utils.columns import Column, ColumnResolver

ARTICLE_ID_ALIASES = ("idarticulo", "id", "id artículo", "id articulo", "codigo", "código")

ARTICLE_COLUMNS = (
    Column("barcode", ("codbarra", "cod barra", "codigo de barras", "código de barras")),
    Column("article_id", ARTICLE_ID_ALIASES, required=True),
    Column("name", ("nombre",)),
    Column("description", ("descripcion", "descripción")),
    Column("price", ("precio",)),
    Column("stock", ("stock", "existencia", "inventario")),
    Column("category", ("categoria", "categoría")),
)


class ArticleRepository(SheetRepository[Article]):
    """Articles tab. The key is the article id; barcodes are unique when set."""

    columns = ARTICLE_COLUMNS
    key_field = "article_id"
    not_found_message = "Artículo no encontrado"

    def from_row(self, resolver: ColumnResolver, row: Sequence[str]) -> Article:
        return Article(
            article_id=resolver.value(row, "article_id"),
            name=resolver.value(row, "name"),
            barcode=resolver.value(row, "barcode"),
            description=resolver.value(row, "description"),
            price=resolver.number(row, "price"),
            stock=resolver.integer(row, "stock"),
            category=resolver.value(row, "category"),
        )

    def to_fields(self, entity: Article) -> Dict[str, Any]:
        fields = super().to_fields(entity)
        # Category is maintained by hand in the sheet.
        fields.pop("category")
        return fields

    def exists_by_barcode(self, barcode: str, exclude_id: Optional[str] = None) -> bool:
        """
        Whether another article already uses ``barcode``.

        ``exclude_id`` skips the article being edited, so it does not collide
        with its own barcode.
        """
        if not (barcode or "").strip():
            return False
        for article in self.list_all():
            if not same_key(article.barcode, barcode):
                continue
            if exclude_id and same_key(article.article_id, exclude_id):
                continue
            return True
        return False

    def find_by(self, barcode: Optional[str] = None, article_id: Optional[str] = None) -> Optional[Article]:
        """First article matching the barcode or the id."""
        for article in self.list_all():
            if barcode and same_key(article.barcode, barcode):
                return article
            if article_id and same_key(article.article_id, article_id):
                return article
        return None
