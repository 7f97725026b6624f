import logging
from typing import List, Optional

from app.config import get_settings
from app.database import SheetsBackend
from app.exceptions import DuplicateKeyError, ValidationError
from app.models.article import Article
from app.repositories.articles import ArticleRepository
from app.repositories.base import same_key
from app.schemas.article import ArticleIn
from app.utils.text import clean

logger = logging.getLogger(__name__)


class ArticleService:
    """
    Service class for Article CRUD operations.

    Id and barcode uniqueness is checked against a full scan of the tab
    right before the write. Two concurrent creations with the same id can
    still both pass the check.
    """

    def __init__(self, backend: SheetsBackend):
        self.articles = ArticleRepository(backend, get_settings().ARTICLES_TAB)

    def list_articles(self) -> List[Article]:
        return self.articles.list_all()

    def exists(self, article_id: str) -> bool:
        if not clean(article_id):
            return False
        return self.articles.exists(article_id)

    def barcode_in_use(self, barcode: str, exclude_id: Optional[str] = None) -> bool:
        return self.articles.exists_by_barcode(clean(barcode), clean(exclude_id) or None)

    def lookup(self, barcode: Optional[str] = None, article_id: Optional[str] = None) -> Optional[Article]:
        """
        Find an article by barcode or id, as the sale and purchase forms do
        when a code is scanned.

        Raises:
            ValidationError: If neither barcode nor id is given
        """
        barcode, article_id = clean(barcode), clean(article_id)
        if not barcode and not article_id:
            raise ValidationError("Debe proporcionar codbarra o id")
        return self.articles.find_by(barcode=barcode or None, article_id=article_id or None)

    def create(self, data: ArticleIn) -> Article:
        """
        Create a new article.

        Raises:
            ValidationError: If id or name is missing
            DuplicateKeyError: If the id or the barcode is already used
        """
        article_id, name = clean(data.article_id), clean(data.name)
        if not article_id or not name:
            raise ValidationError("ID artículo y nombre son obligatorios")
        if self.articles.exists(article_id):
            raise DuplicateKeyError("Ya existe un artículo con ese código")

        barcode = clean(data.barcode)
        if barcode and self.articles.exists_by_barcode(barcode):
            raise DuplicateKeyError("Ya existe un artículo con ese código de barras")

        article = Article(
            article_id=article_id,
            name=name,
            barcode=barcode,
            description=clean(data.description),
            price=data.price or 0.0,
            stock=data.stock or 0,
        )
        self.articles.insert(article)
        logger.info(f"Article {article_id} created")
        return article

    def update(self, article_id: str, data: ArticleIn) -> Article:
        """
        Update an article. Omitted fields keep their value; the id itself
        may change as long as the new one is free.

        Raises:
            ValidationError: If the id or the name is blank
            DuplicateKeyError: If the new id or the barcode belongs to another article
            NotFoundError: If the article doesn't exist
        """
        key = clean(article_id)
        if not key:
            raise ValidationError("ID es obligatorio")
        if not clean(data.name):
            raise ValidationError("Nombre es obligatorio")

        new_id = clean(data.article_id) or key
        if not same_key(new_id, key) and self.articles.exists(new_id):
            raise DuplicateKeyError("Ya existe un artículo con ese código")

        barcode = clean(data.barcode)
        if barcode and self.articles.exists_by_barcode(barcode, exclude_id=key):
            raise DuplicateKeyError("Ya existe un artículo con ese código de barras")

        changes = {"article_id": new_id, "name": clean(data.name)}
        if data.barcode is not None:
            changes["barcode"] = barcode
        if data.description is not None:
            changes["description"] = clean(data.description)
        if data.price is not None:
            changes["price"] = data.price
        if data.stock is not None:
            changes["stock"] = data.stock

        article = self.articles.update(key, changes)
        logger.info(f"Article {key} updated" + (f" (now {new_id})" if new_id != key else ""))
        return article

    def delete(self, article_id: str) -> Article:
        key = clean(article_id)
        if not key:
            raise ValidationError("ID es obligatorio")
        return self.articles.delete(key)
