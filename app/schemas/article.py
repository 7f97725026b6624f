from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator

from app.schemas.common import WireModel, blank_to_none


class ArticleIn(WireModel):
    """Body for creating or updating an article. Required fields are checked by the service."""
    barcode: Optional[str] = Field(None, alias="codbarra", description="Barcode, unique when set")
    article_id: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("idarticulo", "id"),
        description="Article id (``idarticulo`` or ``id``)",
    )
    name: Optional[str] = Field(None, alias="nombre")
    description: Optional[str] = Field(None, alias="descripcion")
    price: Optional[float] = Field(None, alias="precio", ge=0)
    stock: Optional[int] = Field(None, ge=0)

    @field_validator("price", "stock", mode="before")
    @classmethod
    def _blank_numbers(cls, value):
        return blank_to_none(value)


class ArticleResponse(WireModel):
    barcode: str = Field("", alias="codbarra")
    article_id: str = Field(..., alias="idarticulo")
    name: str = Field("", alias="nombre")
    description: str = Field("", alias="descripcion")
    price: float = Field(0.0, alias="precio")
    stock: int = 0
    category: str = Field("", alias="categoria")


class ArticleListResponse(WireModel):
    articles: List[ArticleResponse] = Field(..., alias="articulos")


class ArticleCreatedResponse(WireModel):
    success: bool = True
    article: ArticleResponse = Field(..., alias="articulo")


class ArticleLookup(ArticleResponse):
    """Search result, also exposing the id under ``id`` for the sale/purchase forms."""
    id: str = ""


class ArticleLookupResponse(WireModel):
    article: Optional[ArticleLookup] = Field(None, alias="articulo")
