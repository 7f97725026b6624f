from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator

from app.schemas.common import WireModel, blank_to_none


class PurchaseLineIn(WireModel):
    article_id: Optional[str] = Field(None, alias="idarticulo")
    name: Optional[str] = Field(None, validation_alias=AliasChoices("articulo", "nombre"))
    quantity: Optional[int] = Field(None, alias="cantidad")
    price: Optional[float] = Field(None, alias="precio")

    @field_validator("quantity", "price", mode="before")
    @classmethod
    def _blank_numbers(cls, value):
        return blank_to_none(value)


class PurchaseIn(PurchaseLineIn):
    """
    Body for creating or editing a purchase.

    Either a list of lines under ``articulos`` or the single-line fields
    ``idarticulo``/``articulo``/``cantidad``/``precio`` at the top level.
    On edit, omitted fields keep their value.
    """
    date: Optional[str] = Field(None, alias="fecha")
    supplier: Optional[str] = Field(None, alias="proveedor")
    lines: Optional[List[PurchaseLineIn]] = Field(None, alias="articulos")

    def has_single_line_fields(self) -> bool:
        return any(
            value is not None
            for value in (self.article_id, self.name, self.quantity, self.price)
        )


class PurchaseLineResponse(WireModel):
    article_id: str = Field(..., alias="idarticulo")
    name: str = Field("", alias="articulo")
    quantity: int = Field(0, alias="cantidad")
    price: float = Field(0.0, alias="precio")


class PurchaseResponse(WireModel):
    purchase_id: str = Field(..., alias="idcompra")
    date: str = Field("", alias="fecha")
    supplier: str = Field("", alias="proveedor")
    lines: List[PurchaseLineResponse] = Field(default_factory=list, alias="articulos")
    total: float = 0.0
    # Flat view of single-line purchases
    article_id: Optional[str] = Field(None, alias="idarticulo")
    name: Optional[str] = Field(None, alias="articulo")
    quantity: Optional[int] = Field(None, alias="cantidad")
    price: Optional[float] = Field(None, alias="precio")

    @classmethod
    def from_record(cls, record):
        response = super().from_record(record)
        if len(response.lines) == 1:
            line = response.lines[0]
            response.article_id = line.article_id
            response.name = line.name
            response.quantity = line.quantity
            response.price = line.price
        return response


class PurchaseListResponse(WireModel):
    purchases: List[PurchaseResponse] = Field(..., alias="compras")


class PurchaseCreatedResponse(WireModel):
    success: bool = True
    purchase: PurchaseResponse = Field(..., alias="compra")
