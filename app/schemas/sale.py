from typing import List, Optional

from pydantic import Field, field_validator

from app.schemas.common import WireModel, blank_to_none


class SaleLineIn(WireModel):
    article_id: Optional[str] = Field(None, alias="idarticulo")
    name: Optional[str] = Field(None, alias="nombre")
    quantity: Optional[int] = Field(None, alias="cantidad")
    total: Optional[float] = None

    @field_validator("quantity", "total", mode="before")
    @classmethod
    def _blank_numbers(cls, value):
        return blank_to_none(value)


class SaleIn(WireModel):
    """
    Body for creating or editing a sale.

    On edit, omitted fields keep their value; omitting ``articulos`` leaves
    the lines, and therefore the stock, untouched.
    """
    date: Optional[str] = Field(None, alias="fecha")
    client: Optional[str] = Field(None, alias="cliente")
    lines: Optional[List[SaleLineIn]] = Field(None, alias="articulos")
    total: Optional[float] = Field(None, description="Defaults to the sum of the line totals")

    @field_validator("total", mode="before")
    @classmethod
    def _blank_total(cls, value):
        return blank_to_none(value)


class SaleLineResponse(WireModel):
    article_id: str = Field(..., alias="idarticulo")
    name: str = Field("", alias="nombre")
    quantity: int = Field(0, alias="cantidad")
    total: float = 0.0


class SaleResponse(WireModel):
    sale_id: str = Field(..., alias="idventa")
    date: str = Field("", alias="fecha")
    client: str = Field("", alias="cliente")
    lines: List[SaleLineResponse] = Field(default_factory=list, alias="articulos")
    total: float = 0.0
    unit_price: Optional[float] = Field(None, alias="precioUnitario")
    # Flat view of single-line sales
    article_id: Optional[str] = Field(None, alias="idarticulo")
    name: Optional[str] = Field(None, alias="nombre")
    quantity: Optional[int] = Field(None, alias="cantidad")

    @classmethod
    def from_record(cls, record):
        response = super().from_record(record)
        if len(response.lines) == 1:
            line = response.lines[0]
            response.article_id = line.article_id
            response.name = line.name
            response.quantity = line.quantity
        return response


class SaleListResponse(WireModel):
    sales: List[SaleResponse] = Field(..., alias="ventas")


class SaleCreatedResponse(WireModel):
    success: bool = True
    sale: SaleResponse = Field(..., alias="venta")
