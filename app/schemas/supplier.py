from typing import List, Optional

from pydantic import AliasChoices, Field

from app.schemas.common import WireModel


class SupplierIn(WireModel):
    supplier_id: Optional[str] = Field(None, validation_alias=AliasChoices("idproveedor", "id"))
    name: Optional[str] = Field(None, alias="nombre")
    phone: Optional[str] = Field(None, alias="telefono")
    email: Optional[str] = None
    address: Optional[str] = Field(None, alias="direccion")
    contact: Optional[str] = Field(None, alias="contacto")


class SupplierResponse(WireModel):
    supplier_id: str = Field(..., alias="idproveedor")
    name: str = Field("", alias="nombre")
    phone: str = Field("", alias="telefono")
    email: str = ""
    address: str = Field("", alias="direccion")
    contact: str = Field("", alias="contacto")


class SupplierListResponse(WireModel):
    suppliers: List[SupplierResponse] = Field(..., alias="proveedores")


class SupplierCreatedResponse(WireModel):
    success: bool = True
    supplier: SupplierResponse = Field(..., alias="proveedor")
