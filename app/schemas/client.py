from typing import List, Optional

from pydantic import Field

from app.schemas.common import WireModel


class ClientIn(WireModel):
    name: Optional[str] = Field(None, alias="nombre")
    phone: Optional[str] = Field(None, alias="telefono")
    email: Optional[str] = None
    address: Optional[str] = Field(None, alias="direccion")
    created_at: Optional[str] = Field(None, alias="fechaCreacion", description="Kept unchanged when omitted")


class ClientResponse(WireModel):
    client_id: str = Field(..., alias="idcliente")
    name: str = Field("", alias="nombre")
    phone: str = Field("", alias="telefono")
    email: str = ""
    address: str = Field("", alias="direccion")
    created_at: str = Field("", alias="fechaCreacion")


class ClientListResponse(WireModel):
    clients: List[ClientResponse] = Field(..., alias="clientes")


class ClientCreatedResponse(WireModel):
    success: bool = True
    client: ClientResponse = Field(..., alias="cliente")
