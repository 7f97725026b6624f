from typing import Sequence

from app.models.client import Client
from app.repositories.base import SheetRepository
from app.utils.columns import Column, ColumnResolver

CLIENT_COLUMNS = (
    Column("client_id", ("idcliente", "id", "id cliente", "codigo", "código"), required=True),
    Column("name", ("nombre",)),
    Column("phone", ("telefono", "teléfono", "phone")),
    Column("email", ("email", "correo", "e-mail")),
    Column("address", ("direccion", "dirección", "dir", "address")),
    Column(
        "created_at",
        (
            "fechacreacion",
            "fecha creacion",
            "fecha_creacion",
            "fecha alta",
            "fecha",
            "fechacrea",
            "creado",
            "created",
        ),
    ),
)


class ClientRepository(SheetRepository[Client]):
    columns = CLIENT_COLUMNS
    key_field = "client_id"
    not_found_message = "Cliente no encontrado"

    def from_row(self, resolver: ColumnResolver, row: Sequence[str]) -> Client:
        return Client(
            client_id=resolver.value(row, "client_id"),
            name=resolver.value(row, "name"),
            phone=resolver.value(row, "phone"),
            email=resolver.value(row, "email"),
            address=resolver.value(row, "address"),
            created_at=resolver.get_date_cell(row, resolver.index("created_at")),
        )
