from typing import Sequence

from app.models.supplier import Supplier
from app.repositories.base import SheetRepository
from app.utils.columns import Column, ColumnResolver

SUPPLIER_COLUMNS = (
    Column("supplier_id", ("idproveedor", "id", "id proveedor", "codigo", "código"), required=True),
    Column("name", ("nombre",)),
    Column("phone", ("telefono", "teléfono", "phone")),
    Column("email", ("email", "correo", "e-mail")),
    Column("address", ("direccion", "dirección", "dir", "address")),
    Column("contact", ("contacto", "persona contacto")),
)


class SupplierRepository(SheetRepository[Supplier]):
    columns = SUPPLIER_COLUMNS
    key_field = "supplier_id"
    not_found_message = "Proveedor no encontrado"

    def from_row(self, resolver: ColumnResolver, row: Sequence[str]) -> Supplier:
        return Supplier(
            supplier_id=resolver.value(row, "supplier_id"),
            name=resolver.value(row, "name"),
            phone=resolver.value(row, "phone"),
            email=resolver.value(row, "email"),
            address=resolver.value(row, "address"),
            contact=resolver.value(row, "contact"),
        )
