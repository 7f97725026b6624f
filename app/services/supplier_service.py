import logging
from typing import List

from app.config import get_settings
from app.database import SheetsBackend
from app.exceptions import DuplicateKeyError, ValidationError
from app.models.supplier import Supplier
from app.repositories.base import same_key
from app.repositories.suppliers import SupplierRepository
from app.schemas.supplier import SupplierIn
from app.utils.text import clean

logger = logging.getLogger(__name__)


class SupplierService:
    """Suppliers carry a user-chosen id that must be unique (case-insensitive)."""

    def __init__(self, backend: SheetsBackend):
        self.suppliers = SupplierRepository(backend, get_settings().SUPPLIERS_TAB)

    def list_suppliers(self) -> List[Supplier]:
        return self.suppliers.list_all()

    def exists(self, supplier_id: str) -> bool:
        if not clean(supplier_id):
            return False
        return self.suppliers.exists(supplier_id)

    def create(self, data: SupplierIn) -> Supplier:
        supplier_id, name = clean(data.supplier_id), clean(data.name)
        if not supplier_id or not name:
            raise ValidationError("ID proveedor y nombre son obligatorios")
        if self.suppliers.exists(supplier_id):
            raise DuplicateKeyError("Ya existe un proveedor con ese ID")

        supplier = Supplier(
            supplier_id=supplier_id,
            name=name,
            phone=clean(data.phone),
            email=clean(data.email),
            address=clean(data.address),
            contact=clean(data.contact),
        )
        self.suppliers.insert(supplier)
        logger.info(f"Supplier {supplier_id} created")
        return supplier

    def update(self, supplier_id: str, data: SupplierIn) -> Supplier:
        key = clean(supplier_id)
        if not key:
            raise ValidationError("ID es obligatorio")
        if not clean(data.name):
            raise ValidationError("Nombre es obligatorio")

        new_id = clean(data.supplier_id) or key
        if not same_key(new_id, key) and self.suppliers.exists(new_id):
            raise DuplicateKeyError("Ya existe un proveedor con ese ID")

        changes = {"supplier_id": new_id, "name": clean(data.name)}
        for field in ("phone", "email", "address", "contact"):
            value = getattr(data, field)
            if value is not None:
                changes[field] = clean(value)
        return self.suppliers.update(key, changes)

    def delete(self, supplier_id: str) -> Supplier:
        key = clean(supplier_id)
        if not key:
            raise ValidationError("ID es obligatorio")
        return self.suppliers.delete(key)
