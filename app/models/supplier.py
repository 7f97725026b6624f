from dataclasses import dataclass


@dataclass
class Supplier:
    """Supplier row of the ``proveedores`` tab. The id is chosen by the user."""
    supplier_id: str
    name: str
    phone: str = ""
    email: str = ""
    address: str = ""
    contact: str = ""
