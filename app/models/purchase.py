from dataclasses import dataclass, field
from typing import List


@dataclass
class PurchaseLine:
    """One article bought within a purchase, at its new unit price."""
    article_id: str
    name: str = ""
    quantity: int = 0
    price: float = 0.0


@dataclass
class Purchase:
    """
    Purchase row of the ``compras`` tab.

    Attributes:
        purchase_id: Sequential id generated on creation
        date: Purchase date
        supplier: Supplier name or id
        lines: Articles bought; legacy rows have exactly one
        total: Sum of quantity * price over the lines
    """
    purchase_id: str
    date: str = ""
    supplier: str = ""
    lines: List[PurchaseLine] = field(default_factory=list)
    total: float = 0.0
