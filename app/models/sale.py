from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class SaleLine:
    """One article sold within a sale."""
    article_id: str
    name: str = ""
    quantity: int = 0
    total: float = 0.0


@dataclass
class Sale:
    """
    Sale row of the ``ventas`` tab.

    Attributes:
        sale_id: Sequential id generated on creation
        date: Sale date as entered
        client: Optional client name or id
        lines: Articles sold; legacy rows have exactly one
        total: Sale total
        unit_price: Unit price of legacy single-line rows
    """
    sale_id: str
    date: str = ""
    client: str = ""
    lines: List[SaleLine] = field(default_factory=list)
    total: float = 0.0
    unit_price: Optional[float] = None
