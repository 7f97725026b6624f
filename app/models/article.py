from dataclasses import dataclass


@dataclass
class Article:
    """
    Article row of the ``articulos`` tab.

    Attributes:
        article_id: Unique article code (case-insensitive)
        name: Article name
        barcode: Optional barcode, unique when present
        description: Free text description
        price: Current sale price, overwritten by every purchase
        stock: Units on hand, never negative
        category: Read-only category column, if the tab has one
    """
    article_id: str
    name: str
    barcode: str = ""
    description: str = ""
    price: float = 0.0
    stock: int = 0
    category: str = ""
