from typing import Any


def clean(value: Any) -> str:
    """Trimmed text of a form value; "" for None."""
    if value is None:
        return ""
    return str(value).strip()
