import dataclasses
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class WireModel(BaseModel):
    """
    Base for request/response bodies.

    Python attributes are English; the JSON keys are the Spanish names the
    frontend uses, declared as aliases. Numbers sent where text is expected
    (numeric barcodes, ids) are accepted as text.
    """
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    @classmethod
    def from_record(cls, record: Any):
        """Build the model from a record dataclass."""
        return cls.model_validate(dataclasses.asdict(record))


def blank_to_none(value: Any) -> Any:
    """Treat "" (an empty form input) as a missing number."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


class SuccessResponse(BaseModel):
    success: bool = True


class ExistsResponse(BaseModel):
    exists: bool


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Human readable error message")
