"""Error taxonomy shared by the repositories, services and API handlers."""


class InventoryError(Exception):
    """Base class for every error the API reports as ``{"error": ...}``."""
    status_code = 500


class ValidationError(InventoryError):
    """A required field is missing or malformed."""
    status_code = 400


class DuplicateKeyError(InventoryError):
    """An id or barcode is already used by another record."""
    status_code = 400


class InsufficientStockError(InventoryError):
    """Exception raised when a stock change would leave an article below zero."""
    status_code = 400

    def __init__(self, article_id: str, available: int, requested: int, message: str = None):
        self.article_id = article_id
        self.available = available
        self.requested = requested
        super().__init__(
            message
            or f"Stock insuficiente para {article_id}. Disponible: {available}, solicitado: {requested}"
        )


class NotFoundError(InventoryError):
    """No row matches the requested key."""
    status_code = 404


class ConflictError(InventoryError):
    """The row changed between the read and the write that depended on it."""
    status_code = 409


class SchemaError(InventoryError):
    """A tab or a required column is missing from the spreadsheet."""
    status_code = 500


class BackendError(InventoryError):
    """The spreadsheet API call failed."""
    status_code = 500


class ConfigurationError(InventoryError):
    """Spreadsheet id or service-account credentials are not configured."""
    status_code = 500
