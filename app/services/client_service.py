import logging
from datetime import date
from typing import List

from app.config import get_settings
from app.database import SheetsBackend
from app.exceptions import ValidationError
from app.models.client import Client
from app.repositories.clients import ClientRepository
from app.schemas.client import ClientIn
from app.utils.text import clean

logger = logging.getLogger(__name__)


class ClientService:
    """Clients get a sequential id and today's date on creation."""

    def __init__(self, backend: SheetsBackend):
        self.clients = ClientRepository(backend, get_settings().CLIENTS_TAB)

    def list_clients(self) -> List[Client]:
        return self.clients.list_all()

    def exists(self, client_id: str) -> bool:
        if not clean(client_id):
            return False
        return self.clients.exists(client_id)

    def create(self, data: ClientIn) -> Client:
        name = clean(data.name)
        if not name:
            raise ValidationError("El nombre es obligatorio")

        client = Client(
            client_id=self.clients.next_id(),
            name=name,
            phone=clean(data.phone),
            email=clean(data.email),
            address=clean(data.address),
            created_at=date.today().isoformat(),
        )
        self.clients.insert(client)
        logger.info(f"Client {client.client_id} created")
        return client

    def update(self, client_id: str, data: ClientIn) -> Client:
        """Update a client; the id never changes and the creation date is kept unless given."""
        key = clean(client_id)
        if not key:
            raise ValidationError("ID es obligatorio")
        if not clean(data.name):
            raise ValidationError("Nombre es obligatorio")

        changes = {"name": clean(data.name)}
        for field in ("phone", "email", "address"):
            value = getattr(data, field)
            if value is not None:
                changes[field] = clean(value)
        if clean(data.created_at):
            changes["created_at"] = clean(data.created_at)
        return self.clients.update(key, changes)

    def delete(self, client_id: str) -> Client:
        key = clean(client_id)
        if not key:
            raise ValidationError("ID es obligatorio")
        return self.clients.delete(key)
