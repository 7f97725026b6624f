from dataclasses import dataclass


@dataclass
class Client:
    """
    Client row of the ``clientes`` tab.

    Attributes:
        client_id: Sequential id generated on creation
        name: Client name
        phone: Phone number
        email: Email address
        address: Postal address
        created_at: Creation date (YYYY-MM-DD)
    """
    client_id: str
    name: str
    phone: str = ""
    email: str = ""
    address: str = ""
    created_at: str = ""
