from typing import Optional

from fastapi import APIRouter, Depends, Response

from app.api.common import ERROR_RESPONSES, exists_or_false, no_store
from app.database import SheetsBackend, get_backend, try_get_backend
from app.schemas.client import ClientCreatedResponse, ClientIn, ClientListResponse, ClientResponse
from app.schemas.common import ExistsResponse, SuccessResponse
from app.services.client_service import ClientService

router = APIRouter(prefix="/clientes", tags=["Clientes"], responses=ERROR_RESPONSES)


@router.get("", response_model=ClientListResponse, summary="List all clients")
def list_clients(
    response: Response,
    backend: SheetsBackend = Depends(get_backend)
):
    no_store(response)
    service = ClientService(backend)
    return ClientListResponse(
        clients=[ClientResponse.from_record(c) for c in service.list_clients()]
    )


@router.post(
    "",
    response_model=ClientCreatedResponse,
    summary="Create a new client",
    description="The id is generated sequentially and the creation date is today."
)
def create_client(
    client_data: ClientIn,
    backend: SheetsBackend = Depends(get_backend)
):
    service = ClientService(backend)
    client = service.create(client_data)
    return ClientCreatedResponse(client=ClientResponse.from_record(client))


@router.get("/{client_id}", response_model=ExistsResponse, summary="Check whether a client id exists")
def client_exists(
    client_id: str,
    backend: Optional[SheetsBackend] = Depends(try_get_backend)
):
    return exists_or_false(backend, lambda b: ClientService(b).exists(client_id))


@router.put("/{client_id}", response_model=SuccessResponse, summary="Update a client")
def update_client(
    client_id: str,
    client_data: ClientIn,
    backend: SheetsBackend = Depends(get_backend)
):
    ClientService(backend).update(client_id, client_data)
    return SuccessResponse()


@router.delete("/{client_id}", response_model=SuccessResponse, summary="Delete a client")
def delete_client(
    client_id: str,
    backend: SheetsBackend = Depends(get_backend)
):
    ClientService(backend).delete(client_id)
    return SuccessResponse()
