from typing import Optional

from fastapi import APIRouter, Depends, Response

from app.api.common import ERROR_RESPONSES, exists_or_false, no_store
from app.database import SheetsBackend, get_backend, try_get_backend
from app.schemas.common import ExistsResponse, SuccessResponse
from app.schemas.supplier import (
    SupplierCreatedResponse,
    SupplierIn,
    SupplierListResponse,
    SupplierResponse,
)
from app.services.supplier_service import SupplierService

router = APIRouter(prefix="/proveedores", tags=["Proveedores"], responses=ERROR_RESPONSES)


@router.get("", response_model=SupplierListResponse, summary="List all suppliers")
def list_suppliers(
    response: Response,
    backend: SheetsBackend = Depends(get_backend)
):
    no_store(response)
    service = SupplierService(backend)
    return SupplierListResponse(
        suppliers=[SupplierResponse.from_record(s) for s in service.list_suppliers()]
    )


@router.post("", response_model=SupplierCreatedResponse, summary="Create a new supplier")
def create_supplier(
    supplier_data: SupplierIn,
    backend: SheetsBackend = Depends(get_backend)
):
    """
    Create a supplier.

    - **idproveedor** (or **id**): Supplier id (required, unique)
    - **nombre**: Supplier name (required)
    """
    service = SupplierService(backend)
    supplier = service.create(supplier_data)
    return SupplierCreatedResponse(supplier=SupplierResponse.from_record(supplier))


@router.get("/{supplier_id}", response_model=ExistsResponse, summary="Check whether a supplier id exists")
def supplier_exists(
    supplier_id: str,
    backend: Optional[SheetsBackend] = Depends(try_get_backend)
):
    return exists_or_false(backend, lambda b: SupplierService(b).exists(supplier_id))


@router.put(
    "/{supplier_id}",
    response_model=SuccessResponse,
    summary="Update a supplier",
    description="The id may change as long as the new one is free."
)
def update_supplier(
    supplier_id: str,
    supplier_data: SupplierIn,
    backend: SheetsBackend = Depends(get_backend)
):
    SupplierService(backend).update(supplier_id, supplier_data)
    return SuccessResponse()


@router.delete("/{supplier_id}", response_model=SuccessResponse, summary="Delete a supplier")
def delete_supplier(
    supplier_id: str,
    backend: SheetsBackend = Depends(get_backend)
):
    SupplierService(backend).delete(supplier_id)
    return SuccessResponse()
