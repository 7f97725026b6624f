from typing import Optional

from fastapi import APIRouter, Depends, Response

from app.api.common import ERROR_RESPONSES, exists_or_false, no_store
from app.database import SheetsBackend, get_backend, try_get_backend
from app.schemas.common import ExistsResponse, SuccessResponse
from app.schemas.purchase import (
    PurchaseCreatedResponse,
    PurchaseIn,
    PurchaseListResponse,
    PurchaseResponse,
)
from app.services.purchase_service import PurchaseService

router = APIRouter(prefix="/compras", tags=["Compras"], responses=ERROR_RESPONSES)


@router.get("", response_model=PurchaseListResponse, summary="List all purchases")
def list_purchases(
    response: Response,
    backend: SheetsBackend = Depends(get_backend)
):
    no_store(response)
    service = PurchaseService(backend)
    return PurchaseListResponse(
        purchases=[PurchaseResponse.from_record(p) for p in service.list_purchases()]
    )


@router.post(
    "",
    response_model=PurchaseCreatedResponse,
    summary="Create a new purchase",
    description="""
    Register a purchase: each article's stock grows by the quantity bought
    and its price becomes the purchase price.

    Accepts either **articulos** (a list of lines) or a single line given
    through **idarticulo**, **articulo**, **cantidad** and **precio**.
    """
)
def create_purchase(
    purchase_data: PurchaseIn,
    backend: SheetsBackend = Depends(get_backend)
):
    service = PurchaseService(backend)
    purchase = service.create_purchase(purchase_data)
    return PurchaseCreatedResponse(purchase=PurchaseResponse.from_record(purchase))


@router.get("/{purchase_id}", response_model=ExistsResponse, summary="Check whether a purchase exists")
def purchase_exists(
    purchase_id: str,
    backend: Optional[SheetsBackend] = Depends(try_get_backend)
):
    return exists_or_false(backend, lambda b: PurchaseService(b).exists(purchase_id))


@router.put("/{purchase_id}", response_model=SuccessResponse, summary="Update a purchase")
def update_purchase(
    purchase_id: str,
    purchase_data: PurchaseIn,
    backend: SheetsBackend = Depends(get_backend)
):
    PurchaseService(backend).update_purchase(purchase_id, purchase_data)
    return SuccessResponse()


@router.delete(
    "/{purchase_id}",
    response_model=SuccessResponse,
    summary="Delete a purchase",
    description="Quantities are taken back out of stock; prices are left as they are."
)
def delete_purchase(
    purchase_id: str,
    backend: SheetsBackend = Depends(get_backend)
):
    PurchaseService(backend).delete_purchase(purchase_id)
    return SuccessResponse()
