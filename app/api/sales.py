from typing import Optional

from fastapi import APIRouter, Depends, Response

from app.api.common import ERROR_RESPONSES, exists_or_false, no_store
from app.database import SheetsBackend, get_backend, try_get_backend
from app.schemas.common import ExistsResponse, SuccessResponse
from app.schemas.sale import SaleCreatedResponse, SaleIn, SaleListResponse, SaleResponse
from app.services.sale_service import SaleService

router = APIRouter(prefix="/ventas", tags=["Ventas"], responses=ERROR_RESPONSES)


@router.get("", response_model=SaleListResponse, summary="List all sales")
def list_sales(
    response: Response,
    backend: SheetsBackend = Depends(get_backend)
):
    no_store(response)
    service = SaleService(backend)
    return SaleListResponse(sales=[SaleResponse.from_record(s) for s in service.list_sales()])


@router.post(
    "",
    response_model=SaleCreatedResponse,
    summary="Create a new sale",
    description="""
    Register a sale and take its quantities out of stock.

    **Stock handling:**
    Lines are discounted one by one. If a line fails (unknown article,
    insufficient stock) or the sale row cannot be written, the lines
    already discounted are put back before the error is returned.
    """
)
def create_sale(
    sale_data: SaleIn,
    backend: SheetsBackend = Depends(get_backend)
):
    """
    Create a sale.

    - **fecha**: Sale date (required)
    - **articulos**: Lines with **idarticulo**, **nombre**, **cantidad**, **total** (at least one)
    - **cliente**: Optional client
    - **total**: Optional, defaults to the sum of the line totals
    """
    service = SaleService(backend)
    sale = service.create_sale(sale_data)
    return SaleCreatedResponse(sale=SaleResponse.from_record(sale))


@router.get("/{sale_id}", response_model=ExistsResponse, summary="Check whether a sale exists")
def sale_exists(
    sale_id: str,
    backend: Optional[SheetsBackend] = Depends(try_get_backend)
):
    return exists_or_false(backend, lambda b: SaleService(b).exists(sale_id))


@router.put(
    "/{sale_id}",
    response_model=SuccessResponse,
    summary="Update a sale",
    description="New lines replace the old ones; stock moves by the difference."
)
def update_sale(
    sale_id: str,
    sale_data: SaleIn,
    backend: SheetsBackend = Depends(get_backend)
):
    SaleService(backend).update_sale(sale_id, sale_data)
    return SuccessResponse()


@router.delete(
    "/{sale_id}",
    response_model=SuccessResponse,
    summary="Delete a sale",
    description="Quantities go back into stock; articles deleted since the sale are skipped."
)
def delete_sale(
    sale_id: str,
    backend: SheetsBackend = Depends(get_backend)
):
    SaleService(backend).delete_sale(sale_id)
    return SuccessResponse()
