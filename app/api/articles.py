import dataclasses
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from app.api.common import ERROR_RESPONSES, exists_or_false, no_store
from app.database import SheetsBackend, get_backend, try_get_backend
from app.schemas.article import (
    ArticleCreatedResponse,
    ArticleIn,
    ArticleListResponse,
    ArticleLookup,
    ArticleLookupResponse,
    ArticleResponse,
)
from app.schemas.common import ExistsResponse, SuccessResponse
from app.services.article_service import ArticleService

router = APIRouter(prefix="/articulos", tags=["Articulos"], responses=ERROR_RESPONSES)


@router.get(
    "",
    response_model=ArticleListResponse,
    summary="List all articles",
    description="Read every row of the articles tab. Never cached."
)
def list_articles(
    response: Response,
    backend: SheetsBackend = Depends(get_backend)
):
    """Get all articles."""
    no_store(response)
    service = ArticleService(backend)
    return ArticleListResponse(
        articles=[ArticleResponse.from_record(a) for a in service.list_articles()]
    )


@router.post(
    "",
    response_model=ArticleCreatedResponse,
    summary="Create a new article",
    description="Append an article. Id and barcode must not be in use."
)
def create_article(
    article_data: ArticleIn,
    backend: SheetsBackend = Depends(get_backend)
):
    """
    Create a new article.

    - **idarticulo** (or **id**): Article id (required, unique)
    - **nombre**: Article name (required)
    - **codbarra**: Barcode (optional, unique when given)
    - **precio** / **stock**: Default to 0, must not be negative
    """
    service = ArticleService(backend)
    article = service.create(article_data)
    return ArticleCreatedResponse(article=ArticleResponse.from_record(article))


@router.get(
    "/buscar",
    response_model=ArticleLookupResponse,
    summary="Find an article by barcode or id",
    description="Used by the sale and purchase forms when a code is typed or scanned."
)
def find_article(
    codbarra: Optional[str] = Query(None, description="Barcode"),
    id: Optional[str] = Query(None, description="Article id"),
    backend: SheetsBackend = Depends(get_backend)
):
    """Return the first article matching the barcode or the id, or null."""
    service = ArticleService(backend)
    article = service.lookup(barcode=codbarra, article_id=id)
    if article is None:
        return ArticleLookupResponse(article=None)
    return ArticleLookupResponse(
        article=ArticleLookup.model_validate({**dataclasses.asdict(article), "id": article.article_id})
    )


@router.get(
    "/check-codbarra",
    response_model=ExistsResponse,
    summary="Check whether a barcode is in use",
    description="Always answers 200; errors count as 'not in use'."
)
def check_barcode(
    codbarra: Optional[str] = Query(None, description="Barcode to check"),
    excluirId: Optional[str] = Query(None, description="Article being edited, ignored in the check"),
    backend: Optional[SheetsBackend] = Depends(try_get_backend)
):
    return exists_or_false(
        backend, lambda b: ArticleService(b).barcode_in_use(codbarra, exclude_id=excluirId)
    )


@router.get(
    "/{article_id}",
    response_model=ExistsResponse,
    summary="Check whether an article id is in use",
    description="Always answers 200; errors count as 'not in use'."
)
def article_exists(
    article_id: str,
    backend: Optional[SheetsBackend] = Depends(try_get_backend)
):
    return exists_or_false(backend, lambda b: ArticleService(b).exists(article_id))


@router.put(
    "/{article_id}",
    response_model=SuccessResponse,
    summary="Update an article",
    description="Only provided fields are updated; the name is always required."
)
def update_article(
    article_id: str,
    article_data: ArticleIn,
    backend: SheetsBackend = Depends(get_backend)
):
    service = ArticleService(backend)
    service.update(article_id, article_data)
    return SuccessResponse()


@router.delete(
    "/{article_id}",
    response_model=SuccessResponse,
    summary="Delete an article"
)
def delete_article(
    article_id: str,
    backend: SheetsBackend = Depends(get_backend)
):
    service = ArticleService(backend)
    service.delete(article_id)
    return SuccessResponse()
