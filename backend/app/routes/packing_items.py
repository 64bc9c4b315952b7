"""TripPlanner Backend: Packing Item Route Handlers."""

from fastapi import APIRouter, Depends, Query, Response, status

from app.dependencies import get_packing_item_service
from app.schemas.common import ErrorResponse
from app.schemas.packing_item import PackingItemCreate, PackingItemResponse, PackingItemUpdate
from app.schemas.trip import PackingItemDetailResponse
from app.services.packing_item_service import PackingItemService

router = APIRouter(prefix="/api", tags=["Packing Items"])

_ERRORS = {
    400: {"description": "Invalid input", "model": ErrorResponse},
    404: {"description": "Not found", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}
_WITH_RELATIONS_DOC = {200: {"model": PackingItemDetailResponse}}

WithRelations = Query(default=False, alias="withRelations", description="Include the owning trip")


@router.get(
    "/packing-items",
    response_model=None,
    responses={**_ERRORS, **_WITH_RELATIONS_DOC},
    summary="List all packing items",
)
async def list_packing_items(
    with_relations: bool = WithRelations,
    service: PackingItemService = Depends(get_packing_item_service),
):
    return await service.list_items(with_relations)


@router.get(
    "/packing-items/{item_id}",
    response_model=None,
    responses={**_ERRORS, **_WITH_RELATIONS_DOC},
    summary="Get a single packing item",
)
async def get_packing_item(
    item_id: str,
    with_relations: bool = WithRelations,
    service: PackingItemService = Depends(get_packing_item_service),
):
    return await service.get_item(item_id, with_relations)


@router.post(
    "/packing-items",
    response_model=PackingItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
    summary="Add a packing item to a trip",
)
async def create_packing_item(
    payload: PackingItemCreate,
    service: PackingItemService = Depends(get_packing_item_service),
) -> PackingItemResponse:
    return await service.create_item(payload)


@router.put(
    "/packing-items/{item_id}",
    response_model=PackingItemResponse,
    responses=_ERRORS,
    summary="Update a packing item (partial)",
)
async def update_packing_item(
    item_id: str,
    payload: PackingItemUpdate,
    service: PackingItemService = Depends(get_packing_item_service),
) -> PackingItemResponse:
    return await service.update_item(item_id, payload)


@router.delete(
    "/packing-items/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ERRORS,
    summary="Delete a packing item",
)
async def delete_packing_item(
    item_id: str,
    service: PackingItemService = Depends(get_packing_item_service),
) -> Response:
    await service.delete_item(item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
