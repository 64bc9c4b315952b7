"""
TripPlanner Backend: Diary Route Handlers
===========================================

What:  Per-user tags and diary entries.
Why:   Sign-in is handled outside this service; the owning user is named in
       the path and every query is scoped to it.
"""

from typing import List

from fastapi import APIRouter, Depends, Query, Response, status

from app.dependencies import get_diary_service
from app.schemas.common import ErrorResponse
from app.schemas.diary import (
    DiaryEntryCreate,
    DiaryEntryResponse,
    DiaryEntryUpdate,
    DiaryEntryWithTagsResponse,
    TagResponse,
)
from app.services.diary_service import DiaryService

router = APIRouter(prefix="/api/users/{user_id}", tags=["Diary"])

_ERRORS = {
    400: {"description": "Invalid input", "model": ErrorResponse},
    404: {"description": "Not found", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.get("/tags", response_model=List[TagResponse], responses=_ERRORS, summary="List a user's tags")
async def list_tags(
    user_id: str,
    service: DiaryService = Depends(get_diary_service),
) -> List[TagResponse]:
    return await service.list_tags(user_id)


@router.get(
    "/diary-entries",
    response_model=None,
    responses={**_ERRORS, 200: {"model": List[DiaryEntryWithTagsResponse]}},
    summary="List a user's diary entries",
)
async def list_diary_entries(
    user_id: str,
    with_relations: bool = Query(default=True, alias="withRelations", description="Include tags"),
    service: DiaryService = Depends(get_diary_service),
):
    return await service.list_entries(user_id, with_relations)


@router.post(
    "/diary-entries",
    response_model=DiaryEntryWithTagsResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
    summary="Create a diary entry, creating named tags as needed",
)
async def create_diary_entry(
    user_id: str,
    payload: DiaryEntryCreate,
    service: DiaryService = Depends(get_diary_service),
) -> DiaryEntryWithTagsResponse:
    return await service.create_entry(user_id, payload)


@router.put(
    "/diary-entries/{entry_id}",
    response_model=DiaryEntryResponse,
    responses=_ERRORS,
    summary="Update a diary entry (partial)",
)
async def update_diary_entry(
    user_id: str,
    entry_id: str,
    payload: DiaryEntryUpdate,
    service: DiaryService = Depends(get_diary_service),
) -> DiaryEntryResponse:
    return await service.update_entry(user_id, entry_id, payload)


@router.delete(
    "/diary-entries/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ERRORS,
    summary="Delete a diary entry",
)
async def delete_diary_entry(
    user_id: str,
    entry_id: str,
    service: DiaryService = Depends(get_diary_service),
) -> Response:
    await service.delete_entry(user_id, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
