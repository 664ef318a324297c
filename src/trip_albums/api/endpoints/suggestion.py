import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from trip_albums.api.deps import get_current_user_id, get_uow
from trip_albums.common.uow import UnitOfWork
from trip_albums.schemas.suggestion import (
    AcceptSuggestionRequest,
    AcceptSuggestionResponse,
    AlbumSuggestionResponse,
)
from trip_albums.services.results import InvalidSuggestion, TripNotFound
from trip_albums.services.suggestion import AlbumSuggestionService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/photos/trip/{trip_id}/suggest-albums", response_model=List[AlbumSuggestionResponse])
async def get_album_suggestions(
    trip_id: int,
    user_id: int = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_uow),
):
    service = AlbumSuggestionService(uow)
    result = await service.get_album_suggestions(user_id=user_id, trip_id=trip_id)

    if isinstance(result, TripNotFound):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=result.message)

    return [
        AlbumSuggestionResponse(
            type=suggestion.type.value,
            label=suggestion.label,
            photo_ids=suggestion.photo_ids,
            confidence=suggestion.confidence,
            metadata=suggestion.metadata,
        )
        for suggestion in result.suggestions
    ]


@router.post(
    "/photos/trip/{trip_id}/accept-suggestion",
    response_model=AcceptSuggestionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def accept_album_suggestion(
    trip_id: int,
    payload: AcceptSuggestionRequest,
    user_id: int = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_uow),
):
    service = AlbumSuggestionService(uow)
    result = await service.accept_suggestion(
        user_id=user_id, trip_id=trip_id, name=payload.name, photo_ids=payload.photo_ids
    )

    if isinstance(result, TripNotFound):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=result.message)
    if isinstance(result, InvalidSuggestion):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.message)

    return AcceptSuggestionResponse(album_id=result.album_id)
