from typing import Any, Dict, List

from pydantic import BaseModel


class AlbumSuggestionResponse(BaseModel):
    type: str
    label: str
    photo_ids: List[int]
    confidence: float
    metadata: Dict[str, Any] = {}


class AcceptSuggestionRequest(BaseModel):
    # Only the shape is checked here; name and photo id limits are enforced by
    # AlbumSuggestionService from settings and reported as 400
    name: str
    photo_ids: List[int]


class AcceptSuggestionResponse(BaseModel):
    album_id: int
