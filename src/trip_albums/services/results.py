from dataclasses import dataclass, field
from typing import List, Union

from trip_albums.domain.types import AlbumSuggestion

TRIP_NOT_FOUND_MESSAGE = "Trip not found or access denied"
PHOTO_OWNERSHIP_MESSAGE = "Some photos do not belong to this trip"


@dataclass(frozen=True)
class SuggestionsReady:
    suggestions: List[AlbumSuggestion] = field(default_factory=list)


@dataclass(frozen=True)
class AlbumCreated:
    album_id: int


@dataclass(frozen=True)
class TripNotFound:
    trip_id: int
    message: str = TRIP_NOT_FOUND_MESSAGE


@dataclass(frozen=True)
class InvalidSuggestion:
    message: str


SuggestionsResult = Union[SuggestionsReady, TripNotFound]
AcceptResult = Union[AlbumCreated, TripNotFound, InvalidSuggestion]
