import asyncio
import logging
from typing import List, Optional, Sequence

from trip_albums.common.uow import UnitOfWork
from trip_albums.core.config import SuggestionConfig, configs
from trip_albums.domain.suggestion_engine import SuggestionEngine
from trip_albums.domain.types import PhotoPoint
from trip_albums.services.results import (
    PHOTO_OWNERSHIP_MESSAGE,
    AcceptResult,
    AlbumCreated,
    InvalidSuggestion,
    SuggestionsReady,
    SuggestionsResult,
    TripNotFound,
)

logger = logging.getLogger(__name__)


class AlbumSuggestionService:
    def __init__(self, uow: UnitOfWork, config: Optional[SuggestionConfig] = None):
        self.uow = uow
        self.config = config or configs.suggestion_config
        self.engine = SuggestionEngine(self.config)

    async def get_album_suggestions(self, user_id: int, trip_id: int) -> SuggestionsResult:
        """Suggest albums for the photos of a trip the user owns."""
        logger.info(f"Building album suggestions for trip_id: {trip_id}")

        trip = await self.uow.trips.verify_trip_ownership(user_id, trip_id)
        if not trip:
            logger.warning(
                f"Suggestions refused: trip {trip_id} not found for user {user_id}",
                extra={"trip_id": trip_id, "user_id": user_id},
            )
            return TripNotFound(trip_id=trip_id)

        photos = await self.uow.photos.list_photos_for_trip(trip_id)
        points = [PhotoPoint.from_model(p) for p in photos]

        # Clustering is CPU bound, keep it off the event loop
        loop = asyncio.get_running_loop()
        suggestions = await loop.run_in_executor(None, self.engine.suggest, points)

        logger.info(
            f"Returning {len(suggestions)} suggestions for trip_id: {trip_id}",
            extra={"trip_id": trip_id},
        )
        return SuggestionsReady(suggestions=suggestions)

    async def accept_suggestion(
        self, user_id: int, trip_id: int, name: str, photo_ids: Sequence[int]
    ) -> AcceptResult:
        """Create an album from a chosen suggestion. Nothing is written unless every photo belongs to the trip."""
        photo_ids = list(photo_ids)
        name = (name or "").strip()

        problem = self._validate_request(name, photo_ids)
        if problem:
            logger.warning(
                f"Accept rejected for trip {trip_id}: {problem}",
                extra={"trip_id": trip_id, "user_id": user_id},
            )
            return InvalidSuggestion(message=problem)

        trip = await self.uow.trips.verify_trip_ownership(user_id, trip_id)
        if not trip:
            logger.warning(
                f"Accept refused: trip {trip_id} not found for user {user_id}",
                extra={"trip_id": trip_id, "user_id": user_id},
            )
            return TripNotFound(trip_id=trip_id)

        async with self.uow:
            owned = await self.uow.photos.count_in_trip(trip_id, photo_ids)
            if owned != len(photo_ids):
                logger.warning(f"Accept rejected for trip {trip_id}: {len(photo_ids) - owned} foreign photo ids")
                return InvalidSuggestion(message=PHOTO_OWNERSHIP_MESSAGE)

            album_id = await self.uow.albums.create_album_with_assignments(trip_id, name, photo_ids)

        logger.info(
            f"Album {album_id} '{name}' created for trip {trip_id} with {len(photo_ids)} photos",
            extra={"trip_id": trip_id, "album_id": album_id},
        )
        return AlbumCreated(album_id=album_id)

    def _validate_request(self, name: str, photo_ids: List[int]) -> Optional[str]:
        if not name:
            return "Album name is required"
        if len(name) > self.config.MAX_ALBUM_NAME_LENGTH:
            return f"Album name must be at most {self.config.MAX_ALBUM_NAME_LENGTH} characters"
        if not photo_ids:
            return "At least one photo is required"
        if len(photo_ids) > self.config.MAX_ACCEPT_PHOTOS:
            return f"At most {self.config.MAX_ACCEPT_PHOTOS} photos can be added at once"
        if any(not isinstance(pid, int) or isinstance(pid, bool) or pid <= 0 for pid in photo_ids):
            return "Photo ids must be positive integers"
        if len(set(photo_ids)) != len(photo_ids):
            return "Photo ids must be unique"
        return None
