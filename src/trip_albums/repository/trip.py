from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from trip_albums.models.trip import Trip


class TripRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def verify_trip_ownership(self, user_id: int, trip_id: int) -> Optional[Trip]:
        """Return the trip only when it exists and belongs to ``user_id``."""
        result = await self.db.execute(select(Trip).where(Trip.id == trip_id, Trip.user_id == user_id))
        return result.scalar_one_or_none()
