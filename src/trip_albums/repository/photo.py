from typing import Sequence

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from trip_albums.models.photo import Photo


class PhotoRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_photos_for_trip(self, trip_id: int) -> Sequence[Photo]:
        result = await self.db.execute(select(Photo).where(Photo.trip_id == trip_id).order_by(Photo.id.asc()))
        return result.scalars().all()

    async def count_in_trip(self, trip_id: int, photo_ids: Sequence[int]) -> int:
        result = await self.db.execute(
            select(func.count(Photo.id)).where(Photo.trip_id == trip_id, Photo.id.in_(list(photo_ids)))
        )
        return result.scalar_one()
