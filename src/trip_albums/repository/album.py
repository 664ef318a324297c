from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from trip_albums.models.album import PhotoAlbum, PhotoAlbumAssignment


class AlbumRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id_with_assignments(self, album_id: int) -> Optional[PhotoAlbum]:
        result = await self.db.execute(
            select(PhotoAlbum).options(selectinload(PhotoAlbum.photo_assignments)).where(PhotoAlbum.id == album_id)
        )
        return result.scalars().first()

    async def create_album_with_assignments(
        self, trip_id: int, name: str, ordered_photo_ids: Sequence[int]
    ) -> int:
        """
        Stage an album and its ordered photo assignments in the current session.
        The caller's unit of work owns the commit.
        """
        album = PhotoAlbum(trip_id=trip_id, name=name)
        album.photo_assignments = [
            PhotoAlbumAssignment(photo_id=photo_id, sort_order=idx)
            for idx, photo_id in enumerate(ordered_photo_ids)
        ]
        self.db.add(album)
        await self.db.flush()
        return album.id
