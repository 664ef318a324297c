import logging

from sqlalchemy.ext.asyncio import AsyncSession

from trip_albums.repository.album import AlbumRepository
from trip_albums.repository.photo import PhotoRepository
from trip_albums.repository.trip import TripRepository

logger = logging.getLogger(__name__)


class UnitOfWork:
    """
    Unit of Work pattern to manage repositories and database transactions.

    ``async with uow:`` commits on a clean exit and rolls back when the block raises.
    """
    def __init__(self, db: AsyncSession):
        self.db = db
        self.trips = TripRepository(db)
        self.photos = PhotoRepository(db)
        self.albums = AlbumRepository(db)

    async def __aenter__(self) -> "UnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            logger.warning(f"Rolling back transaction after {exc_type.__name__}: {exc_val}")
            await self.rollback()
        else:
            await self.commit()

    async def commit(self):
        await self.db.commit()

    async def rollback(self):
        await self.db.rollback()
