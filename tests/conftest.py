from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from trip_albums.api.deps import get_current_user_id, get_uow
from trip_albums.core.config import SuggestionConfig
from trip_albums.db.database import get_db
from trip_albums.main import app

TEST_USER_ID = 1


@pytest.fixture
def config():
    return SuggestionConfig()


@pytest.fixture
def mock_db_session():
    return AsyncMock()


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.trips = MagicMock()
    uow.photos = MagicMock()
    uow.albums = MagicMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.trips.verify_trip_ownership = AsyncMock(return_value=None)

    # Behave like the real unit of work as an async context manager
    uow.__aenter__ = AsyncMock(return_value=uow)

    async def aexit_side_effect(exc_type, exc_val, exc_tb):
        if exc_type:
            await uow.rollback()
        else:
            await uow.commit()

    uow.__aexit__ = AsyncMock(side_effect=aexit_side_effect)

    return uow


@pytest_asyncio.fixture
async def client(mock_db_session, mock_uow) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db():
        yield mock_db_session

    async def override_get_uow():
        yield mock_uow

    async def override_get_current_user_id():
        return TEST_USER_ID

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_uow] = override_get_uow
    app.dependency_overrides[get_current_user_id] = override_get_current_user_id

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides = {}
