from dataclasses import replace
from unittest.mock import AsyncMock, patch

import pytest
from fastapi import status
from httpx import ASGITransport, AsyncClient

from tests.factories import issue_token
from trip_albums.api.deps import get_uow
from trip_albums.domain.types import AlbumSuggestion, ClusterType
from trip_albums.main import app
from trip_albums.services.results import (
    PHOTO_OWNERSHIP_MESSAGE,
    TRIP_NOT_FOUND_MESSAGE,
    AlbumCreated,
    InvalidSuggestion,
    SuggestionsReady,
    TripNotFound,
)

SERVICE_PATH = "trip_albums.api.endpoints.suggestion.AlbumSuggestionService"


@pytest.mark.asyncio
async def test_get_suggestions(client):
    suggestions = [
        AlbumSuggestion(
            type=ClusterType.LOCATION,
            label="Nearby Photos",
            photo_ids=[4, 5, 6],
            confidence=0.4,
            metadata={"latitude": 48.8584, "longitude": 2.2945},
        ),
        AlbumSuggestion(
            type=ClusterType.DATE,
            label="June 15, 2025",
            photo_ids=[1, 2, 3],
            confidence=0.3,
            metadata={"date": "2025-06-15", "end_date": "2025-06-15"},
        ),
    ]

    with patch(SERVICE_PATH) as MockService:
        mock_service = MockService.return_value
        mock_service.get_album_suggestions = AsyncMock(return_value=SuggestionsReady(suggestions=suggestions))

        response = await client.get("/api/photos/trip/1/suggest-albums")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert [s["type"] for s in data] == ["location", "date"]
        assert data[1]["label"] == "June 15, 2025"
        assert data[1]["photo_ids"] == [1, 2, 3]
        assert data[0]["confidence"] == 0.4
        mock_service.get_album_suggestions.assert_called_once_with(user_id=1, trip_id=1)


@pytest.mark.asyncio
async def test_get_suggestions_empty(client):
    with patch(SERVICE_PATH) as MockService:
        MockService.return_value.get_album_suggestions = AsyncMock(return_value=SuggestionsReady())

        response = await client.get("/api/photos/trip/1/suggest-albums")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == []


@pytest.mark.asyncio
async def test_get_suggestions_trip_not_found(client):
    with patch(SERVICE_PATH) as MockService:
        MockService.return_value.get_album_suggestions = AsyncMock(return_value=TripNotFound(trip_id=42))

        response = await client.get("/api/photos/trip/42/suggest-albums")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == TRIP_NOT_FOUND_MESSAGE


@pytest.mark.asyncio
async def test_accept_suggestion(client):
    payload = {"name": "June 15, 2025", "photo_ids": [1, 2, 3]}

    with patch(SERVICE_PATH) as MockService:
        mock_service = MockService.return_value
        mock_service.accept_suggestion = AsyncMock(return_value=AlbumCreated(album_id=7))

        response = await client.post("/api/photos/trip/1/accept-suggestion", json=payload)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json() == {"album_id": 7}
        mock_service.accept_suggestion.assert_called_once_with(
            user_id=1, trip_id=1, name="June 15, 2025", photo_ids=[1, 2, 3]
        )


@pytest.mark.asyncio
async def test_accept_suggestion_with_foreign_photos(client):
    payload = {"name": "Test Album", "photo_ids": [1, 2, 999]}

    with patch(SERVICE_PATH) as MockService:
        MockService.return_value.accept_suggestion = AsyncMock(
            return_value=InvalidSuggestion(message=PHOTO_OWNERSHIP_MESSAGE)
        )

        response = await client.post("/api/photos/trip/1/accept-suggestion", json=payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == PHOTO_OWNERSHIP_MESSAGE


@pytest.mark.asyncio
async def test_accept_suggestion_trip_not_found(client):
    with patch(SERVICE_PATH) as MockService:
        MockService.return_value.accept_suggestion = AsyncMock(return_value=TripNotFound(trip_id=2))

        response = await client.post("/api/photos/trip/2/accept-suggestion", json={"name": "A", "photo_ids": [1]})

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload, detail",
    [
        ({"name": "", "photo_ids": [1]}, "Album name is required"),
        ({"name": "   ", "photo_ids": [1]}, "Album name is required"),
        ({"name": "x" * 256, "photo_ids": [1]}, "Album name must be at most 255 characters"),
        ({"name": "Album", "photo_ids": []}, "At least one photo is required"),
        ({"name": "Album", "photo_ids": [0]}, "Photo ids must be positive integers"),
        ({"name": "Album", "photo_ids": [-3]}, "Photo ids must be positive integers"),
        ({"name": "Album", "photo_ids": list(range(1, 1002))}, "At most 1000 photos can be added at once"),
        ({"name": "Album", "photo_ids": [1, 2, 2]}, "Photo ids must be unique"),
    ],
)
async def test_accept_suggestion_limit_violations_are_bad_requests(client, mock_uow, payload, detail):
    response = await client.post("/api/photos/trip/1/accept-suggestion", json=payload)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == detail
    mock_uow.trips.verify_trip_ownership.assert_not_called()


@pytest.mark.asyncio
async def test_accept_suggestion_limits_follow_settings(client, mock_uow, config):
    mock_uow.trips.verify_trip_ownership = AsyncMock(return_value=object())
    mock_uow.photos.count_in_trip = AsyncMock(return_value=1)
    mock_uow.albums.create_album_with_assignments = AsyncMock(return_value=3)
    roomy = replace(config, MAX_ALBUM_NAME_LENGTH=300)

    with patch("trip_albums.services.suggestion.configs") as mock_configs:
        mock_configs.suggestion_config = roomy
        response = await client.post(
            "/api/photos/trip/1/accept-suggestion", json={"name": "x" * 280, "photo_ids": [1]}
        )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json() == {"album_id": 3}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"photo_ids": [1]},
        {"name": "Album"},
        {"name": "Album", "photo_ids": "1,2,3"},
        {"name": "Album", "photo_ids": ["one"]},
    ],
)
async def test_accept_suggestion_rejects_malformed_body(client, payload):
    with patch(SERVICE_PATH) as MockService:
        MockService.return_value.accept_suggestion = AsyncMock()

        response = await client.post("/api/photos/trip/1/accept-suggestion", json=payload)

        assert response.status_code == 422
        MockService.return_value.accept_suggestion.assert_not_called()


@pytest.mark.asyncio
async def test_requests_without_token_are_rejected(mock_uow):
    async def override_get_uow():
        yield mock_uow

    app.dependency_overrides[get_uow] = override_get_uow
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            get_response = await ac.get("/api/photos/trip/1/suggest-albums")
            post_response = await ac.post(
                "/api/photos/trip/1/accept-suggestion", json={"name": "A", "photo_ids": [1]}
            )
            bad_token_response = await ac.get(
                "/api/photos/trip/1/suggest-albums", headers={"Authorization": "Bearer not-a-jwt"}
            )
    finally:
        app.dependency_overrides = {}

    assert get_response.status_code == status.HTTP_401_UNAUTHORIZED
    assert post_response.status_code == status.HTTP_401_UNAUTHORIZED
    assert bad_token_response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_token_subject_becomes_the_user(mock_uow):
    async def override_get_uow():
        yield mock_uow

    app.dependency_overrides[get_uow] = override_get_uow
    token = issue_token("7")
    try:
        with patch(SERVICE_PATH) as MockService:
            mock_service = MockService.return_value
            mock_service.get_album_suggestions = AsyncMock(return_value=SuggestionsReady())

            async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
                response = await ac.get(
                    "/api/photos/trip/3/suggest-albums", headers={"Authorization": f"Bearer {token}"}
                )
    finally:
        app.dependency_overrides = {}

    assert response.status_code == status.HTTP_200_OK
    mock_service.get_album_suggestions.assert_called_once_with(user_id=7, trip_id=3)


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "healthy"}
