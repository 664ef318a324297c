from fastapi import APIRouter

from trip_albums.api.endpoints import suggestion

api_router = APIRouter()
api_router.include_router(suggestion.router, tags=["Album Suggestions"])
