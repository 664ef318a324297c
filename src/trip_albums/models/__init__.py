from trip_albums.models.album import PhotoAlbum, PhotoAlbumAssignment
from trip_albums.models.photo import Photo
from trip_albums.models.trip import Trip

__all__ = ["Photo", "PhotoAlbum", "PhotoAlbumAssignment", "Trip"]
