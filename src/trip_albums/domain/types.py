from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class ClusterType(str, Enum):
    DATE = "date"
    LOCATION = "location"


Coordinate = Tuple[float, float]


@dataclass(frozen=True)
class PhotoPoint:
    """The slice of a photo the suggestion engine looks at."""
    id: int
    taken_at: Optional[datetime] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def has_timestamp(self) -> bool:
        return self.taken_at is not None

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def coordinate(self) -> Optional[Coordinate]:
        if not self.has_location:
            return None
        return (self.latitude, self.longitude)

    @classmethod
    def from_model(cls, photo) -> "PhotoPoint":
        return cls(
            id=photo.id,
            taken_at=photo.taken_at,
            latitude=photo.latitude,
            longitude=photo.longitude,
        )


@dataclass
class PhotoCluster:
    type: ClusterType
    photos: List[PhotoPoint]

    @property
    def photo_ids(self) -> List[int]:
        return [p.id for p in self.photos]

    @property
    def size(self) -> int:
        return len(self.photos)


@dataclass
class AlbumSuggestion:
    type: ClusterType
    label: str
    photo_ids: List[int]
    confidence: float
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def size(self) -> int:
        return len(self.photo_ids)
