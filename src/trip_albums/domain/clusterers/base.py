from abc import ABC, abstractmethod
from typing import List

from trip_albums.domain.types import PhotoCluster, PhotoPoint


class Clusterer(ABC):
    """Abstract base class for a suggestion clusterer."""

    @abstractmethod
    def cluster(self, photos: List[PhotoPoint]) -> List[PhotoCluster]:
        """
        Groups the eligible photos of a trip.

        Args:
            photos: every photo of the trip; each clusterer picks the ones it can use.

        Returns:
            Clusters that reached the configured minimum size.
        """
        pass
