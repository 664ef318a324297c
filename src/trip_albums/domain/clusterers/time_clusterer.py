import logging
from typing import List

from trip_albums.core.config import SuggestionConfig
from trip_albums.domain.clusterers.base import Clusterer
from trip_albums.domain.types import ClusterType, PhotoCluster, PhotoPoint

logger = logging.getLogger(__name__)


class TimeGapClusterer(Clusterer):
    def __init__(self, config: SuggestionConfig):
        self.config = config
        logger.debug(f"TimeGapClusterer initialized with MAX_TIME_GAP_SEC: {config.MAX_TIME_GAP_SEC}")

    def cluster(self, photos: List[PhotoPoint]) -> List[PhotoCluster]:
        """Splits the timestamped photos into runs separated by large time gaps."""
        timed_photos = [p for p in photos if p.has_timestamp]
        if len(timed_photos) < self.config.MIN_CLUSTER_SIZE:
            return []

        sorted_photos = sorted(timed_photos, key=lambda p: (p.taken_at, p.id))

        clusters: List[PhotoCluster] = []
        current_group: List[PhotoPoint] = [sorted_photos[0]]

        for prev_photo, current_photo in zip(sorted_photos, sorted_photos[1:]):
            time_gap = (current_photo.taken_at - prev_photo.taken_at).total_seconds()
            # Gap is measured from the previous photo, not from the start of the run
            if time_gap <= self.config.MAX_TIME_GAP_SEC:
                current_group.append(current_photo)
            else:
                logger.debug(f"Time gap of {time_gap:.0f}s exceeded threshold. Starting new group.")
                self._close(current_group, clusters)
                current_group = [current_photo]

        self._close(current_group, clusters)

        logger.info(f"Time-based grouping of {len(timed_photos)} photos produced {len(clusters)} clusters.")
        return clusters

    def _close(self, group: List[PhotoPoint], clusters: List[PhotoCluster]) -> None:
        if len(group) >= self.config.MIN_CLUSTER_SIZE:
            clusters.append(PhotoCluster(type=ClusterType.DATE, photos=group))
