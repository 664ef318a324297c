import logging
from typing import Any, Dict, List, Sequence, Tuple

from trip_albums.core.config import SuggestionConfig
from trip_albums.domain.clusterers.base import Clusterer
from trip_albums.domain.clusterers.location_clusterer import LocationClusterer
from trip_albums.domain.clusterers.time_clusterer import TimeGapClusterer
from trip_albums.domain.geo import centroid
from trip_albums.domain.scoring import ConfidenceScorer, SuggestionRanker
from trip_albums.domain.types import AlbumSuggestion, ClusterType, PhotoCluster, PhotoPoint

logger = logging.getLogger(__name__)

NEARBY_PHOTOS_LABEL = "Nearby Photos"


def format_day(value) -> str:
    return f"{value:%B} {value.day}, {value.year}"


class SuggestionEngine:
    """
    Turns a snapshot of a trip's photos into ranked album suggestions.

    Pure and synchronous: no I/O, no shared state between calls. The time and
    location clusterers run independently over the same snapshot, so one photo
    may show up in a date suggestion and a location suggestion at once.
    """

    def __init__(self, config: SuggestionConfig):
        self.config = config
        self.clusterers: List[Clusterer] = self._create_clusterers(config)
        self.scorer = ConfidenceScorer(config)
        self.ranker = SuggestionRanker(config)

    def _create_clusterers(self, config: SuggestionConfig) -> List[Clusterer]:
        return [TimeGapClusterer(config), LocationClusterer(config)]

    def suggest(self, photos: Sequence[PhotoPoint]) -> List[AlbumSuggestion]:
        photos = list(photos)
        if len(photos) < self.config.MIN_CLUSTER_SIZE:
            logger.debug(f"Only {len(photos)} photos, nothing to suggest.")
            return []

        candidates: List[AlbumSuggestion] = []
        for clusterer in self.clusterers:
            for cluster in clusterer.cluster(photos):
                candidates.append(self._to_suggestion(cluster))

        suggestions = self.ranker.rank(candidates)
        logger.info(f"Built {len(candidates)} candidate suggestions from {len(photos)} photos, returning {len(suggestions)}.")
        return suggestions

    def _to_suggestion(self, cluster: PhotoCluster) -> AlbumSuggestion:
        if cluster.type == ClusterType.DATE:
            label, metadata = self._describe_date_cluster(cluster)
        else:
            label, metadata = self._describe_location_cluster(cluster)

        return AlbumSuggestion(
            type=cluster.type,
            label=label,
            photo_ids=cluster.photo_ids,
            confidence=self.scorer.score(cluster),
            metadata=metadata,
        )

    def _describe_date_cluster(self, cluster: PhotoCluster) -> Tuple[str, Dict[str, Any]]:
        first_day = cluster.photos[0].taken_at.date()
        last_day = cluster.photos[-1].taken_at.date()

        label = format_day(first_day)
        if last_day != first_day:
            label = f"{label} - {format_day(last_day)}"

        return label, {"date": first_day.isoformat(), "end_date": last_day.isoformat()}

    def _describe_location_cluster(self, cluster: PhotoCluster) -> Tuple[str, Dict[str, Any]]:
        center_lat, center_lon = centroid([p.coordinate for p in cluster.photos])
        return NEARBY_PHOTOS_LABEL, {"latitude": round(center_lat, 6), "longitude": round(center_lon, 6)}
