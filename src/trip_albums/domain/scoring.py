import logging
from typing import List

from trip_albums.core.config import SuggestionConfig
from trip_albums.domain.types import AlbumSuggestion, ClusterType, PhotoCluster

logger = logging.getLogger(__name__)


class ConfidenceScorer:
    """
    Heuristic confidence in [0, 1]: grows linearly with cluster size from
    BASE_CONFIDENCE at the minimum size and saturates at 1.0. Location clusters
    get LOCATION_BONUS on top, still capped at 1.0.
    """

    def __init__(self, config: SuggestionConfig):
        self.config = config

    def score(self, cluster: PhotoCluster) -> float:
        extra_photos = max(0, cluster.size - self.config.MIN_CLUSTER_SIZE)
        confidence = min(1.0, self.config.BASE_CONFIDENCE + self.config.CONFIDENCE_STEP * extra_photos)
        if cluster.type == ClusterType.LOCATION:
            confidence = min(1.0, confidence + self.config.LOCATION_BONUS)
        return round(confidence, 2)


class SuggestionRanker:
    def __init__(self, config: SuggestionConfig):
        self.config = config

    def rank(self, suggestions: List[AlbumSuggestion]) -> List[AlbumSuggestion]:
        """Highest confidence first, then larger, then lowest photo id. Keeps the top MAX_SUGGESTIONS."""
        ranked = sorted(
            suggestions,
            key=lambda s: (-s.confidence, -s.size, min(s.photo_ids)),
        )
        if len(ranked) > self.config.MAX_SUGGESTIONS:
            logger.debug(f"Dropping {len(ranked) - self.config.MAX_SUGGESTIONS} lower ranked suggestions.")
        return ranked[: self.config.MAX_SUGGESTIONS]
