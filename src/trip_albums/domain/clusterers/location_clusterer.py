import logging
from typing import Dict, List

import numpy as np
from scipy.sparse import coo_matrix
from scipy.sparse.csgraph import connected_components
from sklearn.neighbors import BallTree

from trip_albums.core.config import SuggestionConfig
from trip_albums.domain.clusterers.base import Clusterer
from trip_albums.domain.geo import EARTH_RADIUS_KM, distance_km
from trip_albums.domain.types import ClusterType, PhotoCluster, PhotoPoint

logger = logging.getLogger(__name__)

# Rows queried against the tree at a time; bounds the size of each neighbour batch
QUERY_CHUNK_SIZE = 256


class LocationClusterer(Clusterer):
    """
    Groups geotagged photos into connected components of the "within radius" relation.

    A haversine BallTree finds candidate neighbours without building a full distance
    matrix. Every candidate edge is then confirmed with ``distance_km(a, b) <= radius``,
    so the boundary is inclusive and agrees exactly with the distance function.
    Components do not depend on the order the photos arrive in.
    """

    def __init__(self, config: SuggestionConfig):
        self.config = config
        self.max_dist_km = config.MAX_LOCATION_DIST_KM
        logger.debug(f"LocationClusterer initialized with MAX_LOCATION_DIST_KM: {self.max_dist_km}")

    def cluster(self, photos: List[PhotoPoint]) -> List[PhotoCluster]:
        geo_photos = sorted((p for p in photos if p.has_location), key=lambda p: p.id)
        if len(geo_photos) < self.config.MIN_CLUSTER_SIZE:
            return []

        labels = self._connected_labels(geo_photos)

        clusters = [
            PhotoCluster(type=ClusterType.LOCATION, photos=group)
            for group in self._group_by_labels(geo_photos, labels)
            if len(group) >= self.config.MIN_CLUSTER_SIZE
        ]
        # geo_photos is id-sorted, so groups are too; order clusters by their smallest id
        clusters.sort(key=lambda c: c.photos[0].id)

        logger.info(f"Location-based grouping of {len(geo_photos)} photos produced {len(clusters)} clusters.")
        return clusters

    def _connected_labels(self, photos: List[PhotoPoint]) -> np.ndarray:
        n = len(photos)
        lats = np.array([p.latitude for p in photos], dtype=float)
        lons = np.array([p.longitude for p in photos], dtype=float)
        coords = np.radians(np.column_stack([lats, lons]))

        tree = BallTree(coords, metric="haversine")
        # Slightly wider than the radius; exact filtering happens below
        search_radius = self.max_dist_km / EARTH_RADIUS_KM * (1 + 1e-9) + 1e-12

        rows: List[np.ndarray] = []
        cols: List[np.ndarray] = []
        for start in range(0, n, QUERY_CHUNK_SIZE):
            neighbours = tree.query_radius(coords[start:start + QUERY_CHUNK_SIZE], r=search_radius)
            for offset, candidates in enumerate(neighbours):
                i = start + offset
                candidates = candidates[candidates > i]
                if candidates.size == 0:
                    continue
                within = distance_km((lats[i], lons[i]), (lats[candidates], lons[candidates])) <= self.max_dist_km
                confirmed = candidates[within]
                rows.append(np.full(confirmed.size, i, dtype=np.int32))
                cols.append(confirmed.astype(np.int32))

        if rows:
            row_idx, col_idx = np.concatenate(rows), np.concatenate(cols)
        else:
            row_idx = col_idx = np.empty(0, dtype=np.int32)

        graph = coo_matrix((np.ones(row_idx.size, dtype=np.int8), (row_idx, col_idx)), shape=(n, n))
        _, labels = connected_components(graph, directed=False)
        logger.debug(f"Confirmed {row_idx.size} neighbour pairs among {n} geotagged photos.")
        return labels

    def _group_by_labels(self, photos: List[PhotoPoint], labels: np.ndarray) -> List[List[PhotoPoint]]:
        groups: Dict[int, List[PhotoPoint]] = {}
        for p, label in zip(photos, labels):
            groups.setdefault(int(label), []).append(p)
        return list(groups.values())
