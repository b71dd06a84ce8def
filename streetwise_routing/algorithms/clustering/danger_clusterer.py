"""
Greedy grouping of incidents into danger clusters.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set

from ...config.safety_config import SafetyConfig
from ...data.distance_utils import Coordinate, distance_between
from ...data.models import IncidentRecord

logger = logging.getLogger(__name__)


@dataclass
class DangerCluster:
    """
    Incidents grouped around a high-severity seed incident.

    Members are within the cluster radius of the seed, not necessarily of
    the center, which is the mean of all member coordinates.
    """
    seed: IncidentRecord
    incidents: List[IncidentRecord] = field(default_factory=list)
    total_severity: int = 0

    @property
    def center(self) -> Coordinate:
        count = len(self.incidents)
        return (
            sum(i.longitude for i in self.incidents) / count,
            sum(i.latitude for i in self.incidents) / count,
        )

    def add(self, incident: IncidentRecord) -> None:
        self.incidents.append(incident)
        self.total_severity += incident.severity


def find_danger_clusters(incidents: List[IncidentRecord],
                         config: Optional[SafetyConfig] = None) -> List[DangerCluster]:
    """
    Group incidents into danger clusters and return the most severe ones.

    Incidents are visited by severity, highest first (input order breaks
    ties). Each unassigned incident seeds a cluster that absorbs every
    unassigned incident within the cluster radius of the seed.

    Args:
        incidents: Incidents near the route
        config: Safety configuration

    Returns:
        Clusters sorted by total severity, at most max_danger_clusters_to_avoid
    """
    config = config or SafetyConfig()
    if not incidents:
        return []

    ordered = sorted(incidents, key=lambda i: -i.severity)
    # Keyed by id so an incident returned twice is only counted once
    used: Set[str] = set()
    clusters: List[DangerCluster] = []

    for seed in ordered:
        if seed.id in used:
            continue

        cluster = DangerCluster(seed=seed)
        cluster.add(seed)
        used.add(seed.id)

        for other in ordered:
            if other.id in used:
                continue
            if distance_between(seed.location, other.location) <= config.danger_cluster_radius_meters:
                cluster.add(other)
                used.add(other.id)

        clusters.append(cluster)

    clusters.sort(key=lambda c: -c.total_severity)
    logger.info(f"Grouped {len(incidents)} incidents into {len(clusters)} danger clusters")
    return clusters[:config.max_danger_clusters_to_avoid]
