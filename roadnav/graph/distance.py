"""Distance metrics and the travel-time edge weight."""

from __future__ import annotations

import math

from ..domain.models import DistanceMetric, GeoVertex

EARTH_RADIUS_M = 6_371_000.0

# metres / (km/h) -> minutes
MINUTES_PER_METRE_PER_KMH = 0.06


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in metres between two lat/lon points."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = phi2 - phi1
    dlambda = math.radians(lon2 - lon1)
    a = (
        math.sin(dphi / 2.0) ** 2
        + (math.cos(phi1) * math.cos(phi2) * (math.sin(dlambda / 2.0) ** 2))
    )
    return 2.0 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(max(0.0, a))))


def euclidean(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Planar distance on the raw coordinate values."""
    return math.hypot(lat1 - lat2, lon1 - lon2)


def distance(
    metric: DistanceMetric, lat1: float, lon1: float, lat2: float, lon2: float
) -> float:
    if metric is DistanceMetric.HAVERSINE:
        return haversine_m(lat1, lon1, lat2, lon2)
    return euclidean(lat1, lon1, lat2, lon2)


def time_factor(metric: DistanceMetric) -> float:
    """Scale applied to distance / speed to obtain the edge weight.

    Great-circle distances are metres and speeds km/h, so the weight is
    converted to minutes. Planar distances carry no unit and are left
    unscaled.
    """
    if metric is DistanceMetric.HAVERSINE:
        return MINUTES_PER_METRE_PER_KMH
    return 1.0


def travel_time(
    metric: DistanceMetric, a: GeoVertex, b: GeoVertex, speed: float
) -> float:
    """Estimated time to travel from ``a`` to ``b`` at ``speed``."""
    return distance(metric, a.lat, a.lon, b.lat, b.lon) / speed * time_factor(metric)
