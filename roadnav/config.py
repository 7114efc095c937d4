"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for all configuration:
the road categories kept by the map loader, the default speed limit,
the distance metric of each input type, the search deadline and the
logging setup.

Configuration can be overridden via environment variables:
- ROADNAV_GRAPH_DEFAULT_SPEED_KMH=30
- ROADNAV_GRAPH_DOT_METRIC=euclidean
- ROADNAV_ROUTING_TIMEOUT_SECONDS=5
- ROADNAV_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.errors import ConfigurationError
from .domain.models import DistanceMetric

DEFAULT_HIGHWAYS = [
    "residential",
    "motorway",
    "trunk",
    "primary",
    "secondary",
    "tertiary",
    "unclassified",
    "trunk_link",
]


class GraphConfig(BaseSettings):
    """Map loading configuration.

    Environment variables prefixed with ROADNAV_GRAPH_.

    Every speed in the system is in km/h. ``default_speed_kmh`` applies
    to segments whose source carries no speed limit.

    Both input types carry latitude/longitude, so both default to the
    haversine metric and minute weights. ``euclidean`` measures raw
    coordinate values and its weights carry no time unit.
    """

    model_config = SettingsConfigDict(env_prefix="ROADNAV_GRAPH_")

    highway_key: str = "highway"
    allowed_highways: List[str] = Field(default_factory=lambda: list(DEFAULT_HIGHWAYS))
    default_speed_kmh: float = Field(default=50.0, gt=0)
    osm_metric: Literal["haversine", "euclidean"] = "haversine"
    dot_metric: Literal["haversine", "euclidean"] = "haversine"

    @property
    def osm_distance_metric(self) -> DistanceMetric:
        return DistanceMetric(self.osm_metric)

    @property
    def dot_distance_metric(self) -> DistanceMetric:
        return DistanceMetric(self.dot_metric)


class RoutingConfig(BaseSettings):
    """Path search configuration.

    Environment variables prefixed with ROADNAV_ROUTING_.
    """

    model_config = SettingsConfigDict(env_prefix="ROADNAV_ROUTING_")

    timeout_seconds: Optional[float] = Field(default=None, ge=0)


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with ROADNAV_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="ROADNAV_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging
    file: Optional[Path] = None


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    Sub-configurations can be accessed via attributes:

        config = get_config()
        print(config.graph.allowed_highways)
        print(config.routing.timeout_seconds)

    Environment variables prefixed with ROADNAV_.
    """

    model_config = SettingsConfigDict(env_prefix="ROADNAV_")

    graph: GraphConfig = Field(default_factory=GraphConfig)
    routing: RoutingConfig = Field(default_factory=RoutingConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()


def load_config() -> AppConfig:
    """Get the configuration, reporting invalid values as a domain error.

    Raises:
        ConfigurationError: Naming the first setting that failed validation.
    """
    try:
        return get_config()
    except ValidationError as e:
        first = e.errors()[0]
        setting_name = ".".join(str(part) for part in first["loc"])
        raise ConfigurationError(
            f"Invalid configuration value for {setting_name}",
            setting_name=setting_name,
            expected_type=first.get("type"),
            cause=e,
        ) from e
