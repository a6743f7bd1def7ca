"""Centralized configuration using Pydantic Settings.

Every threshold the planner relies on lives here so that it can be
overridden from the environment:
- TRAILHOP_GRAPH_STITCH_RADIUS_M=300
- TRAILHOP_RANKING_MAX_WORKERS=4
- TRAILHOP_DATA_DATA_DIR=/path/to/data
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.errors import ConfigurationError


class GraphConfig(BaseSettings):
    """Graph construction thresholds.

    Environment variables prefixed with TRAILHOP_GRAPH_.
    """

    model_config = SettingsConfigDict(env_prefix="TRAILHOP_GRAPH_")

    stitch_radius_m: float = 250.0
    link_radius_m: float = 5000.0
    local_service_markers: tuple[str, ...] = ("Närtrafik",)


class PathConfig(BaseSettings):
    """Walk candidate filtering.

    Environment variables prefixed with TRAILHOP_PATHS_.
    """

    model_config = SettingsConfigDict(env_prefix="TRAILHOP_PATHS_")

    min_distance_m: float = 1000.0
    max_distance_m: float = 40000.0


class RankingConfig(BaseSettings):
    """Itinerary scoring and lookup fan-out.

    Environment variables prefixed with TRAILHOP_RANKING_.
    """

    model_config = SettingsConfigDict(env_prefix="TRAILHOP_RANKING_")

    max_score: float = 21600.0  # 6 hours, in seconds
    tolerance_m: float = 1000.0
    walking_speed_m_per_h: float = Field(default=4000.0, gt=0)
    max_workers: int = Field(default=8, ge=1)


class TransitConfig(BaseSettings):
    """Transit provider client configuration.

    Environment variables prefixed with TRAILHOP_TRANSIT_.
    """

    model_config = SettingsConfigDict(env_prefix="TRAILHOP_TRANSIT_")

    base_url: str = "http://www.labs.skanetrafiken.se/v2.2"
    timeout_seconds: float = 10.0
    nearest_radius_m: int = 5000
    harvest_spacing_m: float = 1000.0
    cache_ttl_seconds: float = 24 * 3600.0


class DataConfig(BaseSettings):
    """Catalogue file locations.

    Environment variables prefixed with TRAILHOP_DATA_.
    """

    model_config = SettingsConfigDict(env_prefix="TRAILHOP_DATA_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent / "data"
    )
    stages_file: str = "etapper.json"
    stop_areas_file: str = "stopareas.json"
    paths_file: str = "paths.json"

    @property
    def stages_path(self) -> Path:
        """Full path to the stage polyline catalogue."""
        return self.data_dir / self.stages_file

    @property
    def stop_areas_path(self) -> Path:
        """Full path to the stop area catalogue."""
        return self.data_dir / self.stop_areas_file

    @property
    def paths_path(self) -> Path:
        """Full path to the walk candidate catalogue."""
        return self.data_dir / self.paths_file


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with TRAILHOP_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="TRAILHOP_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.graph.stitch_radius_m)
        print(config.data.paths_path)

    Environment variables prefixed with TRAILHOP_.
    """

    model_config = SettingsConfigDict(env_prefix="TRAILHOP_")

    graph: GraphConfig = Field(default_factory=GraphConfig)
    paths: PathConfig = Field(default_factory=PathConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    transit: TransitConfig = Field(default_factory=TransitConfig)
    data: DataConfig = Field(default_factory=DataConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Raises:
        ConfigurationError: If an environment override is invalid.
    """
    try:
        return AppConfig()
    except ValidationError as e:
        errors = e.errors()
        setting = ".".join(str(part) for part in errors[0]["loc"]) if errors else ""
        raise ConfigurationError("Invalid configuration", setting_name=setting, cause=e)


def reset_config() -> None:
    """Reset the configuration cache."""
    get_config.cache_clear()
