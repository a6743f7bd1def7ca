import pytest
from pydantic import ValidationError

from trailhop.config import AppConfig, RankingConfig, get_config, reset_config
from trailhop.domain.errors import ConfigurationError


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    yield
    reset_config()


def test_defaults():
    config = AppConfig()
    assert config.graph.stitch_radius_m == 250
    assert config.graph.link_radius_m == 5000
    assert config.ranking.max_score == 6 * 3600
    assert config.data.paths_path.name == "paths.json"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("TRAILHOP_GRAPH_STITCH_RADIUS_M", "300")
    monkeypatch.setenv("TRAILHOP_DATA_DATA_DIR", "/tmp/trailhop")

    config = get_config()

    assert config.graph.stitch_radius_m == 300
    assert str(config.data.stages_path) == "/tmp/trailhop/etapper.json"


def test_get_config_is_cached():
    assert get_config() is get_config()


def test_walking_speed_must_be_positive():
    with pytest.raises(ValidationError):
        RankingConfig(walking_speed_m_per_h=0)


def test_invalid_environment_raises_configuration_error(monkeypatch):
    monkeypatch.setenv("TRAILHOP_RANKING_MAX_WORKERS", "0")

    with pytest.raises(ConfigurationError) as exc_info:
        get_config()
    assert isinstance(exc_info.value.cause, ValidationError)
