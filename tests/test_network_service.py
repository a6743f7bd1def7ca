"""End-to-end tests of the offline pipeline and its wiring."""

import json

import pytest

from trailhop.adapters.catalogue import JSONCatalogueRepository
from trailhop.cli import main
from trailhop.config import AppConfig, DataConfig
from trailhop.container import Container
from trailhop.domain.errors import CatalogueError
from trailhop.ports.catalogue import CatalogueRepositoryPort
from trailhop.services import TrailNetworkService

STAGES = {
    "5_1": [[0, 0], [0, 2000], [0, 4000], [0, 6000]],
    "5_2": [[100, 6000], [0, 9000], [0, 12000]],
}
STOP_AREAS = {
    "1": {"id": 1, "name": "Sofiero", "x": -300, "y": 0},
    "2": {"id": 2, "name": "Domsten", "x": 200, "y": 6100},
    "3": {"id": 3, "name": "Viken", "x": 0, "y": 12400},
    "4": {"id": 4, "name": "Viken Närtrafik", "x": 0, "y": 12300},
}


@pytest.fixture
def data_dir(tmp_path):
    (tmp_path / "etapper.json").write_text(json.dumps(STAGES), encoding="utf-8")
    (tmp_path / "stopareas.json").write_text(json.dumps(STOP_AREAS), encoding="utf-8")
    return tmp_path


def test_rebuild_writes_path_catalogue(data_dir):
    repository = JSONCatalogueRepository(DataConfig(data_dir=data_dir))
    service = TrailNetworkService(repository)

    summary = service.rebuild()

    assert summary.simplify.collapsed > 0
    assert 4 in summary.build.excluded_stop_areas
    saved = repository.load_paths()
    assert saved == summary.paths
    pairs = {(p.src, p.dest) for p in saved}
    assert {(1, 2), (2, 1), (1, 3), (3, 1), (2, 3), (3, 2)} == pairs
    long_walk = next(p for p in saved if (p.src, p.dest) == (1, 3))
    assert long_walk.stages == ("5_1", "5_2")


def test_rebuild_without_inputs_is_fatal(tmp_path):
    service = TrailNetworkService(JSONCatalogueRepository(DataConfig(data_dir=tmp_path)))
    with pytest.raises(CatalogueError):
        service.rebuild()


def test_container_resolves_singletons(data_dir):
    container = Container.create_default(AppConfig(data=DataConfig(data_dir=data_dir)))

    repository = container.resolve(CatalogueRepositoryPort)

    assert repository is container.resolve(CatalogueRepositoryPort)
    assert repository.config.data_dir == data_dir
    with pytest.raises(KeyError):
        Container().resolve(CatalogueRepositoryPort)


def test_cli_build_and_search(data_dir, capsys):
    config = AppConfig(data=DataConfig(data_dir=data_dir))

    assert main(["build"], config=config) == 0
    assert main(["search", "12500", "--tolerance", "1500"], config=config) == 0

    out = capsys.readouterr().out
    assert "walks saved" in out
    assert "Öresundsleden etapp 1, 2" in out


def test_cli_reports_missing_catalogue(tmp_path):
    config = AppConfig(data=DataConfig(data_dir=tmp_path))
    assert main(["search", "10000"], config=config) == 1
