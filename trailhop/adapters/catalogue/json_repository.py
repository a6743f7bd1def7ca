"""JSON catalogue repository adapter.

File formats:
- stages (``etapper.json``): ``{"5_1": [[x, y], ...], ...}``
- stop areas (``stopareas.json``): ``{"<id>": {"id", "name", "x", "y"}, ...}``
- paths (``paths.json``): ``[{"dist", "srcdist", "destdist", "src",
  "dest", "etapp"}, ...]`` where ``etapp`` joins stage labels with ``;``
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path as FilePath
from typing import Any, Dict, List, Mapping, Sequence

from ...config import DataConfig, get_config
from ...domain.errors import CatalogueError
from ...domain.models import Path, Position, StopArea
from ...domain.stages import parse_stage_label

STAGE_LIST_SEPARATOR = ";"


def path_to_record(path: Path) -> Dict[str, Any]:
    for stage in path.stages:
        if STAGE_LIST_SEPARATOR in stage:
            raise CatalogueError(f"Stage label {stage!r} cannot be persisted")
    return {
        "dist": path.dist,
        "srcdist": path.src_dist,
        "destdist": path.dest_dist,
        "src": path.src,
        "dest": path.dest,
        "etapp": STAGE_LIST_SEPARATOR.join(path.stages),
    }


def path_from_record(record: Mapping[str, Any]) -> Path:
    etapp = record.get("etapp", "")
    return Path(
        dist=record["dist"],
        src_dist=record["srcdist"],
        dest_dist=record["destdist"],
        src=int(record["src"]),
        dest=int(record["dest"]),
        stages=tuple(s for s in etapp.split(STAGE_LIST_SEPARATOR) if s),
    )


@dataclass
class JSONCatalogueRepository:
    """Catalogue repository backed by JSON files in the data directory.

    Attributes:
        config: Data configuration (directory, file names)
    """

    config: DataConfig = field(default_factory=lambda: get_config().data)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _read(self, file_path: FilePath) -> Any:
        self._logger.debug("Reading catalogue", extra={"path": str(file_path)})
        try:
            with file_path.open(encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise CatalogueError(
                f"Failed to read catalogue {file_path}",
                file_path=str(file_path),
                cause=e,
            )

    def _write(self, file_path: FilePath, data: Any) -> None:
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with file_path.open("w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
        except OSError as e:
            raise CatalogueError(
                f"Failed to write catalogue {file_path}",
                file_path=str(file_path),
                cause=e,
            )
        self._logger.info("Catalogue written", extra={"path": str(file_path)})

    def load_stages(self) -> Dict[str, List[Position]]:
        file_path = self.config.stages_path
        raw = self._read(file_path)
        try:
            stages = {
                str(label): [(float(p[0]), float(p[1])) for p in points]
                for label, points in raw.items()
            }
        except (AttributeError, TypeError, IndexError, ValueError) as e:
            raise CatalogueError(
                "Malformed stage catalogue", file_path=str(file_path), cause=e
            )
        for label in stages:
            parse_stage_label(label)
        self._logger.info("Stages loaded", extra={"stages": len(stages)})
        return stages

    def load_stop_areas(self) -> Dict[int, StopArea]:
        file_path = self.config.stop_areas_path
        raw = self._read(file_path)
        try:
            stop_areas = {}
            for record in raw.values():
                stop_area = StopArea(
                    id=int(record["id"]),
                    name=str(record["name"]),
                    x=float(record["x"]),
                    y=float(record["y"]),
                )
                stop_areas[stop_area.id] = stop_area
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise CatalogueError(
                "Malformed stop area catalogue", file_path=str(file_path), cause=e
            )
        self._logger.info("Stop areas loaded", extra={"stop_areas": len(stop_areas)})
        return stop_areas

    def save_stop_areas(self, stop_areas: Mapping[int, StopArea]) -> None:
        data = {
            str(sa.id): {"id": sa.id, "name": sa.name, "x": sa.x, "y": sa.y}
            for sa in stop_areas.values()
        }
        self._write(self.config.stop_areas_path, data)

    def load_paths(self) -> List[Path]:
        file_path = self.config.paths_path
        raw = self._read(file_path)
        try:
            paths = [path_from_record(record) for record in raw]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise CatalogueError(
                "Malformed path catalogue", file_path=str(file_path), cause=e
            )
        self._logger.info("Paths loaded", extra={"paths": len(paths)})
        return paths

    def save_paths(self, paths: Sequence[Path]) -> None:
        self._write(self.config.paths_path, [path_to_record(p) for p in paths])
