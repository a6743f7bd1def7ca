"""Skånetrafiken Open API adapter.

Talks to the XML endpoints of the Skånetrafiken Open API (v2.2):
- querystation.asp: stop area lookup by name
- neareststation.asp: stop areas around a planar (RT90) position
- resultspage.asp: journeys between two stop areas

Stop area lookups are cached through CachePort. Network failures,
non-success responses and malformed XML are logged and downgraded to
"nothing found" so that a single bad answer never aborts a batch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional, Sequence
from xml.etree import ElementTree as ET

import requests

from ...config import TransitConfig, get_config
from ...domain.errors import TransitError
from ...domain.models import Journey, StopArea
from ...ports.cache import CachePort
from ..cache.memory_cache import InMemoryCache

STOP_AREA_POINT_TYPE = "STOP_AREA"


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _elements(root: ET.Element, name: str) -> Iterator[ET.Element]:
    for element in root.iter():
        if _local(element.tag) == name:
            yield element


def _fields(element: ET.Element) -> Dict[str, str]:
    return {_local(child.tag): (child.text or "").strip() for child in element}


def _stop_area(fields: Dict[str, str]) -> StopArea:
    return StopArea(
        id=int(fields["Id"]),
        name=fields["Name"],
        x=float(fields["X"]),
        y=float(fields["Y"]),
    )


def parse_stop_areas(xml_text: str, element_name: str) -> List[StopArea]:
    """Extract stop areas from a querystation/neareststation response.

    Raises:
        TransitError: If the document is not parseable.
    """
    root = _parse(xml_text)
    stop_areas = []
    for element in _elements(root, element_name):
        fields = _fields(element)
        if fields.get("Type", STOP_AREA_POINT_TYPE) != STOP_AREA_POINT_TYPE:
            continue
        try:
            stop_areas.append(_stop_area(fields))
        except (KeyError, ValueError) as e:
            raise TransitError(f"Malformed {element_name} element", cause=e)
    return stop_areas


def parse_journeys(xml_text: str) -> List[Journey]:
    """Extract journeys from a resultspage response.

    Raises:
        TransitError: If the document or a journey is malformed.
    """
    root = _parse(xml_text)
    journeys = []
    for element in _elements(root, "Journey"):
        fields = _fields(element)
        try:
            journeys.append(
                Journey(
                    departure=datetime.fromisoformat(fields["DepDateTime"]),
                    arrival=datetime.fromisoformat(fields["ArrDateTime"]),
                    changes=int(fields.get("NoOfChanges") or 0),
                )
            )
        except (KeyError, ValueError) as e:
            raise TransitError("Malformed Journey element", cause=e)
    return journeys


def _parse(xml_text: str) -> ET.Element:
    try:
        return ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise TransitError("Provider returned malformed XML", cause=e)


@dataclass
class SkanetrafikenTransitAdapter:
    """TransitProviderPort backed by the Skånetrafiken Open API.

    Attributes:
        config: Endpoint and timeout configuration
        cache: Cache for stop area lookups
        session: HTTP session (injectable for tests)
    """

    config: TransitConfig = field(default_factory=lambda: get_config().transit)
    cache: CachePort[Optional[StopArea]] = field(
        default_factory=lambda: InMemoryCache(name="stop_areas")
    )
    session: requests.Session = field(default_factory=requests.Session)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _get(self, endpoint: str, params: Dict[str, Any]) -> str:
        url = f"{self.config.base_url.rstrip('/')}/{endpoint}"
        try:
            response = self.session.get(
                url, params=params, timeout=self.config.timeout_seconds
            )
        except requests.RequestException as e:
            raise TransitError(
                f"Request to {endpoint} failed", endpoint=endpoint, cause=e
            )
        if response.status_code != 200:
            raise TransitError(
                f"{endpoint} answered HTTP {response.status_code}",
                endpoint=endpoint,
                status_code=response.status_code,
            )
        return response.text

    def lookup_stop_area(self, query: str) -> Optional[StopArea]:
        if not query or not query.strip():
            return None

        def fetch() -> Optional[StopArea]:
            text = self._get("querystation.asp", {"inpPointFr": query.strip()})
            found = parse_stop_areas(text, "Point")
            return found[0] if found else None

        try:
            return self.cache.get_or_compute(f"name:{query.strip().lower()}", fetch)
        except TransitError as e:
            self._logger.warning(
                "Stop area lookup failed",
                extra={"query": query, "error": str(e)},
            )
            return None

    def nearest_stop_area(self, x: float, y: float, radius: float) -> Optional[StopArea]:
        params = {"x": int(x), "y": int(y), "radius": int(radius)}

        def fetch() -> Optional[StopArea]:
            text = self._get("neareststation.asp", params)
            found = parse_stop_areas(text, "NearestStopArea")
            return found[0] if found else None

        try:
            return self.cache.get_or_compute(
                f"nearest:{params['x']}:{params['y']}:{params['radius']}", fetch
            )
        except TransitError as e:
            self._logger.warning(
                "Nearest stop area lookup failed",
                extra={"x": x, "y": y, "error": str(e)},
            )
            return None

    def query_journeys(
        self,
        origin: StopArea,
        destination: StopArea,
        depart_after: datetime,
    ) -> Sequence[Journey]:
        params = {
            "cmdaction": "next",
            "selPointFr": f"{origin.name}|{origin.id}|0",
            "selPointTo": f"{destination.name}|{destination.id}|0",
            "inpDate": depart_after.strftime("%Y-%m-%d"),
            "inpTime": depart_after.strftime("%H:%M"),
        }
        try:
            journeys = parse_journeys(self._get("resultspage.asp", params))
        except TransitError as e:
            self._logger.warning(
                "Journey query failed",
                extra={
                    "origin": origin.id,
                    "destination": destination.id,
                    "error": str(e),
                },
            )
            return []

        self._logger.debug(
            "Journeys found",
            extra={
                "origin": origin.id,
                "destination": destination.id,
                "journeys": len(journeys),
            },
        )
        return journeys
