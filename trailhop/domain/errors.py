"""Typed domain errors for the trail itinerary planner.

All errors inherit from TrailhopError and can optionally wrap a root
cause exception for debugging. Fatal conditions (missing catalogues,
corrupt stage labels) raise; recoverable ones are logged by the caller
and downgraded to empty results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class TrailhopError(Exception):
    """Base error for the planner domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class GraphError(TrailhopError):
    """Invalid operation on the trail graph (negative weight, bad edge)."""


@dataclass
class NodeNotFoundError(GraphError):
    """Node index not present in the graph.

    Attributes:
        node: The missing node index
    """

    node: int = -1


@dataclass
class CatalogueError(TrailhopError):
    """An input or output catalogue could not be read or written.

    Attributes:
        file_path: Path to the catalogue file if relevant
    """

    file_path: Optional[str] = None


@dataclass
class UnknownStageError(TrailhopError):
    """A stage label does not map to a known trail.

    Attributes:
        label: The offending stage label
    """

    label: str = ""


@dataclass
class TransitError(TrailhopError):
    """The transit provider failed or answered with garbage.

    Attributes:
        endpoint: The provider endpoint that was called
        status_code: HTTP status code, if a response was received
    """

    endpoint: str = ""
    status_code: Optional[int] = None


@dataclass
class StopAreaNotFoundError(TrailhopError):
    """No stop area matched a name lookup.

    Attributes:
        query: The name that was looked up
    """

    query: str = ""


@dataclass
class ConfigurationError(TrailhopError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
    """

    setting_name: str = ""
