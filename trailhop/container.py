"""Dependency injection container.

A small explicit container: factories are registered per port type and
resolved lazily, optionally as singletons. Tests build a bare Container
and register fakes; production code uses Container.create_default().
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        ranker = container.resolve(ItineraryRanker)

        # Testing
        container = Container()
        container.register(TransitProviderPort, lambda: FakeTransit())

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type."""
        with self._lock:
            self._factories[port_type] = factory
            if singleton:
                self._singleton_types.add(port_type)
            else:
                self._singleton_types.discard(port_type)
            self._singletons.pop(port_type, None)

    def resolve(self, port_type: type[Any]) -> Any:
        """Resolve an instance of a port type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return self._singletons[port_type]

            return self._factories[port_type]()

    def is_registered(self, port_type: type[Any]) -> bool:
        return port_type in self._factories

    def clear_singletons(self) -> None:
        with self._lock:
            self._singletons.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with the production bindings."""
        from .adapters.cache import InMemoryCache
        from .adapters.catalogue import JSONCatalogueRepository
        from .adapters.transit import SkanetrafikenTransitAdapter
        from .graph.builder import GraphBuilder
        from .graph.extractor import PathExtractor
        from .ports.cache import CachePort
        from .ports.catalogue import CatalogueRepositoryPort
        from .ports.transit import TransitProviderPort
        from .services import ItineraryRanker, StopAreaService, TrailNetworkService

        config = config or get_config()
        container = cls(config=config)

        container.register(
            CachePort,
            lambda: InMemoryCache(
                name="stop_areas",
                default_ttl_seconds=config.transit.cache_ttl_seconds,
            ),
        )
        container.register(
            CatalogueRepositoryPort,
            lambda: JSONCatalogueRepository(config.data),
        )
        container.register(
            TransitProviderPort,
            lambda: SkanetrafikenTransitAdapter(
                config.transit, container.resolve(CachePort)
            ),
        )

        container.register(
            TrailNetworkService,
            lambda: TrailNetworkService(
                repository=container.resolve(CatalogueRepositoryPort),
                builder=GraphBuilder(config.graph),
                extractor=PathExtractor(config.paths),
            ),
        )
        container.register(
            StopAreaService,
            lambda: StopAreaService(
                container.resolve(TransitProviderPort), config.transit
            ),
        )
        container.register(
            ItineraryRanker,
            lambda: ItineraryRanker(
                container.resolve(TransitProviderPort), config.ranking
            ),
        )

        return container
