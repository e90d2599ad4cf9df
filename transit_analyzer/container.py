"""Dependency injection container.

This module provides a simple DI container without external frameworks.
It allows registering and resolving the adapters behind each port and
wiring them into the analyzer service.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, TypeVar

from .config import AppConfig, get_config

T = TypeVar("T")


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        service = container.resolve(NetworkAnalyzerService)

        # Testing
        container = Container()
        container.register(ReportWriterPort, lambda: FakeWriter())
        writer = container.resolve(ReportWriterPort)

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
        """Register a factory for a port type.

        Args:
            port_type: The type (usually a Protocol) to register.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
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

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with the CSV adapters registered.

        Args:
            config: Optional configuration override.

        Returns:
            A configured Container instance.
        """
        from .adapters.network import CSVAdjacencyRepository, CSVEdgeSource
        from .adapters.reporting import CSVReportWriter
        from .ports.network import AdjacencySinkPort, AdjacencySourcePort, EdgeSourcePort
        from .ports.reporting import ReportWriterPort
        from .services import NetworkAnalyzerService

        config = config or get_config()
        container = cls(config=config)

        container.register(EdgeSourcePort, lambda: CSVEdgeSource(config.network))

        # One repository serves both directions of the adjacency file
        adjacency = CSVAdjacencyRepository(config.network)
        container.register(AdjacencySourcePort, lambda: adjacency)
        container.register(AdjacencySinkPort, lambda: adjacency)

        container.register(ReportWriterPort, lambda: CSVReportWriter(config.report))

        def create_analyzer() -> NetworkAnalyzerService:
            return NetworkAnalyzerService(
                edge_source=container.resolve(EdgeSourcePort),
                adjacency_source=container.resolve(AdjacencySourcePort),
                adjacency_sink=container.resolve(AdjacencySinkPort),
                report_writer=container.resolve(ReportWriterPort),
            )

        container.register(NetworkAnalyzerService, create_analyzer)

        return container
