"""
Application Container

Dependency injection container that wires ports to adapters and manages service lifecycle.
"""

from dataclasses import dataclass, field
from typing import Optional

from versenet.config.settings import Settings


@dataclass
class Container:
    """
    Dependency injection container.

    Wires the layers:
    - Ports define contracts
    - Adapters implement ports
    - Services orchestrate domain logic
    """
    settings: Settings = field(default_factory=Settings)

    _repository: Optional[object] = field(default=None, repr=False)
    _statistics: Optional[object] = field(default=None, repr=False)

    @classmethod
    def from_env(cls) -> "Container":
        """Create container from environment settings."""
        return cls(settings=Settings.from_env())

    def verse_repository(self):
        """Get the verse repository singleton."""
        if not self._repository:
            # Lazy import to avoid circular dependencies
            from versenet.adapters.outbound.persistence import JsonVerseRepository
            self._repository = JsonVerseRepository(self.settings.data_file)
        return self._repository

    def statistics_service(self):
        """Get the statistics service singleton (owns the statistics cache)."""
        if not self._statistics:
            from versenet.application.services.statistics_service import StatisticsService
            s = self.settings
            self._statistics = StatisticsService(
                sample_size=s.sample_size,
                max_depth=s.max_depth,
                iterations=s.iterations,
                hub_count=s.hub_count,
                top_n=s.top_n,
                seed=s.seed,
            )
        return self._statistics

    def path_finder(self):
        from versenet.domain.services import PathFinder
        return PathFinder(max_depth=self.settings.max_depth)

    def report_exporter(self):
        from versenet.adapters.outbound.export import JsonReportExporter
        return JsonReportExporter()

    def graphml_exporter(self):
        from versenet.adapters.outbound.export import GraphMLExporter
        return GraphMLExporter()

    def display_service(self):
        """Get console display service."""
        from versenet.application.services.display_service import DisplayService
        return DisplayService(max_rows=self.settings.top_n)

    def close(self) -> None:
        """Close all resources."""
        if self._statistics:
            self._statistics.invalidate()
            self._statistics = None
        if self._repository:
            self._repository.close()
            self._repository = None
