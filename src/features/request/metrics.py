"""Metrics collection for request construction."""

from dataclasses import dataclass, field
from typing import ClassVar

from src.features.request.errors import RequestErrorClass


@dataclass
class RequestMetrics:
    """Metrics for request construction and outbound option building.

    Singleton class that counts constructed requests, clones, built
    outbound options, and failures by error class.
    """

    requests_constructed_total: int = 0
    requests_cloned_total: int = 0
    outbound_built_total: int = 0
    failures_total: dict[str, int] = field(default_factory=dict)

    _instance: ClassVar["RequestMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "RequestMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_construction(self) -> None:
        """Record a constructed request."""
        self.requests_constructed_total += 1

    def record_clone(self) -> None:
        """Record a cloned request."""
        self.requests_cloned_total += 1

    def record_outbound_built(self) -> None:
        """Record a successfully built outbound options record."""
        self.outbound_built_total += 1

    def record_failure(self, error_class: RequestErrorClass) -> None:
        """Record a construction or build failure.

        Args:
            error_class: Classification of the failure.
        """
        key = error_class.value
        self.failures_total[key] = self.failures_total.get(key, 0) + 1

    def to_dict(self) -> dict[str, int | dict[str, int]]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "requests_constructed_total": self.requests_constructed_total,
            "requests_cloned_total": self.requests_cloned_total,
            "outbound_built_total": self.outbound_built_total,
            "failures_total": dict(self.failures_total),
        }
