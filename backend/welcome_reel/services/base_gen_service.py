from __future__ import annotations
"""Base generation service — single attempt with timing and usage metrics."""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class GenResult(Generic[T]):
    """Standardized generation result."""
    data: T
    provider: str
    latency_ms: int


class BaseGenService(ABC, Generic[T]):
    """Abstract base class for generation services.

    Runs ``_generate`` exactly once. Failures are counted and re-raised
    unchanged so callers see the original error type.
    """

    service_name: str = "unknown"

    def __init__(self) -> None:
        self._total_calls = 0
        self._total_errors = 0
        self._total_latency_ms = 0

    async def execute(self, **kwargs: Any) -> GenResult[T]:
        """Unified execution entry point with metrics."""
        self._total_calls += 1
        start = time.monotonic()
        try:
            result = await self._generate(**kwargs)
        except Exception as e:
            self._total_errors += 1
            logger.warning("%s failed: %s", self.service_name, e)
            raise

        latency = int((time.monotonic() - start) * 1000)
        self._total_latency_ms += latency
        return GenResult(data=result, provider=self.service_name, latency_ms=latency)

    @abstractmethod
    async def _generate(self, **kwargs: Any) -> T:
        """Subclass implements actual generation logic."""
        ...

    def get_metrics(self) -> dict[str, Any]:
        """Return usage statistics for this service."""
        successes = self._total_calls - self._total_errors
        return {
            "service": self.service_name,
            "total_calls": self._total_calls,
            "total_errors": self._total_errors,
            "error_rate": round(self._total_errors / max(self._total_calls, 1), 3),
            "avg_latency_ms": (
                round(self._total_latency_ms / successes) if successes > 0 else 0
            ),
        }
