"""
Tracer provider interface.

New tracers are obtained from a TracerProvider via get_tracer(). The
config name must identify the instrumentation library (e.g.
`io.opentelemetry.contrib.mongodb`), not the instrumented library.

- An empty name never fails: the provider substitutes DEFAULT_TRACER_NAME
  and returns a working tracer.
- A provider without named-tracer support may ignore the name and return
  a single default tracer for every call.
- A provider may return a no-op tracer when telemetry from that library
  is suppressed.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from opentelemetry.trace import Tracer

from .config import TracerConfig
from .errors import FlushResult

DEFAULT_TRACER_NAME = "tracekit"


def resolve_tracer_name(name: Optional[str]) -> str:
    """Return the name a provider registers a tracer under."""
    if not name:
        return DEFAULT_TRACER_NAME
    return name


class TracerProvider(ABC):
    """Produces Tracer instances and coordinates flush of buffered spans."""

    @abstractmethod
    def get_tracer(self, config: Optional[TracerConfig] = None) -> Tracer:
        """
        Get a tracer for an instrumentation library.

        Args:
            config: Instrumentation identity. None means tracer_config().

        Returns:
            A usable tracer, possibly a no-op one. Never raises.
        """
        pass

    @abstractmethod
    def force_flush(self) -> List[FlushResult]:
        """
        Flush every span-processing pipeline this provider owns.

        Returns:
            One FlushResult per pipeline flushed, in registration order.
            Failures are reported in the results, never raised.
        """
        pass
