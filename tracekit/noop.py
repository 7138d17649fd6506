"""
No-op tracer provider.

Hands out one shared NoOpTracer regardless of instrumentation identity and
owns no pipelines, so there is never anything to flush.
"""

from typing import List, Optional

from opentelemetry.trace import NoOpTracer, Tracer

from .config import TracerConfig
from .errors import FlushResult
from .provider import TracerProvider
from .settings import ProviderConfig

NOOP_TRACER = NoOpTracer()


class NoOpTracerProvider(TracerProvider):
    """Provider used when telemetry is disabled or no backend is configured."""

    def __init__(self, config: Optional[ProviderConfig] = None):
        self.config = config

    def get_tracer(self, config: Optional[TracerConfig] = None) -> Tracer:
        return NOOP_TRACER

    def force_flush(self) -> List[FlushResult]:
        return []

    def shutdown(self) -> List[FlushResult]:
        return []

    def __repr__(self) -> str:
        return "NoOpTracerProvider()"
