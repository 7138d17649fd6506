"""
Process-wide tracer provider.

Instrumentation libraries fetch tracers from here without knowing which
backend the application installed. Until an application calls
set_tracer_provider(), a NoOpTracerProvider is in place.
"""

import logging
import threading
from typing import List, Optional

from opentelemetry.trace import Tracer

from .config import tracer_config
from .errors import FlushResult
from .noop import NoOpTracerProvider
from .provider import TracerProvider

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_tracer_provider: TracerProvider = NoOpTracerProvider()


def set_tracer_provider(provider: TracerProvider) -> TracerProvider:
    """
    Install the global tracer provider.

    Returns:
        The previously installed provider
    """
    global _tracer_provider
    with _lock:
        previous = _tracer_provider
        _tracer_provider = provider
    logger.info(f"Global tracer provider set to {provider!r}")
    return previous


def get_tracer_provider() -> TracerProvider:
    """Return the installed global tracer provider."""
    with _lock:
        return _tracer_provider


def get_tracer(name: str, version: Optional[str] = None) -> Tracer:
    """Get a tracer from the global provider."""
    config = tracer_config().with_name(name)
    if version is not None:
        config = config.with_version(version)
    return get_tracer_provider().get_tracer(config)


def force_flush() -> List[FlushResult]:
    """Force flush the global provider."""
    return get_tracer_provider().force_flush()


def shutdown_tracer_provider() -> List[FlushResult]:
    """
    Swap in a no-op provider and shut down the previous one.

    Returns:
        Shutdown results of the previous provider ([] if it has no shutdown)
    """
    previous = set_tracer_provider(NoOpTracerProvider())
    shutdown = getattr(previous, "shutdown", None)
    if shutdown is None:
        return []
    return shutdown()
