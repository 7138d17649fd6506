"""
Tracer identity passed to TracerProvider.get_tracer().

Usage:
    config = tracer_config().with_name("io.example.lib").with_version("2.1.0")
    tracer = provider.get_tracer(config)
"""

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class TracerConfig:
    """
    Identity of the instrumentation library requesting a tracer.

    `name` identifies the instrumentation library (e.g. `io.opentelemetry.contrib.mongodb`),
    not the library being instrumented. Nothing is validated here: an empty
    name is legal and the provider falls back to its default identity.
    """

    name: str = ""
    version: Optional[str] = None

    def with_name(self, name: str) -> "TracerConfig":
        """Return a copy with `name` set."""
        return replace(self, name=name)

    def with_version(self, version: str) -> "TracerConfig":
        """Return a copy with `version` set."""
        return replace(self, version=version)


def tracer_config() -> TracerConfig:
    """Default tracer configuration."""
    return TracerConfig()
