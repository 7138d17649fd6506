"""
Tracer provider layer for OpenTelemetry.

This package provides:
- TracerConfig builder describing instrumentation identity
- TracerProvider interface with SDK-backed and no-op implementations
- Per-pipeline force flush results
- Entry-point registry of provider backends
- Process-wide provider accessors
"""

__version__ = "0.1.0"

from .config import TracerConfig, tracer_config
from .errors import (
    ExportFailedError,
    ExportTimedOutError,
    FlushResult,
    PipelineShutdownError,
    TraceError,
)
from .global_provider import (
    force_flush,
    get_tracer,
    get_tracer_provider,
    set_tracer_provider,
    shutdown_tracer_provider,
)
from .noop import NoOpTracerProvider
from .pipeline import SpanPipeline, build_otlp_pipeline
from .provider import DEFAULT_TRACER_NAME, TracerProvider
from .registry import TracerProviderRegistry, create_tracer_provider
from .sdk import SdkTracerProvider
from .settings import BatchExportConfig, ProviderConfig, load_provider_config

__all__ = [
    "BatchExportConfig",
    "DEFAULT_TRACER_NAME",
    "ExportFailedError",
    "ExportTimedOutError",
    "FlushResult",
    "NoOpTracerProvider",
    "PipelineShutdownError",
    "ProviderConfig",
    "SdkTracerProvider",
    "SpanPipeline",
    "TraceError",
    "TracerConfig",
    "TracerProvider",
    "TracerProviderRegistry",
    "build_otlp_pipeline",
    "create_tracer_provider",
    "force_flush",
    "get_tracer",
    "get_tracer_provider",
    "load_provider_config",
    "set_tracer_provider",
    "shutdown_tracer_provider",
    "tracer_config",
]
