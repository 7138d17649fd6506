"""Shared fixtures for tracer provider tests."""

import pytest
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import (
    InMemorySpanExporter,
)

from tracekit import global_provider
from tracekit.noop import NoOpTracerProvider
from tracekit.pipeline import SpanPipeline
from tracekit.sdk import SdkTracerProvider
from tracekit.settings import ProviderConfig


@pytest.fixture
def provider_config():
    """Config with OTLP export turned off so tests never touch the network."""
    return ProviderConfig(
        service_name="test-service",
        environment="test",
        otlp_enabled=False,
    )


@pytest.fixture
def span_exporter():
    return InMemorySpanExporter()


@pytest.fixture
def sdk_provider(provider_config, span_exporter):
    """SDK provider exporting synchronously into memory."""
    provider = SdkTracerProvider(
        provider_config,
        pipelines=[SpanPipeline(SimpleSpanProcessor(span_exporter), name="memory")],
        shutdown_on_exit=False,
    )
    yield provider
    provider.shutdown()


@pytest.fixture
def reset_global_provider():
    """Restore a no-op global provider around a test."""
    global_provider.set_tracer_provider(NoOpTracerProvider())
    yield
    global_provider.set_tracer_provider(NoOpTracerProvider())
