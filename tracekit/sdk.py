"""
Exporting tracer provider backed by the OpenTelemetry SDK.

Handles:
- Default-name fallback and suppression before any tracer is created
- Thread-safe LRU registry of tracers keyed by (name, version)
- Per-pipeline force flush that never stops at the first failure
- One-shot shutdown of every pipeline
"""

import atexit
import logging
import threading
from collections import OrderedDict
from typing import Any, Dict, Iterable, List, Optional, Tuple

from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import SpanProcessor
from opentelemetry.sdk.trace import TracerProvider as OtelSdkTracerProvider
from opentelemetry.sdk.trace.sampling import (
    DEFAULT_ON,
    Decision,
    Sampler,
    SamplingResult,
)
from opentelemetry.trace import Tracer

from .config import TracerConfig, tracer_config
from .errors import FlushResult
from .noop import NOOP_TRACER
from .pipeline import SpanPipeline, build_otlp_pipeline
from .provider import TracerProvider, resolve_tracer_name
from .settings import ProviderConfig

logger = logging.getLogger(__name__)

TracerKey = Tuple[str, Optional[str]]


class _ShutdownAwareSampler(Sampler):
    """Delegates to the configured sampler until the provider shuts down, then drops."""

    def __init__(self, delegate: Sampler, provider: "SdkTracerProvider"):
        self._delegate = delegate
        self._provider = provider

    def should_sample(
        self,
        parent_context,
        trace_id,
        name,
        kind=None,
        attributes=None,
        links=None,
        trace_state=None,
    ) -> SamplingResult:
        if self._provider.is_shutdown:
            return SamplingResult(Decision.DROP)
        return self._delegate.should_sample(
            parent_context, trace_id, name, kind, attributes, links, trace_state
        )

    def get_description(self) -> str:
        return f"ShutdownAware{{{self._delegate.get_description()}}}"


class SdkTracerProvider(TracerProvider):
    """
    Tracer provider that records spans and exports them through pipelines.

    Usage:
        provider = SdkTracerProvider(ProviderConfig(service_name="search"))
        tracer = provider.get_tracer(tracer_config().with_name("io.example.lib"))

        with tracer.start_as_current_span("search") as span:
            span.set_attribute("query", "test")

        results = provider.force_flush()
        failed = [r for r in results if not r.ok]
    """

    def __init__(
        self,
        config: Optional[ProviderConfig] = None,
        resource: Optional[Resource] = None,
        sampler: Optional[Sampler] = None,
        pipelines: Optional[Iterable[SpanPipeline]] = None,
        shutdown_on_exit: bool = True,
    ):
        self.config = config or ProviderConfig()
        self.config.validate()

        self._sdk_provider = OtelSdkTracerProvider(
            sampler=_ShutdownAwareSampler(sampler or DEFAULT_ON, self),
            resource=resource or self._build_resource(),
            shutdown_on_exit=False,
        )

        # Thread-safe registry
        self._tracers: "OrderedDict[TracerKey, Tracer]" = OrderedDict()
        self._pipelines: List[SpanPipeline] = []
        self._lock = threading.RLock()
        self._tracers_issued = False
        self._is_shutdown = False

        # Metrics
        self._cache_hits = 0
        self._cache_misses = 0
        self._failed_creations = 0

        if pipelines is None:
            if self.config.enabled and self.config.otlp_enabled:
                self._add_pipeline(build_otlp_pipeline(self.config))
        else:
            for pipeline in pipelines:
                self._add_pipeline(pipeline)

        if shutdown_on_exit:
            atexit.register(self.shutdown)

        logger.info(
            f"SdkTracerProvider initialized for service {self.config.service_name} "
            f"with {len(self._pipelines)} pipeline(s)"
        )

    def _build_resource(self) -> Resource:
        attributes: Dict[str, Any] = {
            "service.name": self.config.service_name,
            "deployment.environment": self.config.environment,
        }
        if self.config.service_version:
            attributes["service.version"] = self.config.service_version
        attributes.update(self.config.extra_resource_attributes)
        return Resource.create(attributes)

    def _add_pipeline(self, pipeline: SpanPipeline) -> None:
        with self._lock:
            self._pipelines.append(pipeline)
            self._sdk_provider.add_span_processor(pipeline.processor)

    def add_span_processor(
        self, processor: SpanProcessor, name: Optional[str] = None
    ) -> SpanPipeline:
        """
        Register an additional span processor as a pipeline.

        Args:
            processor: OpenTelemetry span processor
            name: Pipeline name reported in flush results (defaults to class name)

        Returns:
            The registered SpanPipeline
        """
        pipeline = SpanPipeline(processor, name=name)
        self._add_pipeline(pipeline)
        logger.debug(f"Registered pipeline {pipeline.name}")
        return pipeline

    @property
    def pipelines(self) -> List[SpanPipeline]:
        with self._lock:
            return list(self._pipelines)

    @property
    def resource(self) -> Resource:
        return self._sdk_provider.resource

    def get_tracer(self, config: Optional[TracerConfig] = None) -> Tracer:
        """
        Get the tracer registered for an instrumentation identity.

        Empty names resolve to DEFAULT_TRACER_NAME. Suppressed libraries,
        a disabled config or a shut down provider yield a no-op tracer.
        Never raises.
        """
        try:
            if config is None:
                config = tracer_config()
            name = resolve_tracer_name(config.name)
            version = config.version

            if self._is_shutdown or self.config.is_suppressed(name):
                return NOOP_TRACER

            key = (name, version)
            with self._lock:
                tracer = self._tracers.get(key)
                if tracer is not None:
                    self._cache_hits += 1
                    self._tracers.move_to_end(key)
                    return tracer

                self._cache_misses += 1
                tracer = self._sdk_provider.get_tracer(name, version)
                self._tracers[key] = tracer
                self._tracers_issued = True
                self._evict_old_tracers()

                logger.debug(f"Created tracer {name} (version={version})")
                return tracer

        except Exception as e:
            with self._lock:
                self._failed_creations += 1
            logger.warning(f"Failed to create tracer, falling back to no-op: {e}")
            return NOOP_TRACER

    def _evict_old_tracers(self) -> None:
        """Drop least recently used registry entries. Evicted tracers stay usable."""
        while len(self._tracers) > self.config.max_cached_tracers:
            key, _ = self._tracers.popitem(last=False)
            logger.debug(f"Evicted tracer from cache: {key}")

    def force_flush(self) -> List[FlushResult]:
        """
        Flush every pipeline and report each outcome.

        Returns [] when no tracer has been issued yet. The pipeline list is
        snapshotted under the lock and flushed outside it.
        """
        with self._lock:
            if not self._tracers_issued:
                return []
            pipelines = list(self._pipelines)

        results = [
            pipeline.flush(self.config.flush_timeout_millis) for pipeline in pipelines
        ]

        failed = [r.pipeline for r in results if not r.ok]
        if failed:
            logger.warning(f"Force flush failed for pipelines: {failed}")
        return results

    def shutdown(self) -> List[FlushResult]:
        """
        Flush and shut down every pipeline. Only the first call does work.

        Tracers issued before shutdown stop recording: their spans are dropped
        by the sampler instead of reaching closed pipelines.

        Returns:
            Flush outcome per pipeline, [] if already shut down
        """
        with self._lock:
            if self._is_shutdown:
                return []
            self._is_shutdown = True
            pipelines = list(self._pipelines)

        results = []
        for pipeline in pipelines:
            results.append(pipeline.flush(self.config.flush_timeout_millis))
            pipeline.shutdown()

        atexit.unregister(self.shutdown)
        logger.info(
            f"SdkTracerProvider for service {self.config.service_name} shut down "
            f"({len(pipelines)} pipeline(s))"
        )
        return results

    @property
    def is_shutdown(self) -> bool:
        return self._is_shutdown

    def get_stats(self) -> Dict[str, Any]:
        """Get provider statistics."""
        with self._lock:
            return {
                "cache_hits": self._cache_hits,
                "cache_misses": self._cache_misses,
                "failed_creations": self._failed_creations,
                "cached_tracers": len(self._tracers),
                "pipelines": len(self._pipelines),
                "shutdown": self._is_shutdown,
                "config": {
                    "enabled": self.config.enabled,
                    "service_name": self.config.service_name,
                    "environment": self.config.environment,
                },
            }

    def __repr__(self) -> str:
        return (
            f"SdkTracerProvider(service_name={self.config.service_name!r}, "
            f"pipelines={len(self._pipelines)})"
        )
