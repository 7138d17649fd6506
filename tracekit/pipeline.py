"""
Span-processing pipelines owned by a tracer provider.

A pipeline wraps one OpenTelemetry SpanProcessor (and through it, its
exporter). Flushing a pipeline never raises; the outcome is a FlushResult.
"""

import logging
import threading
from typing import Optional

from opentelemetry.sdk.trace import SpanProcessor
from opentelemetry.sdk.trace.export import BatchSpanProcessor, SimpleSpanProcessor

from .errors import (
    ExportFailedError,
    ExportTimedOutError,
    FlushResult,
    PipelineShutdownError,
)
from .settings import ProviderConfig

logger = logging.getLogger(__name__)


class SpanPipeline:
    """
    Named span processor with per-flush outcome reporting.

    Shut processors down through the pipeline (or the owning provider). A
    processor shut down directly reports False on flush, which the pipeline
    cannot tell apart from a timeout.
    """

    def __init__(self, processor: SpanProcessor, name: Optional[str] = None):
        self.processor = processor
        self.name = name or type(processor).__name__
        self._is_shutdown = False
        self._lock = threading.Lock()

    @property
    def is_shutdown(self) -> bool:
        return self._is_shutdown

    def flush(self, timeout_millis: int = 30_000) -> FlushResult:
        """
        Flush spans buffered in the processor.

        Args:
            timeout_millis: Timeout handed to the processor

        Returns:
            FlushResult for this pipeline
        """
        if self._is_shutdown:
            return FlushResult.failure(
                self.name, PipelineShutdownError(f"pipeline {self.name} is shut down")
            )

        try:
            flushed = self.processor.force_flush(timeout_millis)
        except Exception as e:
            logger.warning(f"Force flush failed for pipeline {self.name}: {e}")
            error = ExportFailedError(f"pipeline {self.name} failed to flush: {e}")
            error.__cause__ = e
            return FlushResult.failure(self.name, error)

        # SpanProcessor.force_flush returns None for processors that buffer nothing
        if flushed is False:
            logger.warning(
                f"Force flush timed out for pipeline {self.name} "
                f"(timeout={timeout_millis}ms)"
            )
            return FlushResult.failure(
                self.name,
                ExportTimedOutError(
                    f"pipeline {self.name} did not flush within {timeout_millis}ms"
                ),
            )

        logger.debug(f"Flushed pipeline {self.name}")
        return FlushResult.success(self.name)

    def shutdown(self) -> None:
        """Shut down the processor once. Errors are logged, not raised."""
        with self._lock:
            if self._is_shutdown:
                return
            self._is_shutdown = True

        try:
            self.processor.shutdown()
            logger.debug(f"Shut down pipeline {self.name}")
        except Exception as e:
            logger.warning(f"Shutdown failed for pipeline {self.name}: {e}")

    def __repr__(self) -> str:
        return f"SpanPipeline(name={self.name!r}, shutdown={self._is_shutdown})"


def build_otlp_pipeline(config: ProviderConfig) -> SpanPipeline:
    """
    Create an OTLP gRPC export pipeline.

    Uses a SimpleSpanProcessor when batch_config.use_sync_export is set
    (spans exported as they end), otherwise a BatchSpanProcessor.
    """
    from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
        OTLPSpanExporter,
    )

    endpoint = config.otlp_endpoint
    if "://" in endpoint:
        # An explicit scheme wins over otlp_use_tls
        insecure = endpoint.startswith("http://")
    else:
        insecure = not config.otlp_use_tls
        scheme = "http" if insecure else "https"
        endpoint = f"{scheme}://{endpoint}"

    exporter = OTLPSpanExporter(endpoint=endpoint, insecure=insecure)

    batch = config.batch_config
    if batch.use_sync_export:
        processor = SimpleSpanProcessor(exporter)
        mode = "SYNC"
    else:
        processor = BatchSpanProcessor(
            exporter,
            max_queue_size=batch.max_queue_size,
            schedule_delay_millis=batch.schedule_delay_millis,
            max_export_batch_size=batch.max_export_batch_size,
            export_timeout_millis=batch.export_timeout_millis,
        )
        mode = "BATCH"

    logger.info(f"Created {mode} OTLP pipeline (endpoint={endpoint})")
    return SpanPipeline(processor, name=f"otlp:{endpoint}")
