"""
Trace errors and per-pipeline flush outcomes.

Flush failures are reported as data (FlushResult entries), never raised
out of a provider.
"""

from dataclasses import dataclass
from typing import Optional


class TraceError(Exception):
    """Base class for tracing failures."""


class ExportFailedError(TraceError):
    """A pipeline failed while exporting buffered spans."""


class ExportTimedOutError(TraceError):
    """A pipeline did not finish flushing within its timeout."""


class PipelineShutdownError(TraceError):
    """A pipeline was flushed after it had been shut down."""


@dataclass(frozen=True)
class FlushResult:
    """Outcome of flushing one span-processing pipeline."""

    pipeline: str
    error: Optional[TraceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, pipeline: str) -> "FlushResult":
        return cls(pipeline=pipeline)

    @classmethod
    def failure(cls, pipeline: str, error: TraceError) -> "FlushResult":
        return cls(pipeline=pipeline, error=error)
