"""
Configuration for tracer providers.

Settings come from a JSON file (auto-discovered) with environment variable
overrides on top. Provider-specific behaviour is driven entirely by
ProviderConfig; TracerConfig only carries instrumentation identity.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

logger = logging.getLogger(__name__)

# Registry names of the built-in providers
PROVIDER_SDK = "sdk"
PROVIDER_NOOP = "noop"

CONFIG_ENV_VAR = "TRACEKIT_CONFIG"


@dataclass
class BatchExportConfig:
    """Configuration for batch span export."""

    max_queue_size: int = 2048
    max_export_batch_size: int = 512
    export_timeout_millis: int = 30_000
    schedule_delay_millis: int = 500
    use_sync_export: bool = False


@dataclass
class ProviderConfig:
    """
    Tracer provider configuration.

    enabled=False suppresses all telemetry: providers hand out no-op tracers.
    Names listed in suppressed_instrumentations get no-op tracers as well.
    """

    # Core settings
    enabled: bool = True
    provider: str = PROVIDER_SDK
    environment: str = "development"

    # Service identification
    service_name: str = "unknown_service"
    service_version: Optional[str] = None

    # OpenTelemetry span export (OTLP gRPC)
    otlp_enabled: bool = True
    otlp_endpoint: str = "localhost:4317"
    otlp_use_tls: bool = False

    # Instrumentation libraries whose telemetry is dropped
    suppressed_instrumentations: List[str] = field(default_factory=list)

    # Tracer registry size (LRU)
    max_cached_tracers: int = 1000

    # Timeout handed to each pipeline on force_flush
    flush_timeout_millis: int = 30_000

    batch_config: BatchExportConfig = field(default_factory=BatchExportConfig)

    # Resource attributes
    extra_resource_attributes: Dict[str, str] = field(default_factory=dict)

    def is_suppressed(self, instrumentation_name: str) -> bool:
        """Check whether telemetry from an instrumentation library is suppressed."""
        if not self.enabled:
            return True
        return instrumentation_name in self.suppressed_instrumentations

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary for persistence."""
        return {
            "enabled": self.enabled,
            "provider": self.provider,
            "environment": self.environment,
            "service_name": self.service_name,
            "service_version": self.service_version,
            "otlp_enabled": self.otlp_enabled,
            "otlp_endpoint": self.otlp_endpoint,
            "otlp_use_tls": self.otlp_use_tls,
            "suppressed_instrumentations": list(self.suppressed_instrumentations),
            "max_cached_tracers": self.max_cached_tracers,
            "flush_timeout_millis": self.flush_timeout_millis,
            "max_queue_size": self.batch_config.max_queue_size,
            "max_export_batch_size": self.batch_config.max_export_batch_size,
            "export_timeout_millis": self.batch_config.export_timeout_millis,
            "schedule_delay_millis": self.batch_config.schedule_delay_millis,
            "use_sync_export": self.batch_config.use_sync_export,
            "extra_resource_attributes": dict(self.extra_resource_attributes),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProviderConfig":
        """Deserialize from dictionary."""
        batch_config = BatchExportConfig(
            max_queue_size=data.get("max_queue_size", 2048),
            max_export_batch_size=data.get("max_export_batch_size", 512),
            export_timeout_millis=data.get("export_timeout_millis", 30_000),
            schedule_delay_millis=data.get("schedule_delay_millis", 500),
            use_sync_export=data.get("use_sync_export", False),
        )

        return cls(
            enabled=data.get("enabled", True),
            provider=data.get("provider", PROVIDER_SDK),
            environment=data.get("environment", "development"),
            service_name=data.get("service_name", "unknown_service"),
            service_version=data.get("service_version"),
            otlp_enabled=data.get("otlp_enabled", True),
            otlp_endpoint=data.get("otlp_endpoint", "localhost:4317"),
            otlp_use_tls=data.get("otlp_use_tls", False),
            suppressed_instrumentations=list(
                data.get("suppressed_instrumentations", [])
            ),
            max_cached_tracers=data.get("max_cached_tracers", 1000),
            flush_timeout_millis=data.get("flush_timeout_millis", 30_000),
            batch_config=batch_config,
            extra_resource_attributes=dict(data.get("extra_resource_attributes", {})),
        )

    def validate(self) -> None:
        """Validate configuration."""
        if self.enabled and self.otlp_enabled:
            if not self.otlp_endpoint:
                raise ValueError("otlp_endpoint required when OTLP span export enabled")

        if self.batch_config.max_queue_size <= 0:
            raise ValueError("max_queue_size must be positive")

        if self.batch_config.max_export_batch_size <= 0:
            raise ValueError("max_export_batch_size must be positive")

        if (
            self.batch_config.max_export_batch_size
            > self.batch_config.max_queue_size
        ):
            raise ValueError("max_export_batch_size must not exceed max_queue_size")

        if self.max_cached_tracers <= 0:
            raise ValueError("max_cached_tracers must be positive")

        if self.flush_timeout_millis <= 0:
            raise ValueError("flush_timeout_millis must be positive")


def _discover_config_file() -> Optional[Path]:
    """
    Auto-discover tracing.json from standard locations.

    Search order:
    1. TRACEKIT_CONFIG env var (if set)
    2. configs/tracing.json (from current directory)
    3. ../configs/tracing.json (one level up)
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path)
        if path.exists():
            logger.debug(f"Found config via {CONFIG_ENV_VAR}: {path}")
            return path
        logger.warning(f"{CONFIG_ENV_VAR} points to missing file: {path}")

    search_paths = [
        Path("configs/tracing.json"),
        Path("../configs/tracing.json"),
    ]

    for path in search_paths:
        if path.exists():
            logger.debug(f"Found config at: {path.resolve()}")
            return path.resolve()

    return None


def _load_json_config(config_path: Optional[Path]) -> Dict[str, Any]:
    if config_path is None:
        return {}

    try:
        with open(config_path, "r") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Error loading tracing config from {config_path}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.error(f"Tracing config in {config_path} is not a JSON object")
        return {}

    section = data.get("tracing", data)
    if not isinstance(section, dict):
        logger.error(f"'tracing' section in {config_path} is not a JSON object")
        return {}

    logger.debug(f"Loaded tracing config from {config_path}")
    return section


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay standard OTEL_* and TRACEKIT_* environment variables."""
    data = dict(data)

    sdk_disabled = os.getenv("OTEL_SDK_DISABLED")
    if sdk_disabled and sdk_disabled.strip().lower() == "true":
        data["enabled"] = False

    service_name = os.getenv("OTEL_SERVICE_NAME")
    if service_name:
        data["service_name"] = service_name

    endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    if endpoint:
        data["otlp_endpoint"] = endpoint

    provider = os.getenv("TRACEKIT_PROVIDER")
    if provider:
        data["provider"] = provider

    suppressed = os.getenv("TRACEKIT_SUPPRESSED_INSTRUMENTATIONS")
    if suppressed:
        data["suppressed_instrumentations"] = [
            name.strip() for name in suppressed.split(",") if name.strip()
        ]

    return data


def load_provider_config(
    config_path: Optional[Union[str, Path]] = None,
) -> ProviderConfig:
    """
    Load provider configuration from JSON file and environment.

    Args:
        config_path: Path to a JSON config file. Defaults to auto-discovery.

    Returns:
        Validated ProviderConfig instance

    Raises:
        ValueError: If the resulting configuration is invalid
    """
    path = Path(config_path) if config_path is not None else _discover_config_file()
    if path is not None and not path.exists():
        logger.warning(f"Tracing config not found: {path}, using defaults")
        path = None

    data = _apply_env_overrides(_load_json_config(path))
    config = ProviderConfig.from_dict(data)
    config.validate()
    return config
