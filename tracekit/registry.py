"""
Tracer provider registry with entry points discovery.

Backends self-register via setuptools entry points:
    entry_points={
        "tracekit.tracer_providers": [
            "sdk = tracekit.sdk:SdkTracerProvider",
        ],
    }

Built-in providers are registered directly so a source checkout works
without installed metadata.
"""

import importlib.metadata
import logging
from typing import Dict, List, Optional, Type

from .noop import NoOpTracerProvider
from .provider import TracerProvider
from .sdk import SdkTracerProvider
from .settings import PROVIDER_NOOP, PROVIDER_SDK, ProviderConfig

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "tracekit.tracer_providers"


class TracerProviderRegistry:
    """Registry mapping backend names to TracerProvider classes."""

    _providers: Dict[str, Type[TracerProvider]] = {
        PROVIDER_SDK: SdkTracerProvider,
        PROVIDER_NOOP: NoOpTracerProvider,
    }
    _entry_points_loaded = False

    @classmethod
    def discover_providers(cls) -> None:
        """
        Auto-discover providers via entry points.

        Raises:
            ValueError: If one name is registered by two different modules
        """
        if cls._entry_points_loaded:
            return

        logger.info("Discovering tracer providers via entry points...")

        for entry_point in importlib.metadata.entry_points(group=ENTRY_POINT_GROUP):
            name = entry_point.name

            if name in cls._providers:
                existing_module = cls._providers[name].__module__
                new_module = entry_point.value.split(":")[0]

                if existing_module != new_module:
                    raise ValueError(
                        f"Conflict: tracer provider '{name}' registered by multiple packages:\n"
                        f"  - {existing_module}\n"
                        f"  - {new_module}"
                    )
                logger.debug(
                    f"Provider '{name}' already registered, skipping duplicate entry point"
                )
                continue

            try:
                cls._providers[name] = entry_point.load()
                logger.info(f"Discovered tracer provider: {name} ({entry_point.value})")
            except Exception as e:
                logger.error(f"Failed to load tracer provider '{name}': {e}")

        cls._entry_points_loaded = True
        logger.info(f"Tracer providers available: {list(cls._providers.keys())}")

    @classmethod
    def register(cls, name: str, provider_class: Type[TracerProvider]) -> None:
        """
        Register a provider class under a name.

        Raises:
            ValueError: If a different class is already registered under name
        """
        existing = cls._providers.get(name)
        if existing is not None and existing is not provider_class:
            raise ValueError(
                f"Tracer provider '{name}' already registered as "
                f"{existing.__module__}.{existing.__name__}"
            )
        cls._providers[name] = provider_class
        logger.debug(f"Registered tracer provider: {name}")

    @classmethod
    def list_providers(cls) -> List[str]:
        """List all known provider names."""
        cls.discover_providers()
        return list(cls._providers.keys())

    @classmethod
    def is_provider_available(cls, name: str) -> bool:
        cls.discover_providers()
        return name in cls._providers

    @classmethod
    def create(cls, config: Optional[ProviderConfig] = None) -> TracerProvider:
        """
        Create the provider selected by config.provider.

        A disabled config always yields a NoOpTracerProvider.

        Raises:
            ValueError: If the provider name is unknown
        """
        config = config or ProviderConfig()

        if not config.enabled:
            logger.info("Tracing disabled, using no-op tracer provider")
            return NoOpTracerProvider(config)

        cls.discover_providers()

        provider_class = cls._providers.get(config.provider)
        if provider_class is None:
            available = list(cls._providers.keys())
            raise ValueError(
                f"Tracer provider '{config.provider}' not found. "
                f"Available providers: {available}"
            )

        provider = provider_class(config)
        logger.info(f"Created tracer provider: {config.provider}")
        return provider


def create_tracer_provider(config: Optional[ProviderConfig] = None) -> TracerProvider:
    """Create a tracer provider from config (defaults to ProviderConfig())."""
    return TracerProviderRegistry.create(config)
