"""
Setup configuration for the tracekit tracer provider library.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_path = Path(__file__).parent / "README.md"
long_description = ""
if readme_path.exists():
    long_description = readme_path.read_text()

setup(
    name="tracekit",
    version="0.1.0",
    author="Tracekit Team",
    description="Tracer provider layer for OpenTelemetry",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["tracekit", "tracekit.*"]),
    python_requires=">=3.10",
    install_requires=[
        "opentelemetry-api>=1.25.0",
        "opentelemetry-sdk>=1.25.0",
        "opentelemetry-exporter-otlp-proto-grpc>=1.25.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "pytest-mock>=3.10.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "tracekit.tracer_providers": [
            "sdk = tracekit.sdk:SdkTracerProvider",
            "noop = tracekit.noop:NoOpTracerProvider",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries",
        "Topic :: System :: Monitoring",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
