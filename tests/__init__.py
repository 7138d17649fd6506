"""
Test suite for tracekit.

Usage:
    pytest tests/tracing
"""
