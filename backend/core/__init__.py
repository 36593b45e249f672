"""Core backend infrastructure for the HLS fixture server.

This package contains configuration, logging, and dependency helpers
used by the FastAPI application entrypoint.
"""
