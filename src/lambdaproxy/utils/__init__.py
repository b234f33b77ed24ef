"""Shared utilities for the dispatch layer."""

from lambdaproxy.utils.observability import logger, metrics, tracer

__all__ = [
    "logger",
    "tracer",
    "metrics",
]
