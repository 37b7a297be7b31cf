"""
Structured logging utilities for sitemap generation and serving.
"""

import logging
import time
from typing import Any


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module."""
    return logging.getLogger(name)


def build_request_context(request, **additional_context: Any) -> dict[str, Any]:
    """
    Build structured context dictionary for logging.

    Args:
        request: Django request object (may be None outside a request)
        **additional_context: Additional context to include

    Returns:
        Dictionary with structured context
    """
    context: dict[str, Any] = {}
    if request is not None:
        context.update(
            {
                "user_agent": request.META.get("HTTP_USER_AGENT", "Unknown"),
                "remote_addr": request.META.get("REMOTE_ADDR", "Unknown"),
                "method": request.method,
                "path": request.path,
            }
        )

    context.update(additional_context)
    return context


def log_index_build_start(logger: logging.Logger, context: dict[str, Any]) -> float:
    """
    Log the start of a sitemap index build.

    Returns:
        Start time for performance measurement
    """
    start_time = time.time()
    logger.debug(
        "Building sitemap index",
        extra={**context, "event": "sitemap_index_start"},
    )
    return start_time


def log_index_build_success(
    logger: logging.Logger,
    context: dict[str, Any],
    start_time: float,
    url_count: int,
):
    """
    Log a completed sitemap index build.

    Args:
        logger: Logger instance
        context: Request context
        start_time: Start time from log_index_build_start
        url_count: Number of <sitemap> entries written
    """
    processing_time = time.time() - start_time
    logger.info(
        f"Sitemap index built with {url_count} entries",
        extra={
            **context,
            "event": "sitemap_index_success",
            "url_count": url_count,
            "processing_time_ms": round(processing_time * 1000, 2),
        },
    )
