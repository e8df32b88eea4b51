"""Structured logging for requests and pagination.

This module provides telemetry hooks for the REST and pagination layers,
emitting structured log records (event name plus ``extra`` fields).
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_rate_limit_wait(*, delay: float, cooldown: float) -> None:
    """Log a request being held back by the rate limiter.

    Args:
        delay: Seconds the request will wait before starting
        cooldown: Configured spacing between request starts
    """
    logger.debug(
        "rate_limit_wait",
        extra={
            "delay_ms": delay * 1000.0,
            "cooldown_ms": cooldown * 1000.0,
        },
    )


def log_request_failed(
    *,
    method: str,
    url: str,
    status: int | None,
    error_type: str,
    error_message: str,
) -> None:
    """Log a request that failed at the transport or HTTP level."""
    logger.warning(
        "request_failed",
        extra={
            "method": method,
            "url": url,
            "status": status,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_page_fetched(
    *,
    endpoint_id: str,
    cursor: str | None,
    next_cursor: str | None,
    records: int,
    latency_ms: float | None = None,
) -> None:
    """Log completion of a single page request.

    Args:
        endpoint_id: Endpoint identifier
        cursor: Cursor the page was requested with (None for the first page)
        next_cursor: Cursor computed for the following page
        records: Number of records decoded from the page
        latency_ms: Latency in milliseconds (optional)
    """
    logger.info(
        "page_fetched",
        extra={
            "endpoint_id": endpoint_id,
            "cursor": cursor,
            "next_cursor": next_cursor,
            "records": records,
            "latency_ms": latency_ms,
        },
    )


def log_page_error(
    *,
    endpoint_id: str,
    cursor: str | None,
    error_type: str,
    error_message: str,
) -> None:
    """Log a page request that failed.

    Args:
        endpoint_id: Endpoint identifier
        cursor: Cursor the page was requested with
        error_type: Exception class name (e.g. "HttpError", "SerializationError")
        error_message: Error message
    """
    logger.error(
        "page_error",
        extra={
            "endpoint_id": endpoint_id,
            "cursor": cursor,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_search_exhausted(*, endpoint_id: str, pages: int, records: int) -> None:
    """Log a search that reached an empty page."""
    logger.info(
        "search_exhausted",
        extra={
            "endpoint_id": endpoint_id,
            "pages": pages,
            "records": records,
        },
    )


def log_batch_requested(*, endpoint_id: str, batch_index: int, ids: int) -> None:
    """Log an id batch about to be requested."""
    logger.debug(
        "batch_requested",
        extra={
            "endpoint_id": endpoint_id,
            "batch_index": batch_index,
            "ids": ids,
        },
    )
