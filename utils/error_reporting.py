"""
Centralized error reporting.

Failures that a handler catches and degrades around (bot verification outages,
email delivery, rating refreshes) are reported here so they stay visible in the
logs even though the user-facing request succeeds.
"""
import logging
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


def _format_context(extra_context: Optional[Dict[str, Any]]) -> str:
    return f" | Context: {extra_context}" if extra_context else ""


def report_error(
    error: Exception,
    source: str,
    extra_context: Optional[Dict[str, Any]] = None,
    include_traceback: bool = True
) -> None:
    """
    Log a caught exception with its origin.

    Args:
        error: The exception that occurred
        source: Where the error originated (e.g. 'submit_review', 'approve_application')
        extra_context: Identifiers useful for debugging (never raw emails or IPs)
        include_traceback: Whether to include the full traceback

    Example:
        try:
            refresh_chef_rating_stats(chef_id)
        except Exception as e:
            report_error(e, 'verify_review', {'chef_id': chef_id})
    """
    if include_traceback:
        logger.exception(f"[{source}] {error}{_format_context(extra_context)}")
    else:
        logger.error(f"[{source}] {error}{_format_context(extra_context)}")


def report_warning(
    message: str,
    source: str,
    extra_context: Optional[Dict[str, Any]] = None
) -> None:
    """Log a non-exception problem (e.g. a degraded dependency)."""
    logger.warning(f"[{source}] {message}{_format_context(extra_context)}")
