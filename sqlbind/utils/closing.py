"""Helpers for releasing connections and statements."""

from typing import Any, Optional

from sqlbind.utils.logging import get_logger

__all__ = ("close", "close_after_error", "close_quietly", "commit_and_close", "rollback", "rollback_and_close")

logger = get_logger("utils.closing")


def close(resource: Optional[Any]) -> None:
    """Close ``resource`` unless it is ``None``. Errors propagate."""
    if resource is not None:
        resource.close()


def close_quietly(*resources: Optional[Any]) -> None:
    """Close each resource in order, logging and suppressing failures.

    Every resource gets a close attempt even when an earlier one fails.
    """
    for resource in resources:
        if resource is None:
            continue
        try:
            resource.close()
        except Exception:
            logger.debug("Suppressed error while closing %r", resource, exc_info=True)


def close_after_error(resource: Optional[Any], description: str = "resource") -> None:
    """Close ``resource`` while another error is propagating.

    A failure to close is logged at WARNING and suppressed so the caller can
    re-raise the error that caused the cleanup.
    """
    if resource is None:
        return
    try:
        resource.close()
    except Exception:
        logger.warning("Failed to release %s after an error", description, exc_info=True)


def commit_and_close(connection: Optional[Any]) -> None:
    """Commit and then close ``connection``; the close runs even if the commit fails."""
    if connection is None:
        return
    try:
        connection.commit()
    finally:
        connection.close()


def rollback(connection: Optional[Any]) -> None:
    if connection is not None:
        connection.rollback()


def rollback_and_close(connection: Optional[Any]) -> None:
    """Roll back and then close ``connection``; the close runs even if the rollback fails."""
    if connection is None:
        return
    try:
        connection.rollback()
    finally:
        connection.close()
