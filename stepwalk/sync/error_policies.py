"""
Error handling policies for StepWalk.

This module provides a flexible error handling system through the Policy pattern,
allowing users to define what the high-level walk API does when an entry
cannot be read. The iterator itself always moves past a failed entry; a policy
only decides whether the walk carries on, and what gets recorded.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from .._common.errors import EntryAccessError, ErrorThresholdExceeded

logger = logging.getLogger(__name__)


class ErrorPolicy(ABC):
    """
    Base class for error handling policies.

    Subclasses implement different strategies for handling entries
    that fail during a walk.
    """

    @abstractmethod
    def handle(self, error: EntryAccessError) -> None:
        """
        Handle an entry that could not be read.

        Args:
            error: The EntryAccessError raised by the iterator

        Returns:
            None to let the walk continue.

        Raises:
            Any exception to stop the walk.
        """
        pass


class FailFastPolicy(ErrorPolicy):
    """
    Policy that immediately re-raises any error, stopping the walk.

    Useful when data integrity is critical and partial results are not acceptable.
    """

    def handle(self, error: EntryAccessError) -> None:
        """Re-raise the error immediately."""
        raise error


class _RecordingPolicy(ErrorPolicy):
    """Shared bookkeeping for policies that let the walk continue."""

    def __init__(self):
        self.errors: List[Dict[str, Any]] = []
        self.skipped_paths: List[str] = []

    def _record(self, error: EntryAccessError) -> Dict[str, Any]:
        cause = error.cause
        record = {
            'path': error.path,
            'error': error,
            'error_type': type(cause).__name__ if cause is not None else type(error).__name__,
            'error_message': str(cause) if cause is not None else str(error),
        }
        self.errors.append(record)
        self.skipped_paths.append(error.path)
        return record

    def get_statistics(self) -> dict:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        return {
            'total_errors': len(self.errors),
            'permission_errors': sum(1 for e in self.errors if e['error_type'] == 'PermissionError'),
            'not_found_errors': sum(1 for e in self.errors if e['error_type'] == 'FileNotFoundError'),
            'skipped_paths': len(self.skipped_paths),
            'errors': self.errors,
        }


class ContinueOnErrorsPolicy(_RecordingPolicy):
    """
    Policy that logs errors and continues the walk.

    Errors are collected for later inspection. This is the default policy
    of the high-level API: process as much as possible despite failures.
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize the policy.

        Args:
            verbose: If True, log a warning for every skipped entry
        """
        super().__init__()
        self.verbose = verbose

    def handle(self, error: EntryAccessError) -> None:
        self._record(error)
        if not self.verbose:
            return
        if isinstance(error.cause, PermissionError):
            logger.warning("Skipping inaccessible path '%s': %s", error.path, error.cause)
        else:
            logger.warning("Error reading '%s': %s", error.path, error)


class CollectErrorsPolicy(_RecordingPolicy):
    """
    Policy that collects all errors without logging, for batch processing.

    Useful for collecting all errors and presenting them at the end.
    """

    def handle(self, error: EntryAccessError) -> None:
        """Silently collect the error."""
        self._record(error)


class ThresholdPolicy(_RecordingPolicy):
    """
    Policy that tolerates errors up to a threshold, then fails fast.

    Useful when some errors are expected but too many indicate
    a systemic problem that should halt processing.
    """

    def __init__(self, max_errors: int = 10, verbose: bool = True):
        """
        Initialize threshold policy.

        Args:
            max_errors: Maximum errors to tolerate before failing
            verbose: If True, log a warning for every tolerated error
        """
        super().__init__()
        self.max_errors = max_errors
        self.verbose = verbose

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def handle(self, error: EntryAccessError) -> None:
        """Handle error if under threshold, otherwise raise."""
        self._record(error)

        if self.error_count > self.max_errors:
            raise ErrorThresholdExceeded(
                f"Error threshold exceeded ({self.max_errors} errors)"
            ) from error

        if self.verbose:
            logger.warning("[%d/%d] Error reading '%s': %s",
                           self.error_count, self.max_errors, error.path, error)
