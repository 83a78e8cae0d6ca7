"""Error handling framework for GitMate."""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Any, Optional


class ErrorCategory(Enum):
    """How far an error is allowed to propagate."""
    ADVISORY = "advisory"   # logged, the run continues
    USAGE = "usage"         # logged, no git operation is performed
    FATAL = "fatal"         # the run stops before touching any branch


class GitMateError(Exception):
    """Base class for errors raised by GitMate."""


class NotAGitRepositoryError(GitMateError):
    """Raised when the working directory is not inside a git repository."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"not a git repository: {path}")


class RepositoryOperationError(GitMateError):
    """Raised by the repository accessor when a git operation fails."""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        self.message = message
        super().__init__(message)


@dataclass
class ErrorResponse:
    """Structured record of an error that occurred during a run."""
    error: str
    error_code: str
    message: str
    timestamp: str
    category: str
    context: Optional[Dict[str, Any]] = None

    @property
    def is_fatal(self) -> bool:
        return self.category == ErrorCategory.FATAL.value


class ErrorHandler:
    """Builds error records and logs them at the level their category calls for."""

    def __init__(self):
        self.logger = logging.getLogger('gitmate.error_handler')

    def _build(self, error: str, error_code: str, message: str,
               category: ErrorCategory, context: Optional[Dict[str, Any]]) -> ErrorResponse:
        return ErrorResponse(
            error=error,
            error_code=error_code,
            message=message,
            timestamp=datetime.now().isoformat(),
            category=category.value,
            context=context or None
        )

    def handle_advisory(self, error_code: str, message: str, context: Dict[str, Any] = None,
                        log: bool = True) -> ErrorResponse:
        """Record a failure that does not stop the run.

        Pass ``log=False`` when the failure has already been logged where it happened.
        """
        context = context or {}
        response = self._build("Operation failed", error_code, message, ErrorCategory.ADVISORY, context)

        if log:
            self.logger.warning(
                message,
                extra={
                    'operation': context.get('operation', 'advisory'),
                    'error_code': error_code
                }
            )
        return response

    def handle_usage_error(self, message: str, context: Dict[str, Any] = None) -> ErrorResponse:
        """Record a command-line usage error."""
        response = self._build("Usage error", "USAGE_ERROR", message, ErrorCategory.USAGE, context)

        self.logger.error(
            f"error: {message}",
            extra={'operation': 'usage', 'error_code': "USAGE_ERROR"}
        )
        return response

    def handle_fatal(self, error_code: str, message: str, context: Dict[str, Any] = None) -> ErrorResponse:
        """Record an error that aborts the run."""
        context = context or {}
        response = self._build("Run aborted", error_code, message, ErrorCategory.FATAL, context)

        self.logger.error(
            f"critical failure: {message}",
            extra={
                'operation': context.get('operation', 'fatal'),
                'error_code': error_code,
                'repository_path': context.get('repository_path')
            }
        )
        return response

    def handle_not_a_repository(self, error: NotAGitRepositoryError, context: Dict[str, Any] = None) -> ErrorResponse:
        """Record a failure to open the repository. Always fatal."""
        return self.handle_fatal("GIT_NOT_REPOSITORY", f"Not a git repository: {error.path}", context)


# Initialize global error handler
error_handler = ErrorHandler()
