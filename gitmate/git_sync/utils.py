"""Utility classes and functions for Git synchronization."""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .error_types import ErrorCategory


@dataclass
class GitSyncResult:
    """Result of a single Git synchronization operation."""
    success: bool
    message: str
    operation: str
    error_code: Optional[str] = None
    branch_used: Optional[str] = None
    category: Optional["ErrorCategory"] = None
    value: Optional[str] = None


def create_git_sync_result(
    success: bool,
    message: str,
    operation: str,
    error_code: Optional[str] = None,
    branch_used: Optional[str] = None,
    category: Optional["ErrorCategory"] = None,
    value: Optional[str] = None
) -> GitSyncResult:
    """
    Helper function to create GitSyncResult instances.

    Args:
        success: Whether the operation was successful
        message: Descriptive message about the operation result
        operation: Name of the operation that was performed
        error_code: Optional error code for failed operations
        branch_used: Optional branch name that was used in the operation
        category: Optional category of a failed operation
        value: Optional payload of a successful operation (e.g. a remote name)

    Returns:
        GitSyncResult instance with all fields populated
    """
    return GitSyncResult(
        success=success,
        message=message,
        operation=operation,
        error_code=error_code,
        branch_used=branch_used,
        category=category,
        value=value
    )


def get_error_str(error: BaseException) -> str:
    """Return the most useful single-line description of an exception."""
    stderr = getattr(error, "stderr", None)
    if isinstance(stderr, str) and stderr.strip():
        return stderr.strip().splitlines()[-1].strip()
    message = str(error).strip()
    return message or error.__class__.__name__
