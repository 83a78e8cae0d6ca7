"""Categorization of git failure messages and the hints shown for them."""

import logging
from typing import Dict, Optional

from .error_types import ErrorCategory, ErrorResolution, RecoveryAction


def build_error_strategies() -> Dict[ErrorCategory, ErrorResolution]:
    """Build the resolution hints for each error category."""
    return {
        ErrorCategory.NETWORK: ErrorResolution(
            category=ErrorCategory.NETWORK,
            action=RecoveryAction.SKIP,
            user_message="Network connection issue detected",
            resolution_steps=[
                "Check your internet connection",
                "Verify the remote URL is reachable",
                "Run the fetch again once the remote is available"
            ]
        ),

        ErrorCategory.AUTHENTICATION: ErrorResolution(
            category=ErrorCategory.AUTHENTICATION,
            action=RecoveryAction.USER_ACTION_REQUIRED,
            user_message="Authentication failed - please check your credentials",
            resolution_steps=[
                "Verify your git credentials or SSH keys are configured",
                "Check that you have access to the repository",
                "Try running 'git config --global credential.helper' to check credential storage"
            ]
        ),

        ErrorCategory.REPOSITORY_ACCESS: ErrorResolution(
            category=ErrorCategory.REPOSITORY_ACCESS,
            action=RecoveryAction.USER_ACTION_REQUIRED,
            user_message="Remote repository not accessible - please verify the URL",
            resolution_steps=[
                "Check the remote URL with 'git remote -v'",
                "Ensure the repository still exists"
            ]
        ),

        ErrorCategory.BRANCH_DETECTION: ErrorResolution(
            category=ErrorCategory.BRANCH_DETECTION,
            action=RecoveryAction.SKIP,
            user_message="Branch does not exist locally or on the remote",
            resolution_steps=[
                "Create the local branch with 'git checkout -b <branch> <remote>/<branch>'",
                "Or ignore this message if the repository does not use this branch"
            ]
        ),

        ErrorCategory.MERGE_CONFLICT: ErrorResolution(
            category=ErrorCategory.MERGE_CONFLICT,
            action=RecoveryAction.USER_ACTION_REQUIRED,
            user_message="Merge conflicts detected",
            resolution_steps=[
                "Resolve the conflicts by hand and commit",
                "Or abort with 'git merge --abort'"
            ]
        ),

        ErrorCategory.DIVERGED: ErrorResolution(
            category=ErrorCategory.DIVERGED,
            action=RecoveryAction.USER_ACTION_REQUIRED,
            user_message="Local branch has diverged from the remote and cannot be fast-forwarded",
            resolution_steps=[
                "Rebase or merge the branch by hand"
            ]
        ),

        ErrorCategory.DIRTY_WORKTREE: ErrorResolution(
            category=ErrorCategory.DIRTY_WORKTREE,
            action=RecoveryAction.USER_ACTION_REQUIRED,
            user_message="Local changes would be overwritten",
            resolution_steps=[
                "Commit or stash your changes before running the fetch"
            ]
        ),

        ErrorCategory.REPOSITORY_CORRUPTION: ErrorResolution(
            category=ErrorCategory.REPOSITORY_CORRUPTION,
            action=RecoveryAction.USER_ACTION_REQUIRED,
            user_message="Local repository appears to be damaged",
            resolution_steps=[
                "Run 'git fsck' to inspect the repository"
            ]
        ),

        ErrorCategory.UNKNOWN: ErrorResolution(
            category=ErrorCategory.UNKNOWN,
            action=RecoveryAction.SKIP,
            user_message="Unexpected git error",
            resolution_steps=[]
        )
    }


def build_error_patterns() -> Dict[str, ErrorCategory]:
    """Build mapping of error patterns to categories.

    Patterns are checked in insertion order, so more specific patterns come first.
    """
    return {
        # Network errors
        "could not resolve host": ErrorCategory.NETWORK,
        "connection refused": ErrorCategory.NETWORK,
        "network is unreachable": ErrorCategory.NETWORK,
        "connection timed out": ErrorCategory.NETWORK,
        "no route to host": ErrorCategory.NETWORK,
        "temporary failure in name resolution": ErrorCategory.NETWORK,
        "timeout": ErrorCategory.NETWORK,

        # Authentication errors
        "authentication failed": ErrorCategory.AUTHENTICATION,
        "permission denied": ErrorCategory.AUTHENTICATION,
        "invalid credentials": ErrorCategory.AUTHENTICATION,
        "forbidden": ErrorCategory.AUTHENTICATION,

        # Repository access errors
        "repository not found": ErrorCategory.REPOSITORY_ACCESS,
        "does not appear to be a git repository": ErrorCategory.REPOSITORY_ACCESS,
        "could not read from remote repository": ErrorCategory.REPOSITORY_ACCESS,

        # Local state
        "would be overwritten": ErrorCategory.DIRTY_WORKTREE,
        "not possible to fast-forward": ErrorCategory.DIVERGED,
        "not possible because you have unmerged files": ErrorCategory.MERGE_CONFLICT,
        "automatic merge failed": ErrorCategory.MERGE_CONFLICT,
        "merge conflict": ErrorCategory.MERGE_CONFLICT,
        "unmerged paths": ErrorCategory.MERGE_CONFLICT,

        # Branch detection errors
        "branch does not exist": ErrorCategory.BRANCH_DETECTION,
        "no such branch": ErrorCategory.BRANCH_DETECTION,
        "did not match any": ErrorCategory.BRANCH_DETECTION,
        "not something we can merge": ErrorCategory.BRANCH_DETECTION,
        "unknown revision": ErrorCategory.BRANCH_DETECTION,

        # Repository corruption
        "corrupt": ErrorCategory.REPOSITORY_CORRUPTION,
        "invalid object": ErrorCategory.REPOSITORY_CORRUPTION,
        "loose object": ErrorCategory.REPOSITORY_CORRUPTION,
    }


_ERROR_PATTERNS = build_error_patterns()
_ERROR_STRATEGIES = build_error_strategies()


def categorize_git_error(error_message: Optional[str]) -> ErrorCategory:
    """
    Categorize a git failure based on its message.

    Args:
        error_message: The error message or stderr output to categorize

    Returns:
        ErrorCategory enum value, UNKNOWN when nothing matches
    """
    if not error_message:
        return ErrorCategory.UNKNOWN

    error_lower = error_message.lower()
    for pattern, category in _ERROR_PATTERNS.items():
        if pattern in error_lower:
            logging.getLogger('gitmate.git_sync.error_strategies').debug(
                f"Categorized error as {category}: pattern '{pattern}' found"
            )
            return category

    return ErrorCategory.UNKNOWN


def get_resolution(category: ErrorCategory) -> ErrorResolution:
    """Return the resolution hints for a category."""
    return _ERROR_STRATEGIES[category]


def describe_error(error_message: Optional[str]) -> str:
    """Build a one-line hint for a git failure, e.g. for a log line."""
    resolution = get_resolution(categorize_git_error(error_message))
    if resolution.resolution_steps:
        return f"{resolution.user_message} ({resolution.resolution_steps[0]})"
    return resolution.user_message
