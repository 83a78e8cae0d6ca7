"""Error types and categorization for Git synchronization operations."""

from dataclasses import dataclass
from enum import Enum
from typing import List


class ErrorCategory(Enum):
    """Categories of git failures, used to pick a hint for the user."""
    NETWORK = "network"
    AUTHENTICATION = "authentication"
    REPOSITORY_ACCESS = "repository_access"
    BRANCH_DETECTION = "branch_detection"
    MERGE_CONFLICT = "merge_conflict"
    DIVERGED = "diverged"
    DIRTY_WORKTREE = "dirty_worktree"
    REPOSITORY_CORRUPTION = "repository_corruption"
    UNKNOWN = "unknown"


class RecoveryAction(Enum):
    """What GitMate does after a failure of this kind."""
    SKIP = "skip"
    FALLBACK = "fallback"
    USER_ACTION_REQUIRED = "user_action_required"


@dataclass
class ErrorResolution:
    """Information about how to resolve a specific error."""
    category: ErrorCategory
    action: RecoveryAction
    user_message: str
    resolution_steps: List[str]
