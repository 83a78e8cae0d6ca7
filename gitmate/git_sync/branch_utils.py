"""Checkout and fast-forward of the configured branches."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from ..errors import RepositoryOperationError
from .error_strategies import categorize_git_error, describe_error
from .repository import RepositoryAccessor, get_tracking_ref
from .utils import GitSyncResult, create_git_sync_result, get_error_str


class BranchSyncState(Enum):
    """Progress of a single branch through a sync."""
    PENDING = "pending"
    CHECKED_OUT = "checked_out"
    MERGED = "merged"
    FAILED = "failed"


@dataclass
class BranchSyncReport:
    """What happened to one branch."""
    requested: str
    state: BranchSyncState = BranchSyncState.PENDING
    local_branch: Optional[str] = None
    result: Optional[GitSyncResult] = None

    @property
    def success(self) -> bool:
        return self.state == BranchSyncState.MERGED


def sync_branch(accessor: RepositoryAccessor, remote_name: str, branch_name: str) -> BranchSyncReport:
    """
    Check out ``branch_name`` and fast-forward it to its tracking ref on ``remote_name``.

    Never raises: a checkout or merge failure moves the report to FAILED and
    is logged with the branch name and its cause.
    """
    logger = logging.getLogger('gitmate.git_sync.branch_utils')
    report = BranchSyncReport(requested=branch_name)

    try:
        accessor.checkout_branch(branch_name)
        # Trust what git checked out, not what was asked for
        current_branch = accessor.get_current_branch()
        report.local_branch = current_branch
        report.state = BranchSyncState.CHECKED_OUT

        logger.info(f'fetching branch "{branch_name}" - ({current_branch}) ...')
        accessor.merge_branches(current_branch, get_tracking_ref(remote_name, current_branch))
    except RepositoryOperationError as e:
        error_message = get_error_str(e)
        report.state = BranchSyncState.FAILED
        report.result = create_git_sync_result(
            success=False,
            message=error_message,
            operation=e.operation,
            error_code="BRANCH_SYNC_FAILED",
            branch_used=branch_name,
            category=categorize_git_error(error_message)
        )
        logger.warning(
            f'error: unable to fetch "{branch_name}": {error_message}',
            extra={'operation': 'sync_branch', 'error_code': "BRANCH_SYNC_FAILED"}
        )
        logger.debug(f"hint: {describe_error(error_message)}")
        return report

    report.state = BranchSyncState.MERGED
    report.result = create_git_sync_result(
        success=True,
        message=f"merged {get_tracking_ref(remote_name, report.local_branch)}",
        operation="sync_branch",
        branch_used=report.local_branch
    )
    logger.info("...merge complete.")
    return report


def sync_branches(accessor: RepositoryAccessor, remote_name: str, branches: Sequence[str]) -> List[BranchSyncReport]:
    """Sync each branch in order, one at a time.

    The branches share one working tree, so this must never run in parallel.
    """
    logger = logging.getLogger('gitmate.git_sync.branch_utils')
    logger.info(f"fetching branches: {', '.join(branches)}")

    reports = [sync_branch(accessor, remote_name, branch) for branch in branches]

    failed = [report.requested for report in reports if not report.success]
    if failed:
        logger.info(f"fetch complete ({len(failed)} branch(es) skipped: {', '.join(failed)}).")
    else:
        logger.info("fetch complete.")
    return reports
