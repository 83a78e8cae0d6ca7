"""Git synchronization functionality for GitMate."""

from .utils import GitSyncResult, create_git_sync_result
from .repository import RepositoryAccessor, get_local_branch_name, get_tracking_ref
from .remote_utils import RemoteInfo, FetchSummary, fetch_remote_info, fetch_remotes, resolve_target_remote
from .branch_utils import BranchSyncState, BranchSyncReport, sync_branch, sync_branches
from .operations import RunAction, RunOutcome, RunState, execute_fetch, run_fetch

__all__ = [
    'GitSyncResult',
    'create_git_sync_result',
    'RepositoryAccessor',
    'get_local_branch_name',
    'get_tracking_ref',
    'RemoteInfo',
    'FetchSummary',
    'fetch_remote_info',
    'fetch_remotes',
    'resolve_target_remote',
    'BranchSyncState',
    'BranchSyncReport',
    'sync_branch',
    'sync_branches',
    'RunAction',
    'RunOutcome',
    'RunState',
    'execute_fetch',
    'run_fetch'
]
