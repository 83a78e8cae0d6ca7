"""Remote discovery, fetching and resolution."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..config import DEFAULT_REMOTE, FALLBACK_BRANCH
from ..errors import RepositoryOperationError
from ..shell import ShellExecutor
from .error_strategies import categorize_git_error, describe_error
from .repository import RepositoryAccessor
from .utils import GitSyncResult, create_git_sync_result, get_error_str


@dataclass(frozen=True)
class RemoteInfo:
    """What GitMate knows about one remote."""
    name: str
    url: str
    default_branch: str = FALLBACK_BRANCH


@dataclass
class FetchSummary:
    """Outcome of updating every remote of a repository."""
    remotes: List[RemoteInfo]
    results: List[GitSyncResult] = field(default_factory=list)

    @property
    def failures(self) -> List[GitSyncResult]:
        return [result for result in self.results if not result.success]


def fetch_remote_info(accessor: RepositoryAccessor, remote, fallback_branch: str = FALLBACK_BRANCH) -> RemoteInfo:
    """
    Collect name, URL and default branch of a remote.

    The default branch is advisory only: if it cannot be determined the
    fallback branch is used and a warning is logged. This function never raises.
    """
    logger = logging.getLogger('gitmate.git_sync.remote_utils')

    try:
        default_branch = accessor.get_remote_default_branch(remote.name)
    except RepositoryOperationError as e:
        logger.warning(f'warn: unable to fetch default branch info for remote "{remote.name}"')
        logger.warning(f'warn: "{get_error_str(e)}"')
        logger.warning(f'warn: falling back to "{fallback_branch}".')
        default_branch = fallback_branch

    return RemoteInfo(
        name=remote.name,
        url=accessor.get_remote_url(remote) or "",
        default_branch=default_branch
    )


def fetch_remote(shell: ShellExecutor, remote_name: str) -> GitSyncResult:
    """Run ``git fetch <remote>`` and report the outcome without raising."""
    result = shell.run(["git", "fetch", remote_name])
    if result.success:
        return create_git_sync_result(
            success=True,
            message=f"fetched remote '{remote_name}'",
            operation="fetch_remote",
            value=remote_name
        )

    error_message = result.error_message
    return create_git_sync_result(
        success=False,
        message=error_message,
        operation="fetch_remote",
        error_code="FETCH_FAILED",
        category=categorize_git_error(error_message),
        value=remote_name
    )


def fetch_remotes(
    accessor: RepositoryAccessor,
    shell: ShellExecutor,
    fallback_branch: str = FALLBACK_BRANCH,
    max_workers: int = 4
) -> Optional[FetchSummary]:
    """
    Update all remotes, if there are any.

    Remote metadata is gathered concurrently, then ``git fetch`` runs for one
    remote at a time in listed order. A failing fetch is logged and does not
    stop the remaining ones.

    Returns:
        FetchSummary with the remotes in listed order, or None when the
        repository has no remotes (nothing is fetched in that case).
    """
    logger = logging.getLogger('gitmate.git_sync.remote_utils')
    logger.info("fetching remotes list...")

    remotes = accessor.list_remotes()
    if not remotes:
        logger.info("did not find any remotes. Cancelling fetch")
        return None

    # Executor.map yields results in input order, whatever order they finish in
    with ThreadPoolExecutor(max_workers=min(max_workers, len(remotes))) as executor:
        remote_infos = list(executor.map(
            lambda remote: fetch_remote_info(accessor, remote, fallback_branch),
            remotes
        ))

    logger.info("fetching remotes: " + ", ".join(
        f"{info.name} ({info.url or 'no url'}, default: {info.default_branch})" for info in remote_infos
    ))

    summary = FetchSummary(remotes=remote_infos)
    for info in remote_infos:
        result = fetch_remote(shell, info.name)
        summary.results.append(result)
        if not result.success:
            logger.warning(
                f'error: unable to fetch remote "{info.name}": {result.message}',
                extra={'operation': 'fetch_remote', 'error_code': result.error_code}
            )
            logger.warning(f"hint: {describe_error(result.message)}")

    if summary.failures:
        logger.info(f"fetch completed with {len(summary.failures)} failure(s).")
    else:
        logger.info("fetch complete.")
    return summary


def resolve_target_remote(
    remotes: Optional[Sequence[RemoteInfo]],
    requested_name: Optional[str] = None,
    default_remote: str = DEFAULT_REMOTE
) -> GitSyncResult:
    """
    Decide which remote the branches are merged against.

    Without a requested name the default remote is returned as is, even if
    the repository has no remote by that name. A requested name must match
    one of ``remotes`` exactly.
    """
    if requested_name is None:
        return create_git_sync_result(
            success=True,
            message=f"using default remote '{default_remote}'",
            operation="resolve_target_remote",
            value=default_remote
        )

    for remote in remotes or ():
        if remote.name == requested_name:
            return create_git_sync_result(
                success=True,
                message=f"using remote '{requested_name}'",
                operation="resolve_target_remote",
                value=requested_name
            )

    return create_git_sync_result(
        success=False,
        message=f'could not find remote "{requested_name}"',
        operation="resolve_target_remote",
        error_code="REMOTE_NOT_FOUND",
        value=requested_name
    )
