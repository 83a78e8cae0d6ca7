"""The ``fetch`` run: update remotes, sync branches, restore and report."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..config import Config
from ..console import GitMateConsole
from ..errors import ErrorResponse, NotAGitRepositoryError, RepositoryOperationError, error_handler
from ..shell import ShellExecutor
from .branch_utils import BranchSyncReport, sync_branches
from .error_strategies import describe_error
from .remote_utils import FetchSummary, fetch_remotes, resolve_target_remote
from .repository import RepositoryAccessor
from .utils import get_error_str

EXIT_OK = 0
EXIT_FATAL = 1

HEADER_TITLE = "GitMate Fetch"


class RunAction(Enum):
    """Whether the run may go on after a step."""
    CONTINUE = "continue"
    ABORT = "abort"


@dataclass(frozen=True)
class RunOutcome:
    """Result of an orchestration step."""
    action: RunAction
    reason: Optional[str] = None
    exit_code: int = EXIT_OK

    @classmethod
    def proceed(cls) -> "RunOutcome":
        return cls(action=RunAction.CONTINUE)

    @classmethod
    def abort(cls, reason: str, exit_code: int = EXIT_FATAL) -> "RunOutcome":
        return cls(action=RunAction.ABORT, reason=reason, exit_code=exit_code)

    @property
    def aborted(self) -> bool:
        return self.action == RunAction.ABORT


@dataclass
class RunState:
    """Everything a run learns along the way."""
    original_branch: Optional[str] = None
    target_remote: Optional[str] = None
    fetch_summary: Optional[FetchSummary] = None
    branch_reports: List[BranchSyncReport] = field(default_factory=list)
    errors: List[ErrorResponse] = field(default_factory=list)
    restored: bool = False


def capture_current_branch(accessor: RepositoryAccessor, state: RunState) -> RunOutcome:
    """Remember the checked-out branch so it can be restored at the end."""
    try:
        state.original_branch = accessor.get_current_branch()
    except RepositoryOperationError as e:
        state.errors.append(error_handler.handle_fatal(
            "CURRENT_BRANCH_UNKNOWN",
            f"unable to determine the current branch: {get_error_str(e)}",
            {'operation': 'capture_current_branch'}
        ))
        return RunOutcome.abort("current branch unknown")
    return RunOutcome.proceed()


def update_remotes(config: Config, accessor: RepositoryAccessor, shell: ShellExecutor, state: RunState) -> RunOutcome:
    """Fetch every remote. Failures here are advisory only."""
    state.fetch_summary = fetch_remotes(
        accessor,
        shell,
        fallback_branch=config.fallback_branch,
        max_workers=config.max_workers
    )
    if state.fetch_summary is not None:
        for failure in state.fetch_summary.failures:
            state.errors.append(error_handler.handle_advisory(
                failure.error_code,
                f'fetch of remote "{failure.value}" failed',
                {'operation': 'fetch_remote', 'remote': failure.value},
                log=False
            ))
    return RunOutcome.proceed()


def select_target_remote(config: Config, state: RunState, requested_name: Optional[str]) -> RunOutcome:
    """Resolve the remote to merge against. The only step allowed to abort."""
    remotes = state.fetch_summary.remotes if state.fetch_summary else None
    result = resolve_target_remote(remotes, requested_name, default_remote=config.default_remote)
    if not result.success:
        state.errors.append(error_handler.handle_fatal(
            result.error_code,
            result.message,
            {'operation': 'resolve_target_remote', 'remote': requested_name}
        ))
        return RunOutcome.abort(result.message)

    state.target_remote = result.value
    logging.getLogger('gitmate.git_sync.operations').info(result.message)
    return RunOutcome.proceed()


def restore_original_branch(shell: ShellExecutor, state: RunState) -> None:
    """Check the starting branch out again. Failure is logged, never raised."""
    logger = logging.getLogger('gitmate.git_sync.operations')
    result = shell.run(["git", "checkout", state.original_branch])
    if result.success:
        state.restored = True
        logger.debug(f'restored branch "{state.original_branch}"')
        return

    state.errors.append(error_handler.handle_advisory(
        "RESTORE_FAILED",
        f'unable to switch back to "{state.original_branch}": {result.error_message}',
        {'operation': 'restore_branch'}
    ))
    logger.warning(f"hint: {describe_error(result.error_message)}")


def record_branch_failures(state: RunState) -> None:
    """Add skipped branches to the run's advisory errors. They were logged when they failed."""
    for report in state.branch_reports:
        if not report.success:
            state.errors.append(error_handler.handle_advisory(
                report.result.error_code,
                f'branch "{report.requested}" skipped: {report.result.message}',
                {'operation': 'sync_branch', 'branch': report.requested},
                log=False
            ))


def report_status(shell: ShellExecutor, console: GitMateConsole, state: RunState) -> None:
    """Print ``git branch`` and ``git status`` output."""
    for title, command in (("git branch", ["git", "branch"]), ("git status", ["git", "status"])):
        result = shell.run(command)
        if result.success:
            console.print_section(title, result.stdout)
        else:
            state.errors.append(error_handler.handle_advisory(
                "STATUS_FAILED",
                f"'{result.command}' failed: {result.error_message}",
                {'operation': 'report_status'}
            ))


def execute_fetch(
    config: Config,
    accessor: RepositoryAccessor,
    shell: ShellExecutor,
    console: GitMateConsole,
    requested_remote: Optional[str] = None,
    state: Optional[RunState] = None
) -> RunOutcome:
    """
    Run the fetch workflow against an open repository.

    Steps run in order, and only the pre-flight steps (current branch and
    target remote) may abort. Once any branch has been touched, the original
    branch is checked out again whatever happened to the individual syncs.
    """
    state = state if state is not None else RunState()

    outcome = capture_current_branch(accessor, state)
    if outcome.aborted:
        return outcome
    console.print_current_branch(state.original_branch)

    outcome = update_remotes(config, accessor, shell, state)
    if outcome.aborted:
        return outcome

    outcome = select_target_remote(config, state, requested_remote)
    if outcome.aborted:
        return outcome

    try:
        state.branch_reports = sync_branches(accessor, state.target_remote, config.branches)
    finally:
        restore_original_branch(shell, state)
    record_branch_failures(state)

    report_status(shell, console, state)
    return RunOutcome.proceed()


def run_fetch(
    config: Config,
    requested_remote: Optional[str] = None,
    accessor: Optional[RepositoryAccessor] = None,
    shell: Optional[ShellExecutor] = None,
    console: Optional[GitMateConsole] = None
) -> int:
    """
    Entry point of the ``fetch`` command.

    Returns:
        Process exit code: 0 on completion, 1 when the run was aborted
    """
    logger = logging.getLogger('gitmate.git_sync.operations')
    console = console or GitMateConsole()

    if config.show_header:
        console.print_header(HEADER_TITLE, clear=config.clear_screen)

    if accessor is None:
        try:
            accessor = RepositoryAccessor.open(config.repo_dir)
        except NotAGitRepositoryError as e:
            error_handler.handle_not_a_repository(e, {'repository_path': str(config.repo_dir)})
            return EXIT_FATAL

    shell = shell or ShellExecutor(accessor.working_dir)

    state = RunState()
    outcome = execute_fetch(config, accessor, shell, console, requested_remote, state=state)
    if outcome.aborted:
        logger.error(f"aborted: {outcome.reason}")
    elif state.errors:
        logger.warning(
            f"finished with {len(state.errors)} problem(s): " + "; ".join(error.message for error in state.errors)
        )
    else:
        logger.info("finished without problems.")
    return outcome.exit_code
