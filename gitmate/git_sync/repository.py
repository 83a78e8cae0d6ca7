"""Repository access through GitPython."""

import logging
from pathlib import Path
from typing import List, Optional

from git import Repo, GitCommandError, InvalidGitRepositoryError, NoSuchPathError
from git.remote import Remote

from ..errors import NotAGitRepositoryError, RepositoryOperationError
from .utils import get_error_str


def get_local_branch_name(ref_name: str) -> str:
    """Strip the ``refs/heads/`` prefix from a reference name."""
    prefix = "refs/heads/"
    if ref_name.startswith(prefix):
        return ref_name[len(prefix):]
    return ref_name


def get_tracking_ref(remote_name: str, branch_name: str) -> str:
    """Name of the reference that mirrors ``branch_name`` on ``remote_name``."""
    return f"refs/remotes/{remote_name}/{branch_name}"


class RepositoryAccessor:
    """Thin wrapper around a GitPython ``Repo`` with the operations GitMate needs.

    Every failing git call is re-raised as ``RepositoryOperationError`` so
    callers only have one exception type to contain.
    """

    def __init__(self, repo: Repo):
        self.repo = repo
        self.logger = logging.getLogger('gitmate.git_sync.repository')

    @classmethod
    def open(cls, path: Path) -> "RepositoryAccessor":
        """Open the repository containing ``path``."""
        try:
            repo = Repo(path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError):
            raise NotAGitRepositoryError(path)
        if repo.bare:
            raise NotAGitRepositoryError(path)
        return cls(repo)

    @property
    def working_dir(self) -> Path:
        return Path(self.repo.working_tree_dir)

    def get_current_branch(self) -> str:
        """Name of the checked-out branch, or the HEAD commit SHA when detached.

        Raises:
            RepositoryOperationError: if HEAD does not point at a commit yet
        """
        if not self.repo.head.is_valid():
            raise RepositoryOperationError("get_current_branch", "HEAD has no commits yet")
        try:
            if self.repo.head.is_detached:
                return self.repo.head.commit.hexsha
            return get_local_branch_name(self.repo.head.reference.path)
        except (TypeError, ValueError) as e:
            raise RepositoryOperationError("get_current_branch", get_error_str(e))

    def list_remotes(self) -> List[Remote]:
        """Remotes in the order git lists them."""
        return list(self.repo.remotes)

    def get_remote_default_branch(self, remote_name: str) -> str:
        """
        Default branch of a remote.

        Asks the remote for its symbolic HEAD first and falls back to the
        locally cached ``refs/remotes/<remote>/HEAD``.

        Raises:
            RepositoryOperationError: if neither source knows the default branch
        """
        try:
            output = self.repo.git.ls_remote('--symref', remote_name, 'HEAD')
            for line in output.strip().split('\n'):
                if line.startswith('ref: refs/heads/'):
                    # "ref: refs/heads/main\tHEAD"
                    branch_name = line.split('refs/heads/')[-1].split('\t')[0].strip()
                    self.logger.debug(f"Detected default branch of '{remote_name}': {branch_name}")
                    return branch_name
            remote_error = f"remote '{remote_name}' did not report a HEAD reference"
        except GitCommandError as e:
            remote_error = get_error_str(e)
            self.logger.debug(f"ls-remote failed for '{remote_name}': {remote_error}")

        try:
            ref = self.repo.git.symbolic_ref(f'refs/remotes/{remote_name}/HEAD')
            prefix = f'refs/remotes/{remote_name}/'
            if ref.startswith(prefix):
                return ref[len(prefix):].strip()
        except GitCommandError:
            pass

        raise RepositoryOperationError("get_remote_default_branch", remote_error)

    def checkout_branch(self, branch_name: str) -> None:
        """Check out an existing local branch."""
        head = next((h for h in self.repo.heads if h.name == branch_name), None)
        if head is None:
            raise RepositoryOperationError(
                "checkout_branch", f"no such branch: '{branch_name}'"
            )
        try:
            head.checkout()
        except GitCommandError as e:
            raise RepositoryOperationError("checkout_branch", get_error_str(e))

    def merge_branches(self, local_branch: str, tracking_ref: str) -> None:
        """
        Fast-forward ``local_branch`` to ``tracking_ref``.

        ``local_branch`` must be the checked-out branch. Nothing is merged if
        the branch has diverged from the tracking reference.
        """
        current = self.get_current_branch()
        if current != local_branch:
            raise RepositoryOperationError(
                "merge_branches",
                f"cannot merge into '{local_branch}': '{current}' is checked out"
            )
        try:
            self.repo.git.merge('--ff-only', tracking_ref)
        except GitCommandError as e:
            raise RepositoryOperationError("merge_branches", get_error_str(e))

    def get_remote_url(self, remote: Remote) -> Optional[str]:
        """First configured URL of a remote, if any."""
        try:
            return next(iter(remote.urls), None)
        except GitCommandError as e:
            self.logger.debug(f"Could not read URL of remote '{remote.name}': {get_error_str(e)}")
            return None
