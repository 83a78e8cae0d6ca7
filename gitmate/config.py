"""Configuration management for GitMate."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple


DEFAULT_BRANCHES: Tuple[str, ...] = ("master", "develop", "dev")
DEFAULT_REMOTE = "origin"
FALLBACK_BRANCH = "master"


@dataclass
class Config:
    """Configuration for a GitMate run with validation and defaults."""

    # Repository
    repo_dir: Path = field(default_factory=lambda: Path("./"))

    # Branch synchronization
    branches: Tuple[str, ...] = DEFAULT_BRANCHES
    default_remote: str = DEFAULT_REMOTE
    fallback_branch: str = FALLBACK_BRANCH

    # Remote metadata lookups run on a thread pool
    max_workers: int = 4

    # Output
    log_level: str = "INFO"
    clear_screen: bool = True
    show_header: bool = True

    def __post_init__(self):
        """Validate configuration after initialization."""
        if isinstance(self.repo_dir, str):
            self.repo_dir = Path(self.repo_dir)
        self.repo_dir = self.repo_dir.expanduser()

        self.branches = tuple(self.branches)
        if not self.branches:
            raise ValueError("branches must contain at least one branch name")
        for branch in self.branches:
            if not branch or not branch.strip():
                raise ValueError("branch names must be non-empty")

        if not self.default_remote or not self.default_remote.strip():
            raise ValueError("default_remote must be non-empty")

        if not self.fallback_branch or not self.fallback_branch.strip():
            raise ValueError("fallback_branch must be non-empty")

        # Validate log level
        valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        self.log_level = self.log_level.upper()
        if self.log_level not in valid_log_levels:
            raise ValueError(f"Invalid log level: {self.log_level}. Must be one of {valid_log_levels}")

        if self.max_workers <= 0:
            raise ValueError("max_workers must be positive")


def build_config(
    repo_dir: Optional[str] = None,
    log_level: Optional[str] = None,
    clear_screen: bool = True,
    show_header: bool = True,
) -> Config:
    """Build a configuration from command-line options.

    GitMate reads no configuration files and no environment variables, so
    anything not supplied on the command line keeps its default.
    """
    try:
        kwargs = {
            "clear_screen": clear_screen,
            "show_header": show_header,
        }
        if repo_dir:
            kwargs["repo_dir"] = Path(repo_dir)
        if log_level:
            kwargs["log_level"] = log_level
        config = Config(**kwargs)
    except (ValueError, TypeError) as e:
        raise ValueError(f"Configuration error: {e}")

    logging.getLogger('gitmate.config').debug(
        f"Configuration loaded: repo_dir={config.repo_dir}, branches={list(config.branches)}"
    )
    return config
