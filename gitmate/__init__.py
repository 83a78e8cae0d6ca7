"""
GitMate - a small command-line helper for a personal git workflow.

This package fetches every remote of a local repository, merges a fixed list
of branches against a chosen remote and reports the final repository status.
"""

__version__ = "1.0.0"
__author__ = "Carl Eiserman"
__description__ = "GitMate - fetch all remotes and fast-forward the main branches"

from .cli import main

__all__ = ["main"]
