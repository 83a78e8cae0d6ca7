#!/usr/bin/env python3
"""
Unit tests for error categorization and error records.

Tests categorize_git_error() against real git messages, the resolution
hints and the ErrorHandler records for each error category.
"""

import sys
import unittest
from pathlib import Path

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).parent))

from gitmate.errors import ErrorCategory as RunErrorCategory
from gitmate.errors import ErrorHandler, NotAGitRepositoryError
from gitmate.git_sync.error_strategies import (
    build_error_strategies, categorize_git_error, describe_error, get_resolution
)
from gitmate.git_sync.error_types import ErrorCategory, RecoveryAction
from gitmate.git_sync.utils import get_error_str


class TestErrorCategorization(unittest.TestCase):
    """Test mapping of git messages to categories."""

    def test_git_messages(self):
        cases = {
            "fatal: unable to access 'https://example.com/repo.git/': Could not resolve host: example.com":
                ErrorCategory.NETWORK,
            "ssh: connect to host example.com port 22: Connection timed out":
                ErrorCategory.NETWORK,
            "git@github.com: Permission denied (publickey).":
                ErrorCategory.AUTHENTICATION,
            "remote: Repository not found.":
                ErrorCategory.REPOSITORY_ACCESS,
            "fatal: 'nowhere' does not appear to be a git repository":
                ErrorCategory.REPOSITORY_ACCESS,
            "error: pathspec 'dev' did not match any file(s) known to git":
                ErrorCategory.BRANCH_DETECTION,
            "merge: refs/remotes/origin/dev - not something we can merge":
                ErrorCategory.BRANCH_DETECTION,
            "fatal: Not possible to fast-forward, aborting.":
                ErrorCategory.DIVERGED,
            "error: Your local changes to the following files would be overwritten by checkout:":
                ErrorCategory.DIRTY_WORKTREE,
            "error: Merging is not possible because you have unmerged files.":
                ErrorCategory.MERGE_CONFLICT,
            "error: object file .git/objects/ab/cdef is empty; fatal: loose object abcdef is corrupt":
                ErrorCategory.REPOSITORY_CORRUPTION,
        }
        for message, expected in cases.items():
            with self.subTest(message=message):
                self.assertEqual(categorize_git_error(message), expected)

    def test_unknown_and_empty_messages(self):
        self.assertEqual(categorize_git_error("something odd happened"), ErrorCategory.UNKNOWN)
        self.assertEqual(categorize_git_error(""), ErrorCategory.UNKNOWN)
        self.assertEqual(categorize_git_error(None), ErrorCategory.UNKNOWN)

    def test_every_category_has_a_resolution(self):
        strategies = build_error_strategies()
        for category in ErrorCategory:
            with self.subTest(category=category):
                self.assertIn(category, strategies)
                self.assertEqual(strategies[category].category, category)

    def test_describe_error_includes_first_step(self):
        hint = describe_error("git@github.com: Permission denied (publickey).")

        resolution = get_resolution(ErrorCategory.AUTHENTICATION)
        self.assertEqual(resolution.action, RecoveryAction.USER_ACTION_REQUIRED)
        self.assertIn(resolution.user_message, hint)
        self.assertIn(resolution.resolution_steps[0], hint)

    def test_describe_unknown_error(self):
        self.assertEqual(describe_error("???"), "Unexpected git error")


class TestErrorStr(unittest.TestCase):
    """Test extraction of a readable message from exceptions."""

    def test_uses_last_stderr_line(self):
        error = Exception("cmdline: git merge")
        error.stderr = "\n  stderr: 'hint: something'\nfatal: Not possible to fast-forward, aborting.\n"

        self.assertEqual(get_error_str(error), "fatal: Not possible to fast-forward, aborting.")

    def test_falls_back_to_message(self):
        self.assertEqual(get_error_str(ValueError("bad value")), "bad value")

    def test_empty_message_uses_class_name(self):
        self.assertEqual(get_error_str(RuntimeError()), "RuntimeError")


class TestErrorHandler(unittest.TestCase):
    """Test error records and their log levels."""

    def setUp(self):
        self.handler = ErrorHandler()

    def test_advisory_logs_warning(self):
        with self.assertLogs('gitmate.error_handler', level='WARNING') as logs:
            response = self.handler.handle_advisory("FETCH_FAILED", "fetch failed", {'remote': 'origin'})

        self.assertEqual(response.category, RunErrorCategory.ADVISORY.value)
        self.assertFalse(response.is_fatal)
        self.assertEqual(response.context, {'remote': 'origin'})
        self.assertIn("WARNING", logs.output[0])

    def test_advisory_without_logging(self):
        response = self.handler.handle_advisory("FETCH_FAILED", "fetch failed", log=False)

        self.assertEqual(response.error_code, "FETCH_FAILED")
        self.assertIsNone(response.context)

    def test_usage_error(self):
        with self.assertLogs('gitmate.error_handler', level='ERROR') as logs:
            response = self.handler.handle_usage_error("too many arguments")

        self.assertEqual(response.category, RunErrorCategory.USAGE.value)
        self.assertEqual(response.error_code, "USAGE_ERROR")
        self.assertEqual(len(logs.output), 1)

    def test_fatal(self):
        with self.assertLogs('gitmate.error_handler', level='ERROR'):
            response = self.handler.handle_fatal("REMOTE_NOT_FOUND", 'could not find remote "x"')

        self.assertTrue(response.is_fatal)
        self.assertEqual(response.error_code, "REMOTE_NOT_FOUND")
        self.assertEqual(response.category, "fatal")
        self.assertIsNone(response.context)

    def test_not_a_repository(self):
        with self.assertLogs('gitmate.error_handler', level='ERROR'):
            response = self.handler.handle_not_a_repository(NotAGitRepositoryError(Path("/tmp/nowhere")))

        self.assertEqual(response.error_code, "GIT_NOT_REPOSITORY")
        self.assertIn("/tmp/nowhere", response.message)


def run_tests():
    """Run all error handling tests."""
    print("Running Error Handling Tests")
    print("=" * 60)

    loader = unittest.TestLoader()
    test_suite = unittest.TestSuite()
    for case in (TestErrorCategorization, TestErrorStr, TestErrorHandler):
        test_suite.addTests(loader.loadTestsFromTestCase(case))

    runner = unittest.TextTestRunner(verbosity=2, stream=sys.stdout)
    result = runner.run(test_suite)

    success = len(result.failures) == 0 and len(result.errors) == 0
    print(f"\nOverall result: {'PASS' if success else 'FAIL'}")
    return success


if __name__ == "__main__":
    success = run_tests()
    sys.exit(0 if success else 1)
