#!/usr/bin/env python3
"""Test runner for the GitMate test suite."""

import sys
import subprocess
from pathlib import Path


def run_test(test_file: str, description: str) -> bool:
    """Run a single test file and return success status."""
    print(f"\n{'='*60}")
    print(f"Running: {description}")
    print(f"File: {test_file}")
    print('='*60)

    try:
        result = subprocess.run([
            sys.executable, "-m", "pytest", "-q", test_file
        ], capture_output=False, text=True)

        success = result.returncode == 0
        print(f"\n{'✅ PASSED' if success else '❌ FAILED'}: {description}")
        return success

    except OSError as e:
        print(f"❌ ERROR running {test_file}: {e}")
        return False


def main():
    """Run all GitMate tests."""
    print("GitMate Test Suite")
    print("="*60)

    tests = [
        ("test_config.py", "Configuration"),
        ("test_error_handling.py", "Error Categorization and Records"),
        ("test_shell_executor.py", "Shell Executor"),
        ("test_console.py", "Console Output"),
        ("test_remote_resolution.py", "Remote Resolution"),
        ("test_remote_fetching.py", "Remote Fetching"),
        ("test_branch_sync.py", "Branch Synchronization"),
        ("test_fetch_run.py", "Fetch Run"),
        ("test_cli.py", "Command Line"),
        ("test_repository_integration.py", "Real Repository Integration"),
    ]

    results = []
    for test_file, description in tests:
        if Path(test_file).exists():
            success = run_test(test_file, description)
            results.append((test_file, description, success))
        else:
            print(f"⚠️  Test file not found: {test_file}")
            results.append((test_file, description, False))

    # Summary
    print(f"\n{'='*60}")
    print("TEST SUITE SUMMARY")
    print("="*60)

    passed = 0
    for test_file, description, success in results:
        status = "✅ PASS" if success else "❌ FAIL"
        print(f"{status} {description}")
        if success:
            passed += 1

    print(f"\nResults: {passed}/{len(results)} tests passed")

    if passed == len(results):
        print("\n🎉 ALL TESTS PASSED!")
        return True
    else:
        print(f"\n⚠️  {len(results) - passed} tests failed")
        return False


if __name__ == "__main__":
    try:
        success = main()
        sys.exit(0 if success else 1)
    except KeyboardInterrupt:
        print("\n\nTest suite interrupted by user")
        sys.exit(1)
