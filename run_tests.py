#!/usr/bin/env python3
"""
Test runner for termlog.

Usage:
    python run_tests.py             # Run the test suite
    python run_tests.py --list      # List available test modules
    python run_tests.py --coverage  # Run with coverage report
    python run_tests.py -k routing  # Only tests matching an expression
"""

import sys
import subprocess
import argparse
from pathlib import Path


def run_tests(verbose=True, coverage=False, keyword=None):
    """
    Run pytest with appropriate configuration.

    Args:
        verbose: Whether to show verbose output.
        coverage: Whether to run with coverage analysis.
        keyword: Optional pytest -k expression.

    Returns:
        Exit code from pytest.
    """
    cmd = [
        sys.executable, "-m", "pytest",
        "tests/",
        "--tb=short",
        "--durations=10",
    ]

    if verbose:
        cmd.append("-v")

    if keyword:
        cmd.extend(["-k", keyword])

    if coverage:
        cmd.extend([
            "--cov=termlog",
            "--cov-report=term-missing",
        ])

    print(f"Running: {' '.join(cmd)}")
    print("=" * 60)

    result = subprocess.run(cmd)
    return result.returncode


def list_tests():
    """List available test modules."""
    test_files = sorted(Path("tests").glob("test_*.py"))

    print()
    print("Available test modules:")
    print("-" * 40)
    for test_file in test_files:
        print(f"  {test_file.stem}")
    print("-" * 40)
    print()
    print("Run a specific module: python -m pytest tests/test_sinks.py")


def main():
    """Main entry point for test runner."""
    parser = argparse.ArgumentParser(
        description="Test runner for termlog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_tests.py             # Run all tests
  python run_tests.py --coverage  # Run with coverage report
  python run_tests.py --list      # List test modules
        """
    )
    parser.add_argument(
        "--coverage", action="store_true",
        help="Run tests with coverage analysis (needs pytest-cov)"
    )
    parser.add_argument(
        "--list", action="store_true",
        help="List available test modules"
    )
    parser.add_argument(
        "-k", dest="keyword", default=None,
        help="Only run tests matching the given expression"
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true",
        help="Less verbose output"
    )

    args = parser.parse_args()

    if args.list:
        list_tests()
        return 0

    print("=" * 60)
    print("TERMLOG TEST SUITE")
    print("=" * 60)
    print()
    return run_tests(
        verbose=not args.quiet,
        coverage=args.coverage,
        keyword=args.keyword,
    )


if __name__ == "__main__":
    sys.exit(main())
