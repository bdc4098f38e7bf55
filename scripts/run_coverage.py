#!/usr/bin/env python3
"""Run the test suite under coverage and enforce a minimum percentage.

Usage:
    python scripts/run_coverage.py [OPTIONS]

Options:
    --threshold PERCENT    Minimum coverage percentage (default: 90)
    --html                 Also write an HTML report to htmlcov/
    --xml                  Also write coverage.xml for CI tools
    --verbose              List missing lines per module
    --tests PATH           Test directory or file (default: tests/)

Exit Codes:
    0 - Tests passed and coverage threshold met
    1 - Tests failed
    2 - Coverage below threshold
    3 - Missing tooling or unexpected pytest exit code
"""

import argparse
import os
import subprocess
import sys
from pathlib import Path


PROJECT_ROOT = Path(__file__).parent.parent
PACKAGE = "nbtstorage"
DEFAULT_THRESHOLD = 90

MODULES = [
    ("nbtstorage.tag", "Tag tree"),
    ("nbtstorage.serialization", "Binary codec"),
    ("nbtstorage.snbt", "SNBT parser"),
    ("nbtstorage.file", "Storage file"),
    ("nbtstorage.config", "Configuration"),
    ("nbtstorage.logging", "Logging"),
]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run pytest with coverage validation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--threshold", type=float, default=DEFAULT_THRESHOLD)
    parser.add_argument("--html", action="store_true")
    parser.add_argument("--xml", action="store_true")
    parser.add_argument("--verbose", "-v", action="store_true")
    parser.add_argument("--tests", default="tests/")
    return parser.parse_args()


def build_pytest_command(args: argparse.Namespace) -> list:
    """Build the pytest command line with coverage options."""
    cmd = [
        sys.executable, "-m", "pytest",
        f"--cov={PACKAGE}",
        f"--cov-fail-under={args.threshold}",
        "--cov-report=term-missing" if args.verbose else "--cov-report=term",
    ]
    if args.html:
        cmd.append("--cov-report=html:htmlcov")
    if args.xml:
        cmd.append("--cov-report=xml:coverage.xml")
    cmd.append(args.tests)
    return cmd


def run_coverage(args: argparse.Namespace) -> int:
    os.chdir(PROJECT_ROOT)
    cmd = build_pytest_command(args)

    print("=" * 70)
    print("NBTSTORAGE - COVERAGE VALIDATION")
    print("=" * 70)
    print(f"Threshold: {args.threshold}%")
    print(f"Command:   {' '.join(cmd)}")
    if args.verbose:
        for module, description in MODULES:
            print(f"  {description:<15} {module}")
    print("=" * 70)

    result = subprocess.run(cmd, cwd=PROJECT_ROOT)

    if result.returncode == 0:
        print(f"SUCCESS: coverage meets {args.threshold}%")
        return 0
    if result.returncode == 1:
        # pytest-cov reports a missed threshold as a failed session
        if _coverage_below(args.threshold):
            print(f"FAILURE: coverage below {args.threshold}%")
            return 2
        print("FAILURE: tests failed")
        return 1
    print(f"ERROR: unexpected pytest exit code {result.returncode}")
    return 3


def _coverage_below(threshold: float) -> bool:
    report = subprocess.run(
        [sys.executable, "-m", "coverage", "report", f"--fail-under={threshold}"],
        cwd=PROJECT_ROOT,
        capture_output=True,
    )
    return report.returncode == 2


def main() -> int:
    args = parse_args()
    try:
        import pytest  # noqa: F401
        import pytest_cov  # noqa: F401
    except ImportError as e:
        print(f"ERROR: Required package not installed: {e}")
        print('Install with: pip install -e ".[dev]"')
        return 3
    return run_coverage(args)


if __name__ == "__main__":
    sys.exit(main())
