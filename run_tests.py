#!/usr/bin/env python3
"""
Test runner script for PyFastResample.

Shortcuts for running the import, kernel, CLI and workflow test groups.
"""
import sys
import subprocess
import argparse

SUITES = {
    "imports": (["tests/test_imports.py"], "Import tests"),
    "kernels": (
        [
            "tests/unit/test_rastermanip.py",
            "tests/unit/test_flipping.py",
            "tests/unit/test_element_kinds.py",
            "tests/unit/test_pool_and_gridio.py",
        ],
        "Resampling kernel tests",
    ),
    "cli": (["tests/unit/test_cli.py"], "CLI tests"),
    "integration": (["tests/integration/"], "Slice workflow tests"),
}


def run_pytest(paths, extra, description):
    """Run pytest on ``paths`` and report success."""
    cmd = [sys.executable, "-m", "pytest", *extra, *paths]
    print(f"→ {description}: {' '.join(cmd)}")
    return subprocess.run(cmd).returncode == 0


def main():
    parser = argparse.ArgumentParser(
        description="PyFastResample test runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_tests.py --suite kernels     # Scaling, flipping, element kinds
  python run_tests.py --suite cli         # Command line tools only
  python run_tests.py --all               # Every suite, one after another
  python run_tests.py --coverage -v       # Default suites with coverage
        """
    )

    parser.add_argument('--suite', choices=sorted(SUITES), action='append',
                        help='Suite to run (repeatable)')
    parser.add_argument('--all', action='store_true',
                        help='Run all suites')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Verbose output')
    parser.add_argument('--coverage', action='store_true',
                        help='Run with coverage report')

    args = parser.parse_args()

    extra = ["-v" if args.verbose else "-q", "--disable-warnings"]
    if args.coverage:
        extra += ["--cov=pyfastresample", "--cov-report=term"]

    if args.all:
        selected = list(SUITES)
    elif args.suite:
        selected = args.suite
    else:
        selected = ["imports", "kernels"]

    success = True
    for name in selected:
        paths, description = SUITES[name]
        if not run_pytest(paths, extra, description):
            success = False

    if success:
        print("\n✅ All tests passed!")
        return 0
    print("\n❌ Some tests failed!")
    return 1


if __name__ == '__main__':
    sys.exit(main())
