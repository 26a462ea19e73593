"""
Run flake8 and pylint over the interpreter sources.

Tests are excluded; both tools share the line length used across the package.
Exits with the status of the first tool that reports problems.
"""
import subprocess
import sys

SOURCES = ["./alang", "./al.py"]
MAX_LINE_LENGTH = "100"

CHECKS = {
    "flake8": ["--exclude=alang/tests", f"--max-line-length={MAX_LINE_LENGTH}"],
    "pylint": ["--ignore=tests", f"--max-line-length={MAX_LINE_LENGTH}"],
}


def main() -> int:
    """
    Lint the AL sources, stopping at the first failing tool.
    """
    for tool, options in CHECKS.items():
        print(f"Running {tool}...")
        result = subprocess.run([tool, *SOURCES, *options], check=False)
        if result.returncode != 0:
            return result.returncode
    return 0


if __name__ == "__main__":
    sys.exit(main())
