"""
Lint script runner.
"""
import subprocess
import sys

TARGETS = ["./pukimo", "./puki.py", "./vscode/server/main.py"]


def main() -> int:
    """
    Lint the PukiMO project using flake8 and pylint.
    """
    print("Running flake8...")
    flake8 = subprocess.run([
        "flake8",
        *TARGETS,
        "--max-line-length=110",
        "--exclude=pukimo/tests",
    ], check=False)

    print("Running pylint...")
    pylint = subprocess.run([
        "pylint",
        *TARGETS,
        "--ignore=tests",
        "--max-line-length=110",
    ], check=False)
    return 1 if flake8.returncode or pylint.returncode else 0


if __name__ == "__main__":
    sys.exit(main())
