"""
Add or refresh the author/copyright/version/license footer in the module
docstring of every PukiMO source file.

Usage:
    python scripts/generate_docstring_headers.py [--check]

With ``--check`` nothing is written; the exit code is 1 if any file would change.
"""
import datetime
import os
import re
import sys

VERSION = "0.1.1"
SOURCE_ROOTS = ["pukimo"]
SOURCE_FILES = ["puki.py"]

FOOTER_PATTERN = re.compile(
    r"File: .+?\nAuthor: .+?\nCopyright: .+?\nVersion: .+?\nLicense: .+?$",
    re.MULTILINE
)
DOCSTRING_PATTERN = re.compile(r'("""|\'\'\')([\s\S]*?)(\1)')


def should_skip(path: str) -> bool:
    """
    Determine whether a file should be skipped based on its path.

    Args:
        path (str): The full path to the file.

    Returns:
        bool: True if the file should be skipped, False otherwise.
    """
    return "__pycache__" in path or not path.endswith(".py")


def build_footer(filename: str, year: int) -> str:
    """
    Return the footer block for ``filename``.
    """
    return f"""File: {filename}
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © {year} Chris Rowles. All rights reserved.
Version: {VERSION}
License: MIT"""


def apply_footer(contents: str, filename: str, year: int) -> str:
    """
    Return ``contents`` with the footer block present and current.

    The footer goes at the end of the first docstring of the module. An
    existing footer is replaced; a module without a docstring gets one.
    """
    footer = build_footer(filename, year)
    docstring_match = DOCSTRING_PATTERN.match(contents)
    if not docstring_match:
        return f'"""{footer}\n"""\n\n' + contents

    quote = docstring_match.group(1)
    body = docstring_match.group(2)
    if FOOTER_PATTERN.search(body):
        updated_body = FOOTER_PATTERN.sub(footer, body.strip())
    else:
        updated_body = body.strip() + "\n\n\n" + footer
    return f"{quote}{updated_body}\n{quote}" + contents[docstring_match.end():]


def process_file(filepath: str, year: int, check: bool) -> bool:
    """
    Update one file. Returns ``True`` if its contents changed (or would change).
    """
    with open(filepath, "r", encoding="utf-8") as file:
        contents = file.read()

    updated = apply_footer(contents, os.path.basename(filepath), year)
    if updated == contents:
        return False
    if check:
        print(f"Footer out of date: {filepath}")
    else:
        with open(filepath, "w", encoding="utf-8") as file:
            file.write(updated)
        print(f"Footer updated: {filepath}")
    return True


def iter_sources(project_root: str):
    """
    Yield every source file covered by the footer convention.
    """
    for root in SOURCE_ROOTS:
        for dirpath, dirnames, filenames in os.walk(os.path.join(project_root, root)):
            dirnames[:] = [d for d in dirnames if d not in ["__pycache__", "tests"]]
            for filename in sorted(filenames):
                full_path = os.path.join(dirpath, filename)
                if not should_skip(full_path):
                    yield full_path
    for filename in SOURCE_FILES:
        yield os.path.join(project_root, filename)


def main(argv: list[str]) -> int:
    """
    Insert docstring footers into source files.
    """
    check = "--check" in argv[1:]
    year = datetime.datetime.now().year
    changed = [
        path for path in iter_sources(os.getcwd()) if process_file(path, year, check)
    ]
    return 1 if check and changed else 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
