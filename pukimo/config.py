"""Interpreter configuration.

Settings are read from the process environment:

- ``PUKIDEBUG``: any non-empty value other than ``0``/``false`` dumps the
  tokens and the AST before a script runs.
- ``PUKI_MAX_STEPS``: a positive integer budget of executed statements.
- ``PUKI_STRICT``: reject assignment to names that were never bound instead
  of creating a global.


File: config.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.1
License: MIT
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

FALSE_VALUES = ('', '0', 'false', 'no', 'off')


def _flag(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() not in FALSE_VALUES


@dataclass
class InterpreterConfig:
    """Runtime options for the interpreter and the CLI."""

    debug: bool = False
    max_steps: Optional[int] = None
    strict_assignment: bool = False

    def __post_init__(self):
        if self.max_steps is not None and self.max_steps <= 0:
            raise ValueError(f"max_steps must be a positive integer, got {self.max_steps}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ) -> 'InterpreterConfig':
        """
        Build a configuration from environment variables.

        Raises:
            ValueError: If ``PUKI_MAX_STEPS`` is not a positive integer.
        """
        raw_steps = environ.get('PUKI_MAX_STEPS', '').strip()
        max_steps = None
        if raw_steps:
            try:
                max_steps = int(raw_steps)
            except ValueError as e:
                raise ValueError(
                    f"PUKI_MAX_STEPS must be a positive integer, got {raw_steps!r}"
                ) from e
        return cls(
            debug=_flag(environ.get('PUKIDEBUG')),
            max_steps=max_steps,
            strict_assignment=_flag(environ.get('PUKI_STRICT')),
        )
