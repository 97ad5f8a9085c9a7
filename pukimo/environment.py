"""Variable environments.

An :class:`Environment` is one frame of the scope chain: a mapping of names to
values plus a link to the enclosing frame. Lookups and assignments walk
outward through the links; the frame without a parent is the global frame.

The interpreter creates a child frame for every block, every loop iteration
and every function call. Function values keep a reference to the frame they
were defined in, so a frame lives as long as any closure that captured it.


File: environment.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.1
License: MIT
"""

import logging
from typing import Any, Optional

from pukimo.exceptions import (
    ConstantReassignmentException,
    UndefinedVariableException,
)

logger = logging.getLogger(__name__)


class Environment:
    """One level of the variable-binding chain."""

    def __init__(self, parent: Optional['Environment'] = None):
        self.values: dict[str, Any] = {}
        self.constants: set[str] = set()
        self.parent = parent

    def __repr__(self) -> str:
        return f"Environment(depth={self.depth}, names={sorted(self.values)})"

    def __contains__(self, name: str) -> bool:
        return self.find_frame(name) is not None

    @property
    def depth(self) -> int:
        """
        Number of frames between this one and the global frame.
        """
        depth = 0
        env = self.parent
        while env is not None:
            depth += 1
            env = env.parent
        return depth

    @property
    def global_frame(self) -> 'Environment':
        """
        The outermost frame of the chain.
        """
        env = self
        while env.parent is not None:
            env = env.parent
        return env

    def child(self) -> 'Environment':
        """
        Create a new frame enclosed by this one.
        """
        return Environment(self)

    def find_frame(self, name: str) -> Optional['Environment']:
        """
        Return the nearest frame that binds ``name``, or ``None``.
        """
        env = self
        while env is not None:
            if name in env.values:
                return env
            env = env.parent
        return None

    def define(self, name: str, value: Any, constant: bool = False) -> None:
        """
        Bind ``name`` in this frame, replacing any existing binding here.

        Raises:
            ConstantReassignmentException: If ``name`` is a constant of this frame.
        """
        if name in self.constants:
            raise ConstantReassignmentException(name)
        self.values[name] = value
        if constant:
            self.constants.add(name)

    def get(self, name: str) -> Any:
        """
        Look ``name`` up through the chain.

        Raises:
            UndefinedVariableException: If no frame binds ``name``.
        """
        frame = self.find_frame(name)
        if frame is None:
            raise UndefinedVariableException(name)
        return frame.values[name]

    def set(self, name: str, value: Any, create_missing: bool = True) -> None:
        """
        Update the nearest existing binding of ``name``.

        When no frame binds ``name`` the binding is created in the global frame,
        unless ``create_missing`` is false.

        Raises:
            UndefinedVariableException: If ``name`` is unbound and ``create_missing`` is false.
            ConstantReassignmentException: If the binding found is a constant.
        """
        frame = self.find_frame(name)
        if frame is None:
            if not create_missing:
                raise UndefinedVariableException(name)
            frame = self.global_frame
            logger.debug("Assignment to unbound '%s' creates a global", name)
        elif name in frame.constants:
            raise ConstantReassignmentException(name)
        frame.values[name] = value
