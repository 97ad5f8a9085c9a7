"""Built-in objects.

PukiMO has exactly three object kinds, created with the ``SafariZone(...)``,
``Team(...)`` and ``Pokemon(...)`` constructors. They share one capability
contract, defined by :class:`BuiltinObject`:

- ``get_property(name)`` for ``obj.name``,
- ``set_property(name, value)`` for ``obj.name = value``,
- ``call_method(name, args, kwargs)`` for ``obj->name(args, key=value)``.

Each kind declares which properties are readable and writable and which
methods it answers; anything else raises ``UnknownPropertyException``,
``ReadOnlyPropertyException`` or ``UnknownMethodException``.

Rosters store each Pokemon once. ``Team->find`` and ``SafariZone.pokemon``
hand out the stored instances, so changing a Pokemon obtained from a lookup
changes it everywhere it is listed.


File: objects.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.1
License: MIT
"""

import logging
import math
from abc import ABC, abstractmethod

from pukimo.exceptions import (
    ArityMismatchException,
    DuplicateEntityException,
    InvalidArgumentException,
    NotFoundException,
    NumericRangeException,
    ReadOnlyPropertyException,
    TypeMismatchException,
    UnknownMethodException,
    UnknownPropertyException,
)
from pukimo.operations import is_integer, values_equal

logger = logging.getLogger(__name__)

_INCOMPATIBLE = object()


def bind_arguments(callee: str, params: tuple, args: list, kwargs: dict,
                   defaults: dict | None = None) -> dict:
    """
    Match positional and named arguments to parameter names.

    Args:
        callee (str): Name used in error messages, e.g. ``"Pokemon"``.
        params (tuple): Parameter names in positional order.
        args (list): Positional argument values.
        kwargs (dict): Named argument values.
        defaults (dict): Values for parameters that may be omitted.

    Returns:
        dict: Parameter name to value.

    Raises:
        ArityMismatchException: On too many, unknown, repeated or missing arguments.
    """
    defaults = defaults or {}
    if len(args) > len(params):
        raise ArityMismatchException(
            f"{callee}() takes at most {len(params)} arguments but got {len(args)}"
        )
    bound = dict(zip(params, args))
    for key, value in kwargs.items():
        if key not in params:
            raise ArityMismatchException(f"{callee}() got an unexpected argument '{key}'")
        if key in bound:
            raise ArityMismatchException(f"{callee}() got multiple values for '{key}'")
        bound[key] = value
    for param in params:
        if param not in bound:
            if param not in defaults:
                raise ArityMismatchException(f"{callee}() is missing argument '{param}'")
            bound[param] = defaults[param]
    return bound


def _count_argument(callee: str, value) -> int:
    if not is_integer(value):
        raise TypeMismatchException(f"{callee} expects an integer amount")
    if value < 0:
        raise InvalidArgumentException(f"{callee} expects a non-negative amount, got {value}")
    return value


def _to_int(value):
    if is_integer(value):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise NumericRangeException(f"Cannot convert {value!r} to an integer")
        return int(value)
    return _INCOMPATIBLE


def _to_text(value):
    if isinstance(value, str):
        return value
    if is_integer(value):
        return str(value)
    if isinstance(value, float):
        return repr(value)
    return _INCOMPATIBLE


def _to_bool(value):
    if isinstance(value, bool):
        return value
    return _INCOMPATIBLE


class BuiltinObject(ABC):
    """
    Capability contract shared by the built-in object kinds.

    Subclasses list their readable and writable property names and map method
    names to handler attributes; handlers receive ``(args, kwargs)``.
    """
    kind = "object"
    readable: tuple = ()
    writable: tuple = ()
    methods: dict = {}

    @classmethod
    @abstractmethod
    def construct(cls, args: list, kwargs: dict) -> 'BuiltinObject':
        """
        Build an instance from constructor call arguments.
        """

    def get_property(self, name: str):
        """
        Return the value of property ``name``.
        """
        if name not in self.readable:
            raise UnknownPropertyException(self.kind, name)
        return self._read(name)

    def set_property(self, name: str, value) -> None:
        """
        Store ``value`` in property ``name``.
        """
        if name not in self.readable:
            raise UnknownPropertyException(self.kind, name)
        if name not in self.writable:
            raise ReadOnlyPropertyException(self.kind, name)
        self._write(name, value)

    def call_method(self, name: str, args: list, kwargs: dict):
        """
        Invoke method ``name`` and return its result.
        """
        handler = self.methods.get(name)
        if handler is None:
            raise UnknownMethodException(self.kind, name)
        logger.debug("%s->%s(%d positional, %d named)", self.kind, name, len(args), len(kwargs))
        return getattr(self, handler)(args, kwargs)

    def _read(self, name: str):
        return getattr(self, name)

    def _write(self, name: str, value) -> None:
        setattr(self, name, value)


class Pokemon(BuiltinObject):
    """A single Pokemon with a fixed attribute set."""

    kind = "Pokemon"
    params = ('name', 'level', 'nature', 'behavior', 'friendliness', 'caught')
    defaults = {
        'level': 1,
        'nature': "Hardy",
        'behavior': "Calm",
        'friendliness': 70,
        'caught': False,
    }
    readable = params
    writable = params[1:]
    methods = {'levelUp': '_level_up'}
    coercions = {
        'level': _to_int,
        'friendliness': _to_int,
        'nature': _to_text,
        'behavior': _to_text,
        'caught': _to_bool,
    }

    def __init__(self, name: str, level: int = 1, nature: str = "Hardy",
                 behavior: str = "Calm", friendliness: int = 70, caught: bool = False):
        self.name = name
        self.level = level
        self.nature = nature
        self.behavior = behavior
        self.friendliness = friendliness
        self.caught = caught

    @classmethod
    def construct(cls, args: list, kwargs: dict) -> 'Pokemon':
        """
        Build a Pokemon from constructor arguments, coercing each attribute.
        """
        bound = bind_arguments(cls.kind, cls.params, args, kwargs, cls.defaults)
        if not isinstance(bound['name'], str):
            raise TypeMismatchException("Pokemon() name must be a string")
        for attr, coerce in cls.coercions.items():
            value = coerce(bound[attr])
            if value is _INCOMPATIBLE:
                raise TypeMismatchException(
                    f"Pokemon() got an incompatible value for '{attr}'"
                )
            bound[attr] = value
        return cls(**bound)

    def _write(self, name: str, value) -> None:
        coerced = self.coercions[name](value)
        if coerced is _INCOMPATIBLE:
            logger.warning(
                "Ignoring write of %s to %s.%s: incompatible type",
                type(value).__name__, self.name, name,
            )
            return
        setattr(self, name, coerced)

    def _level_up(self, args: list, kwargs: dict) -> int:
        bound = bind_arguments("levelUp", ('levels',), args, kwargs, {'levels': 1})
        self.level += _count_argument("levelUp()", bound['levels'])
        return self.level

    def __str__(self) -> str:
        caught = "true" if self.caught else "false"
        return (
            f"Pokemon(name={self.name}, level={self.level}, "
            f"nature={self.nature}, caught={caught})"
        )

    __repr__ = __str__


def _roster(callee: str, value) -> list:
    if not isinstance(value, list):
        raise TypeMismatchException(f"{callee}() expects a list of Pokemon")
    for entry in value:
        if not isinstance(entry, Pokemon):
            raise TypeMismatchException(f"{callee}() expects a list of Pokemon")
    return value


class Team(BuiltinObject):
    """A trainer's team: an ordered roster of uniquely named Pokemon."""

    kind = "Team"
    readable = ('pokemon',)
    methods = {
        'add': '_add',
        'remove': '_remove',
        'find': '_find',
        'filter': '_filter',
    }

    def __init__(self, pokemon: list | None = None):
        self._pokemon: list[Pokemon] = []
        for entry in pokemon or []:
            self.add(entry)

    @classmethod
    def construct(cls, args: list, kwargs: dict) -> 'Team':
        """
        Build a Team from an optional list of Pokemon.
        """
        bound = bind_arguments(cls.kind, ('pokemon',), args, kwargs, {'pokemon': []})
        return cls(_roster(cls.kind, bound['pokemon']))

    def add(self, entry) -> Pokemon:
        """
        Append ``entry`` to the roster.
        """
        if not isinstance(entry, Pokemon):
            raise TypeMismatchException("Team->add() expects a Pokemon")
        if self._index(entry.name) is not None:
            raise DuplicateEntityException(entry.name)
        self._pokemon.append(entry)
        return entry

    def _index(self, name: str) -> int | None:
        for index, entry in enumerate(self._pokemon):
            if entry.name == name:
                return index
        return None

    def _read(self, name: str):
        return list(self._pokemon)

    def _name_argument(self, callee: str, args: list, kwargs: dict) -> str:
        bound = bind_arguments(callee, ('name',), args, kwargs)
        if not isinstance(bound['name'], str):
            raise TypeMismatchException(f"Team->{callee}() expects a name string")
        return bound['name']

    def _add(self, args: list, kwargs: dict) -> Pokemon:
        bound = bind_arguments("add", ('pokemon',), args, kwargs)
        return self.add(bound['pokemon'])

    def _remove(self, args: list, kwargs: dict) -> bool:
        index = self._index(self._name_argument("remove", args, kwargs))
        if index is None:
            return False
        del self._pokemon[index]
        return True

    def _find(self, args: list, kwargs: dict) -> Pokemon:
        name = self._name_argument("find", args, kwargs)
        index = self._index(name)
        if index is None:
            raise NotFoundException(f"No Pokemon named '{name}' on the team")
        return self._pokemon[index]

    def _filter(self, args: list, kwargs: dict) -> list:
        if args:
            raise ArityMismatchException("Team->filter() only accepts named criteria")
        if not kwargs:
            raise ArityMismatchException("Team->filter() needs at least one criterion")
        for attr in kwargs:
            if attr not in Pokemon.readable:
                raise UnknownPropertyException(Pokemon.kind, attr)
        return [
            entry for entry in self._pokemon
            if all(values_equal(entry.get_property(attr), value) for attr, value in kwargs.items())
        ]

    def __str__(self) -> str:
        return f"Team({', '.join(entry.name for entry in self._pokemon)})"

    __repr__ = __str__


class SafariZone(BuiltinObject):
    """A Safari Zone with a ball counter, a turn counter and wild Pokemon."""

    kind = "SafariZone"
    params = ('balls', 'turns', 'pokemon')
    readable = params
    writable = ('balls', 'turns')
    methods = {
        'refillBalls': '_refill_balls',
        'refillTurns': '_refill_turns',
    }

    def __init__(self, balls: int = 30, turns: int = 500, pokemon: list | None = None):
        self.balls = balls
        self.turns = turns
        self._pokemon: list[Pokemon] = list(pokemon or [])

    @classmethod
    def construct(cls, args: list, kwargs: dict) -> 'SafariZone':
        """
        Build a SafariZone from its counters and an optional list of Pokemon.
        """
        bound = bind_arguments(
            cls.kind, cls.params, args, kwargs,
            {'balls': 30, 'turns': 500, 'pokemon': []},
        )
        return cls(
            _count_argument("SafariZone() balls", bound["balls"]),
            _count_argument("SafariZone() turns", bound["turns"]),
            _roster(cls.kind, bound['pokemon']),
        )

    def _read(self, name: str):
        if name == 'pokemon':
            return list(self._pokemon)
        return getattr(self, name)

    def _write(self, name: str, value) -> None:
        setattr(self, name, _count_argument(f"SafariZone.{name}", value))

    def _refill_balls(self, args: list, kwargs: dict) -> int:
        bound = bind_arguments("refillBalls", ('amount',), args, kwargs)
        self.balls += _count_argument("refillBalls()", bound['amount'])
        return self.balls

    def _refill_turns(self, args: list, kwargs: dict) -> int:
        bound = bind_arguments("refillTurns", ('amount',), args, kwargs)
        self.turns += _count_argument("refillTurns()", bound['amount'])
        return self.turns

    def wild_pokemon(self) -> Pokemon | None:
        """
        Return the first Pokemon in the zone that has not been caught.
        """
        for entry in self._pokemon:
            if not entry.caught:
                return entry
        return None

    def throw_ball(self) -> tuple[bool, list[str]]:
        """
        Throw one Safari Ball at the next wild Pokemon.

        Returns:
            tuple: Whether a Pokemon was caught, and the status messages to show.
        """
        if self.turns <= 0:
            return False, ["The Safari Game is over!"]
        if self.balls <= 0:
            return False, ["You have no Safari Balls left!"]
        self.balls -= 1
        self.turns -= 1
        messages = [f"You threw a Safari Ball! ({self.balls} left)"]
        target = self.wild_pokemon()
        if target is None:
            messages.append("The ball hit nothing. No wild Pokemon here.")
            return False, messages
        target.caught = True
        messages.append(f"Gotcha! {target.name} was caught!")
        logger.debug("Caught %s; %d balls and %d turns left", target.name, self.balls, self.turns)
        return True, messages

    def __str__(self) -> str:
        return (
            f"SafariZone(balls={self.balls}, turns={self.turns}, "
            f"pokemon={len(self._pokemon)})"
        )

    __repr__ = __str__


CONSTRUCTORS = {
    'SafariZone': SafariZone,
    'Team': Team,
    'Pokemon': Pokemon,
}

__all__ = [
    "BuiltinObject",
    "Pokemon",
    "Team",
    "SafariZone",
    "CONSTRUCTORS",
    "bind_arguments",
]
