"""
Tests for the built-in SafariZone, Team and Pokemon objects.
"""
import logging

import pytest

from pukimo.exceptions import (
    ArityMismatchException,
    DuplicateEntityException,
    InvalidArgumentException,
    NotAnObjectException,
    NotFoundException,
    NumericRangeException,
    ReadOnlyPropertyException,
    TypeMismatchException,
    UnknownMethodException,
    UnknownPropertyException,
)
from pukimo.objects import Pokemon, SafariZone, Team
from pukimo.tests.utils import output_lines, run_source


def make(name, **kwargs):
    """
    Construct a Pokemon the way the language does.
    """
    return Pokemon.construct([name], kwargs)


# ----------------------------------------------------------------------
# Pokemon
# ----------------------------------------------------------------------

def test_pokemon_defaults():
    """
    Omitted constructor arguments take their documented defaults.
    """
    p = make("Eevee")
    assert (p.name, p.level, p.nature, p.behavior, p.friendliness, p.caught) == (
        "Eevee", 1, "Hardy", "Calm", 70, False,
    )
    assert str(p) == "Pokemon(name=Eevee, level=1, nature=Hardy, caught=false)"


def test_pokemon_constructor_coercion():
    """
    Decimals truncate for integer attributes and numbers become text.
    """
    p = Pokemon.construct(["Abra", 3.9, 5], {})
    assert p.level == 3
    assert p.nature == "5"


@pytest.mark.parametrize("args, kwargs, error", [
    ([1], {}, TypeMismatchException),
    (["A"], {"level": "high"}, TypeMismatchException),
    (["A"], {"caught": 1}, TypeMismatchException),
    (["A", 1, "x", "y", 2, False, "extra"], {}, ArityMismatchException),
    (["A"], {"speed": 3}, ArityMismatchException),
    (["A"], {"name": "B"}, ArityMismatchException),
    ([], {}, ArityMismatchException),
])
def test_pokemon_constructor_errors(args, kwargs, error):
    """
    Construction validates argument names, counts and types.
    """
    with pytest.raises(error):
        Pokemon.construct(args, kwargs)


def test_pokemon_property_writes():
    """
    Writable properties coerce their values; name is read-only.
    """
    p = make("Abra")
    p.set_property("level", 7.8)
    p.set_property("behavior", 12)
    p.set_property("caught", True)
    assert (p.level, p.behavior, p.caught) == (7, "12", True)

    with pytest.raises(ReadOnlyPropertyException):
        p.set_property("name", "Kadabra")
    with pytest.raises(UnknownPropertyException):
        p.get_property("speed")
    with pytest.raises(UnknownPropertyException):
        p.set_property("speed", 1)


def test_incompatible_write_is_ignored(caplog):
    """
    Writing the wrong type leaves the attribute unchanged and logs a warning.
    """
    p = make("Abra")
    with caplog.at_level(logging.WARNING, logger="pukimo.objects"):
        p.set_property("caught", 1)
        p.set_property("level", "ten")
    assert p.caught is False
    assert p.level == 1
    assert len(caplog.records) == 2
    assert "Abra.caught" in caplog.records[0].getMessage()


def test_level_up():
    """
    levelUp adds one level by default or the given non-negative amount.
    """
    p = make("Abra")
    assert p.call_method("levelUp", [], {}) == 2
    assert p.call_method("levelUp", [3], {}) == 5
    assert p.call_method("levelUp", [], {"levels": 0}) == 5
    with pytest.raises(InvalidArgumentException):
        p.call_method("levelUp", [-1], {})
    with pytest.raises(TypeMismatchException):
        p.call_method("levelUp", [1.5], {})
    with pytest.raises(UnknownMethodException):
        p.call_method("evolve", [], {})


# ----------------------------------------------------------------------
# Team
# ----------------------------------------------------------------------

def test_team_add_and_duplicates():
    """
    Names are unique within a team.
    """
    team = Team.construct([], {})
    abra = make("Abra")
    assert team.call_method("add", [abra], {}) is abra
    with pytest.raises(DuplicateEntityException):
        team.call_method("add", [make("Abra")], {})
    with pytest.raises(TypeMismatchException):
        team.call_method("add", ["Abra"], {})
    with pytest.raises(DuplicateEntityException):
        Team.construct([[make("A"), make("A")]], {})
    with pytest.raises(TypeMismatchException):
        Team.construct([[1]], {})


def test_team_remove():
    """
    remove reports whether anything was removed and never fails on a miss.
    """
    team = Team([make("Abra")])
    assert team.call_method("remove", ["Zubat"], {}) is False
    assert team.call_method("remove", ["Abra"], {}) is True
    assert team.get_property("pokemon") == []


def test_team_find_returns_stored_instance():
    """
    find hands out the roster's own Pokemon.
    """
    abra = make("Abra")
    team = Team([abra])
    assert team.call_method("find", ["Abra"], {}) is abra
    with pytest.raises(NotFoundException):
        team.call_method("find", ["Zubat"], {})
    with pytest.raises(TypeMismatchException):
        team.call_method("find", [3], {})


def test_team_filter():
    """
    filter returns a new list of Pokemon matching every named criterion.
    """
    team = Team([make("A", level=5), make("B", level=5, caught=True), make("C")])
    result = team.call_method("filter", [], {"level": 5, "caught": False})
    assert [p.name for p in result] == ["A"]
    assert team.call_method("filter", [], {"nature": "Bold"}) == []
    assert len(team.get_property("pokemon")) == 3

    with pytest.raises(UnknownPropertyException):
        team.call_method("filter", [], {"speed": 1})
    with pytest.raises(ArityMismatchException):
        team.call_method("filter", [], {})
    with pytest.raises(ArityMismatchException):
        team.call_method("filter", [5], {})


def test_team_roster_is_a_copy():
    """
    The pokemon property is a fresh list; changing it leaves the team alone.
    """
    team = Team([make("A")])
    roster = team.get_property("pokemon")
    roster.append(make("B"))
    assert str(team) == "Team(A)"
    with pytest.raises(ReadOnlyPropertyException):
        team.set_property("pokemon", [])


# ----------------------------------------------------------------------
# SafariZone
# ----------------------------------------------------------------------

def test_zone_defaults_and_counters():
    """
    Counters are settable non-negative integers; refills add to them.
    """
    zone = SafariZone.construct([], {})
    assert (zone.balls, zone.turns, zone.get_property("pokemon")) == (30, 500, [])
    assert zone.call_method("refillBalls", [5], {}) == 35
    assert zone.call_method("refillTurns", [], {"amount": 10}) == 510
    zone.set_property("balls", 2)
    assert zone.get_property("balls") == 2

    with pytest.raises(TypeMismatchException):
        zone.set_property("balls", "many")
    with pytest.raises(InvalidArgumentException):
        zone.set_property("turns", -1)
    with pytest.raises(ReadOnlyPropertyException):
        zone.set_property("pokemon", [])
    with pytest.raises(InvalidArgumentException):
        zone.call_method("refillBalls", [-1], {})
    with pytest.raises(TypeMismatchException):
        zone.call_method("refillBalls", [1.5], {})
    with pytest.raises(ArityMismatchException):
        zone.call_method("refillBalls", [], {})
    with pytest.raises(TypeMismatchException):
        SafariZone.construct([True], {})


def test_throw_ball_sequence():
    """
    Each throw uses a ball and a turn and catches the next wild Pokemon.
    """
    abra, zubat = make("Abra"), make("Zubat", caught=True)
    zone = SafariZone(balls=2, turns=10, pokemon=[zubat, abra])
    assert zone.throw_ball() == (
        True, ["You threw a Safari Ball! (1 left)", "Gotcha! Abra was caught!"],
    )
    assert abra.caught is True
    assert zone.throw_ball() == (
        False, ["You threw a Safari Ball! (0 left)", "The ball hit nothing. No wild Pokemon here."],
    )
    assert zone.throw_ball() == (False, ["You have no Safari Balls left!"])
    assert (zone.balls, zone.turns) == (0, 8)


def test_throw_ball_game_over_checked_first():
    """
    With no turns left the game is over, whatever the ball count.
    """
    zone = SafariZone(balls=0, turns=0)
    assert zone.throw_ball() == (False, ["The Safari Game is over!"])


# ----------------------------------------------------------------------
# Through the language
# ----------------------------------------------------------------------

def test_throw_ball_statement(capsys):
    """
    throwBall prints the zone's messages and evaluates to whether it caught.
    """
    interpreter = run_source(
        'zone = SafariZone(balls = 1, turns = 5, pokemon = [Pokemon("Abra")]);\n'
        "throwBall(zone);\n"
        "print(zone.pokemon);\n"
    )
    assert output_lines(capsys) == [
        "You threw a Safari Ball! (0 left)",
        "Gotcha! Abra was caught!",
        "[Pokemon(name=Abra, level=1, nature=Hardy, caught=true)]",
    ]
    assert interpreter.vars['zone'].turns == 4


def test_throw_ball_requires_zone():
    """
    throwBall only accepts a SafariZone.
    """
    with pytest.raises(TypeMismatchException) as exc:
        run_source("t = Team();\nthrowBall(t);")
    assert exc.value.line == 2


def test_changes_through_find_are_shared(capsys):
    """
    Pokemon are stored once, so every reference sees the same changes.
    """
    run_source(
        'abra = Pokemon("Abra");\n'
        "team = Team([abra]);\n"
        "zone = SafariZone(pokemon = [abra]);\n"
        'team->find("Abra").level = 9;\n'
        "throwBall(zone);\n"
        "print(team.pokemon);\n"
    )
    assert output_lines(capsys)[-1] == (
        "[Pokemon(name=Abra, level=9, nature=Hardy, caught=true)]"
    )


def test_member_access_on_non_object():
    """
    . and -> need an object on the left.
    """
    with pytest.raises(NotAnObjectException):
        run_source("x = 1;\nprint(x.level);")
    with pytest.raises(NotAnObjectException):
        run_source('"text"->levelUp();')


def test_object_errors_are_located():
    """
    Errors raised inside objects get the line of the call.
    """
    with pytest.raises(UnknownMethodException) as exc:
        run_source('p = Pokemon("Abra");\n\np->fly();')
    assert exc.value.line == 3
    assert str(exc.value) == "Pokemon has no method 'fly' on line 3 in <test>"


def test_filter_from_the_language(capsys):
    """
    Named arguments reach Team->filter as criteria.
    """
    run_source(
        'team = Team([Pokemon("A", nature = "Bold"), Pokemon("B")]);\n'
        'print(team->filter(nature = "Bold"));\n'
        'print(team->remove("A"));\n'
        "print(team);\n"
    )
    assert output_lines(capsys) == [
        "[Pokemon(name=A, level=1, nature=Bold, caught=false)]",
        "true",
        "Team(B)",
    ]


def test_zone_counter_update_through_property(capsys):
    """
    A counter can be read and written back through property access.
    """
    run_source(
        "myZone = SafariZone(10, 20);\n"
        "myZone.balls = myZone.balls - 1;\n"
        "print(myZone.balls);\n"
    )
    assert output_lines(capsys) == ['9']


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
def test_non_finite_levels_are_rejected(value):
    """
    Integer attributes refuse decimals that have no integer value.
    """
    with pytest.raises(NumericRangeException):
        Pokemon.construct(["Abra", value], {})
    p = make("Abra")
    with pytest.raises(NumericRangeException):
        p.set_property("friendliness", value)
    assert p.friendliness == 70


def test_infinite_level_from_the_language():
    """
    A decimal literal too large to represent cannot become a level.
    """
    huge = "1" + "0" * 400 + ".0"
    with pytest.raises(NumericRangeException) as exc:
        run_source(f'p = Pokemon("Abra");\np.level = {huge};')
    assert exc.value.line == 2
