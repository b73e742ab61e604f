"""Tests for offspring lifecycle state helpers."""

from repro_platform.lifecycle import (
    ALIVE_UNWEANED,
    ALIVE_WEANED,
    DEAD_UNWEANED,
    DEAD_WEANED,
    can_die,
    can_wean,
    is_terminal_state,
    offspring_state,
)
from repro_platform.models import Offspring


def _offspring(is_alive: bool = True, weaned: bool = False) -> Offspring:
    return Offspring(
        id="L1",
        litter_id="EWE-1-1",
        sex="female",
        is_alive=is_alive,
        survived_till_weaning=weaned,
    )


def test_offspring_state_covers_all_four_states():
    assert offspring_state(_offspring()) == ALIVE_UNWEANED
    assert offspring_state(_offspring(weaned=True)) == ALIVE_WEANED
    assert offspring_state(_offspring(is_alive=False)) == DEAD_UNWEANED
    assert offspring_state(_offspring(is_alive=False, weaned=True)) == DEAD_WEANED


def test_is_terminal_state():
    assert is_terminal_state(DEAD_UNWEANED) is True
    assert is_terminal_state(DEAD_WEANED) is True
    assert is_terminal_state(ALIVE_UNWEANED) is False
    assert is_terminal_state(ALIVE_WEANED) is False


def test_can_wean_only_while_alive():
    assert can_wean(_offspring()) is True
    assert can_wean(_offspring(weaned=True)) is True
    assert can_wean(_offspring(is_alive=False)) is False
    assert can_wean(_offspring(is_alive=False, weaned=True)) is False


def test_can_die_only_once():
    assert can_die(_offspring()) is True
    assert can_die(_offspring(weaned=True)) is True
    assert can_die(_offspring(is_alive=False)) is False
