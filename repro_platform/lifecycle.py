"""Offspring lifecycle state machine helpers.

Four reachable states::

    alive-unweaned --wean--> alive-weaned
          |                       |
        death                   death
          v                       v
    dead-unweaned            dead-weaned

Both dead states are terminal: no further weaning or death is accepted.
"""

from __future__ import annotations

from repro_platform.models import Offspring

ALIVE_UNWEANED = "alive-unweaned"
ALIVE_WEANED = "alive-weaned"
DEAD_UNWEANED = "dead-unweaned"
DEAD_WEANED = "dead-weaned"

TERMINAL_STATES = {DEAD_UNWEANED, DEAD_WEANED}


def offspring_state(offspring: Offspring) -> str:
    """Return the lifecycle state name for an offspring record."""
    if offspring.is_alive:
        return ALIVE_WEANED if offspring.survived_till_weaning else ALIVE_UNWEANED
    return DEAD_WEANED if offspring.survived_till_weaning else DEAD_UNWEANED


def is_terminal_state(state: str) -> bool:
    """Return True when a lifecycle state accepts no further transitions."""
    return state in TERMINAL_STATES


def can_wean(offspring: Offspring) -> bool:
    """Weaning is allowed in either alive state (re-weaning is a no-op)."""
    return not is_terminal_state(offspring_state(offspring))


def can_die(offspring: Offspring) -> bool:
    return not is_terminal_state(offspring_state(offspring))


__all__ = [
    "ALIVE_UNWEANED",
    "ALIVE_WEANED",
    "DEAD_UNWEANED",
    "DEAD_WEANED",
    "TERMINAL_STATES",
    "offspring_state",
    "is_terminal_state",
    "can_wean",
    "can_die",
]
