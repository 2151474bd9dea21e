"""
Discrete key bindings for the simulation controls.

Keys are pygame.key.name() strings so the mapping can be tested without a
window.
"""

from __future__ import annotations

import enum
import logging
from typing import Iterable, List

from .attractors import ATTRACTORS

logger = logging.getLogger(__name__)


class Action(enum.Enum):
    CLEAR = "clear"
    SELECT_EQUATION = "select_equation"
    MORE_SUBSTEPS = "more_substeps"
    FEWER_SUBSTEPS = "fewer_substeps"
    LARGER_DT = "larger_dt"
    SMALLER_DT = "smaller_dt"
    QUIT = "quit"


# digit keys pick presets in ATTRACTORS order
EQUATION_KEYS = {str(i + 1): name for i, name in enumerate(ATTRACTORS)}

QUIT_KEYS = ("escape", "q")
CLEAR_KEYS = ("c",)
MORE_SUBSTEP_KEYS = ("[+]", "=")
FEWER_SUBSTEP_KEYS = ("[-]", "-")
LARGER_DT_KEYS = ("]",)
SMALLER_DT_KEYS = ("[",)

# held while clicking to spawn a cluster instead of one particle
CLUSTER_MODIFIER = "left shift"


def actions_for_keys(keys: Iterable[str]) -> List[tuple]:
    """Map just-pressed key names to (Action, argument) pairs.

    The result never depends on the order of keys. Each group yields at most one
    action: the lowest equation digit wins, more substeps beats fewer, a larger dt
    beats a smaller one.
    """
    keys = set(keys)
    if keys.intersection(QUIT_KEYS):
        return [(Action.QUIT, None)]

    actions = []
    if keys.intersection(CLEAR_KEYS):
        actions.append((Action.CLEAR, None))
    for key, name in EQUATION_KEYS.items():
        if key in keys:
            actions.append((Action.SELECT_EQUATION, name))
            break
    if keys.intersection(MORE_SUBSTEP_KEYS):
        actions.append((Action.MORE_SUBSTEPS, None))
    elif keys.intersection(FEWER_SUBSTEP_KEYS):
        actions.append((Action.FEWER_SUBSTEPS, None))
    if keys.intersection(LARGER_DT_KEYS):
        actions.append((Action.LARGER_DT, None))
    elif keys.intersection(SMALLER_DT_KEYS):
        actions.append((Action.SMALLER_DT, None))
    return actions


def apply_actions(actions, sim, store) -> bool:
    """Run the actions against the simulation; returns False when asked to quit."""
    for action, arg in actions:
        if action is Action.QUIT:
            logger.info("Quit requested")
            return False
        if action is Action.CLEAR:
            store.despawn_all()
        elif action is Action.SELECT_EQUATION:
            sim.select_equation(arg)
        elif action is Action.MORE_SUBSTEPS:
            sim.increase_substeps()
        elif action is Action.FEWER_SUBSTEPS:
            sim.decrease_substeps()
        elif action is Action.LARGER_DT:
            sim.increase_dt_exponent()
        elif action is Action.SMALLER_DT:
            sim.decrease_dt_exponent()
    return True
