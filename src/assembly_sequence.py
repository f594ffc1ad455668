"""
Assembly sequence for a folded shell.

Turns an unfolded net into the ordered folding steps a person follows to
build it: cut, score, raise the walls, tuck the corner flaps, fold the inner
walls back and lock their tabs into the base slots.
"""
import logging
from dataclasses import dataclass
from typing import List, Tuple

from box_geometry import LineRole, PanelNet, PrimitiveKind, ShellKind

logger = logging.getLogger(__name__)

SIDES = ("front", "back", "left", "right")


@dataclass(frozen=True)
class AssemblyStep:
    """A single step in the assembly sequence."""
    step_number: int
    action: str                     # "cut", "score", "fold", "lock", "place"
    panels: Tuple[str, ...] = ()    # primitive names the step acts on
    notes: str = ""


def assembly_sequence(net: PanelNet) -> List[AssemblyStep]:
    """Ordered assembly steps for one unfolded shell.

    Args:
        net: Box or lid net from the panel unfolder.

    Returns:
        Steps numbered from 1.
    """
    prefix = net.shell.prefix
    names = {p.name for p in net.primitives}
    walls = tuple(n for n in (f"{prefix}{s}-wall" for s in SIDES) if n in names)
    inners = tuple(n for n in (f"{prefix}{s}-inner" for s in SIDES) if n in names)
    flaps = tuple(
        p.name for p in net.primitives
        if p.kind is PrimitiveKind.PATH and p.name.endswith("-flap")
    )
    tabs = tuple(p.name for p in net.primitives if "-tab-" in p.name)
    folds = tuple(p.name for p in net.by_role(LineRole.FOLD))

    if net.shell is ShellKind.BOX:
        panel = "base"
        direction = "up from the base"
        inner_direction = "back down into the box"
    else:
        panel = "top panel"
        direction = "down from the top panel"
        inner_direction = "up inside the walls"

    plan = [
        ("cut", (), "Cut out the pattern along all cut lines"),
        ("score", folds, "Score all fold lines for easier folding"),
        ("fold", walls, f"Fold the four walls {direction}"),
        ("fold", flaps, "Fold the corner flaps inward"),
        ("fold", inners, f"Fold the inner wall panels {inner_direction}"),
        ("lock", tabs, f"Insert tabs through the slots in the {panel} to lock the walls"),
    ]
    if net.shell is ShellKind.LID:
        plan.append(("place", (), "Place the lid over the bottom box"))

    steps = [
        AssemblyStep(step_number=i + 1, action=action, panels=panels, notes=notes)
        for i, (action, panels, notes) in enumerate(plan)
    ]
    logger.info("Assembly sequence (%s): %d steps", net.shell.value, len(steps))
    return steps


def format_steps(steps: List[AssemblyStep]) -> List[str]:
    return [f"{s.step_number}. {s.notes}" for s in steps]
