"""
Panel unfolder.

Builds the flat net of one hinged shell: a base (or lid top) panel with
slots on every edge, four outer walls, four double-wall inner panels that
fold back and lock into the slots with tabs, and eight corner flaps. The box
and the lid use the same routine; only the plan size, wall height and
naming differ.

Layout, with h = wall height and t = material thickness:

    origin ─┐
            ▼   2h        W        2h
          ┌────┬───────────────┬────┐
          │    │  front inner  │    │  h - t (+ t of tabs)
          │    ├───────────────┤    │
          │    │  front wall   │    │  h
          ├────┼───────────────┼────┤
          │ L  │               │ R  │
          │    │     base      │    │  D
          ├────┼───────────────┼────┤
          │    │  back wall    │    │
          │    │  back inner   │    │
          └────┴───────────────┴────┘

All coordinates are additive offsets from ``origin``; every fold line lies
exactly on the shared edge of the two panels it joins.
"""
import logging
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from box_dimensions import Dimensions
from box_geometry import (
    Edge,
    FeatureType,
    LineRole,
    Orientation,
    PanelNet,
    Point,
    Primitive,
    ShellKind,
    make_line,
    make_path,
    make_rect,
    rect_between,
)
from tab_slot_generator import generate_features

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _WallSide:
    """One edge of the base panel and the wall hinged to it."""
    name: str
    hinge: np.ndarray      # start of the base edge (minimum coordinate end)
    along: np.ndarray      # unit vector along the base edge
    outward: np.ndarray    # unit vector from the base towards the wall
    length: float
    flap_inset: float      # corner flaps start this far from the hinge

    @property
    def orientation(self) -> Orientation:
        return Orientation.HORIZONTAL if self.along[0] else Orientation.VERTICAL

    @property
    def sign(self) -> int:
        return int(self.outward.sum())


def net_size(panel_width: float, panel_depth: float, wall_height: float) -> Tuple[float, float]:
    """(width, height) of the unfolded net for a panel and wall height."""
    return (panel_width + 4 * wall_height, panel_depth + 4 * wall_height)


def unfold(
    panel_width: float,
    panel_depth: float,
    wall_height: float,
    dims: Dimensions,
    origin: Point = (0.0, 0.0),
    shell: ShellKind = ShellKind.BOX,
) -> PanelNet:
    """Unfold one shell into a flat net.

    Args:
        panel_width: Base/top panel size along x.
        panel_depth: Base/top panel size along y.
        wall_height: Height of the outer walls.
        dims: Material thickness, tab and clearance parameters.
        origin: Top-left corner of the net's bounding box.
        shell: BOX or LID; selects primitive naming.

    Returns:
        PanelNet with primitives ordered base, slots, then per wall:
        outer wall, hinge, inner wall, inner hinge, tabs, corner flaps.
    """
    w, d, h = panel_width, panel_depth, wall_height
    t = dims.material_thickness
    prefix = shell.prefix

    ox, oy = float(origin[0]), float(origin[1])
    base = np.array([ox + 2 * h, oy + 2 * h])
    bx, by = float(base[0]), float(base[1])

    primitives: List[Primitive] = [
        make_rect(bx, by, w, d, name=f"{prefix}{shell.panel_name}"),
    ]

    # Slots sit just inside each base edge; back and right rows start one
    # thickness in so every slot lies on the panel.
    slot_edges = [
        ("front", Edge((bx, by), w, Orientation.HORIZONTAL)),
        ("back", Edge((bx, by + d - t), w, Orientation.HORIZONTAL)),
        ("left", Edge((bx, by), d, Orientation.VERTICAL)),
        ("right", Edge((bx + w - t, by), d, Orientation.VERTICAL)),
    ]
    for side, edge in slot_edges:
        primitives.extend(
            generate_features(edge, FeatureType.SLOT, dims, name=f"{prefix}{side}")
        )

    x_axis = np.array([1.0, 0.0])
    y_axis = np.array([0.0, 1.0])
    sides = [
        _WallSide("front", base, x_axis, -y_axis, w, 0.0),
        _WallSide("back", base + y_axis * d, x_axis, y_axis, w, 0.0),
        _WallSide("left", base, y_axis, -x_axis, d, t),
        _WallSide("right", base + x_axis * w, y_axis, x_axis, d, t),
    ]
    for side in sides:
        primitives.extend(_wall(side, h, dims, prefix))

    net = PanelNet(shell=shell, primitives=tuple(primitives))
    logger.debug(
        "Unfolded %s net %.3f x %.3f with %d primitives",
        shell.value, net.width, net.height, len(net.primitives),
    )
    return net


def unfold_box(dims: Dimensions, origin: Point = (0.0, 0.0)) -> PanelNet:
    """Net of the box body at its interior size."""
    return unfold(dims.width, dims.depth, dims.height, dims, origin, ShellKind.BOX)


def unfold_lid(dims: Dimensions, origin: Point = (0.0, 0.0)) -> PanelNet:
    """Net of the lid, sized to slide over the box's outer envelope."""
    return unfold(dims.lid_width, dims.lid_depth, dims.lid_height, dims, origin, ShellKind.LID)


# ─── Internal helpers ────────────────────────────────────────────────────────

def _wall(side: _WallSide, h: float, dims: Dimensions, prefix: str) -> List[Primitive]:
    """Outer wall, inner wall, their hinges, tabs and corner flaps for one side."""
    t = dims.material_thickness
    key = f"{prefix}{side.name}"
    start = side.hinge
    end = side.hinge + side.along * side.length
    n = side.outward

    elements: List[Primitive] = [
        rect_between(start, end + n * h, name=f"{key}-wall"),
        make_line(start, end, role=LineRole.FOLD, name=f"{key}-fold"),
        rect_between(start + n * h, end + n * (2 * h - t), name=f"{key}-inner"),
        make_line(start + n * h, end + n * h, role=LineRole.FOLD, name=f"{key}-inner-fold"),
    ]

    # Tabs on the free edge of the inner wall, pointing away from the base.
    tab_anchor = start + n * (2 * h - t)
    free_edge = Edge(
        anchor=(float(tab_anchor[0]), float(tab_anchor[1])),
        length=side.length,
        orientation=side.orientation,
    )
    elements.extend(generate_features(
        free_edge, FeatureType.TAB, dims, outward=side.sign, name=f"{key}-inner",
    ))

    for corner, hinge_point, away in (
        ("start", start, -side.along),
        ("end", end, side.along),
    ):
        near = hinge_point + n * side.flap_inset
        far = hinge_point + n * h
        elements.append(make_path(
            [far, far + away * t, near + away * t, near],
            role=LineRole.CUT,
            name=f"{key}-{_corner_name(side, corner)}-flap",
        ))
        elements.append(make_line(
            far, near, role=LineRole.FOLD,
            name=f"{key}-{_corner_name(side, corner)}-flap-fold",
        ))

    return elements


def _corner_name(side: _WallSide, corner: str) -> str:
    if side.orientation is Orientation.HORIZONTAL:
        return "left" if corner == "start" else "right"
    return "front" if corner == "start" else "back"
