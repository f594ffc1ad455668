"""
Sheet composer.

Places the box net and the lid net on one canvas, box above lid, with a
uniform border and a fixed gap between them. Placement is pure translation:
neither net's internal geometry changes.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from box_dimensions import Dimensions, LayoutConfig
from box_geometry import LineRole, PanelNet, Primitive
from panel_unfolder import net_size, unfold_box, unfold_lid

logger = logging.getLogger(__name__)

DEFAULT_PADDING = 20.0


@dataclass(frozen=True)
class SheetLayout:
    """Composed pattern: flat primitive list plus canvas size."""
    primitives: Tuple[Primitive, ...]
    width: float
    height: float
    nets: Tuple[PanelNet, ...] = ()

    def by_role(self, role: LineRole) -> Tuple[Primitive, ...]:
        return tuple(p for p in self.primitives if p.role is role)


@dataclass(frozen=True)
class PatternSummary:
    """Sizes reported alongside a pattern."""
    box_net: Tuple[float, float]
    lid_net: Tuple[float, float]
    lid_plan: Tuple[float, float]

    def lines(self):
        return [
            f"Bottom: {self.box_net[0]:.1f} x {self.box_net[1]:.1f} mm",
            f"Lid: {self.lid_net[0]:.1f} x {self.lid_net[1]:.1f} mm",
            f"Lid plan: {self.lid_plan[0]:.1f} x {self.lid_plan[1]:.1f} mm",
        ]


def compose(
    show_box: bool,
    show_lid: bool,
    box_net: Optional[PanelNet],
    lid_net: Optional[PanelNet],
    padding: float = DEFAULT_PADDING,
) -> SheetLayout:
    """Stack the requested nets on a shared canvas.

    Args:
        show_box: Include the box net.
        show_lid: Include the lid net.
        box_net: Box net at any origin (ignored when hidden).
        lid_net: Lid net at any origin (ignored when hidden).
        padding: Border around the canvas and gap between the nets.

    Returns:
        SheetLayout with box primitives first, then lid primitives.
    """
    visible = []
    if show_box and box_net is not None:
        visible.append(box_net)
    if show_lid and lid_net is not None:
        visible.append(lid_net)

    placed = []
    cursor_y = padding
    for net in visible:
        min_x, min_y, _, _ = net.bounds
        placed.append(net.translated(padding - min_x, cursor_y - min_y))
        cursor_y += net.height + padding

    width = max((n.width for n in visible), default=0.0) + 2 * padding
    height = sum(n.height for n in visible) + padding * max(0, len(visible) - 1) + 2 * padding

    primitives = tuple(p for net in placed for p in net.primitives)
    logger.info(
        "Composed sheet %.3f x %.3f with %d nets, %d primitives",
        width, height, len(placed), len(primitives),
    )
    return SheetLayout(primitives=primitives, width=width, height=height, nets=tuple(placed))


def build_sheet(dims: Dimensions, config: Optional[LayoutConfig] = None) -> SheetLayout:
    """Run the whole layout engine for one set of dimensions."""
    if config is None:
        config = LayoutConfig()
    box_net = unfold_box(dims) if config.show_box else None
    lid_net = unfold_lid(dims) if config.show_lid else None
    return compose(config.show_box, config.show_lid, box_net, lid_net, config.padding)


def pattern_summary(dims: Dimensions) -> PatternSummary:
    return PatternSummary(
        box_net=net_size(dims.width, dims.depth, dims.height),
        lid_net=net_size(dims.lid_width, dims.lid_depth, dims.lid_height),
        lid_plan=(dims.lid_width, dims.lid_depth),
    )
