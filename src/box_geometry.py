"""
Core geometry types for die-cut pattern layout.

Every pattern is a flat, ordered list of Primitive values (cut rectangles,
open cut paths and fold lines). Primitives carry a visual role but no style;
styling is left to the exporters. Shapely is used for bounds and spatial
checks on the primitives.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple

import numpy as np
import shapely
from shapely.geometry import LineString, Polygon

Point = Tuple[float, float]
Bounds = Tuple[float, float, float, float]


class Orientation(Enum):
    """Direction of an edge on the working plane."""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class FeatureType(Enum):
    """Locking features generated along an edge."""
    TAB = "tab"
    SLOT = "slot"


class PrimitiveKind(Enum):
    RECT = "rect"    # closed rectangle
    PATH = "path"    # open polyline
    LINE = "line"    # single segment


class LineRole(Enum):
    """What the cutting machine does with a primitive."""
    CUT = "cut"
    FOLD = "fold"


class ShellKind(Enum):
    """The two developable shells of a banker box.

    The box opens upward (walls fold up from the base), the lid opens
    downward (walls fold down from the top panel). Both unfold to the
    same net shape; only naming and fold direction differ.
    """
    BOX = "box"
    LID = "lid"

    @property
    def fold_direction(self) -> int:
        return 1 if self is ShellKind.BOX else -1

    @property
    def prefix(self) -> str:
        return "" if self is ShellKind.BOX else "lid-"

    @property
    def panel_name(self) -> str:
        return "base" if self is ShellKind.BOX else "top"


@dataclass(frozen=True)
class Edge:
    """A directed segment used as input to the tab/slot generator.

    The anchor is the edge's minimum-coordinate end; the edge runs along
    +x (horizontal) or +y (vertical) for ``length`` units.
    """
    anchor: Point
    length: float
    orientation: Orientation

    @property
    def end(self) -> Point:
        x, y = self.anchor
        if self.orientation is Orientation.HORIZONTAL:
            return (x + self.length, y)
        return (x, y + self.length)


@dataclass(frozen=True)
class Primitive:
    """A single geometric element of a pattern.

    ``points`` holds the vertices in drawing order. Rectangles store their
    four corners counter-clockwise from the minimum corner; paths and lines
    are open.
    """
    kind: PrimitiveKind
    role: LineRole
    points: Tuple[Point, ...]
    name: str = ""

    @property
    def geometry(self) -> shapely.Geometry:
        if self.kind is PrimitiveKind.RECT:
            return Polygon(self.points)
        return LineString(self.points)

    @property
    def bounds(self) -> Bounds:
        xs = [p[0] for p in self.points]
        ys = [p[1] for p in self.points]
        return (min(xs), min(ys), max(xs), max(ys))

    @property
    def rect(self) -> Tuple[float, float, float, float]:
        """(x, y, width, height) of a RECT primitive."""
        min_x, min_y, max_x, max_y = self.bounds
        return (min_x, min_y, max_x - min_x, max_y - min_y)

    def translated(self, dx: float, dy: float) -> "Primitive":
        moved = np.asarray(self.points, dtype=float) + np.array([dx, dy])
        return Primitive(
            kind=self.kind,
            role=self.role,
            points=tuple(_to_point(p) for p in moved),
            name=self.name,
        )


@dataclass(frozen=True)
class PanelNet:
    """The fully unfolded 2D layout of one shell."""
    shell: ShellKind
    primitives: Tuple[Primitive, ...]

    @property
    def bounds(self) -> Bounds:
        return primitives_bounds(self.primitives)

    @property
    def width(self) -> float:
        min_x, _, max_x, _ = self.bounds
        return max_x - min_x

    @property
    def height(self) -> float:
        _, min_y, _, max_y = self.bounds
        return max_y - min_y

    def by_role(self, role: LineRole) -> Tuple[Primitive, ...]:
        return tuple(p for p in self.primitives if p.role is role)

    def named(self, name: str) -> Primitive:
        for p in self.primitives:
            if p.name == name:
                return p
        raise KeyError(name)

    def translated(self, dx: float, dy: float) -> "PanelNet":
        return PanelNet(
            shell=self.shell,
            primitives=tuple(p.translated(dx, dy) for p in self.primitives),
        )


# ─── Constructors ────────────────────────────────────────────────────────────

def make_rect(
    x: float, y: float, width: float, height: float,
    role: LineRole = LineRole.CUT, name: str = "",
) -> Primitive:
    """Rectangle from its minimum corner and size."""
    return Primitive(
        kind=PrimitiveKind.RECT,
        role=role,
        points=(
            (float(x), float(y)),
            (float(x + width), float(y)),
            (float(x + width), float(y + height)),
            (float(x), float(y + height)),
        ),
        name=name,
    )


def rect_between(a, b, role: LineRole = LineRole.CUT, name: str = "") -> Primitive:
    """Axis-aligned rectangle spanned by two opposite corners."""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    lo = np.minimum(a, b)
    hi = np.maximum(a, b)
    return make_rect(lo[0], lo[1], hi[0] - lo[0], hi[1] - lo[1], role=role, name=name)


def make_path(points: Iterable, role: LineRole = LineRole.CUT, name: str = "") -> Primitive:
    return Primitive(
        kind=PrimitiveKind.PATH,
        role=role,
        points=tuple(_to_point(p) for p in points),
        name=name,
    )


def make_line(start, end, role: LineRole = LineRole.FOLD, name: str = "") -> Primitive:
    return Primitive(
        kind=PrimitiveKind.LINE,
        role=role,
        points=(_to_point(start), _to_point(end)),
        name=name,
    )


# ─── Helpers ─────────────────────────────────────────────────────────────────

def primitives_bounds(primitives: Iterable[Primitive]) -> Bounds:
    """Union bounding box of a set of primitives.

    Returns (0, 0, 0, 0) for an empty collection.
    """
    geoms = [p.geometry for p in primitives]
    if not geoms:
        return (0.0, 0.0, 0.0, 0.0)
    min_x, min_y, max_x, max_y = shapely.total_bounds(geoms)
    return (float(min_x), float(min_y), float(max_x), float(max_y))


def bounds_polygon(bounds: Bounds) -> Polygon:
    """Shapely box for a (min_x, min_y, max_x, max_y) tuple."""
    return shapely.box(*bounds)


def _to_point(p) -> Point:
    return (float(p[0]), float(p[1]))
