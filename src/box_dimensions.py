"""
Box dimension parameters and layout options.

Dimensions are interior sizes of the box plus the corrugate and joinery
parameters, all in one linear unit (millimetres by convention). Input
collected from users is coerced leniently: anything that does not parse as
a number becomes zero. Strict checking is opt-in through validate().
"""
import logging
import math
import re
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import List, Mapping, Optional

logger = logging.getLogger(__name__)

# Keys used by the browser form, mapped to dataclass fields.
FIELD_ALIASES = {
    "lidHeight": "lid_height",
    "lidWallHeight": "lid_height",
    "materialThickness": "material_thickness",
    "tabWidth": "tab_width",
    "tabSpacing": "tab_spacing",
    "assemblyClearance": "clearance",
}

_LEADING_NUMBER = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class DimensionError(ValueError):
    """Raised when dimensions are rejected by strict validation."""

    def __init__(self, issues: List["DimensionIssue"]):
        self.issues = issues
        details = "; ".join(i.message for i in issues)
        super().__init__(f"Invalid box dimensions: {details}")


class StyleMode(Enum):
    """How fold lines are told apart from cut lines in exported files."""
    SCREEN = "screen"   # red fold lines
    LASER = "laser"     # dashed fold lines


@dataclass(frozen=True)
class DimensionIssue:
    """A single problem found in a Dimensions record."""
    field: str
    severity: str  # "error" or "warning"
    message: str
    value: float = 0.0


@dataclass(frozen=True)
class Dimensions:
    """Interior box size, lid wall height and material parameters."""
    width: float = 150.0
    depth: float = 100.0
    height: float = 80.0
    lid_height: float = 25.0
    material_thickness: float = 2.0
    tab_width: float = 15.0
    tab_spacing: float = 30.0
    clearance: float = 0.5

    @property
    def outer_width(self) -> float:
        return self.width + 2 * self.material_thickness

    @property
    def outer_depth(self) -> float:
        return self.depth + 2 * self.material_thickness

    @property
    def lid_clearance(self) -> float:
        """Total play between the lid cavity and the box envelope."""
        return 2 * self.clearance

    @property
    def lid_width(self) -> float:
        return self.outer_width + self.lid_clearance

    @property
    def lid_depth(self) -> float:
        return self.outer_depth + self.lid_clearance

    @classmethod
    def from_mapping(cls, values: Mapping[str, object], base: Optional["Dimensions"] = None) -> "Dimensions":
        """Build dimensions from raw form values.

        Unknown keys are ignored, missing keys keep the value from ``base``
        (or the defaults), and unparseable values become 0.
        """
        dims = base if base is not None else cls()
        for key, raw in values.items():
            name = FIELD_ALIASES.get(key, key)
            if name not in _FIELD_NAMES:
                logger.debug("Ignoring unknown dimension key %r", key)
                continue
            dims = dims.with_value(name, raw)
        return dims

    def with_value(self, name: str, raw: object) -> "Dimensions":
        """Copy with one field replaced by a leniently parsed value."""
        name = FIELD_ALIASES.get(name, name)
        if name not in _FIELD_NAMES:
            raise KeyError(name)
        return replace(self, **{name: coerce_dimension(raw, name)})

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def validate(self, strict: bool = False) -> List[DimensionIssue]:
        """Check the record for values the layout engine cannot use.

        Args:
            strict: Raise DimensionError if any error-severity issue is found.

        Returns:
            List of issues (empty = ok).
        """
        issues: List[DimensionIssue] = []

        for name in _FIELD_NAMES_ORDERED:
            value = getattr(self, name)
            if not math.isfinite(value):
                issues.append(DimensionIssue(
                    field=name,
                    severity="error",
                    message=f"{name} must be a finite number, got {value!r}",
                    value=value,
                ))
        if issues:
            if strict:
                raise DimensionError(issues)
            return issues

        for name in ("width", "depth", "height", "lid_height", "material_thickness", "tab_width"):
            value = getattr(self, name)
            if not value > 0:
                issues.append(DimensionIssue(
                    field=name,
                    severity="error",
                    message=f"{name} must be positive, got {value:g}",
                    value=value,
                ))

        for name in ("tab_spacing", "clearance"):
            value = getattr(self, name)
            if value < 0:
                issues.append(DimensionIssue(
                    field=name,
                    severity="error",
                    message=f"{name} must not be negative, got {value:g}",
                    value=value,
                ))

        t = self.material_thickness
        for name in ("height", "lid_height"):
            value = getattr(self, name)
            if 0 < value <= t:
                issues.append(DimensionIssue(
                    field=name,
                    severity="warning",
                    message=f"{name} {value:g} leaves no inner wall at thickness {t:g}",
                    value=value,
                ))

        # Tabs and slots run along the box and lid plan edges only.
        shortest = min(self.width, self.depth, self.lid_width, self.lid_depth)
        if self.tab_width > 0 and shortest > 0 and self.tab_width >= shortest:
            issues.append(DimensionIssue(
                field="tab_width",
                severity="warning",
                message=(
                    f"tab_width {self.tab_width:g} does not fit edge of length "
                    f"{shortest:g}; a single oversized tab will be drawn"
                ),
                value=self.tab_width,
            ))

        errors = [i for i in issues if i.severity == "error"]
        if strict and errors:
            raise DimensionError(errors)
        for issue in issues:
            if issue.severity == "warning":
                logger.warning(issue.message)
        return issues


@dataclass(frozen=True)
class LayoutConfig:
    """Which shells to draw and how to style fold lines."""
    show_box: bool = True
    show_lid: bool = True
    style_mode: StyleMode = StyleMode.SCREEN
    padding: float = 20.0


_FIELD_NAMES_ORDERED = tuple(f.name for f in fields(Dimensions))
_FIELD_NAMES = set(_FIELD_NAMES_ORDERED)


def coerce_dimension(raw: object, name: str = "value") -> float:
    """Parse a user-entered number the way the browser form does.

    Leading numeric text is used ("12mm" -> 12.0); anything else,
    including NaN and infinities, becomes 0.0.
    """
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = "" if raw is None else str(raw)
        match = _LEADING_NUMBER.match(text)
        if match is None:
            if text.strip():
                logger.warning("Could not parse %s=%r; using 0", name, raw)
            return 0.0
        value = float(match.group(0))

    if not math.isfinite(value):
        logger.warning("Non-finite %s=%r; using 0", name, raw)
        return 0.0
    return value
