"""
Tab and slot generator.

Distributes locking features evenly along a straight edge. Tabs are open
three-sided notches cut from an inner wall; slots are closed rectangular
holes in the base/top panel, enlarged by the assembly clearance so the
matching tab passes through with equal play on every side.
"""
import logging
import math
from typing import List

import numpy as np

from box_dimensions import Dimensions
from box_geometry import (
    Edge,
    FeatureType,
    LineRole,
    Orientation,
    Primitive,
    make_path,
    make_rect,
)

logger = logging.getLogger(__name__)


def compute_feature_count(length: float, tab_width: float, tab_spacing: float) -> int:
    """Number of features that fit along an edge.

    Always at least one for a usable edge, even when the tab is wider than
    the edge itself. Non-positive or non-finite lengths or widths give zero.
    """
    pitch = tab_width + tab_spacing
    if not all(math.isfinite(v) for v in (length, tab_width, pitch)):
        return 0
    if length <= 0 or tab_width <= 0 or pitch <= 0:
        return 0
    return max(1, math.floor((length - tab_width) / pitch))


def compute_feature_spacing(length: float, tab_width: float, count: int) -> float:
    """Gap left before, between and after ``count`` features of ``tab_width``."""
    if count <= 0:
        return 0.0
    return (length - count * tab_width) / (count + 1)


def feature_offsets(length: float, tab_width: float, tab_spacing: float) -> np.ndarray:
    """Along-edge start offset of each feature, measured from the edge anchor."""
    count = compute_feature_count(length, tab_width, tab_spacing)
    spacing = compute_feature_spacing(length, tab_width, count)
    return spacing + np.arange(count) * (tab_width + spacing)


def generate_features(
    edge: Edge,
    mode: FeatureType,
    dims: Dimensions,
    outward: int = 1,
    name: str = "",
) -> List[Primitive]:
    """Lay out tabs or slots along an edge.

    Args:
        edge: Anchor, length and orientation of the edge.
        mode: FeatureType.TAB for notches, FeatureType.SLOT for holes.
        dims: Supplies tab width/spacing, material thickness and clearance.
        outward: +1 to protrude tabs towards +x/+y, -1 towards -x/-y.
            Ignored for slots, which always sit on the +side of the anchor.
        name: Prefix for primitive names ("{name}-tab-{i}" / "{name}-slot-{i}").

    Returns:
        One cut primitive per feature, ordered along the edge.
    """
    offsets = feature_offsets(edge.length, dims.tab_width, dims.tab_spacing)
    if mode is FeatureType.TAB:
        features = [
            _tab(edge, float(o), dims, outward, f"{name}-tab-{i}")
            for i, o in enumerate(offsets)
        ]
    else:
        features = [
            _slot(edge, float(o), dims, f"{name}-slot-{i}")
            for i, o in enumerate(offsets)
        ]
    logger.debug(
        "Edge %s (%s, length %.3f): %d %s features",
        name, edge.orientation.value, edge.length, len(features), mode.value,
    )
    return features


# ─── Feature shapes ──────────────────────────────────────────────────────────

def _tab(edge: Edge, offset: float, dims: Dimensions, outward: int, name: str) -> Primitive:
    """Three-sided notch one material thickness deep."""
    along, across = _axes(edge.orientation)
    start = np.asarray(edge.anchor, dtype=float) + along * offset
    depth = across * dims.material_thickness * outward
    width = along * dims.tab_width
    return make_path(
        [start, start + depth, start + depth + width, start + width],
        role=LineRole.CUT,
        name=name,
    )


def _slot(edge: Edge, offset: float, dims: Dimensions, name: str) -> Primitive:
    """Hole that takes a tab with ``clearance`` play all round."""
    c = dims.clearance
    ax, ay = edge.anchor
    along_len = dims.tab_width + 2 * c
    across_len = dims.material_thickness + c
    if edge.orientation is Orientation.HORIZONTAL:
        return make_rect(ax + offset - c, ay - c / 2, along_len, across_len, name=name)
    return make_rect(ax - c / 2, ay + offset - c, across_len, along_len, name=name)


def _axes(orientation: Orientation):
    if orientation is Orientation.HORIZONTAL:
        return np.array([1.0, 0.0]), np.array([0.0, 1.0])
    return np.array([0.0, 1.0]), np.array([1.0, 0.0])
