"""
DXF export for die-cut patterns.

Uses ezdxf to produce DXF files with two layers:
  - CUT (ACI 7, black/white): panel outlines, slots, tabs and flaps
  - FOLD (ACI 1, red): score lines; dashed linetype in laser mode

DXF's y axis points up, so coordinates are mirrored against the sheet
height to keep the drawing the same way up as the SVG.

Units: millimeters. Format: R2010.
"""
import logging
import os
from dataclasses import dataclass
from typing import Optional

import ezdxf

from box_dimensions import Dimensions, StyleMode
from box_geometry import LineRole, Primitive, PrimitiveKind
from sheet_composer import SheetLayout
from svg_exporter import ExportError, pattern_filename

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DXFExportConfig:
    """Configuration for DXF export."""
    cut_layer: str = "CUT"
    fold_layer: str = "FOLD"
    cut_color: int = 7       # ACI black/white
    fold_color: int = 1      # ACI red
    laser_fold_linetype: str = "DASHED"
    flip_y: bool = True


def layout_to_dxf_document(
    layout: SheetLayout,
    style_mode: StyleMode = StyleMode.SCREEN,
    config: Optional[DXFExportConfig] = None,
):
    """Build an in-memory ezdxf document for a composed layout."""
    if config is None:
        config = DXFExportConfig()

    doc = ezdxf.new("R2010", setup=True)
    doc.units = ezdxf.units.MM
    msp = doc.modelspace()

    _setup_layers(doc, style_mode, config)
    for primitive in layout.primitives:
        _add_primitive(msp, primitive, layout.height, config)
    return doc


def sheet_to_dxf(
    layout: SheetLayout,
    filepath: str,
    style_mode: StyleMode = StyleMode.SCREEN,
    config: Optional[DXFExportConfig] = None,
) -> str:
    """Export a composed layout to a DXF file.

    Returns:
        Path to created DXF file.

    Raises:
        ExportError: The file cannot be written.
    """
    doc = layout_to_dxf_document(layout, style_mode, config)
    try:
        os.makedirs(os.path.dirname(filepath) or ".", exist_ok=True)
        doc.saveas(filepath)
    except OSError as e:
        raise ExportError(f"Cannot write DXF pattern to {filepath}: {e}") from e
    logger.info("Exported DXF: %s", filepath)
    return filepath


def export_dxf(
    layout: SheetLayout,
    dims: Dimensions,
    style_mode: StyleMode = StyleMode.SCREEN,
    output_dir: str = ".",
    config: Optional[DXFExportConfig] = None,
) -> str:
    """Write the layout to ``output_dir`` under the standard pattern name."""
    filepath = os.path.join(output_dir, pattern_filename(dims, style_mode, "dxf"))
    return sheet_to_dxf(layout, filepath, style_mode, config)


# ─── Internal helpers ────────────────────────────────────────────────────────

def _setup_layers(doc, style_mode: StyleMode, config: DXFExportConfig) -> None:
    """Create CUT and FOLD layers."""
    doc.layers.add(config.cut_layer, color=config.cut_color)
    fold_linetype = "Continuous"
    if style_mode is StyleMode.LASER:
        fold_linetype = config.laser_fold_linetype
    doc.layers.add(config.fold_layer, color=config.fold_color, linetype=fold_linetype)


def _add_primitive(msp, primitive: Primitive, sheet_height: float, config: DXFExportConfig) -> None:
    layer = config.cut_layer if primitive.role is LineRole.CUT else config.fold_layer
    if config.flip_y:
        points = [(x, sheet_height - y) for x, y in primitive.points]
    else:
        points = list(primitive.points)

    if primitive.kind is PrimitiveKind.LINE:
        msp.add_line(points[0], points[1], dxfattribs={"layer": layer})
    else:
        msp.add_lwpolyline(
            points,
            close=primitive.kind is PrimitiveKind.RECT,
            dxfattribs={"layer": layer},
        )
