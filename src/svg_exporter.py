"""
SVG exporter for die-cut patterns.

Renders a composed SheetLayout as a standalone SVG document. Cut primitives
become stroked, unfilled rectangles and polylines; fold primitives become
stroked lines told apart by colour (screen preview) or by dash pattern
(laser / cutting plotter).
"""
import io
import logging
import os
from dataclasses import dataclass
from typing import Dict, Optional

import svgwrite

from box_dimensions import Dimensions, StyleMode
from box_geometry import LineRole, Primitive, PrimitiveKind
from sheet_composer import SheetLayout

logger = logging.getLogger(__name__)


class ExportError(OSError):
    """Raised when a pattern file cannot be written."""


@dataclass(frozen=True)
class SVGExportConfig:
    """Stroke styling for exported patterns."""
    units: str = "mm"
    stroke_width: float = 0.5
    cut_color: str = "#000000"
    screen_fold_color: str = "#FF0000"
    laser_fold_color: str = "#000000"
    laser_dash: str = "5,3"


def line_style(role: LineRole, style_mode: StyleMode, config: Optional[SVGExportConfig] = None) -> Dict[str, str]:
    """svgwrite keyword attributes for a primitive role."""
    if config is None:
        config = SVGExportConfig()
    style = {"stroke_width": fmt(config.stroke_width), "fill": "none"}
    if role is LineRole.CUT:
        style["stroke"] = config.cut_color
    elif style_mode is StyleMode.LASER:
        style["stroke"] = config.laser_fold_color
        style["stroke_dasharray"] = config.laser_dash
    else:
        style["stroke"] = config.screen_fold_color
    return style


def layout_to_drawing(
    layout: SheetLayout,
    style_mode: StyleMode = StyleMode.SCREEN,
    config: Optional[SVGExportConfig] = None,
    filepath: str = "noname.svg",
) -> svgwrite.Drawing:
    """Build an svgwrite Drawing holding every primitive of the layout."""
    if config is None:
        config = SVGExportConfig()

    width = fmt(layout.width)
    height = fmt(layout.height)
    dwg = svgwrite.Drawing(
        filepath,
        size=(f"{width}{config.units}", f"{height}{config.units}"),
        viewBox=f"0 0 {width} {height}",
    )

    styles = {
        role: line_style(role, style_mode, config) for role in LineRole
    }
    for primitive in layout.primitives:
        dwg.add(_primitive_element(dwg, primitive, styles[primitive.role]))
    return dwg


def sheet_to_svg_string(
    layout: SheetLayout,
    style_mode: StyleMode = StyleMode.SCREEN,
    config: Optional[SVGExportConfig] = None,
) -> str:
    """Serialise a layout to SVG text, including the XML declaration."""
    dwg = layout_to_drawing(layout, style_mode, config)
    buf = io.StringIO()
    dwg.write(buf)
    return buf.getvalue()


def pattern_filename(dims: Dimensions, style_mode: StyleMode, extension: str = "svg") -> str:
    """banker-box-{W}x{D}x{H}mm-{mode}.{ext}"""
    return (
        f"banker-box-{fmt(dims.width)}x{fmt(dims.depth)}x{fmt(dims.height)}mm"
        f"-{style_mode.value}.{extension}"
    )


def export_svg(
    layout: SheetLayout,
    dims: Dimensions,
    style_mode: StyleMode = StyleMode.SCREEN,
    output_dir: str = ".",
    config: Optional[SVGExportConfig] = None,
) -> str:
    """Write the layout to ``output_dir`` under the standard pattern name.

    Returns:
        Path to created SVG file.

    Raises:
        ExportError: The directory cannot be created or the file written.
    """
    filepath = os.path.join(output_dir, pattern_filename(dims, style_mode, "svg"))
    content = sheet_to_svg_string(layout, style_mode, config)
    try:
        os.makedirs(output_dir or ".", exist_ok=True)
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        raise ExportError(f"Cannot write SVG pattern to {filepath}: {e}") from e
    logger.info("Exported SVG: %s", filepath)
    return filepath


def fmt(n: float) -> str:
    """Compact number: at most three decimals, no trailing zeros."""
    text = f"{n:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


# ─── Internal helpers ────────────────────────────────────────────────────────

def _primitive_element(dwg: svgwrite.Drawing, primitive: Primitive, style: Dict[str, str]):
    if primitive.kind is PrimitiveKind.RECT:
        x, y, w, h = primitive.rect
        return dwg.rect(insert=(x, y), size=(w, h), **style)
    if primitive.kind is PrimitiveKind.LINE:
        start, end = primitive.points
        return dwg.line(start=start, end=end, **style)
    return dwg.polyline(list(primitive.points), **style)
