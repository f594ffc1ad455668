"""Single-path pipeline: dimensions -> layout engine -> pattern files."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from assembly_sequence import AssemblyStep, assembly_sequence
from box_dimensions import Dimensions, DimensionIssue, LayoutConfig
from box_geometry import LineRole
from dxf_exporter import export_dxf
from sheet_composer import SheetLayout, build_sheet, pattern_summary
from svg_exporter import ExportError, export_svg

logger = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    output_dir: str = "output"
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    export_svg: bool = True
    export_dxf: bool = False
    write_summary: bool = True
    strict: bool = False


@dataclass
class PipelineResult:
    layout: SheetLayout
    issues: List[DimensionIssue] = field(default_factory=list)
    svg_path: Optional[str] = None
    dxf_path: Optional[str] = None
    summary_path: Optional[str] = None
    assembly: Dict[str, List[AssemblyStep]] = field(default_factory=dict)


def run_pipeline(dims: Dimensions, config: Optional[PipelineConfig] = None) -> PipelineResult:
    """Lay out the pattern for ``dims`` and write the requested files.

    Raises:
        DimensionError: ``config.strict`` is set and the dimensions are invalid.
        ExportError: An output file cannot be written.
    """
    if config is None:
        config = PipelineConfig()

    issues = dims.validate(strict=config.strict)
    layout = build_sheet(dims, config.layout)
    mode = config.layout.style_mode

    result = PipelineResult(layout=layout, issues=issues)
    for net in layout.nets:
        result.assembly[net.shell.value] = assembly_sequence(net)

    if config.export_svg:
        result.svg_path = export_svg(layout, dims, mode, config.output_dir)
    if config.export_dxf:
        result.dxf_path = export_dxf(layout, dims, mode, config.output_dir)
    if config.write_summary:
        summary_path = os.path.join(config.output_dir, "summary.json")
        write_json(summary_path, build_summary(dims, config.layout, layout))
        result.summary_path = summary_path

    logger.info(
        "Pipeline finished: %d primitives on %.1f x %.1f sheet",
        len(layout.primitives), layout.width, layout.height,
    )
    return result


def build_summary(dims: Dimensions, layout_config: LayoutConfig, layout: SheetLayout) -> dict:
    sizes = pattern_summary(dims)
    return {
        "dimensions": dims.as_dict(),
        "style_mode": layout_config.style_mode.value,
        "show_box": layout_config.show_box,
        "show_lid": layout_config.show_lid,
        "sheet": {"width": layout.width, "height": layout.height},
        "box_net": list(sizes.box_net),
        "lid_net": list(sizes.lid_net),
        "lid_plan": list(sizes.lid_plan),
        "primitives": {
            "total": len(layout.primitives),
            "cut": len(layout.by_role(LineRole.CUT)),
            "fold": len(layout.by_role(LineRole.FOLD)),
        },
    }


def write_json(path: str, payload: dict) -> None:
    try:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
    except OSError as e:
        raise ExportError(f"Cannot write summary to {path}: {e}") from e
