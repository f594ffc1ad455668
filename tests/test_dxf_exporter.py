"""Tests for dxf_exporter module."""
import os

import ezdxf
import pytest

from box_dimensions import StyleMode
from box_geometry import LineRole, PrimitiveKind
from dxf_exporter import (
    DXFExportConfig,
    export_dxf,
    layout_to_dxf_document,
    sheet_to_dxf,
)
from svg_exporter import ExportError


class TestLayoutToDXF:
    """Test in-memory DXF documents."""

    def test_layers(self, sheet):
        doc = layout_to_dxf_document(sheet)
        assert doc.layers.has_entry("CUT")
        assert doc.layers.has_entry("FOLD")
        assert doc.layers.get("FOLD").dxf.color == 1

    def test_entity_counts(self, sheet):
        msp = layout_to_dxf_document(sheet).modelspace()
        cut = msp.query('LWPOLYLINE[layer=="CUT"]')
        folds = msp.query('LINE[layer=="FOLD"]')

        kinds = [p.kind for p in sheet.primitives]
        assert len(cut) == kinds.count(PrimitiveKind.RECT) + kinds.count(PrimitiveKind.PATH)
        assert len(folds) == len(sheet.by_role(LineRole.FOLD))

    def test_rects_closed_paths_open(self, sheet):
        msp = layout_to_dxf_document(sheet).modelspace()
        polylines = list(msp.query("LWPOLYLINE"))
        closed = [p for p in polylines if p.closed]
        kinds = [p.kind for p in sheet.primitives]
        assert len(closed) == kinds.count(PrimitiveKind.RECT)

    def test_y_axis_flipped(self, sheet):
        msp = layout_to_dxf_document(sheet).modelspace()
        base = next(iter(msp.query("LWPOLYLINE")))
        ys = [pt[1] for pt in base.get_points("xy")]
        # Base panel spans y 180..280 on the sheet
        assert max(ys) == pytest.approx(sheet.height - 180)
        assert min(ys) == pytest.approx(sheet.height - 280)

    def test_no_flip(self, sheet):
        msp = layout_to_dxf_document(sheet, config=DXFExportConfig(flip_y=False)).modelspace()
        base = next(iter(msp.query("LWPOLYLINE")))
        ys = [pt[1] for pt in base.get_points("xy")]
        assert min(ys) == pytest.approx(180)

    def test_laser_mode_dashed_folds(self, laser_sheet):
        doc = layout_to_dxf_document(laser_sheet, StyleMode.LASER)
        assert doc.layers.get("FOLD").dxf.linetype.upper() == "DASHED"

    def test_screen_mode_continuous_folds(self, sheet):
        doc = layout_to_dxf_document(sheet, StyleMode.SCREEN)
        assert doc.layers.get("FOLD").dxf.linetype.upper() == "CONTINUOUS"


class TestExportDXF:

    def test_writes_readable_file(self, sheet, tmp_path):
        filepath = str(tmp_path / "pattern.dxf")
        result = sheet_to_dxf(sheet, filepath)

        assert result == filepath
        assert os.path.isfile(filepath)
        doc = ezdxf.readfile(filepath)
        assert len(doc.modelspace().query('LINE[layer=="FOLD"]')) == 32

    def test_standard_name(self, sheet, dims, tmp_path):
        path = export_dxf(sheet, dims, StyleMode.LASER, str(tmp_path))
        assert os.path.basename(path) == "banker-box-150x100x80mm-laser.dxf"
        assert os.path.getsize(path) > 0

    def test_unwritable_target_raises(self, sheet, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises(ExportError):
            sheet_to_dxf(sheet, str(blocker / "pattern.dxf"))
