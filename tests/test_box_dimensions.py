"""Tests for box_dimensions module."""
import logging

import pytest

from box_dimensions import (
    DimensionError,
    Dimensions,
    LayoutConfig,
    StyleMode,
    coerce_dimension,
)


class TestCoerceDimension:
    """Lenient parsing of form input."""

    @pytest.mark.parametrize("raw,expected", [
        (12, 12.0),
        (2.5, 2.5),
        ("80", 80.0),
        (" 0.5 ", 0.5),
        ("12mm", 12.0),
        (".75", 0.75),
        ("1e2", 100.0),
        ("-3", -3.0),
        ("", 0.0),
        ("abc", 0.0),
        (None, 0.0),
        (float("nan"), 0.0),
        ("inf", 0.0),
    ])
    def test_values(self, raw, expected):
        assert coerce_dimension(raw) == expected

    def test_unparseable_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="box_dimensions"):
            coerce_dimension("wide", "width")
        assert "width" in caplog.text


class TestDimensions:

    def test_defaults(self):
        dims = Dimensions()
        assert (dims.width, dims.depth, dims.height, dims.lid_height) == (150, 100, 80, 25)
        assert dims.material_thickness == 2
        assert dims.clearance == 0.5

    def test_lid_plan(self, dims):
        assert dims.outer_width == pytest.approx(154.0)
        assert dims.lid_width == pytest.approx(155.0)
        assert dims.lid_depth == pytest.approx(105.0)

    def test_from_mapping_accepts_form_keys(self):
        dims = Dimensions.from_mapping({
            "width": "200",
            "lidHeight": "30",
            "materialThickness": "3",
            "tabWidth": 10,
            "colour": "red",
        })
        assert dims.width == 200.0
        assert dims.lid_height == 30.0
        assert dims.material_thickness == 3.0
        assert dims.tab_width == 10.0
        assert dims.depth == 100.0

    def test_from_mapping_coerces_garbage_to_zero(self):
        dims = Dimensions.from_mapping({"height": "tall"})
        assert dims.height == 0.0

    def test_with_value_is_copy(self, dims):
        updated = dims.with_value("depth", "120")
        assert updated.depth == 120.0
        assert dims.depth == 100

    def test_with_value_unknown_field(self, dims):
        with pytest.raises(KeyError):
            dims.with_value("colour", 1)

    def test_as_dict(self, dims):
        values = dims.as_dict()
        assert values["tab_spacing"] == 30
        assert len(values) == 8


class TestValidate:

    def test_reference_dimensions_are_clean(self, dims):
        assert dims.validate() == []

    def test_non_positive_values_are_errors(self):
        issues = Dimensions(width=0, material_thickness=-1).validate()
        errors = {i.field for i in issues if i.severity == "error"}
        assert errors == {"width", "material_thickness"}

    def test_negative_clearance_is_error(self):
        issues = Dimensions(clearance=-0.1).validate()
        assert [i.field for i in issues if i.severity == "error"] == ["clearance"]

    def test_oversized_tab_is_warning(self):
        issues = Dimensions(depth=40, tab_width=40).validate()
        assert [(i.field, i.severity) for i in issues] == [("tab_width", "warning")]
        assert "length 40" in issues[0].message

    def test_tab_wider_than_lid_wall_is_fine(self):
        # Wall heights are never tabbed; every plan edge is longer than 30.
        assert Dimensions(lid_height=25, tab_width=30).validate() == []

    def test_non_finite_values_are_errors(self):
        issues = Dimensions(width=float("nan"), clearance=float("inf")).validate()
        assert [(i.field, i.severity) for i in issues] == [
            ("width", "error"),
            ("clearance", "error"),
        ]

    def test_non_finite_strict_raises(self):
        with pytest.raises(DimensionError):
            Dimensions(height=float("nan")).validate(strict=True)

    def test_wall_not_taller_than_thickness_is_warning(self):
        issues = Dimensions(lid_height=2, tab_width=1).validate()
        assert ("lid_height", "warning") in [(i.field, i.severity) for i in issues]

    def test_strict_raises(self):
        with pytest.raises(DimensionError) as exc:
            Dimensions(depth=0).validate(strict=True)
        assert exc.value.issues[0].field == "depth"
        assert isinstance(exc.value, ValueError)

    def test_strict_ignores_warnings(self):
        assert Dimensions(tab_width=120).validate(strict=True)


class TestLayoutConfig:

    def test_defaults(self):
        config = LayoutConfig()
        assert config.show_box and config.show_lid
        assert config.style_mode is StyleMode.SCREEN
        assert config.padding == 20.0

    def test_style_mode_from_text(self):
        assert StyleMode("laser") is StyleMode.LASER
