"""
Shared test fixtures for the die-cut pattern generator.
"""
import sys
from pathlib import Path

import pytest

# Add src/ to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from box_dimensions import Dimensions, LayoutConfig, StyleMode
from panel_unfolder import unfold_box, unfold_lid
from sheet_composer import build_sheet


@pytest.fixture
def dims():
    """150 x 100 x 80 box, 25 lid walls, 2mm corrugate, 15mm tabs."""
    return Dimensions(
        width=150,
        depth=100,
        height=80,
        lid_height=25,
        material_thickness=2,
        tab_width=15,
        tab_spacing=30,
        clearance=0.5,
    )


@pytest.fixture
def box_net(dims):
    return unfold_box(dims)


@pytest.fixture
def lid_net(dims):
    return unfold_lid(dims)


@pytest.fixture
def sheet(dims):
    return build_sheet(dims, LayoutConfig())


@pytest.fixture
def laser_sheet(dims):
    return build_sheet(dims, LayoutConfig(style_mode=StyleMode.LASER))
