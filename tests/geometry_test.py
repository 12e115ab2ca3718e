# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Scipp contributors (https://github.com/scipp)
import numpy as np
import pytest

from roimux.config.models import GridLayout, HardwareVersion
from roimux.config.versions import get_version_config
from roimux.errors import MalformedVersionTableError
from roimux.geometry import build_geometry, layout_coordinates


def test_layout_coordinates():
    layout = GridLayout(columns=3, rows=2)
    np.testing.assert_array_equal(
        layout_coordinates(layout, 6),
        [[0, 0], [1, 0], [2, 0], [0, -1], [1, -1], [2, -1]],
    )


def test_layout_coordinates_serpentine():
    layout = GridLayout(columns=3, rows=3, serpentine=True)
    np.testing.assert_array_equal(
        layout_coordinates(layout, 9),
        [
            [0, 0], [1, 0], [2, 0],
            [2, -1], [1, -1], [0, -1],
            [0, -2], [1, -2], [2, -2],
        ],  # fmt: skip
    )


def test_layout_coordinates_with_steps():
    layout = GridLayout(columns=2, rows=2, column_step=4, row_step=8)
    np.testing.assert_array_equal(
        layout_coordinates(layout, 4), [[0, 0], [4, 0], [0, -8], [4, -8]]
    )


@pytest.mark.parametrize('version', list(HardwareVersion))
def test_pixel_zero_is_origin(version):
    geometry = build_geometry(get_version_config(version))
    np.testing.assert_array_equal(geometry.pixel_coor[0], [0, 0])
    np.testing.assert_array_equal(geometry.roi_coor[0], [0, 0])


@pytest.mark.parametrize('version', list(HardwareVersion))
def test_table_shapes(version):
    config = get_version_config(version)
    geometry = build_geometry(config)
    assert geometry.pixel_coor.shape == (config.n_pixels, 2)
    assert geometry.roi_coor.shape == (config.n_rois, 2)


@pytest.mark.parametrize('version', list(HardwareVersion))
def test_absolute_pixel_coordinates_are_unique(version):
    config = get_version_config(version)
    coor = build_geometry(config).absolute_pixel_coor()
    assert coor.shape == (config.n_rois, config.n_pixels, 2)
    unique = np.unique(coor.reshape(-1, 2), axis=0)
    assert len(unique) == config.n_rois * config.n_pixels


def test_version_a_coordinates():
    geometry = build_geometry(get_version_config(HardwareVersion.A))
    np.testing.assert_array_equal(geometry.pixel_coor[5], [1, -1])
    np.testing.assert_array_equal(geometry.pixel_coor[31], [3, -7])
    np.testing.assert_array_equal(geometry.roi_coor[9], [4, -8])
    np.testing.assert_array_equal(geometry.roi_coor[31], [28, -24])


def test_version_b_coordinates():
    geometry = build_geometry(get_version_config(HardwareVersion.B))
    np.testing.assert_array_equal(geometry.pixel_coor[4], [3, -1])
    np.testing.assert_array_equal(geometry.pixel_coor[7], [0, -1])
    np.testing.assert_array_equal(geometry.pixel_coor[8], [0, -2])
    np.testing.assert_array_equal(geometry.pixel_coor[27], [3, -6])
    np.testing.assert_array_equal(geometry.roi_coor[35], [20, -35])


def test_repeated_builds_are_equal():
    config = get_version_config(HardwareVersion.B)
    first = build_geometry(config)
    second = build_geometry(config)
    assert first == second
    assert not np.shares_memory(first.pixel_coor, second.pixel_coor)


def test_tables_are_read_only():
    geometry = build_geometry(get_version_config(HardwareVersion.A))
    with pytest.raises(ValueError, match="read-only"):
        geometry.pixel_coor[0, 0] = 1
    with pytest.raises(ValueError, match="read-only"):
        geometry.roi_coor[0, 0] = 1


def test_layout_not_matching_pixel_count_raises():
    config = get_version_config(HardwareVersion.A).model_copy(
        update={'pixel_layout': GridLayout(columns=4, rows=7)}
    )
    with pytest.raises(MalformedVersionTableError, match="28 cells for 32 pixel"):
        build_geometry(config)


def test_layout_not_matching_roi_count_raises():
    config = get_version_config(HardwareVersion.B).model_copy(
        update={'roi_layout': GridLayout(columns=6, rows=5)}
    )
    with pytest.raises(MalformedVersionTableError, match="30 cells for 36 ROI"):
        build_geometry(config)
