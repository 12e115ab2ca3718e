# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Scipp contributors (https://github.com/scipp)
"""
Mechanical coordinates of pixels and ROIs in units of pixel pitch.

Pixel coordinates are relative offsets within one ROI, pixel number 0 has the
coordinates (0, 0). ROI coordinates are the offsets of pixel number 0 in the
upper left corner of the ROI. The absolute coordinates of a pixel are the sum of
both. The numbering is derived from the readout PCB design.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .config.models import GridLayout, HardwareVersionConfig
from .errors import MalformedVersionTableError


def layout_coordinates(layout: GridLayout, size: int) -> np.ndarray:
    """
    Coordinates of the first ``size`` cells of a grid layout.

    Returns
    -------
    :
        Array of shape ``(size, 2)`` with the x and y coordinate of each cell.
    """
    row, column = np.divmod(np.arange(size), layout.columns)
    if layout.serpentine:
        column = np.where(row % 2 == 1, layout.columns - 1 - column, column)
    return np.stack(
        [column * layout.column_step, -row * layout.row_step], axis=1
    ).astype(np.int64)


@dataclass(frozen=True, eq=False)
class GeometryTables:
    """Read-only pixel and ROI coordinate tables of shape ``(n, 2)``."""

    pixel_coor: np.ndarray
    roi_coor: np.ndarray

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GeometryTables):
            return NotImplemented
        return np.array_equal(self.pixel_coor, other.pixel_coor) and np.array_equal(
            self.roi_coor, other.roi_coor
        )

    def absolute_pixel_coor(self) -> np.ndarray:
        """Coordinates of all pixels in all ROIs, shape ``(n_rois, n_pixels, 2)``."""
        return self.roi_coor[:, np.newaxis, :] + self.pixel_coor[np.newaxis, :, :]


def _build_table(layout: GridLayout, size: int, *, kind: str, name: str) -> np.ndarray:
    if layout.size != size:
        raise MalformedVersionTableError(
            f"The {kind} layout of hardware version {name} has {layout.size} "
            f"cells for {size} {kind} channels."
        )
    table = layout_coordinates(layout, size)
    table.setflags(write=False)
    return table


def build_geometry(config: HardwareVersionConfig) -> GeometryTables:
    """
    Build the pixel and ROI coordinate tables of a hardware version.

    Raises
    ------
    MalformedVersionTableError:
        If a layout does not have exactly one cell per pixel or ROI channel.
    """
    name = config.version.value
    return GeometryTables(
        pixel_coor=_build_table(
            config.pixel_layout, config.n_pixels, kind='pixel', name=name
        ),
        roi_coor=_build_table(config.roi_layout, config.n_rois, kind='ROI', name=name),
    )
