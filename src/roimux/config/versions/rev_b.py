# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Scipp contributors (https://github.com/scipp)
"""
Second revision of the readout PCB.

Each ROI covers 4x7 pixels and the 36 ROIs are arranged in 6 rows of 6. Pixel
traces are routed in a serpentine, so every other pixel row is numbered from
right to left.
"""

from ..models import (
    CalibrationConstants,
    GridLayout,
    HardwareVersion,
    HardwareVersionConfig,
)

# The Ind_x bank carries ROIs 0-31 in reverse order. The Col_x bank carries the
# pixels with swapped pin pairs, with the remaining four ROIs on the spare pins
# at the end of each connector.
# fmt: off
_daq2readout = (
    # Ind_x
    59, 58, 57, 56, 55, 54, 53, 52, 51, 50, 49, 48, 47, 46, 45, 44,
    43, 42, 41, 40, 39, 38, 37, 36, 35, 34, 33, 32, 31, 30, 29, 28,
    # Col_x
     1,  0,  3,  2,  5,  4,  7,  6,  9,  8, 11, 10, 13, 12, 60, 61,
    15, 14, 17, 16, 19, 18, 21, 20, 23, 22, 25, 24, 27, 26, 62, 63,
)
# fmt: on

version_config = HardwareVersionConfig(
    version=HardwareVersion.B,
    description='Readout PCB revision B, 28 pixels x 36 ROIs',
    n_pixels=28,
    n_rois=36,
    daq2readout=_daq2readout,
    pixel_layout=GridLayout(columns=4, rows=7, serpentine=True),
    roi_layout=GridLayout(columns=6, rows=6, column_step=4, row_step=7),
    calibration=CalibrationConstants(
        pixel_pitch=2.54,
        drift_length=580.0,
        sample_time=0.2,
        drift_speed=1.648,
        anode_sample=475,
        adc_lsb=0.488,
        preamp_gain=9.3,
    ),
)
