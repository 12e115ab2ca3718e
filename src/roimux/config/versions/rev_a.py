# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Scipp contributors (https://github.com/scipp)
"""
First revision of the readout PCB.

Each ROI covers 4x8 pixels and the 32 ROIs are arranged in 4 rows of 8, giving a
32x32 pixel plane. DAQ channels 0-31 carry the pixels and 32-63 the ROIs.
"""

from ..models import (
    CalibrationConstants,
    GridLayout,
    HardwareVersion,
    HardwareVersionConfig,
)

# Pixel connectors are mounted upside down, which reverses the order of the pin
# pairs. ROI connectors interleave the two halves of each ribbon cable.
# fmt: off
_daq2readout = (
    # Ind_x
    14, 15, 12, 13, 10, 11,  8,  9,  6,  7,  4,  5,  2,  3,  0,  1,
    30, 31, 28, 29, 26, 27, 24, 25, 22, 23, 20, 21, 18, 19, 16, 17,
    # Col_x
    32, 40, 33, 41, 34, 42, 35, 43, 36, 44, 37, 45, 38, 46, 39, 47,
    48, 56, 49, 57, 50, 58, 51, 59, 52, 60, 53, 61, 54, 62, 55, 63,
)
# fmt: on

version_config = HardwareVersionConfig(
    version=HardwareVersion.A,
    description='Readout PCB revision A, 32 pixels x 32 ROIs',
    n_pixels=32,
    n_rois=32,
    daq2readout=_daq2readout,
    pixel_layout=GridLayout(columns=4, rows=8),
    roi_layout=GridLayout(columns=8, rows=4, column_step=4, row_step=8),
    calibration=CalibrationConstants(
        pixel_pitch=2.8,
        drift_length=580.0,
        sample_time=0.2,
        drift_speed=1.6,
        anode_sample=468,
        adc_lsb=0.488,
        preamp_gain=7.8,
    ),
)
