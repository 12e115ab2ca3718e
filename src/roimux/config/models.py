# SPDX-FileCopyrightText: 2025 Scipp contributors (https://github.com/scipp)
# SPDX-License-Identifier: BSD-3-Clause
"""
Models for the static configuration of the readout hardware and the run table.
"""

from __future__ import annotations

from enum import Enum

import scipp as sc
from pydantic import BaseModel, ConfigDict, Field, model_validator


class HardwareVersion(str, Enum):
    """
    Revisions of the pixel/ROI readout hardware.

    - A: First readout PCB, 32 pixels per ROI and 32 ROIs.
    - B: Second readout PCB, 28 pixels per ROI and 36 ROIs.
    """

    A = 'A'
    B = 'B'


class RunRange(BaseModel):
    """Inclusive range of run IDs."""

    model_config = ConfigDict(frozen=True, extra='forbid')

    first_run: int = Field(ge=0, description="First run ID of the range.")
    last_run: int = Field(ge=0, description="Last run ID of the range (inclusive).")

    @model_validator(mode='after')
    def validate_range(self) -> RunRange:
        """Validate that first_run <= last_run."""
        if self.first_run > self.last_run:
            raise ValueError('first_run must not be larger than last_run')
        return self

    def __contains__(self, run_id: int) -> bool:
        return self.first_run <= run_id <= self.last_run

    def __str__(self) -> str:
        return f'[{self.first_run}, {self.last_run}]'

    def overlaps(self, other: RunRange) -> bool:
        return self.first_run <= other.last_run and other.first_run <= self.last_run


class VersionRange(RunRange):
    """Range of runs taken with a single hardware version."""

    version: HardwareVersion = Field(description="Hardware version of the runs.")


class CalibrationOverride(RunRange):
    """
    Run specific calibration constants.

    Only operating conditions that may change between runs of the same hardware
    version can be overridden. Fields that are not set keep the default of the
    hardware version.
    """

    sample_time: float | None = Field(
        default=None, gt=0, description="Sample time in us."
    )
    drift_speed: float | None = Field(
        default=None, gt=0, description="Drift speed in mm/us."
    )
    anode_sample: int | None = Field(
        default=None, ge=0, description="Location of the anode in samples."
    )
    adc_lsb: float | None = Field(default=None, gt=0, description="ADC LSB in mV.")
    preamp_gain: float | None = Field(
        default=None, gt=0, description="Preamplifier gain in mV/fC."
    )

    @model_validator(mode='after')
    def validate_not_empty(self) -> CalibrationOverride:
        if not self.updates:
            raise ValueError('An override must set at least one constant')
        return self

    @property
    def updates(self) -> dict[str, float | int]:
        """The constants replaced by this override."""
        return self.model_dump(exclude={'first_run', 'last_run'}, exclude_none=True)


class RunTableConfig(BaseModel):
    """Content of the run table configuration file."""

    model_config = ConfigDict(frozen=True, extra='forbid')

    hardware_versions: tuple[VersionRange, ...] = Field(
        min_length=1, description="Run ranges of the hardware versions."
    )
    calibration_overrides: tuple[CalibrationOverride, ...] = Field(
        default=(), description="Run specific calibration constants."
    )


class GridLayout(BaseModel):
    """
    Regular grid used to number pixels or ROIs on the readout PCB.

    Cells are numbered row by row starting in the upper left corner. Columns run
    along +x and rows along -y. With ``serpentine`` the numbering reverses
    direction on every other row, following the routing of the traces.
    Steps are given in units of pixel pitch.
    """

    model_config = ConfigDict(frozen=True, extra='forbid')

    columns: int = Field(gt=0, description="Number of columns.")
    rows: int = Field(gt=0, description="Number of rows.")
    column_step: int = Field(default=1, gt=0, description="Distance of columns.")
    row_step: int = Field(default=1, gt=0, description="Distance of rows.")
    serpentine: bool = Field(
        default=False, description="Reverse numbering on every other row."
    )

    @property
    def size(self) -> int:
        return self.columns * self.rows


_UNITS = {
    'pixel_pitch': 'mm',
    'drift_length': 'mm',
    'sample_time': 'us',
    'drift_speed': 'mm/us',
    'anode_sample': None,
    'adc_lsb': 'mV',
    'preamp_gain': 'mV/fC',
}


class CalibrationConstants(BaseModel):
    """Calibration constants used to reconstruct a run."""

    model_config = ConfigDict(frozen=True, extra='forbid')

    pixel_pitch: float = Field(gt=0, description="Pixel pitch in mm.")
    drift_length: float = Field(gt=0, description="Drift length in mm.")
    sample_time: float = Field(gt=0, description="Sample time in us.")
    drift_speed: float = Field(gt=0, description="Drift speed in mm/us.")
    anode_sample: int = Field(
        ge=0, description="Location of the anode in histogram samples."
    )
    adc_lsb: float = Field(
        gt=0, description="Analog-to-digital converter least significant bit in mV."
    )
    preamp_gain: float = Field(gt=0, description="Preamplifier gain in mV/fC.")

    def to_datagroup(self) -> sc.DataGroup:
        """The constants as scipp scalars with physical units."""
        return sc.DataGroup(
            {
                name: sc.scalar(getattr(self, name), unit=unit)
                for name, unit in _UNITS.items()
            }
        )

    @property
    def charge_per_adc_count(self) -> sc.Variable:
        """Charge corresponding to one ADC count in fC."""
        adc_lsb = sc.scalar(self.adc_lsb, unit='mV')
        gain = sc.scalar(self.preamp_gain, unit='mV/fC')
        return (adc_lsb / gain).to(unit='fC')

    @property
    def max_drift_time(self) -> sc.Variable:
        """Time for electrons to drift over the full drift length in us."""
        length = sc.scalar(self.drift_length, unit='mm')
        speed = sc.scalar(self.drift_speed, unit='mm/us')
        return (length / speed).to(unit='us')


class HardwareVersionConfig(BaseModel):
    """
    Static description of one hardware version.

    ``daq2readout`` is the wiring of the readout board: entry ``i`` is the readout
    channel connected to DAQ channel ``i``.
    """

    model_config = ConfigDict(frozen=True, extra='forbid')

    version: HardwareVersion
    description: str = Field(default='', description="Description of the revision.")
    n_pixels: int = Field(gt=0, description="Number of pixel channels.")
    n_rois: int = Field(gt=0, description="Number of ROI channels.")
    daq2readout: tuple[int, ...] = Field(description="Wiring table.")
    pixel_layout: GridLayout
    roi_layout: GridLayout
    calibration: CalibrationConstants = Field(
        description="Default calibration constants."
    )

    @property
    def n_chans(self) -> int:
        return self.n_pixels + self.n_rois
