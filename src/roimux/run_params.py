# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Scipp contributors (https://github.com/scipp)
from __future__ import annotations

import logging
import operator

import numpy as np
import scipp as sc

from .calibration import resolve_calibration
from .channel_map import ChannelMap, build_channel_map
from .config.models import CalibrationConstants, HardwareVersion
from .config.run_table import RunTable, default_run_table
from .config.versions import get_version_config
from .errors import IndexOutOfRangeError
from .geometry import GeometryTables, build_geometry


def _check_index(index: int, size: int, kind: str) -> int:
    index = operator.index(index)
    if not 0 <= index < size:
        raise IndexOutOfRangeError(f"{kind} {index} is out of range [0, {size}).")
    return index


class RunParams:
    """
    Maps and constants required for the reconstruction of one run.

    This contains the map from DAQ channels to readout channels and vice versa, the
    mechanical coordinates of the pixels and the regions of interest (ROI), and the
    calibration constants. All of them are determined from the run ID on
    construction and cannot be modified afterwards, so an instance can be shared
    by any number of readers.

    Readout channels ``[0, n_pixels)`` are pixels and ``[n_pixels, n_chans)`` are
    ROIs. All accessors raise :py:class:`IndexOutOfRangeError` if an index is out
    of range.

    Parameters
    ----------
    run_id:
        Run ID used to generate the maps.
    run_table:
        Table used to look up the hardware version and calibration overrides of
        the run. Defaults to :py:func:`roimux.config.default_run_table`.
    logger:
        Logger used to report the resolved configuration.

    Raises
    ------
    UnknownRunIdError:
        If the run is not covered by the run table.
    MalformedVersionTableError:
        If the run table or the configuration of the hardware version is
        inconsistent or cannot be read.
    """

    __slots__ = (
        '_logger',
        '_run_id',
        '_version',
        '_channel_map',
        '_geometry',
        '_calibration',
    )

    def __init__(
        self,
        run_id: int,
        *,
        run_table: RunTable | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._logger = logger or logging.getLogger(__name__)
        run_id = operator.index(run_id)
        if run_table is None:
            run_table = default_run_table()
        version = run_table.hardware_version(run_id)
        config = get_version_config(version)
        channel_map = build_channel_map(config)
        geometry = build_geometry(config)
        override = run_table.calibration_override(run_id)
        calibration = resolve_calibration(config.calibration, override)

        self._run_id = run_id
        self._version = version
        self._channel_map: ChannelMap = channel_map
        self._geometry: GeometryTables = geometry
        self._calibration = calibration
        self._logger.info(
            "Run %d uses readout hardware version %s", run_id, version.value
        )
        if override is not None:
            self._logger.debug(
                "Run %d overrides calibration constants %s", run_id, override.updates
            )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(run_id={self._run_id}, "
            f"hardware_version={self._version.value})"
        )

    @property
    def run_id(self) -> int:
        """The run ID that was used to generate the maps."""
        return self._run_id

    @property
    def hardware_version(self) -> HardwareVersion:
        return self._version

    @property
    def n_pixels(self) -> int:
        return self._channel_map.n_pixels

    @property
    def n_rois(self) -> int:
        return self._channel_map.n_rois

    @property
    def n_chans(self) -> int:
        """
        The total number of readout channels.

        Divided by 2 this gives the number of channels of each of the two DAQ
        histograms ("Ind_x" and "Col_x").
        """
        return self._channel_map.n_chans

    # Channel maps

    def daq2readout_chan(self, daq_chan: int) -> int:
        """Convert DAQ channel to readout channel."""
        daq_chan = _check_index(daq_chan, self.n_chans, 'DAQ channel')
        return int(self._channel_map.daq2readout[daq_chan])

    def is_pixel_channel(self, daq_chan: int) -> bool:
        return self.daq2readout_chan(daq_chan) < self.n_pixels

    def is_roi_channel(self, daq_chan: int) -> bool:
        return not self.is_pixel_channel(daq_chan)

    def daq2pixel(self, daq_chan: int) -> int:
        """Convert DAQ channel to pixel channel."""
        readout = self.daq2readout_chan(daq_chan)
        if readout >= self.n_pixels:
            raise IndexOutOfRangeError(
                f"DAQ channel {daq_chan} is connected to ROI "
                f"{readout - self.n_pixels}, not to a pixel."
            )
        return readout

    def pixel2daq(self, pixel: int) -> int:
        """Convert pixel channel to DAQ channel."""
        pixel = _check_index(pixel, self.n_pixels, 'Pixel')
        return int(self._channel_map.readout2daq[pixel])

    def daq2roi(self, daq_chan: int) -> int:
        """Convert DAQ channel to ROI channel."""
        readout = self.daq2readout_chan(daq_chan)
        if readout < self.n_pixels:
            raise IndexOutOfRangeError(
                f"DAQ channel {daq_chan} is connected to pixel {readout}, "
                "not to a ROI."
            )
        return readout - self.n_pixels

    def roi2daq(self, roi: int) -> int:
        """Convert ROI channel to DAQ channel."""
        roi = _check_index(roi, self.n_rois, 'ROI')
        return int(self._channel_map.readout2daq[roi + self.n_pixels])

    @property
    def daq2readout(self) -> np.ndarray:
        """Copy of the array mapping DAQ channels to readout channels."""
        return self._channel_map.daq2readout.copy()

    @property
    def readout2daq(self) -> np.ndarray:
        """Copy of the array mapping readout channels to DAQ channels."""
        return self._channel_map.readout2daq.copy()

    # Geometry

    def pixel_coor(self, pixel: int, dim: int) -> int:
        """
        Get pixel coordinates in units of pixel pitch.

        Pixel number 0 has the coordinates (0, 0). These are relative offsets
        within one ROI. To get absolute coordinates, add the coordinates of the ROI
        obtained from :py:meth:`roi_coor`.
        """
        pixel = _check_index(pixel, self.n_pixels, 'Pixel')
        dim = _check_index(dim, 2, 'Dimension')
        return int(self._geometry.pixel_coor[pixel, dim])

    def roi_coor(self, roi: int, dim: int) -> int:
        """
        Get ROI coordinates in units of pixel pitch.

        These are the offsets of pixel number 0 in the upper left corner of the
        ROI.
        """
        roi = _check_index(roi, self.n_rois, 'ROI')
        dim = _check_index(dim, 2, 'Dimension')
        return int(self._geometry.roi_coor[roi, dim])

    @property
    def pixel_coordinates(self) -> np.ndarray:
        return self._geometry.pixel_coor.copy()

    @property
    def roi_coordinates(self) -> np.ndarray:
        return self._geometry.roi_coor.copy()

    def pixel_positions(self) -> sc.DataGroup:
        """
        Absolute positions of all pixels in all ROIs.

        Returns
        -------
        :
            Data group with the ``x`` and ``y`` positions in mm, with dims
            ``('roi', 'pixel')``.
        """
        coor = self._geometry.absolute_pixel_coor() * self.pixel_pitch
        return sc.DataGroup(
            {
                'x': sc.array(dims=['roi', 'pixel'], values=coor[..., 0], unit='mm'),
                'y': sc.array(dims=['roi', 'pixel'], values=coor[..., 1], unit='mm'),
            }
        )

    # Calibration constants

    @property
    def calibration(self) -> CalibrationConstants:
        return self._calibration

    @property
    def pixel_pitch(self) -> float:
        """Pixel pitch in mm."""
        return self._calibration.pixel_pitch

    @property
    def drift_length(self) -> float:
        """Drift length in mm."""
        return self._calibration.drift_length

    @property
    def sample_time(self) -> float:
        """Sample time in us."""
        return self._calibration.sample_time

    @property
    def drift_speed(self) -> float:
        """Drift speed in mm/us."""
        return self._calibration.drift_speed

    @property
    def anode_sample(self) -> int:
        """Location of the anode in histogram samples."""
        return self._calibration.anode_sample

    @property
    def adc_lsb(self) -> float:
        """ADC least significant bit in mV."""
        return self._calibration.adc_lsb

    @property
    def preamp_gain(self) -> float:
        """Preamplifier gain in mV/fC."""
        return self._calibration.preamp_gain
