# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Scipp contributors (https://github.com/scipp)
"""
Mapping between DAQ channels and readout channels.

DAQ channels are numbered from 0 to 63. Channels 0 through 31 correspond to the
"Ind_x" histogram in the raw data and channels 32 through 63 to the "Col_x"
histogram. The histogram names are hardcoded in the DAQ driver and must not be
confused with the pixel collection channels and ROI induction channels.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .config.models import HardwareVersionConfig
from .errors import IndexOutOfRangeError, MalformedVersionTableError

N_DAQ_CHANNELS = 64
DAQ_BANK_SIZE = 32
DAQ_BANKS = ('Ind_x', 'Col_x')


def daq_histogram(daq_chan: int) -> tuple[str, int]:
    """Get the name of the raw data histogram of a DAQ channel and its bin."""
    if not 0 <= daq_chan < N_DAQ_CHANNELS:
        raise IndexOutOfRangeError(
            f"DAQ channel {daq_chan} is out of range [0, {N_DAQ_CHANNELS})."
        )
    bank, chan = divmod(daq_chan, DAQ_BANK_SIZE)
    return DAQ_BANKS[bank], chan


def _readonly(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class ChannelMap:
    """
    Bijection between DAQ channels and readout channels.

    Readout channels ``[0, n_pixels)`` are pixels and ``[n_pixels, n_chans)`` are
    ROIs. Both arrays are read-only.
    """

    daq2readout: np.ndarray
    readout2daq: np.ndarray
    n_pixels: int

    @property
    def n_chans(self) -> int:
        return len(self.daq2readout)

    @property
    def n_rois(self) -> int:
        return self.n_chans - self.n_pixels

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChannelMap):
            return NotImplemented
        return (
            self.n_pixels == other.n_pixels
            and np.array_equal(self.daq2readout, other.daq2readout)
            and np.array_equal(self.readout2daq, other.readout2daq)
        )


def build_channel_map(config: HardwareVersionConfig) -> ChannelMap:
    """
    Build the channel map from the wiring table of a hardware version.

    Raises
    ------
    MalformedVersionTableError:
        If the channel counts are inconsistent or the wiring table is not a
        permutation of the readout channels.
    """
    name = config.version.value
    n_chans = len(config.daq2readout)
    if config.n_pixels + config.n_rois != n_chans:
        raise MalformedVersionTableError(
            f"Hardware version {name} has {config.n_pixels} pixels and "
            f"{config.n_rois} ROIs but {n_chans} wired channels."
        )
    if n_chans != N_DAQ_CHANNELS:
        raise MalformedVersionTableError(
            f"Hardware version {name} wires {n_chans} channels, the DAQ has "
            f"{N_DAQ_CHANNELS}."
        )
    daq2readout = np.asarray(config.daq2readout, dtype=np.int64)
    if daq2readout.min() < 0 or daq2readout.max() >= n_chans:
        raise MalformedVersionTableError(
            f"Wiring table of hardware version {name} has entries outside of "
            f"[0, {n_chans})."
        )
    counts = np.bincount(daq2readout, minlength=n_chans)
    if np.any(counts != 1):
        missing = np.flatnonzero(counts == 0).tolist()
        raise MalformedVersionTableError(
            f"Wiring table of hardware version {name} is not a permutation, "
            f"readout channels {missing} are not connected."
        )
    readout2daq = np.empty_like(daq2readout)
    readout2daq[daq2readout] = np.arange(n_chans)
    if not np.array_equal(readout2daq[daq2readout], np.arange(n_chans)):
        raise MalformedVersionTableError(
            f"Inverse wiring table of hardware version {name} is inconsistent."
        )
    return ChannelMap(
        daq2readout=_readonly(daq2readout),
        readout2daq=_readonly(readout2daq),
        n_pixels=config.n_pixels,
    )
