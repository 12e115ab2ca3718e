# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Scipp contributors (https://github.com/scipp)
import numpy as np
import pytest

from roimux.channel_map import (
    N_DAQ_CHANNELS,
    ChannelMap,
    build_channel_map,
    daq_histogram,
)
from roimux.config.models import HardwareVersion
from roimux.config.versions import get_version_config
from roimux.errors import IndexOutOfRangeError, MalformedVersionTableError


@pytest.fixture
def config_a():
    return get_version_config(HardwareVersion.A)


@pytest.mark.parametrize(
    ('daq_chan', 'expected'),
    [(0, ('Ind_x', 0)), (31, ('Ind_x', 31)), (32, ('Col_x', 0)), (63, ('Col_x', 31))],
)
def test_daq_histogram(daq_chan, expected):
    assert daq_histogram(daq_chan) == expected


@pytest.mark.parametrize('daq_chan', [-1, N_DAQ_CHANNELS])
def test_daq_histogram_out_of_range(daq_chan):
    with pytest.raises(IndexOutOfRangeError):
        daq_histogram(daq_chan)


@pytest.mark.parametrize('version', list(HardwareVersion))
def test_inverse_is_exact(version):
    channel_map = build_channel_map(get_version_config(version))
    chans = np.arange(channel_map.n_chans)
    np.testing.assert_array_equal(
        channel_map.readout2daq[channel_map.daq2readout], chans
    )
    np.testing.assert_array_equal(
        channel_map.daq2readout[channel_map.readout2daq], chans
    )


def test_channel_counts(config_a):
    channel_map = build_channel_map(config_a)
    assert channel_map.n_pixels == 32
    assert channel_map.n_rois == 32
    assert channel_map.n_chans == 64


def test_daq2readout_follows_wiring_table(config_a):
    channel_map = build_channel_map(config_a)
    np.testing.assert_array_equal(channel_map.daq2readout, config_a.daq2readout)
    assert channel_map.daq2readout[0] == 14
    assert channel_map.readout2daq[0] == 14
    assert channel_map.readout2daq[32] == 32
    assert channel_map.readout2daq[40] == 33


def test_arrays_are_read_only(config_a):
    channel_map = build_channel_map(config_a)
    with pytest.raises(ValueError, match="read-only"):
        channel_map.daq2readout[0] = 1
    with pytest.raises(ValueError, match="read-only"):
        channel_map.readout2daq[0] = 1


def test_repeated_builds_are_equal_but_independent(config_a):
    first = build_channel_map(config_a)
    second = build_channel_map(config_a)
    assert first == second
    assert not np.shares_memory(first.daq2readout, second.daq2readout)
    assert not np.shares_memory(first.readout2daq, second.readout2daq)


def test_maps_of_different_versions_differ():
    a = build_channel_map(get_version_config(HardwareVersion.A))
    b = build_channel_map(get_version_config(HardwareVersion.B))
    assert a != b


def test_compare_with_other_type(config_a):
    assert build_channel_map(config_a) != 'channel map'


def test_channel_map_is_frozen(config_a):
    channel_map = build_channel_map(config_a)
    with pytest.raises(AttributeError):
        channel_map.n_pixels = 3


class TestMalformedWiring:
    def test_duplicate_entries_raise(self, config_a):
        config = config_a.model_copy(update={'daq2readout': (0,) * 64})
        with pytest.raises(MalformedVersionTableError, match="not a permutation"):
            build_channel_map(config)

    def test_entries_out_of_range_raise(self, config_a):
        config = config_a.model_copy(update={'daq2readout': (*range(63), 64)})
        with pytest.raises(MalformedVersionTableError, match="outside of"):
            build_channel_map(config)

    def test_negative_entries_raise(self, config_a):
        config = config_a.model_copy(update={'daq2readout': (-1, *range(1, 64))})
        with pytest.raises(MalformedVersionTableError, match="outside of"):
            build_channel_map(config)

    def test_inconsistent_channel_counts_raise(self, config_a):
        config = config_a.model_copy(update={'n_pixels': 31})
        with pytest.raises(MalformedVersionTableError, match="wired channels"):
            build_channel_map(config)

    def test_wrong_number_of_daq_channels_raises(self, config_a):
        config = config_a.model_copy(
            update={'n_pixels': 16, 'n_rois': 16, 'daq2readout': tuple(range(32))}
        )
        with pytest.raises(MalformedVersionTableError, match="the DAQ has 64"):
            build_channel_map(config)

    def test_identity_wiring_is_valid(self, config_a):
        config = config_a.model_copy(update={'daq2readout': tuple(range(64))})
        channel_map = build_channel_map(config)
        assert channel_map == ChannelMap(
            daq2readout=np.arange(64), readout2daq=np.arange(64), n_pixels=32
        )
