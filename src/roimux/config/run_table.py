# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Scipp contributors (https://github.com/scipp)
from __future__ import annotations

import bisect
import functools
import logging
import operator
from collections.abc import Sequence
from typing import TypeVar

import pydantic
import yaml

from ..errors import MalformedVersionTableError, UnknownRunIdError
from .config_loader import load_config
from .models import (
    CalibrationOverride,
    HardwareVersion,
    RunRange,
    RunTableConfig,
    VersionRange,
)

R = TypeVar('R', bound=RunRange)


def _sort_disjoint(ranges: Sequence[R], *, kind: str) -> tuple[R, ...]:
    ordered = tuple(sorted(ranges, key=lambda r: r.first_run))
    for previous, current in zip(ordered, ordered[1:], strict=False):
        if previous.overlaps(current):
            raise MalformedVersionTableError(
                f"Overlapping {kind} run ranges {previous} and {current}."
            )
    return ordered


def _find(ranges: tuple[R, ...], starts: list[int], run_id: int) -> R | None:
    index = bisect.bisect_right(starts, run_id) - 1
    if index >= 0 and run_id in ranges[index]:
        return ranges[index]
    return None


class RunTable:
    """
    Lookup of the hardware version and the calibration overrides of a run.

    The ranges are sorted and checked once on construction. Hardware version
    ranges must cover a contiguous block of runs without gaps or overlaps, runs
    before the first or after the last range are unknown. Lookups are a binary
    search.

    Parameters
    ----------
    version_ranges:
        Run ranges of the hardware versions.
    calibration_overrides:
        Run specific calibration constants. Each override must lie within the
        runs of a single hardware version.
    """

    def __init__(
        self,
        version_ranges: Sequence[VersionRange],
        calibration_overrides: Sequence[CalibrationOverride] = (),
    ) -> None:
        if not version_ranges:
            raise MalformedVersionTableError("The run table has no hardware versions.")
        self._version_ranges = _sort_disjoint(version_ranges, kind='hardware version')
        for previous, current in zip(
            self._version_ranges, self._version_ranges[1:], strict=False
        ):
            if current.first_run != previous.last_run + 1:
                raise MalformedVersionTableError(
                    f"Gap between hardware version run ranges {previous} and "
                    f"{current}."
                )
        self._overrides = _sort_disjoint(
            calibration_overrides, kind='calibration override'
        )
        for override in self._overrides:
            if not any(
                override.first_run in r and override.last_run in r
                for r in self._version_ranges
            ):
                raise MalformedVersionTableError(
                    f"Calibration override for runs {override} is not within the "
                    "runs of a single hardware version."
                )
        self._version_starts = [r.first_run for r in self._version_ranges]
        self._override_starts = [r.first_run for r in self._overrides]

    @classmethod
    def from_config(cls, config: dict) -> RunTable:
        """Create a run table from the content of a run table file."""
        try:
            parsed = RunTableConfig.model_validate(config)
        except pydantic.ValidationError as e:
            raise MalformedVersionTableError(f"Invalid run table: {e}") from e
        return cls(parsed.hardware_versions, parsed.calibration_overrides)

    @property
    def version_ranges(self) -> tuple[VersionRange, ...]:
        return self._version_ranges

    @property
    def calibration_overrides(self) -> tuple[CalibrationOverride, ...]:
        return self._overrides

    def hardware_version(self, run_id: int) -> HardwareVersion:
        """
        Get the hardware version used in a run.

        Raises
        ------
        UnknownRunIdError:
            If the run is not covered by any hardware version range.
        """
        run_id = operator.index(run_id)
        match = _find(self._version_ranges, self._version_starts, run_id)
        if match is None:
            raise UnknownRunIdError(
                f"Run {run_id} is not covered by any hardware version range."
            )
        return match.version

    def calibration_override(self, run_id: int) -> CalibrationOverride | None:
        """Get the calibration override of a run, or None if there is none."""
        return _find(self._overrides, self._override_starts, operator.index(run_id))


@functools.cache
def default_run_table() -> RunTable:
    """
    The process wide run table.

    It is loaded on first use from the file given by the ROIMUX_RUN_TABLE
    environment variable, or from the packaged default.
    """
    try:
        config = load_config(name='run_table')
    except (yaml.YAMLError, OSError) as e:
        raise MalformedVersionTableError(f"Cannot read run table: {e}") from e
    table = RunTable.from_config(config)
    logging.getLogger(__name__).debug(
        "Loaded run table with %d hardware version ranges and %d overrides",
        len(table.version_ranges),
        len(table.calibration_overrides),
    )
    return table
