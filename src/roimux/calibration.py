# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Scipp contributors (https://github.com/scipp)
from __future__ import annotations

import pydantic

from .config.models import CalibrationConstants, CalibrationOverride
from .errors import MalformedVersionTableError


def resolve_calibration(
    defaults: CalibrationConstants, override: CalibrationOverride | None
) -> CalibrationConstants:
    """
    Get the calibration constants of a run.

    Parameters
    ----------
    defaults:
        Default constants of the hardware version of the run.
    override:
        Run specific constants, or None if the run uses the defaults.

    Returns
    -------
    :
        A copy of the defaults with the values of the override applied.
    """
    if override is None:
        return defaults.model_copy()
    try:
        return CalibrationConstants.model_validate(
            {**defaults.model_dump(), **override.updates}
        )
    except pydantic.ValidationError as e:
        raise MalformedVersionTableError(
            f"Invalid calibration override for runs {override}: {e}"
        ) from e
