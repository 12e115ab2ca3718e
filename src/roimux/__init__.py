# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Scipp contributors (https://github.com/scipp)
# ruff: noqa: E402, F401, I

import importlib.metadata

try:
    __version__ = importlib.metadata.version(__package__ or __name__)
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.0.0"

del importlib

from .config.models import CalibrationConstants, HardwareVersion
from .errors import IndexOutOfRangeError, MalformedVersionTableError, UnknownRunIdError
from .run_params import RunParams

__all__ = [
    "CalibrationConstants",
    "HardwareVersion",
    "IndexOutOfRangeError",
    "MalformedVersionTableError",
    "RunParams",
    "UnknownRunIdError",
]
