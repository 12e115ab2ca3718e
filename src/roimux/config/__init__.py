# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Scipp contributors (https://github.com/scipp)

from .models import CalibrationConstants, HardwareVersion, HardwareVersionConfig
from .run_table import RunTable, default_run_table
from .versions import available_versions, get_version_config

__all__ = [
    'CalibrationConstants',
    'HardwareVersion',
    'HardwareVersionConfig',
    'RunTable',
    'available_versions',
    'default_run_table',
    'get_version_config',
]
