# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Scipp contributors (https://github.com/scipp)

"""
Static configuration of the readout hardware versions.

Each module ``rev_<version>`` defines a ``version_config`` describing the wiring,
the PCB layout and the default calibration constants of one hardware version.
Currently the configuration is stored in python files, but it can be moved to a
separate file format in the future.
"""

import importlib
import pkgutil

from ...errors import MalformedVersionTableError
from ..models import HardwareVersion, HardwareVersionConfig


def _module_name(version: HardwareVersion) -> str:
    return f'rev_{version.value.lower()}'


def available_versions() -> list[str]:
    """Get list of available version config modules."""
    return [
        name
        for _, name, _ in pkgutil.iter_modules(__path__)
        if name != '__init__' and not name.startswith('_')
    ]


def get_version_config(version: HardwareVersion) -> HardwareVersionConfig:
    """Get the static configuration of a hardware version."""
    version = HardwareVersion(version)
    name = _module_name(version)
    try:
        module = importlib.import_module(f'.{name}', __package__)
    except ImportError as e:
        raise MalformedVersionTableError(
            f'No configuration found for hardware version {version}'
        ) from e
    config = getattr(module, 'version_config', None)
    if not isinstance(config, HardwareVersionConfig):
        raise MalformedVersionTableError(
            f'Module {name} does not define a version_config'
        )
    if config.version != version:
        raise MalformedVersionTableError(
            f'Module {name} describes hardware version {config.version.value} '
            f'instead of {version.value}'
        )
    return config


__all__ = ['available_versions', 'get_version_config']
