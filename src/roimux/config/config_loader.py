# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Scipp contributors (https://github.com/scipp)
import os
from importlib import resources

import yaml


def load_config(*, name: str, path: str | os.PathLike | None = None) -> dict:
    """Load a YAML configuration file.

    Args:
        name: Name of the configuration, e.g., 'run_table'.
        path: Path to a configuration file. Defaults to the value of the
              ROIMUX_<NAME> environment variable, e.g., ROIMUX_RUN_TABLE.
              If neither is given the packaged default is used.
    """
    path = path or os.getenv(f'ROIMUX_{name.upper()}')
    if path:
        with open(path) as f:
            return yaml.safe_load(f)
    # Use importlib.resources to access packaged config files
    with resources.files('roimux.config.defaults').joinpath(f'{name}.yaml').open() as f:
        return yaml.safe_load(f)
