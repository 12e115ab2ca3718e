# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Scipp contributors (https://github.com/scipp)
"""Exceptions raised while resolving the readout configuration of a run."""


class UnknownRunIdError(LookupError):
    """The run ID is not covered by any known hardware version range."""


class MalformedVersionTableError(ValueError):
    """
    The static configuration data is inconsistent.

    This is a defect in the version or run tables, not an input error. Examples are
    a wiring table that is not a permutation or overlapping run ranges.
    """


class IndexOutOfRangeError(IndexError):
    """An accessor was called with an index outside of the valid range."""
