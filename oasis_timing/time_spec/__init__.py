################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Time value type and tick-domain conversions."""

from __future__ import annotations

from oasis_timing.time_spec.time_spec import ASAP
from oasis_timing.time_spec.time_spec import TimeSpec
from oasis_timing.time_spec.time_spec_error import TimeSpecError


__all__ = [
    "ASAP",
    "TimeSpec",
    "TimeSpecError",
]
