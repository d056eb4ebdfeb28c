################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Exception raised by time value construction and tick conversions."""

from __future__ import annotations


class TimeSpecError(ValueError):
    """Raised when a time value operation receives an invalid argument."""
