################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""
Named clock domain for converting between tick counts and time values
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from oasis_timing.time_spec.tick_math import validate_from_ticks_rate
from oasis_timing.time_spec.time_spec import TimeSpec
from oasis_timing.time_spec.time_spec_error import TimeSpecError


_LOG: logging.Logger = logging.getLogger(__name__)


class ClockDomainError(TimeSpecError):
    """Raised when a clock domain definition is invalid."""


@dataclass(frozen=True)
class ClockDomain:
    """
    A device clock identified by name and tick rate

    Fields:
        name: Identifier of the clock, such as "master_clock"
        tick_rate_hz: Ticks per second, at least 1 Hz, may be non-integer
    """

    name: str
    tick_rate_hz: float

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ClockDomainError("name must be a non-empty string")

        try:
            rate: float = validate_from_ticks_rate(self.tick_rate_hz, "tick_rate_hz")
        except TimeSpecError as exc:
            raise ClockDomainError(f"{self.name}: {exc}") from exc

        object.__setattr__(self, "tick_rate_hz", rate)

        if not self.is_integer_rate():
            _LOG.debug("Clock domain %s uses non-integer rate %r Hz", self.name, rate)

    def is_integer_rate(self) -> bool:
        """True when the tick rate has no fractional part."""
        return self.tick_rate_hz.is_integer()

    def time_from_ticks(self, ticks: int) -> TimeSpec:
        """Return the time of an absolute tick count."""
        return TimeSpec.from_ticks(ticks, self.tick_rate_hz)

    def ticks_from_time(self, t: TimeSpec) -> int:
        """Return the absolute tick count nearest to a time."""
        return t.to_ticks(self.tick_rate_hz)

    def tick_period(self) -> TimeSpec:
        """Return the duration of a single tick."""
        return TimeSpec.from_ticks(1, self.tick_rate_hz)

    def align(self, t: TimeSpec) -> TimeSpec:
        """Snap a time to the nearest tick boundary of this clock."""
        return self.time_from_ticks(self.ticks_from_time(t))

    def rescale_ticks(self, ticks: int, target: ClockDomain) -> int:
        """Express a tick count of this clock as the nearest tick of another."""
        return target.ticks_from_time(self.time_from_ticks(ticks))
