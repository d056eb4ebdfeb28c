################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Structured configuration schema for device clock domains."""

from __future__ import annotations

import math
from dataclasses import dataclass
from dataclasses import fields
from dataclasses import replace
from typing import Any

from oasis_timing.clock.clock_domain import ClockDomain
from oasis_timing.time_spec.tick_math import MIN_FROM_TICKS_RATE_HZ


# Name of the device master clock
MASTER_CLOCK_NAME: str = "master_clock"
# Master clock rate in Hz
MASTER_CLOCK_RATE_HZ: float = 200e6

# Name of the sample clock derived from the master clock
SAMPLE_CLOCK_NAME: str = "sample_clock"
# Sample rate in Hz
SAMPLE_RATE_HZ: float = 200e6


class TimingParamsError(Exception):
    """Raised when timing parameter validation fails."""


def _require_name(value: Any, name: str) -> None:
    """Require a non-empty string."""
    if not isinstance(value, str) or not value:
        raise TimingParamsError(f"{name} must be set")


def _require_rate(value: Any, name: str) -> None:
    """Require a finite clock rate of at least 1 Hz."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TimingParamsError(f"{name} must be a number")
    if not math.isfinite(value):
        raise TimingParamsError(f"{name} must be finite")
    if value <= 0.0:
        raise TimingParamsError(f"{name} must be positive")
    if value < MIN_FROM_TICKS_RATE_HZ:
        raise TimingParamsError(f"{name} must be at least {MIN_FROM_TICKS_RATE_HZ} Hz")


@dataclass(frozen=True)
class ClockParams:
    """Master clock of the device."""

    # Master clock name
    name: str = MASTER_CLOCK_NAME
    # Master clock rate in Hz
    tick_rate_hz: float = MASTER_CLOCK_RATE_HZ


@dataclass(frozen=True)
class SampleParams:
    """Sample clock used to timestamp streamed samples."""

    # Sample clock name
    name: str = SAMPLE_CLOCK_NAME
    # Sample rate in Hz, may be a non-integer divide of the master clock
    sample_rate_hz: float = SAMPLE_RATE_HZ


@dataclass(frozen=True)
class TimingParams:
    """Complete configuration tree for device timing."""

    clock: ClockParams
    sample: SampleParams

    @classmethod
    def defaults(cls) -> TimingParams:
        """Return the default timing parameter tree."""
        return cls(
            clock=ClockParams(),
            sample=SampleParams(),
        )

    def validate(self) -> None:
        """Validate parameter invariants and constraints."""
        _require_name(self.clock.name, "clock.name")
        _require_name(self.sample.name, "sample.name")
        if self.clock.name == self.sample.name:
            raise TimingParamsError("clock.name and sample.name must differ")

        _require_rate(self.clock.tick_rate_hz, "clock.tick_rate_hz")
        _require_rate(self.sample.sample_rate_hz, "sample.sample_rate_hz")
        if self.sample.sample_rate_hz > self.clock.tick_rate_hz:
            raise TimingParamsError(
                "sample.sample_rate_hz must not exceed clock.tick_rate_hz"
            )

    def replace(self, **namespace_overrides: Any) -> TimingParams:
        """Return a modified copy of the parameters."""
        return replace(self, **namespace_overrides)

    def as_nested_dict(self) -> dict[str, Any]:
        """Return a nested dict representation for debugging and YAML."""
        return _dataclass_to_dict(self)

    def clock_domains(self) -> dict[str, ClockDomain]:
        """Return the configured clock domains keyed by name."""
        self.validate()

        master: ClockDomain = ClockDomain(self.clock.name, self.clock.tick_rate_hz)
        sample: ClockDomain = ClockDomain(self.sample.name, self.sample.sample_rate_hz)

        return {master.name: master, sample.name: sample}


def _dataclass_to_dict(value: Any) -> Any:
    """Convert dataclasses into plain Python values."""
    if hasattr(value, "__dataclass_fields__"):
        return {
            field.name: _dataclass_to_dict(getattr(value, field.name))
            for field in fields(value)
        }
    return value
