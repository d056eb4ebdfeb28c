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
Tick-rate arithmetic shared by the scalar and batch time conversions

A tick rate is split into an integer part and a fractional remainder. The
integer part carries the bulk of the conversion in exact integer arithmetic
and only the small fractional correction passes through floating point. At an
integer rate the correction vanishes and any 64-bit count converts exactly. At
a non-integer rate the correction grows with the count, and exact_tick_limit()
bounds the counts that still convert without losing individual ticks.
"""

from __future__ import annotations

import math
import numbers
import operator

import numpy as np
from numpy.typing import NDArray

from oasis_timing.time_spec.time_spec_error import TimeSpecError


# Smallest tick rate whose integer part can divide a tick count, in Hz
MIN_FROM_TICKS_RATE_HZ: float = 1.0

# Range of a signed 64-bit tick counter
INT64_MIN: int = -(2**63)
INT64_MAX: int = 2**63 - 1

# Largest rate correction, in ticks, whose rounding error stays well below half
# a tick through a from_ticks/to_ticks round trip
MAX_EXACT_CORRECTION_TICKS: float = 2.0**48


def validate_tick_rate(tick_rate: float, name: str = "tick_rate") -> float:
    """Return the tick rate as a float, rejecting non-positive or non-finite rates."""
    if isinstance(tick_rate, bool) or not isinstance(tick_rate, numbers.Real):
        raise TimeSpecError(f"{name} must be a real number")

    rate: float = float(tick_rate)
    if not math.isfinite(rate):
        raise TimeSpecError(f"{name} must be finite")
    if rate <= 0.0:
        raise TimeSpecError(f"{name} must be positive")

    return rate


def validate_from_ticks_rate(tick_rate: float, name: str = "tick_rate") -> float:
    """Validate a rate used to divide a tick count into whole seconds."""
    rate: float = validate_tick_rate(tick_rate, name)
    if rate < MIN_FROM_TICKS_RATE_HZ:
        raise TimeSpecError(f"{name} must be at least {MIN_FROM_TICKS_RATE_HZ} Hz")
    if math.trunc(rate) > INT64_MAX:
        raise TimeSpecError(f"{name} integer part must fit in 64 bits")

    return rate


def require_int(value: int, name: str) -> int:
    """Return the value as a Python int, rejecting bools and non-integers."""
    if isinstance(value, bool):
        raise TimeSpecError(f"{name} must be an int")
    try:
        return operator.index(value)
    except TypeError as exc:
        raise TimeSpecError(f"{name} must be an int") from exc


def require_finite(value: float, name: str) -> float:
    """Return the value as a float, rejecting bools, NaN and infinities."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise TimeSpecError(f"{name} must be a real number")

    result: float = float(value)
    if not math.isfinite(result):
        raise TimeSpecError(f"{name} must be finite")

    return result


def split_tick_rate(tick_rate: float) -> tuple[int, float]:
    """Split a rate into its truncated integer part and fractional remainder."""
    rate_i: int = math.trunc(tick_rate)
    rate_f: float = tick_rate - rate_i
    return rate_i, rate_f


def exact_tick_limit(tick_rate: float) -> int:
    """
    Return the largest tick magnitude that round-trips exactly at a rate

    Counts within [-limit, limit] survive TimeSpec.from_ticks() followed by
    to_ticks() unchanged. Integer rates, and rates whose correction term stays
    small for every 64-bit count, return INT64_MAX.
    """
    rate: float = validate_from_ticks_rate(tick_rate)
    _, rate_f = split_tick_rate(rate)
    if rate_f == 0.0:
        return INT64_MAX

    limit: float = MAX_EXACT_CORRECTION_TICKS / rate_f * rate
    if limit >= float(INT64_MAX):
        return INT64_MAX

    return math.floor(limit)


def trunc_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient: int = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


def round_half_up(x: float) -> int:
    """Round to the nearest integer, ties toward positive infinity."""
    return math.floor(x + 0.5)


def normalize_seconds(
    whole_seconds: int, fractional_seconds: float
) -> tuple[int, float]:
    """
    Carry the integer part of a fraction into the whole seconds

    The returned fraction is always in [0, 1). A negative remainder borrows
    one second from the whole part.
    """
    frac_int: int = math.trunc(fractional_seconds)
    whole: int = whole_seconds + frac_int
    frac: float = fractional_seconds - frac_int

    if frac < 0.0:
        whole -= 1
        frac += 1.0

        # A remainder within half an ulp of zero rounds up to one
        if frac >= 1.0:
            whole += 1
            frac = 0.0

    # Store -0.0 as 0.0
    return whole, frac + 0.0


def ticks_to_time_arrays(
    ticks: NDArray[np.integer], tick_rate: float
) -> tuple[NDArray[np.int64], NDArray[np.float64]]:
    """
    Convert a block of tick counts to whole and fractional seconds

    Each element matches TimeSpec.from_ticks() for the same count and rate,
    including the precision bound given by exact_tick_limit().
    """
    rate: float = validate_from_ticks_rate(tick_rate)
    ticks_arr: NDArray[np.int64] = _as_int64_array(ticks, "ticks")

    rate_i, rate_f = split_tick_rate(rate)
    rate_i64: np.int64 = np.int64(rate_i)

    # Floor division, then step toward zero where a remainder is left over
    secs_full: NDArray[np.int64] = np.floor_divide(ticks_arr, rate_i64)
    remainder: NDArray[np.int64] = ticks_arr - secs_full * rate_i64
    secs_full = np.where((remainder != 0) & (ticks_arr < 0), secs_full + 1, secs_full)

    ticks_error: NDArray[np.int64] = ticks_arr - secs_full * rate_i64
    ticks_frac: NDArray[np.float64] = ticks_error.astype(np.float64) - (
        secs_full.astype(np.float64) * rate_f
    )

    return _normalize_arrays(secs_full, ticks_frac / rate)


def time_arrays_to_ticks(
    whole_seconds: NDArray[np.integer],
    fractional_seconds: NDArray[np.floating],
    tick_rate: float,
) -> NDArray[np.int64]:
    """
    Convert blocks of whole and fractional seconds to tick counts

    Each element matches TimeSpec.to_ticks() for the same time and rate.
    """
    rate: float = validate_tick_rate(tick_rate)
    whole: NDArray[np.int64] = _as_int64_array(whole_seconds, "whole_seconds")
    frac: NDArray[np.float64] = np.asarray(fractional_seconds, dtype=np.float64)
    if frac.shape != whole.shape:
        raise TimeSpecError("fractional_seconds must match the shape of whole_seconds")
    if not np.all(np.isfinite(frac)):
        raise TimeSpecError("fractional_seconds must be finite")
    if np.any((frac < 0.0) | (frac >= 1.0)):
        raise TimeSpecError("fractional_seconds must be in [0, 1)")

    # Reject anything whose tick count would wrap a 64-bit counter
    magnitude: NDArray[np.float64] = (np.abs(whole.astype(np.float64)) + 1.0) * rate
    if np.any(magnitude >= float(INT64_MAX)):
        raise TimeSpecError("tick count would overflow 64 bits")

    rate_i, rate_f = split_tick_rate(rate)

    ticks_full: NDArray[np.int64] = whole * np.int64(rate_i)
    ticks_error: NDArray[np.float64] = whole.astype(np.float64) * rate_f
    ticks_frac: NDArray[np.float64] = frac * rate

    rounded: NDArray[np.float64] = np.floor(ticks_error + ticks_frac + 0.5)
    result: NDArray[np.int64] = ticks_full + rounded.astype(np.int64)
    return result


def _as_int64_array(values: NDArray[np.integer], name: str) -> NDArray[np.int64]:
    """Coerce an integer array to int64 without wrapping."""
    array: np.ndarray = np.asarray(values)
    if array.dtype == np.bool_ or not np.issubdtype(array.dtype, np.integer):
        raise TimeSpecError(f"{name} must be an integer array")
    if array.dtype == np.uint64 and np.any(array > np.uint64(INT64_MAX)):
        raise TimeSpecError(f"{name} must fit in a signed 64-bit integer")

    return array.astype(np.int64)


def _normalize_arrays(
    whole_seconds: NDArray[np.int64], fractional_seconds: NDArray[np.float64]
) -> tuple[NDArray[np.int64], NDArray[np.float64]]:
    """Vectorized normalize_seconds()."""
    frac_int: NDArray[np.float64] = np.trunc(fractional_seconds)
    whole: NDArray[np.int64] = whole_seconds + frac_int.astype(np.int64)
    frac: NDArray[np.float64] = fractional_seconds - frac_int

    borrow: NDArray[np.bool_] = frac < 0.0
    whole = np.where(borrow, whole - 1, whole)
    frac = np.where(borrow, frac + 1.0, frac)

    carry: NDArray[np.bool_] = frac >= 1.0
    whole = np.where(carry, whole + 1, whole)
    frac = np.where(carry, 0.0, frac)

    return whole.astype(np.int64), frac + 0.0
