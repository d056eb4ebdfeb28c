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
Decimal text form of whole and fractional seconds

The whole seconds are written as a decimal integer and the fraction follows
directly with its leading zero stripped, so the text reads as one number:

    whole=5, frac=0.25   ->  "5.250000000000000"
    whole=-1, frac=0.5   ->  "-1.500000000000000"  (a relative time of -0.5 s)

The fraction is written positionally with the shortest digits that round-trip
the double, padded to at least MIN_FRACTION_DIGITS. Exponents never appear.
"""

from __future__ import annotations

import re

import numpy as np

from oasis_timing.time_spec.time_spec_error import TimeSpecError


# Minimum number of digits written after the decimal point
MIN_FRACTION_DIGITS: int = 15

_SECONDS_PATTERN: re.Pattern[str] = re.compile(r"^\s*([+-]?)(\d+)(?:\.(\d*))?\s*$")


def format_fraction(
    fractional_seconds: float, min_digits: int = MIN_FRACTION_DIGITS
) -> str:
    """Return a fraction in [0, 1) as ".ddd" without the leading zero."""
    if not 0.0 <= fractional_seconds < 1.0:
        raise TimeSpecError("fractional_seconds must be in [0, 1)")

    text: str = np.format_float_positional(
        np.float64(fractional_seconds),
        unique=True,
        fractional=True,
        trim="k",
        min_digits=min_digits,
    )

    # Drop the "0" before the point
    return text[1:]


def format_seconds(
    whole_seconds: int,
    fractional_seconds: float,
    min_digits: int = MIN_FRACTION_DIGITS,
) -> str:
    """Render whole and fractional seconds as a single decimal number."""
    return f"{whole_seconds:d}{format_fraction(fractional_seconds, min_digits)}"


def parse_seconds(text: str) -> tuple[int, float]:
    """
    Parse text written by format_seconds()

    The digits before the point are the whole seconds, including the sign,
    and the digits after it are the non-negative fraction. A signed zero whole
    part is rejected because format_seconds() never writes one.
    """
    if not isinstance(text, str):
        raise TimeSpecError("text must be a str")

    match: re.Match[str] | None = _SECONDS_PATTERN.match(text)
    if match is None:
        raise TimeSpecError(f"Invalid seconds text: {text!r}")

    sign, whole_digits, frac_digits = match.groups()
    whole: int = int(whole_digits)
    if sign == "-":
        if whole == 0:
            raise TimeSpecError(f"Ambiguous negative zero seconds: {text!r}")
        whole = -whole

    frac: float = float(f"0.{frac_digits}") if frac_digits else 0.0

    return whole, frac
