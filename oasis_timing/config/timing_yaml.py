################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""YAML schema utilities for timing parameters."""

from __future__ import annotations

from dataclasses import fields
from typing import Any

import yaml

from oasis_timing.config.timing_params import ClockParams
from oasis_timing.config.timing_params import SampleParams
from oasis_timing.config.timing_params import TimingParams
from oasis_timing.config.timing_params import TimingParamsError


class TimingYamlError(Exception):
    """Raised when the timing YAML schema is invalid."""


# Namespace name to its parameter dataclass
_NAMESPACES: dict[str, type] = {
    "clock": ClockParams,
    "sample": SampleParams,
}

# Fields holding rates in Hz
_RATE_FIELDS: frozenset[str] = frozenset({"tick_rate_hz", "sample_rate_hz"})


def loads_yaml(text: str) -> TimingParams:
    """
    Parse timing parameters from YAML text

    Missing namespaces and keys keep their defaults. An empty document yields
    the defaults.
    """
    try:
        data: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise TimingYamlError("Failed to parse timing YAML") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise TimingYamlError("Timing YAML root must be a mapping")

    unknown: set[str] = set(data) - set(_NAMESPACES)
    if unknown:
        raise TimingYamlError(f"Unknown timing namespaces: {sorted(unknown)}")

    defaults: TimingParams = TimingParams.defaults()
    namespaces: dict[str, Any] = {}
    for namespace, params_type in _NAMESPACES.items():
        default_value: Any = getattr(defaults, namespace)
        section: Any = data.get(namespace)
        if section is None:
            namespaces[namespace] = default_value
            continue
        namespaces[namespace] = _parse_namespace(namespace, params_type, section)

    params: TimingParams = defaults.replace(**namespaces)
    try:
        params.validate()
    except TimingParamsError as exc:
        raise TimingYamlError(str(exc)) from exc

    return params


def dumps_yaml(params: TimingParams) -> str:
    """Serialize timing parameters to YAML text."""
    try:
        params.validate()
    except TimingParamsError as exc:
        raise TimingYamlError(str(exc)) from exc

    return yaml.safe_dump(params.as_nested_dict(), sort_keys=False)


def _parse_namespace(namespace: str, params_type: type, section: Any) -> Any:
    """Build one parameter namespace from its YAML mapping."""
    if not isinstance(section, dict):
        raise TimingYamlError(f"{namespace} must be a mapping")

    allowed: set[str] = {field.name for field in fields(params_type)}
    unknown: set[str] = set(section) - allowed
    if unknown:
        raise TimingYamlError(f"Unknown keys in {namespace}: {sorted(unknown)}")

    values: dict[str, Any] = {}
    for key, value in section.items():
        if key in _RATE_FIELDS:
            values[key] = _coerce_rate(value, f"{namespace}.{key}")
        else:
            values[key] = _require_str(value, f"{namespace}.{key}")

    return params_type(**values)


def _coerce_rate(value: Any, name: str) -> float:
    """
    Coerce a rate to float

    PyYAML reads exponent notation without a decimal point, such as 200e6, as
    a string, so numeric strings are accepted too.
    """
    if isinstance(value, bool):
        raise TimingYamlError(f"{name} must be a number")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError as exc:
            raise TimingYamlError(f"{name} must be a number") from exc
    raise TimingYamlError(f"{name} must be a number")


def _require_str(value: Any, name: str) -> str:
    """Require a string value."""
    if not isinstance(value, str):
        raise TimingYamlError(f"{name} must be a string")
    return value
