#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Operator supplied thresholds

A threshold is a single breach point, either an absolute amount (``"800"``)
or a percentage of the capacity (``"80%"``). Whether it is an upper or a
lower bound is decided by the :class:`CapacityMode` of the metric, so the
Nagios lower bound shorthand ``"20:"`` is accepted and means the same as
``"20"``.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from sophos_xg.utils.exceptions import InvalidCapacity, InvalidThreshold

__all__ = [
    "CapacityMode",
    "Level",
    "ThresholdSpec",
    "parse_threshold",
    "resolve_level",
    "resolve_levels",
]

_THRESHOLD_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(%?)\s*:?\s*$")


class CapacityMode(enum.Enum):
    USED = "used"
    FREE = "free"

    @property
    def default_warning(self) -> str:
        return "80%" if self is CapacityMode.USED else "20%"

    @property
    def default_critical(self) -> str:
        return "90%" if self is CapacityMode.USED else "10%"


@dataclass(frozen=True)
class ThresholdSpec:
    value: float
    is_percentage: bool

    def __str__(self) -> str:
        return f"{self.value:g}{'%' if self.is_percentage else ''}"


@dataclass(frozen=True)
class Level:
    """A threshold resolved against a capacity"""

    percent: float
    absolute: float


def parse_threshold(text: str | None, default: str) -> ThresholdSpec:
    """Parse a threshold given on the command line

    >>> parse_threshold("80%", "90%")
    ThresholdSpec(value=80.0, is_percentage=True)
    >>> parse_threshold(None, "90%")
    ThresholdSpec(value=90.0, is_percentage=True)
    >>> parse_threshold("512.5", "90%")
    ThresholdSpec(value=512.5, is_percentage=False)
    >>> parse_threshold("20:", "10%")
    ThresholdSpec(value=20.0, is_percentage=False)
    """
    raw = default if text is None else text
    if (match := _THRESHOLD_PATTERN.match(raw)) is None:
        raise InvalidThreshold(f"Invalid threshold: {raw!r}")
    return ThresholdSpec(value=float(match.group(1)), is_percentage=bool(match.group(2)))


def resolve_level(spec: ThresholdSpec, capacity: float) -> Level:
    """Express a threshold both as percentage and as absolute amount

    >>> resolve_level(ThresholdSpec(80, True), 1000)
    Level(percent=80, absolute=800.0)
    >>> resolve_level(ThresholdSpec(800, False), 1000)
    Level(percent=80.0, absolute=800)
    """
    if capacity <= 0:
        raise InvalidCapacity(f"Invalid capacity reported by the device: {capacity}")
    if spec.is_percentage:
        return Level(percent=spec.value, absolute=capacity * spec.value / 100)
    return Level(percent=spec.value / capacity * 100, absolute=spec.value)


def resolve_levels(
    warning: ThresholdSpec, critical: ThresholdSpec, capacity: float
) -> tuple[Level, Level]:
    return resolve_level(warning, capacity), resolve_level(critical, capacity)
