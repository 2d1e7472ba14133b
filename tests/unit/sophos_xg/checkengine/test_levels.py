#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import pytest

from sophos_xg.checkengine.levels import (
    CapacityMode,
    Level,
    parse_threshold,
    resolve_level,
    resolve_levels,
    ThresholdSpec,
)
from sophos_xg.utils.exceptions import InvalidCapacity, InvalidThreshold


@pytest.mark.parametrize(
    "text, expected",
    [
        ("80", ThresholdSpec(80.0, False)),
        ("80%", ThresholdSpec(80.0, True)),
        (" 12.5 % ", ThresholdSpec(12.5, True)),
        ("20:", ThresholdSpec(20.0, False)),
        ("20%:", ThresholdSpec(20.0, True)),
        ("0", ThresholdSpec(0.0, False)),
    ],
)
def test_parse_threshold(text: str, expected: ThresholdSpec) -> None:
    assert parse_threshold(text, "90%") == expected


@pytest.mark.parametrize(
    "text",
    ["", "garbage", "@80", "~:80", "10:20", "-5", "80%%", "%80", "8 0", "80MB"],
)
def test_parse_threshold_invalid(text: str) -> None:
    with pytest.raises(InvalidThreshold):
        parse_threshold(text, "90%")


def test_parse_threshold_default() -> None:
    assert parse_threshold(None, "90%") == ThresholdSpec(90.0, True)


def test_invalid_default_is_rejected_too() -> None:
    with pytest.raises(InvalidThreshold):
        parse_threshold(None, "ninety")


@pytest.mark.parametrize(
    "mode, warning, critical",
    [
        (CapacityMode.USED, "80%", "90%"),
        (CapacityMode.FREE, "20%", "10%"),
    ],
)
def test_capacity_mode_defaults(mode: CapacityMode, warning: str, critical: str) -> None:
    assert mode.default_warning == warning
    assert mode.default_critical == critical


def test_percentage_to_absolute() -> None:
    level = resolve_level(parse_threshold("80%", "90%"), 1000)
    assert level.absolute == pytest.approx(800)
    assert level.percent == pytest.approx(80)


def test_absolute_to_percentage() -> None:
    level = resolve_level(parse_threshold("800", "90%"), 1000)
    assert level.percent == pytest.approx(80)
    assert level.absolute == pytest.approx(800)


def test_conversion_is_not_rounded() -> None:
    assert resolve_level(ThresholdSpec(1, False), 3).percent == pytest.approx(33.3333333)


def test_resolve_levels() -> None:
    warn, crit = resolve_levels(ThresholdSpec(20, True), ThresholdSpec(100, False), 2000)
    assert warn == Level(percent=20, absolute=400)
    assert crit.percent == pytest.approx(5)
    assert crit.absolute == 100


@pytest.mark.parametrize("capacity", [0, -1])
def test_invalid_capacity(capacity: float) -> None:
    with pytest.raises(InvalidCapacity):
        resolve_level(ThresholdSpec(80, True), capacity)


def test_threshold_str() -> None:
    assert str(ThresholdSpec(80.0, True)) == "80%"
    assert str(ThresholdSpec(512.5, False)) == "512.5"
