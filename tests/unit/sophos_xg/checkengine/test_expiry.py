#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import datetime

import pytest

from sophos_xg.checkengine.expiry import days_until, parse_expiry_date, require_days_until
from sophos_xg.utils.exceptions import UnparseableDate

TODAY = datetime.date(2024, 1, 1)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Jan 15 2024", datetime.date(2024, 1, 15)),
        ("Feb 29 2024", datetime.date(2024, 2, 29)),
        ("Sep  9 2031", datetime.date(2031, 9, 9)),
        ("Expires Dec 31 2099", datetime.date(2099, 12, 31)),
    ],
)
def test_parse_expiry_date(text: str, expected: datetime.date) -> None:
    assert parse_expiry_date(text) == expected


@pytest.mark.parametrize(
    "text",
    ["", "garbage", "2024-01-15", "15 Jan 2024", "JAN 15 2024", "Foo 15 2024", "Feb 29 2023"],
)
def test_unparseable_expiry_date(text: str) -> None:
    assert parse_expiry_date(text) is None
    assert days_until(text, TODAY) is None


def test_days_until() -> None:
    assert days_until("Jan 15 2024", TODAY) == 14


def test_days_until_today() -> None:
    assert days_until("Jan 1 2024", TODAY) == 0


def test_days_until_expired() -> None:
    assert days_until("Dec 1 2023", TODAY) == -31


def test_require_days_until() -> None:
    assert require_days_until("Mar 1 2024", TODAY) == 60
    with pytest.raises(UnparseableDate):
        require_days_until("garbage", TODAY)
