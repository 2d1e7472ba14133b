#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Expiry dates as reported by the appliance, e.g. "Jan 15 2024"."""

from __future__ import annotations

import datetime
import re

from sophos_xg.utils.exceptions import UnparseableDate

__all__ = ["days_until", "parse_expiry_date", "require_days_until"]

_DATE_PATTERN = re.compile(r"([A-Z][a-z][a-z])\s+(\d+)\s+(\d+)")

_MONTHS = {
    "Jan": 1,
    "Feb": 2,
    "Mar": 3,
    "Apr": 4,
    "May": 5,
    "Jun": 6,
    "Jul": 7,
    "Aug": 8,
    "Sep": 9,
    "Oct": 10,
    "Nov": 11,
    "Dec": 12,
}


def parse_expiry_date(text: str) -> datetime.date | None:
    """
    >>> parse_expiry_date("Jan 15 2024")
    datetime.date(2024, 1, 15)
    >>> parse_expiry_date("Expires: Dec  1 2030 (UTC)")
    datetime.date(2030, 12, 1)
    >>> parse_expiry_date("Fail 1 2024") is None
    True
    >>> parse_expiry_date("Feb 30 2024") is None
    True
    """
    if (match := _DATE_PATTERN.search(text)) is None:
        return None
    if (month := _MONTHS.get(match.group(1))) is None:
        return None
    try:
        return datetime.date(int(match.group(3)), month, int(match.group(2)))
    except ValueError:
        return None


def days_until(text: str, today: datetime.date) -> int | None:
    """Signed number of days from today until the given date

    >>> days_until("Jan 15 2024", datetime.date(2024, 1, 1))
    14
    >>> days_until("Dec 25 2023", datetime.date(2024, 1, 1))
    -7
    """
    if (expiry := parse_expiry_date(text)) is None:
        return None
    return (expiry - today).days


def require_days_until(text: str, today: datetime.date) -> int:
    if (days := days_until(text, today)) is None:
        raise UnparseableDate(f"Unable to parse date: {text!r}")
    return days
