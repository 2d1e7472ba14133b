#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from __future__ import annotations

from collections.abc import Callable, Container

from sophos_xg.checkengine.levels import CapacityMode
from sophos_xg.checkengine.states import State

__all__ = [
    "Levels",
    "check_capacity_state",
    "check_days_left",
    "check_enum_state",
    "check_levels",
]

# (warn, crit)
Levels = tuple[float, float]


def check_levels(
    value: float,
    *,
    levels_upper: Levels | None = None,
    levels_lower: Levels | None = None,
    human_readable_func: Callable[[float], str] = str,
) -> tuple[State, str]:
    """Classify a numeric value

    Upper levels are breached if the value reaches them, lower levels if the
    value falls below them. The critical levels are checked first. The order
    of warn and crit is taken as given.

    >>> check_levels(81.0, levels_upper=(80.0, 90.0))
    (<State.WARN: 1>, ' (warn/crit at 80.0/90.0)')
    >>> check_levels(9.0, levels_lower=(20.0, 10.0))
    (<State.CRIT: 2>, ' (warn/crit below 20.0/10.0)')
    >>> check_levels(50.0, levels_upper=(80.0, 90.0))
    (<State.OK: 0>, '')
    """
    warn_upper, crit_upper = levels_upper or (None, None)
    warn_lower, crit_lower = levels_lower or (None, None)
    # Critical cases
    if crit_upper is not None and value >= crit_upper:
        return State.CRIT, _levelsinfo_ty("at", warn_upper, crit_upper, human_readable_func)
    if crit_lower is not None and value < crit_lower:
        return State.CRIT, _levelsinfo_ty("below", warn_lower, crit_lower, human_readable_func)

    # Warning cases
    if warn_upper is not None and value >= warn_upper:
        return State.WARN, _levelsinfo_ty("at", warn_upper, crit_upper, human_readable_func)
    if warn_lower is not None and value < warn_lower:
        return State.WARN, _levelsinfo_ty("below", warn_lower, crit_lower, human_readable_func)
    return State.OK, ""


def _levelsinfo_ty(
    ty: str, warn: float | None, crit: float | None, human_readable_func: Callable[[float], str]
) -> str:
    warn_str = "never" if warn is None else f"{human_readable_func(warn)}"
    crit_str = "never" if crit is None else f"{human_readable_func(crit)}"
    return f" (warn/crit {ty} {warn_str}/{crit_str})"


def check_capacity_state(
    value: float,
    warn: float,
    crit: float,
    mode: CapacityMode,
    human_readable_func: Callable[[float], str] = str,
) -> tuple[State, str]:
    if mode is CapacityMode.FREE:
        return check_levels(
            value, levels_lower=(warn, crit), human_readable_func=human_readable_func
        )
    return check_levels(value, levels_upper=(warn, crit), human_readable_func=human_readable_func)


def check_days_left(days_left: int, warn_days: int, crit_days: int) -> State:
    """
    >>> check_days_left(14, 30, 15)
    <State.CRIT: 2>
    >>> check_days_left(20, 30, 15)
    <State.WARN: 1>
    >>> check_days_left(30, 30, 15)
    <State.OK: 0>
    """
    state, _info = check_levels(days_left, levels_lower=(warn_days, crit_days))
    return state


def check_enum_state(
    name: str,
    *,
    status_ok: Container[str],
    status_warning: Container[str] = (),
) -> State:
    """Classify a symbolic device state

    >>> check_enum_state("stopped", status_ok=["running"])
    <State.CRIT: 2>
    >>> check_enum_state("stopped", status_ok=["running"], status_warning=["stopped"])
    <State.WARN: 1>
    >>> check_enum_state("running", status_ok=["running"], status_warning=["running"])
    <State.WARN: 1>
    """
    if name in status_warning:
        return State.WARN
    if name not in status_ok:
        return State.CRIT
    return State.OK
