#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from __future__ import annotations

import enum
from typing import Self

from sophos_xg.utils.statename import service_state_name

__all__ = ["State", "state_markers", "worst_service_state"]

# Symbolic representations of states in plug-in output
state_markers = ("", "(!)", "(!!)", "(?)")


class State(enum.IntEnum):
    OK = 0
    WARN = 1
    CRIT = 2
    UNKNOWN = 3

    @property
    def long_name(self) -> str:
        return service_state_name(self.value)

    @property
    def marker(self) -> str:
        return state_markers[self.value]

    @classmethod
    def worst(cls, *states: int) -> Self:
        """Return the numerically highest state

        >>> State.worst(State.OK, State.WARN)
        <State.WARN: 1>
        >>> State.worst(State.CRIT, State.UNKNOWN)
        <State.UNKNOWN: 3>
        >>> State.worst()
        <State.OK: 0>
        """
        return cls(worst_service_state(*states, default=cls.OK))


def worst_service_state(*states: int, default: int) -> int:
    """Return the 'worst' aggregation of all states

    Integers encode service states like this:

        0 -> OK
        1 -> WARN
        2 -> CRIT
        3 -> UNKNOWN

    The aggregation is plain `max`, so an UNKNOWN item raises the overall
    state above a CRIT one. The summary still shows both fragments.

    >>> worst_service_state(0, 1, 2, 3, default=0)
    3
    >>> worst_service_state(default=1)
    1
    """
    return max(states, default=default)
