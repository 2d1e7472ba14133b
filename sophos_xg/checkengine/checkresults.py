#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from __future__ import annotations

import dataclasses
from typing import Self

from sophos_xg.checkengine.states import State

__all__ = ["CheckReport", "Metric", "render_number"]


def render_number(value: float) -> str:
    """
    >>> render_number(800.0)
    '800'
    >>> render_number(12.5)
    '12.5'
    >>> render_number(1 / 3)
    '0.333'
    """
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.3f}".rstrip("0").rstrip(".")


@dataclasses.dataclass(frozen=True, kw_only=True)
class Metric:
    name: str
    value: float
    unit: str = ""
    warn: float | None = None
    crit: float | None = None
    min: float | None = None
    max: float | None = None

    def as_text(self) -> str:
        """Render the metric as performance data token

        >>> Metric(name="percent_usage", value=81, unit="%", warn=80, crit=90).as_text()
        'percent_usage=81%;80;90'
        >>> Metric(name="capacity_free", value=190, unit="MB", min=0, max=1000).as_text()
        'capacity_free=190MB;;;0;1000'
        """
        label = f"'{self.name}'" if " " in self.name or "=" in self.name else self.name
        thresholds = ";".join(
            "" if v is None else render_number(v) for v in (self.warn, self.crit, self.min, self.max)
        ).rstrip(";")
        text = f"{label}={render_number(self.value)}{self.unit}"
        return f"{text};{thresholds}" if thresholds else text


@dataclasses.dataclass
class CheckReport:
    """Result of one plug-in run

    The state only ever gets worse. Summary fragments, detail lines and
    metrics keep the order in which they are added.
    """

    state: State = State.OK
    messages: list[tuple[State, str]] = dataclasses.field(default_factory=list)
    details: list[str] = dataclasses.field(default_factory=list)
    metrics: list[Metric] = dataclasses.field(default_factory=list)

    @classmethod
    def bail_out(cls, state: int, message: str) -> Self:
        report = cls()
        report.add(State(state), message)
        return report

    def add(self, state: State, summary: str = "", *details: str) -> None:
        self.state = State.worst(self.state, state)
        if summary:
            self.messages.append((state, summary))
        self.details.extend(details)

    def add_detail(self, *lines: str) -> None:
        self.details.extend(lines)

    def add_metric(self, metric: Metric) -> None:
        self.metrics.append(metric)

    @property
    def summary(self) -> str:
        problems = [
            text
            for severity in (State.WARN, State.CRIT, State.UNKNOWN)
            for state, text in self.messages
            if state is severity
        ]
        if problems:
            return ", ".join(problems)
        return ", ".join(text for state, text in self.messages if state is State.OK)

    def as_text(self, shortname: str) -> str:
        summary = self._replace_pipe(self.summary)
        headline = f"{shortname} {self.state.long_name}"
        lines = [f"{headline} - {summary}" if summary else headline]
        details = list(self.details)
        while details and not details[-1].strip():
            details.pop()
        lines.extend(self._replace_pipe(line) for line in details)
        if self.metrics:
            lines.append("| " + " ".join(m.as_text() for m in self.metrics))
        return "\n".join(lines)

    def render(self, shortname: str) -> tuple[int, str]:
        return int(self.state), self.as_text(shortname)

    @staticmethod
    def _replace_pipe(txt: str) -> str:
        """The vertical bar indicates end of service output and start of metrics.
        Replace the ones in the output by a Unicode "Light vertical bar"
        """
        return txt.replace("|", "\u2758")
