#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Usage or free space of a resource with a known capacity (disk, memory, swap)"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sophos_xg.checkengine.checkresults import CheckReport, Metric, render_number
from sophos_xg.checkengine.classify import check_capacity_state
from sophos_xg.checkengine.levels import CapacityMode, ThresholdSpec, resolve_levels
from sophos_xg.checkengine.states import State

__all__ = ["CapacityObservation", "check_capacity"]

_logger = logging.getLogger("sophos_xg.checkengine")


@dataclass(frozen=True, kw_only=True)
class CapacityObservation:
    capacity: float  # MB
    percent_used: float
    label: str = ""
    metric_prefix: str = ""


def _render_percent(value: float) -> str:
    return f"{render_number(value)}%"


def check_capacity(
    report: CheckReport,
    observation: CapacityObservation,
    *,
    mode: CapacityMode,
    warning: ThresholdSpec,
    critical: ThresholdSpec,
) -> State:
    """Classify one resource and add message and metrics to the report"""
    warn, crit = resolve_levels(warning, critical, observation.capacity)

    if mode is CapacityMode.FREE:
        percent = 100 - observation.percent_used
        metric_suffix, word = "free", "free"
    else:
        percent = observation.percent_used
        metric_suffix, word = "usage", "used"
    amount = observation.capacity * percent / 100

    state, levels_info = check_capacity_state(
        percent, warn.percent, crit.percent, mode, human_readable_func=_render_percent
    )
    _logger.debug(
        "%s: %s%% %s, levels %s/%s -> %s",
        observation.label or "capacity",
        percent,
        word,
        warn,
        crit,
        state.name,
    )

    text = f"{int(percent)}% ({int(amount)}MB) {word}{levels_info}"
    report.add(state, f"{observation.label}: {text}" if observation.label else text)
    report.add_metric(
        Metric(
            name=f"{observation.metric_prefix}percent_{metric_suffix}",
            value=percent,
            unit="%",
            warn=warn.percent,
            crit=crit.percent,
        )
    )
    report.add_metric(
        Metric(
            name=f"{observation.metric_prefix}capacity_{metric_suffix}",
            value=amount,
            unit="MB",
            warn=warn.absolute,
            crit=crit.absolute,
            min=0,
            max=observation.capacity,
        )
    )
    return state
