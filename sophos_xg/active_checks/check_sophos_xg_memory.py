#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""check_sophos_xg_memory - Memory and swap usage of a Sophos XG firewall"""

from __future__ import annotations

import sys
from collections.abc import Sequence

from sophos_xg import mib
from sophos_xg.checkengine.capacity import CapacityObservation, check_capacity
from sophos_xg.checkengine.checkresults import CheckReport
from sophos_xg.checkengine.levels import CapacityMode, parse_threshold
from sophos_xg.snmplib import BackendFactory, SNMPBackend

from ._common import create_parser, parse_args_into, run_active_check, SNMPArgs

SHORTNAME = "Sophos XG Memory"


class Args(SNMPArgs):
    memory_warning: None | str
    memory_critical: None | str
    swap_warning: None | str
    swap_critical: None | str
    free: bool

    @property
    def mode(self) -> CapacityMode:
        return CapacityMode.FREE if self.free else CapacityMode.USED


def parse_arguments(argv: Sequence[str]) -> Args:
    parser = create_parser("check_sophos_xg_memory", __doc__ or "")
    for resource in ("memory", "swap"):
        parser.add_argument(
            f"--{resource}-warning",
            default=None,
            help=f"Warning threshold for {resource} in MB or percent"
            " (Default: 80%% or 20%% free)",
        )
        parser.add_argument(
            f"--{resource}-critical",
            default=None,
            help=f"Critical threshold for {resource} in MB or percent"
            " (Default: 90%% or 10%% free)",
        )
    parser.add_argument(
        "--free",
        action="store_true",
        help="Check the free memory and swap instead of the used one",
    )
    return parse_args_into(Args, parser, argv)


def check_memory(args: Args, backend: SNMPBackend) -> CheckReport:
    mode = args.mode
    levels = {
        "memory": (
            parse_threshold(args.memory_warning, mode.default_warning),
            parse_threshold(args.memory_critical, mode.default_critical),
        ),
        "swap": (
            parse_threshold(args.swap_warning, mode.default_warning),
            parse_threshold(args.swap_critical, mode.default_critical),
        ),
    }

    values = backend.get(
        [
            mib.MEMORY_CAPACITY,
            mib.MEMORY_PERCENT_USAGE,
            mib.SWAP_CAPACITY,
            mib.SWAP_PERCENT_USAGE,
        ]
    )

    report = CheckReport()
    for name, label, capacity_oid, percent_oid in (
        ("memory", "Memory", mib.MEMORY_CAPACITY, mib.MEMORY_PERCENT_USAGE),
        ("swap", "Swap", mib.SWAP_CAPACITY, mib.SWAP_PERCENT_USAGE),
    ):
        warning, critical = levels[name]
        check_capacity(
            report,
            CapacityObservation(
                capacity=float(values[capacity_oid]),
                percent_used=float(values[percent_oid]),
                label=label,
                metric_prefix=f"{name}_",
            ),
            mode=mode,
            warning=warning,
            critical=critical,
        )
    return report


def main(argv: Sequence[str] | None = None, backend_factory: BackendFactory | None = None) -> int:
    return run_active_check(
        SHORTNAME,
        sys.argv[1:] if argv is None else argv,
        parse_arguments,
        check_memory,
        backend_factory,
    )


if __name__ == "__main__":
    sys.exit(main())
