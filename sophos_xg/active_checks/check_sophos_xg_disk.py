#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""check_sophos_xg_disk - Disk usage of a Sophos XG firewall"""

from __future__ import annotations

import sys
from collections.abc import Sequence

from sophos_xg import mib
from sophos_xg.checkengine.capacity import CapacityObservation, check_capacity
from sophos_xg.checkengine.checkresults import CheckReport
from sophos_xg.checkengine.levels import CapacityMode, parse_threshold
from sophos_xg.snmplib import BackendFactory, SNMPBackend

from ._common import create_parser, parse_args_into, run_active_check, SNMPArgs

SHORTNAME = "Sophos XG Disk"


class Args(SNMPArgs):
    warning: None | str
    critical: None | str
    free: bool

    @property
    def mode(self) -> CapacityMode:
        return CapacityMode.FREE if self.free else CapacityMode.USED


def parse_arguments(argv: Sequence[str]) -> Args:
    parser = create_parser("check_sophos_xg_disk", __doc__ or "")
    parser.add_argument(
        "-w",
        "--warning",
        default=None,
        help="Warning threshold in MB or percent, e.g. 800 or 80%% (Default: 80%% or 20%% free)",
    )
    parser.add_argument(
        "-c",
        "--critical",
        default=None,
        help="Critical threshold in MB or percent (Default: 90%% or 10%% free)",
    )
    parser.add_argument(
        "--free",
        action="store_true",
        help="Check the free disk space instead of the used one",
    )
    return parse_args_into(Args, parser, argv)


def check_disk(args: Args, backend: SNMPBackend) -> CheckReport:
    warning = parse_threshold(args.warning, args.mode.default_warning)
    critical = parse_threshold(args.critical, args.mode.default_critical)

    values = backend.get([mib.DISK_CAPACITY, mib.DISK_PERCENT_USAGE])

    report = CheckReport()
    check_capacity(
        report,
        CapacityObservation(
            capacity=float(values[mib.DISK_CAPACITY]),
            percent_used=float(values[mib.DISK_PERCENT_USAGE]),
        ),
        mode=args.mode,
        warning=warning,
        critical=critical,
    )
    return report


def main(argv: Sequence[str] | None = None, backend_factory: BackendFactory | None = None) -> int:
    return run_active_check(
        SHORTNAME,
        sys.argv[1:] if argv is None else argv,
        parse_arguments,
        check_disk,
        backend_factory,
    )


if __name__ == "__main__":
    sys.exit(main())
