#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""check_sophos_xg_info - Firmware and pattern versions of a Sophos XG firewall"""

from __future__ import annotations

import sys
from collections.abc import Sequence

from sophos_xg import mib
from sophos_xg.checkengine.checkresults import CheckReport
from sophos_xg.checkengine.states import State
from sophos_xg.snmplib import BackendFactory, SNMPBackend

from ._common import create_parser, parse_args_into, run_active_check, SNMPArgs

SHORTNAME = "Sophos XG Info"

_VERSIONS = (
    ("Firmware", mib.FIRMWARE_VERSION),
    ("Webcat", mib.WEBCAT_VERSION),
    ("IPS", mib.IPS_VERSION),
)


def parse_arguments(argv: Sequence[str]) -> SNMPArgs:
    return parse_args_into(SNMPArgs, create_parser("check_sophos_xg_info", __doc__ or ""), argv)


def check_info(args: SNMPArgs, backend: SNMPBackend) -> CheckReport:
    values = backend.get([oid for _label, oid in _VERSIONS])
    report = CheckReport()
    for label, oid in _VERSIONS:
        report.add(State.OK, f"{label}: {values[oid]}")
    return report


def main(argv: Sequence[str] | None = None, backend_factory: BackendFactory | None = None) -> int:
    return run_active_check(
        SHORTNAME,
        sys.argv[1:] if argv is None else argv,
        parse_arguments,
        check_info,
        backend_factory,
    )


if __name__ == "__main__":
    sys.exit(main())
