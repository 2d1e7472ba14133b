#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""check_sophos_xg_ha - High availability state of a Sophos XG firewall"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from sophos_xg import mib
from sophos_xg.checkengine.checkresults import CheckReport
from sophos_xg.checkengine.states import State
from sophos_xg.snmplib import BackendFactory, SNMPBackend
from sophos_xg.utils.exceptions import UnknownEnumerationValue

from ._common import create_parser, parse_args_into, run_active_check, SNMPArgs

SHORTNAME = "Sophos XG HA"

_logger = logging.getLogger("sophos_xg.active_checks")


class Args(SNMPArgs):
    disabled_ok: bool
    expected_mode: list[str]


def parse_arguments(argv: Sequence[str]) -> Args:
    parser = create_parser("check_sophos_xg_ha", __doc__ or "")
    parser.add_argument(
        "--disabled-ok",
        action="store_true",
        help="Report OK if HA is disabled",
    )
    parser.add_argument(
        "--expected-mode",
        action="append",
        default=[],
        metavar="MODE",
        help="Expected HA config mode, e.g. ActivePassive. This option can be specified"
        " multiple times. Report WARNING if the device is in another mode.",
    )
    return parse_args_into(Args, parser, argv)


def _ha_state_label(raw: str) -> tuple[mib.HAState | None, str]:
    try:
        state = mib.HAState.parse(raw)
    except UnknownEnumerationValue as e:
        _logger.debug("%s", e)
        return None, mib.render_code(e)
    return state, state.label


def _load_balancing_label(raw: str) -> str:
    try:
        return mib.LoadBalancing.parse(raw).label
    except UnknownEnumerationValue as e:
        return mib.render_code(e)


def check_ha(args: Args, backend: SNMPBackend) -> CheckReport:
    values = backend.get(
        [
            mib.HA_STATUS,
            mib.HA_DEVICE_STATE,
            mib.HA_PEER_STATE,
            mib.HA_CONFIG_MODE,
            mib.HA_LOAD_BALANCING,
        ]
    )

    try:
        ha_enabled = mib.HAStatus.parse(values[mib.HA_STATUS]) is mib.HAStatus.ENABLED
    except UnknownEnumerationValue:
        ha_enabled = False

    report = CheckReport()
    if not ha_enabled:
        if args.disabled_ok:
            report.add(State.OK, "HA mode is disabled and this is okay.")
        else:
            report.add(State.WARN, "HA is disabled but it should be enabled")
        return report

    report.add(State.OK, "HA enabled")

    device_state, device_label = _ha_state_label(values[mib.HA_DEVICE_STATE])
    peer_state, peer_label = _ha_state_label(values[mib.HA_PEER_STATE])
    message = f"HA State device: {device_label} peer: {peer_label}"
    # any reported peer state is not enough, one side has to be primary
    if mib.HAState.PRIMARY in (device_state, peer_state):
        report.add(State.OK, message)
    else:
        report.add(State.CRIT, f"No primary peer found: {message}")

    mode = values[mib.HA_CONFIG_MODE]
    if args.expected_mode and mode not in args.expected_mode:
        report.add(
            State.WARN,
            f'Mode is "{mode}" but expected "{", ".join(args.expected_mode)}"',
        )

    report.add_detail(
        f"Config mode: {mode}",
        f"Load balancing: {_load_balancing_label(values[mib.HA_LOAD_BALANCING])}",
    )
    return report


def main(argv: Sequence[str] | None = None, backend_factory: BackendFactory | None = None) -> int:
    return run_active_check(
        SHORTNAME,
        sys.argv[1:] if argv is None else argv,
        parse_arguments,
        check_ha,
        backend_factory,
    )


if __name__ == "__main__":
    sys.exit(main())
