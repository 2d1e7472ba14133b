#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""check_sophos_xg_service - State of the services of a Sophos XG firewall"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from sophos_xg import mib
from sophos_xg.checkengine.checkresults import CheckReport
from sophos_xg.checkengine.classify import check_enum_state
from sophos_xg.checkengine.states import State
from sophos_xg.snmplib import BackendFactory, SNMPBackend
from sophos_xg.utils.exceptions import UnknownEnumerationValue

from ._common import (
    create_parser,
    parse_args_into,
    run_active_check,
    select_items,
    SNMPArgs,
    validate_state_labels,
)

SHORTNAME = "Sophos XG services"

_logger = logging.getLogger("sophos_xg.active_checks")


class Args(SNMPArgs):
    include: list[str]
    exclude: list[str]
    status_ok: list[str]
    status_warning: list[str]


def parse_arguments(argv: Sequence[str]) -> Args:
    parser = create_parser("check_sophos_xg_service", __doc__ or "")
    parser.add_argument(
        "--include",
        action="append",
        default=[],
        metavar="SERVICE",
        help="Include the given services in the check. This option can be specified"
        f" multiple times. Allowed values are: all, {', '.join(mib.Service.names())}"
        " (Default: all)",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="SERVICE",
        help="Exclude the given services from the check. This option can be specified"
        " multiple times.",
    )
    parser.add_argument(
        "--status-ok",
        action="append",
        default=[],
        metavar="STATE",
        help="If a service is in the given state it is OK, if not it is critical."
        " This option can be specified multiple times."
        f" Allowed values: {', '.join(mib.ServiceStatus.labels())} (Default: running)",
    )
    parser.add_argument(
        "--status-warning",
        action="append",
        default=[],
        metavar="STATE",
        help="Report WARNING if a service is in the given state. This option can be"
        " specified multiple times.",
    )
    args = parse_args_into(Args, parser, argv)
    if not args.status_ok:
        args.status_ok = [mib.ServiceStatus.RUNNING.label]
    return args


def check_services(args: Args, backend: SNMPBackend) -> CheckReport:
    services = select_items(mib.Service, args.include, args.exclude, "service")
    status_ok = validate_state_labels(mib.ServiceStatus, args.status_ok, "service")
    status_warning = validate_state_labels(mib.ServiceStatus, args.status_warning, "service")

    values = backend.get([service.oid for service in services]) if services else {}

    report = CheckReport()
    report.add_detail("Services:")
    for service in services:
        raw = values[service.oid]
        try:
            status = mib.ServiceStatus.parse(raw).label
        except UnknownEnumerationValue as e:
            _logger.debug("%s: %s", service.label, e)
            status = mib.render_code(e)

        state = check_enum_state(status, status_ok=status_ok, status_warning=status_warning)
        if state is not State.OK:
            report.add(state, f"Service {service.label} state {status}")
        report.add_detail(f"- {service.label}: {status}{state.marker}")

    report.add(State.OK, f"{len(services)} services checked")
    return report


def main(argv: Sequence[str] | None = None, backend_factory: BackendFactory | None = None) -> int:
    return run_active_check(
        SHORTNAME,
        sys.argv[1:] if argv is None else argv,
        parse_arguments,
        check_services,
        backend_factory,
    )


if __name__ == "__main__":
    sys.exit(main())
