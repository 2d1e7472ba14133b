#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""check_sophos_xg_license - License state and expiry of a Sophos XG firewall"""

from __future__ import annotations

import datetime
import logging
import sys
from collections.abc import Sequence

from sophos_xg import mib
from sophos_xg.checkengine.checkresults import CheckReport, Metric
from sophos_xg.checkengine.classify import check_days_left, check_enum_state
from sophos_xg.checkengine.expiry import require_days_until
from sophos_xg.checkengine.states import State
from sophos_xg.snmplib import BackendFactory, SNMPBackend
from sophos_xg.utils.exceptions import UnknownEnumerationValue, UnparseableDate

from ._common import (
    create_parser,
    parse_args_into,
    run_active_check,
    select_items,
    SNMPArgs,
    validate_state_labels,
)

SHORTNAME = "Sophos XG Licenses"

_logger = logging.getLogger("sophos_xg.active_checks")


class Args(SNMPArgs):
    include: list[str]
    exclude: list[str]
    warning: int
    critical: int
    status_ok: list[str]


def parse_arguments(argv: Sequence[str]) -> Args:
    parser = create_parser("check_sophos_xg_license", __doc__ or "")
    parser.add_argument(
        "--include",
        action="append",
        default=[],
        metavar="LICENSE",
        help=f"Included licenses: all, {', '.join(mib.License.names())} (Default: all)",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="LICENSE",
        help="Excluded licenses (Default: empty list)",
    )
    parser.add_argument(
        "-w",
        "--warning",
        type=int,
        default=30,
        metavar="DAYS",
        help="Warn if less than the given number of days are left (Default: 30)",
    )
    parser.add_argument(
        "-c",
        "--critical",
        type=int,
        default=15,
        metavar="DAYS",
        help="Critical if less than the given number of days are left (Default: 15)",
    )
    parser.add_argument(
        "--status-ok",
        action="append",
        default=[],
        metavar="STATE",
        help=f"Status OK: {', '.join(mib.SubscriptionStatus.labels())} (Default: subscribed)",
    )
    args = parse_args_into(Args, parser, argv)
    if not args.status_ok:
        args.status_ok = [mib.SubscriptionStatus.SUBSCRIBED.label]
    return args


def _check_license(
    report: CheckReport,
    license_: mib.License,
    raw_status: str,
    expire_date: str,
    *,
    args: Args,
    status_ok: frozenset[str],
    today: datetime.date,
) -> None:
    status: mib.SubscriptionStatus | None
    try:
        status = mib.SubscriptionStatus.parse(raw_status)
    except UnknownEnumerationValue as e:
        _logger.debug("%s: %s", license_.label, e)
        status, status_label = None, mib.render_code(e)
    else:
        status_label = status.label

    status_state = check_enum_state(status_label, status_ok=status_ok)
    if status_state is not State.OK:
        report.add(status_state, f"License {license_.label} state {status_label}")

    expire_state = State.OK
    days_left: int | None = None
    if status is mib.SubscriptionStatus.SUBSCRIBED:
        try:
            days_left = require_days_until(expire_date, today)
        except UnparseableDate as e:
            _logger.debug("%s: %s", license_.label, e)
            expire_state = State.UNKNOWN
            report.add(expire_state, f"Unable to parse expire date of license {license_.label}")
        else:
            expire_state = check_days_left(days_left, args.warning, args.critical)
            report.add(expire_state, f"License '{license_.label}' expires in {days_left} days")
            report.add_metric(
                Metric(
                    name=f"{license_.value.replace('-', '_')}_days_left",
                    value=days_left,
                    warn=args.warning,
                    crit=args.critical,
                )
            )

    report.add_detail(
        f"License: {license_.label}{State.worst(status_state, expire_state).marker}",
        f"- State {status_label}{status_state.marker}",
        f"- Expire on {expire_date}",
    )
    if days_left is not None:
        report.add_detail(f"- Expire in {days_left} days{expire_state.marker}")
    report.add_detail("")


def check_licenses(
    args: Args, backend: SNMPBackend, today: datetime.date | None = None
) -> CheckReport:
    licenses = select_items(mib.License, args.include, args.exclude, "license")
    status_ok = validate_state_labels(mib.SubscriptionStatus, args.status_ok, "license")

    oids = [oid for lic in licenses for oid in (lic.status_oid, lic.expiry_date_oid)]
    values = backend.get(oids) if oids else {}

    if today is None:
        today = datetime.date.today()

    report = CheckReport()
    for license_ in licenses:
        _check_license(
            report,
            license_,
            values[license_.status_oid],
            values[license_.expiry_date_oid],
            args=args,
            status_ok=status_ok,
            today=today,
        )
    return report


def main(argv: Sequence[str] | None = None, backend_factory: BackendFactory | None = None) -> int:
    return run_active_check(
        SHORTNAME,
        sys.argv[1:] if argv is None else argv,
        parse_arguments,
        check_licenses,
        backend_factory,
    )


if __name__ == "__main__":
    sys.exit(main())
