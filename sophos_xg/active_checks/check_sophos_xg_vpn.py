#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""check_sophos_xg_vpn - Site-to-Site IPsec connections of a Sophos XG firewall"""

from __future__ import annotations

import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from sophos_xg import mib
from sophos_xg.checkengine.checkresults import CheckReport, Metric
from sophos_xg.checkengine.states import State
from sophos_xg.snmplib import BackendFactory, OID, SNMPBackend, SNMPValue
from sophos_xg.utils.exceptions import BailOut, UnknownEnumerationValue, UnknownItemName

from ._common import create_parser, parse_args_into, run_active_check, SNMPArgs

SHORTNAME = "Sophos XG Site-to-Site VPN"


class Args(SNMPArgs):
    name: list[str]
    inactive_ok: bool
    ha: bool


def parse_arguments(argv: Sequence[str]) -> Args:
    parser = create_parser("check_sophos_xg_vpn", __doc__ or "")
    parser.add_argument(
        "-n",
        "--name",
        action="append",
        required=True,
        metavar="CONNECTION",
        help="Name of the connection to check. This option can be specified multiple times.",
    )
    parser.add_argument(
        "--inactive-ok",
        action="store_true",
        help="Report OK if a connection is not active",
    )
    parser.add_argument(
        "--ha",
        action="store_true",
        help="The given connections form a HA group: exactly one of them has to be active",
    )
    return parse_args_into(Args, parser, argv)


@dataclass(frozen=True)
class VPNConnection:
    name: str
    activated: str
    status: str

    @property
    def is_activated(self) -> bool:
        try:
            return mib.VPNActivation.parse(self.activated) is mib.VPNActivation.ACTIVE
        except UnknownEnumerationValue:
            return False


def parse_connections(rows: Mapping[OID, SNMPValue]) -> dict[str, VPNConnection]:
    """Build the connections from the walk of the tunnel table

    >>> parse_connections({
    ...     ".1.3.6.1.4.1.2604.5.1.6.1.1.1.1.2.1": "branch",
    ...     ".1.3.6.1.4.1.2604.5.1.6.1.1.1.1.9.1": "1",
    ...     ".1.3.6.1.4.1.2604.5.1.6.1.1.1.1.10.1": "1",
    ... })
    {'branch': VPNConnection(name='branch', activated='1', status='1')}
    """
    prefix = f"{mib.VPN_CONN_NAME}."
    connections = {}
    for oid, name in rows.items():
        if not oid.startswith(prefix) or not (index := oid[len(prefix) :]).isdigit():
            continue
        connections[name] = VPNConnection(
            name=name,
            activated=rows.get(f"{mib.VPN_ACTIVATED}.{index}", ""),
            status=rows.get(f"{mib.VPN_CONN_STATUS}.{index}", ""),
        )
    return connections


def check_connection(report: CheckReport, connection: VPNConnection, *, inactive_ok: bool) -> None:
    name = connection.name
    if not connection.is_activated:
        if inactive_ok:
            report.add(State.OK, f"Connection '{name}' is not active, but this is ok.")
        else:
            report.add(State.CRIT, f"Connection '{name}' is not active")
        return

    try:
        status = mib.VPNConnectionStatus.parse(connection.status)
    except UnknownEnumerationValue:
        report.add(
            State.UNKNOWN,
            f"Connection '{name}' is active, but an unknown status code has been reported"
            " by the devices.",
        )
        return

    if status is mib.VPNConnectionStatus.INACTIVE:
        report.add(State.CRIT, f"Connection '{name}' is active, but tunnel isn't established.")
    elif status is mib.VPNConnectionStatus.ACTIVE:
        report.add(State.OK, f"Connection '{name}' is active and tunnels are established.")
    else:
        report.add(
            State.WARN,
            f"Connection '{name}' is active, but at least one tunnel isn't established.",
        )


def check_vpn(args: Args, backend: SNMPBackend) -> CheckReport:
    connections = parse_connections(backend.walk(mib.VPN_TUNNEL_ENTRY))

    selected = []
    for name in sorted(set(args.name)):
        if name not in connections:
            raise UnknownItemName(f"Connection '{name}' not found")
        selected.append(connections[name])

    report = CheckReport()
    active = [c for c in selected if c.is_activated]
    if args.ha:
        if len(active) > 1:
            raise BailOut(
                State.UNKNOWN,
                "Only one active connection is allowed in HA mode."
                f" Active connections: '{active[0].name}' and '{active[1].name}'",
            )
        if active:
            check_connection(report, active[0], inactive_ok=args.inactive_ok)
        else:
            report.add(State.CRIT, "No active connection in HA group found.")
    else:
        for connection in selected:
            check_connection(report, connection, inactive_ok=args.inactive_ok)

    for connection in selected:
        try:
            status = mib.VPNConnectionStatus.parse(connection.status).label
        except UnknownEnumerationValue as e:
            status = mib.render_code(e)
        report.add_detail(
            f"{connection.name}: {'activated' if connection.is_activated else 'deactivated'},"
            f" connection {status}"
        )
    report.add_metric(Metric(name="connections_active", value=len(active), min=0))
    return report


def main(argv: Sequence[str] | None = None, backend_factory: BackendFactory | None = None) -> int:
    return run_active_check(
        SHORTNAME,
        sys.argv[1:] if argv is None else argv,
        parse_arguments,
        check_vpn,
        backend_factory,
    )


if __name__ == "__main__":
    sys.exit(main())
