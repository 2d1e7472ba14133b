#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import pytest

from sophos_xg import mib
from sophos_xg.active_checks import check_sophos_xg_vpn
from sophos_xg.active_checks.check_sophos_xg_vpn import check_connection, VPNConnection
from sophos_xg.checkengine.checkresults import CheckReport
from sophos_xg.checkengine.states import State

from tests.unit.mocks_and_helpers import FakeBackend


def _table(*rows: tuple[str, str, str]) -> dict[str, str]:
    table = {}
    for index, (name, activated, status) in enumerate(rows, start=1):
        table[f"{mib.VPN_CONN_NAME}.{index}"] = name
        table[f"{mib.VPN_CONN_STATUS}.{index}"] = status
        table[f"{mib.VPN_ACTIVATED}.{index}"] = activated
    return table


_TUNNELS = _table(
    ("berlin", "1", "1"),
    ("munich", "1", "2"),
    ("hamburg", "0", "0"),
    ("cologne", "1", "0"),
    ("backup", "0", "0"),
)


def _check(*options: str) -> CheckReport:
    args = check_sophos_xg_vpn.parse_arguments(["-H", "fw", *options])
    return check_sophos_xg_vpn.check_vpn(args, FakeBackend(_TUNNELS))


def test_name_is_required(capsys: pytest.CaptureFixture[str]) -> None:
    assert check_sophos_xg_vpn.main(["-H", "fw"], FakeBackend(_TUNNELS).factory) == 3
    assert "the following arguments are required: -n/--name" in capsys.readouterr().out


def test_main(capsys: pytest.CaptureFixture[str]) -> None:
    backend = FakeBackend(_TUNNELS)
    argv = ["-H", "fw", "-n", "munich", "-n", "berlin"]
    assert check_sophos_xg_vpn.main(argv, backend.factory) == 1
    assert capsys.readouterr().out == (
        "Sophos XG Site-to-Site VPN WARNING - Connection 'munich' is active,"
        " but at least one tunnel isn't established.\n"
        "berlin: activated, connection active\n"
        "munich: activated, connection partially-active\n"
        "| connections_active=2;;;0\n"
    )
    assert backend.requests == [("walk", mib.VPN_TUNNEL_ENTRY)]


@pytest.mark.parametrize(
    "connection, inactive_ok, state, summary",
    [
        (
            VPNConnection("a", "1", "1"),
            False,
            State.OK,
            "Connection 'a' is active and tunnels are established.",
        ),
        (
            VPNConnection("a", "1", "0"),
            False,
            State.CRIT,
            "Connection 'a' is active, but tunnel isn't established.",
        ),
        (
            VPNConnection("a", "1", "2"),
            False,
            State.WARN,
            "Connection 'a' is active, but at least one tunnel isn't established.",
        ),
        (
            VPNConnection("a", "1", "5"),
            False,
            State.UNKNOWN,
            "Connection 'a' is active, but an unknown status code has been reported"
            " by the devices.",
        ),
        (
            VPNConnection("a", "0", "1"),
            False,
            State.CRIT,
            "Connection 'a' is not active",
        ),
        (
            VPNConnection("a", "0", "1"),
            True,
            State.OK,
            "Connection 'a' is not active, but this is ok.",
        ),
    ],
)
def test_check_connection(
    connection: VPNConnection, inactive_ok: bool, state: State, summary: str
) -> None:
    report = CheckReport()
    check_connection(report, connection, inactive_ok=inactive_ok)
    assert report.state is state
    assert report.summary == summary


def test_inactive_connection() -> None:
    report = _check("-n", "hamburg")
    assert report.state is State.CRIT
    assert report.details == ["hamburg: deactivated, connection inactive"]
    assert report.metrics[0].value == 0


def test_inactive_ok() -> None:
    assert _check("-n", "hamburg", "--inactive-ok").state is State.OK


def test_duplicate_names_are_checked_once() -> None:
    report = _check("-n", "berlin", "-n", "berlin")
    assert len(report.messages) == 1
    assert report.metrics[0].value == 1


def test_unknown_connection(capsys: pytest.CaptureFixture[str]) -> None:
    argv = ["-H", "fw", "-n", "berlin", "-n", "paris"]
    assert check_sophos_xg_vpn.main(argv, FakeBackend(_TUNNELS).factory) == 3
    assert capsys.readouterr().out == (
        "Sophos XG Site-to-Site VPN UNKNOWN - Connection 'paris' not found\n"
    )


def test_ha_group_one_active() -> None:
    report = _check("--ha", "-n", "berlin", "-n", "backup")
    assert report.state is State.OK
    assert report.summary == "Connection 'berlin' is active and tunnels are established."
    assert report.details == [
        "backup: deactivated, connection inactive",
        "berlin: activated, connection active",
    ]


def test_ha_group_active_connection_is_classified() -> None:
    report = _check("--ha", "-n", "cologne", "-n", "backup")
    assert report.state is State.CRIT
    assert report.summary == "Connection 'cologne' is active, but tunnel isn't established."


def test_ha_group_none_active() -> None:
    report = _check("--ha", "-n", "hamburg", "-n", "backup")
    assert report.state is State.CRIT
    assert report.summary == "No active connection in HA group found."


def test_ha_group_multiple_active(capsys: pytest.CaptureFixture[str]) -> None:
    argv = ["-H", "fw", "--ha", "-n", "munich", "-n", "berlin"]
    assert check_sophos_xg_vpn.main(argv, FakeBackend(_TUNNELS).factory) == 3
    assert capsys.readouterr().out == (
        "Sophos XG Site-to-Site VPN UNKNOWN - Only one active connection is allowed in HA mode."
        " Active connections: 'berlin' and 'munich'\n"
    )
