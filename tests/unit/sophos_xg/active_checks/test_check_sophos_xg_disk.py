#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import pytest

from sophos_xg import mib
from sophos_xg.active_checks import check_sophos_xg_disk
from sophos_xg.checkengine.levels import CapacityMode
from sophos_xg.checkengine.states import State

from tests.unit.mocks_and_helpers import FakeBackend

_DISK = {
    mib.DISK_CAPACITY: "1000",
    mib.DISK_PERCENT_USAGE: "81",
}


def test_parse_arguments() -> None:
    args = check_sophos_xg_disk.parse_arguments(["-H", "fw", "-w", "70%", "--free"])
    assert args.warning == "70%"
    assert args.critical is None
    assert args.mode is CapacityMode.FREE


def test_main_warning(capsys: pytest.CaptureFixture[str]) -> None:
    backend = FakeBackend(_DISK)
    assert check_sophos_xg_disk.main(["-H", "fw"], backend_factory=backend.factory) == 1
    assert capsys.readouterr().out == (
        "Sophos XG Disk WARNING - 81% (810MB) used (warn/crit at 80%/90%)\n"
        "| percent_usage=81%;80;90 capacity_usage=810MB;800;900;0;1000\n"
    )
    assert backend.requests == [("get", [mib.DISK_CAPACITY, mib.DISK_PERCENT_USAGE])]


@pytest.mark.parametrize(
    "argv, expected",
    [
        (["-w", "85%", "-c", "95%"], State.OK),
        (["-w", "700", "-c", "800"], State.CRIT),
        (["-w", "70%:", "-c", "80%"], State.CRIT),
        (["--free"], State.WARN),
        (["--free", "-w", "15%"], State.OK),
    ],
)
def test_thresholds(argv: list[str], expected: State) -> None:
    args = check_sophos_xg_disk.parse_arguments(["-H", "fw", *argv])
    assert check_sophos_xg_disk.check_disk(args, FakeBackend(_DISK)).state is expected


def test_invalid_threshold_skips_query(capsys: pytest.CaptureFixture[str]) -> None:
    backend = FakeBackend(_DISK)
    assert check_sophos_xg_disk.main(["-H", "fw", "-w", "@80"], backend.factory) == 3
    assert capsys.readouterr().out == "Sophos XG Disk UNKNOWN - Invalid threshold: '@80'\n"
    assert not backend.requests


def test_no_response(capsys: pytest.CaptureFixture[str]) -> None:
    backend = FakeBackend(fail=True)
    assert check_sophos_xg_disk.main(["-H", "fw"], backend.factory) == 3
    assert capsys.readouterr().out.startswith("Sophos XG Disk UNKNOWN - Unable to get information\n")
