#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import pytest

from sophos_xg import mib
from sophos_xg.active_checks import check_sophos_xg_info

from tests.unit.mocks_and_helpers import FakeBackend


def test_main(capsys: pytest.CaptureFixture[str]) -> None:
    backend = FakeBackend(
        {
            mib.FIRMWARE_VERSION: "SFOS 19.5.3 MR-3-Build652",
            mib.WEBCAT_VERSION: "4.5.123",
            mib.IPS_VERSION: "9.17.08",
        }
    )
    assert check_sophos_xg_info.main(["-H", "fw", "-C", "private"], backend.factory) == 0
    assert capsys.readouterr().out == (
        "Sophos XG Info OK - Firmware: SFOS 19.5.3 MR-3-Build652, Webcat: 4.5.123, IPS: 9.17.08\n"
    )
    assert backend.config.credentials == "private"


def test_missing_value(capsys: pytest.CaptureFixture[str]) -> None:
    backend = FakeBackend({mib.FIRMWARE_VERSION: "SFOS 19.5.3"})
    assert check_sophos_xg_info.main(["-H", "fw"], backend.factory) == 3
    assert capsys.readouterr().out.startswith("Sophos XG Info UNKNOWN - Unable to get information")
