#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from sophos_xg.snmplib import (
    AuthProtocol,
    PrivProtocol,
    select_credentials,
    SNMPHostConfig,
    SNMPv3Credentials,
    SNMPVersion,
)


def _credentials(
    username: str | None = None,
    auth_password: str | None = None,
    priv_password: str | None = None,
) -> object:
    return select_credentials(
        community="secret-community",
        username=username,
        auth_password=auth_password,
        auth_protocol=AuthProtocol.SHA256,
        priv_password=priv_password,
        priv_protocol=PrivProtocol.AES,
    )


def test_v2c_by_default() -> None:
    assert _credentials() == "secret-community"


def test_v2c_without_auth_password() -> None:
    assert _credentials(username="monitoring") == "secret-community"


def test_v3_auth_no_priv() -> None:
    credentials = _credentials(username="monitoring", auth_password="authpass")
    assert credentials == SNMPv3Credentials(
        username="monitoring",
        auth_protocol=AuthProtocol.SHA256,
        auth_password="authpass",
    )
    assert isinstance(credentials, SNMPv3Credentials)
    assert credentials.security_level == "authNoPriv"


def test_v3_auth_priv() -> None:
    credentials = _credentials(
        username="monitoring", auth_password="authpass", priv_password="privpass"
    )
    assert isinstance(credentials, SNMPv3Credentials)
    assert credentials.security_level == "authPriv"
    assert credentials.priv_protocol is PrivProtocol.AES


def test_snmp_version() -> None:
    assert SNMPHostConfig(hostname="fw", credentials="public").snmp_version is SNMPVersion.V2C
    v3 = SNMPv3Credentials(username="u", auth_protocol=AuthProtocol.MD5, auth_password="p")
    assert SNMPHostConfig(hostname="fw", credentials=v3).snmp_version is SNMPVersion.V3


def test_host_config_defaults() -> None:
    config = SNMPHostConfig(hostname="fw", credentials="public")
    assert (config.port, config.timeout, config.retries) == (161, 5.0, 1)
