#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence
from typing import Any

import pysnmp.entity.config
from pysnmp.error import PySnmpError
from pysnmp.hlapi.v3arch.asyncio import (
    CommunityData,
    ContextData,
    get_cmd,
    ObjectIdentity,
    ObjectType,
    SnmpEngine,
    UdpTransportTarget,
    UsmUserData,
    walk_cmd,
)
from pysnmp.proto.rfc1905 import EndOfMibView, NoSuchInstance, NoSuchObject

from sophos_xg.utils.exceptions import FetchFailure
from sophos_xg.utils.log import VERBOSE

from ._typedefs import (
    AuthProtocol,
    OID,
    PrivProtocol,
    SNMPBackend,
    SNMPv3Credentials,
    SNMPValue,
)

__all__ = ["PySNMPBackend"]

_MISSING_VALUE_TYPES = (NoSuchObject, NoSuchInstance, EndOfMibView)


def _auth_proto_for(proto: AuthProtocol) -> tuple[int, ...]:
    if proto is AuthProtocol.MD5:
        return pysnmp.entity.config.USM_AUTH_HMAC96_MD5
    if proto is AuthProtocol.SHA:
        return pysnmp.entity.config.USM_AUTH_HMAC96_SHA
    if proto is AuthProtocol.SHA224:
        return pysnmp.entity.config.USM_AUTH_HMAC128_SHA224
    if proto is AuthProtocol.SHA256:
        return pysnmp.entity.config.USM_AUTH_HMAC192_SHA256
    if proto is AuthProtocol.SHA384:
        return pysnmp.entity.config.USM_AUTH_HMAC256_SHA384
    if proto is AuthProtocol.SHA512:
        return pysnmp.entity.config.USM_AUTH_HMAC384_SHA512
    raise FetchFailure(f"Invalid SNMP auth protocol: {proto}")


def _priv_proto_for(proto: PrivProtocol | None) -> tuple[int, ...]:
    if proto is None:
        return pysnmp.entity.config.USM_PRIV_NONE
    if proto is PrivProtocol.DES:
        return pysnmp.entity.config.USM_PRIV_CBC56_DES
    if proto is PrivProtocol.AES:
        return pysnmp.entity.config.USM_PRIV_CFB128_AES
    if proto is PrivProtocol.AES192:
        return pysnmp.entity.config.USM_PRIV_CFB192_AES
    if proto is PrivProtocol.AES256:
        return pysnmp.entity.config.USM_PRIV_CFB256_AES
    raise FetchFailure(f"Invalid SNMP priv protocol: {proto}")


def _normalize_oid(oid: object) -> OID:
    text = str(oid)
    return text if text.startswith(".") else f".{text}"


class PySNMPBackend(SNMPBackend):
    """Blocking SNMP requests on top of the asyncio API of pysnmp"""

    def _auth_data(self) -> CommunityData | UsmUserData:
        credentials = self.config.credentials
        if isinstance(credentials, SNMPv3Credentials):
            self.logger.log(
                VERBOSE,
                "SNMPv3 %s login: %s, %s, %s",
                credentials.security_level,
                credentials.username,
                credentials.auth_protocol.value,
                credentials.priv_protocol.value if credentials.priv_protocol else "-",
            )
            return UsmUserData(
                credentials.username,
                authKey=credentials.auth_password,
                privKey=credentials.priv_password,
                authProtocol=_auth_proto_for(credentials.auth_protocol),
                privProtocol=_priv_proto_for(credentials.priv_protocol),
            )
        self.logger.log(VERBOSE, "SNMP v2c login")
        # mpModel=1 selects SNMPv2c
        return CommunityData(credentials, mpModel=1)

    async def _transport(self) -> UdpTransportTarget:
        return await UdpTransportTarget.create(
            (self.config.hostname, self.config.port),
            timeout=self.config.timeout,
            retries=self.config.retries,
        )

    def _check_response(self, error_indication: Any, error_status: Any, error_index: Any) -> None:
        if error_indication:
            raise FetchFailure(f"{self.hostname}: {error_indication}")
        if error_status:
            raise FetchFailure(
                f"{self.hostname}: {error_status.prettyPrint()} at index {int(error_index)}"
            )

    async def _get(self, oids: Sequence[OID]) -> Mapping[OID, SNMPValue]:
        engine = SnmpEngine()
        try:
            error_indication, error_status, error_index, var_binds = await get_cmd(
                engine,
                self._auth_data(),
                await self._transport(),
                ContextData(),
                *(ObjectType(ObjectIdentity(oid.lstrip("."))) for oid in oids),
            )
        finally:
            engine.close_dispatcher()

        self._check_response(error_indication, error_status, error_index)
        values: dict[OID, SNMPValue] = {}
        for oid, (name, value) in zip(oids, var_binds):
            if isinstance(value, _MISSING_VALUE_TYPES):
                raise FetchFailure(f"{self.hostname}: no value for {_normalize_oid(name)}")
            values[oid] = value.prettyPrint()
        if len(values) != len(oids):
            raise FetchFailure(f"{self.hostname}: incomplete response")
        return values

    async def _walk(self, base_oid: OID) -> Mapping[OID, SNMPValue]:
        engine = SnmpEngine()
        rows: dict[OID, SNMPValue] = {}
        try:
            async for error_indication, error_status, error_index, var_binds in walk_cmd(
                engine,
                self._auth_data(),
                await self._transport(),
                ContextData(),
                ObjectType(ObjectIdentity(base_oid.lstrip("."))),
                lexicographicMode=False,
            ):
                self._check_response(error_indication, error_status, error_index)
                for name, value in var_binds:
                    if isinstance(value, _MISSING_VALUE_TYPES):
                        continue
                    rows[_normalize_oid(name)] = value.prettyPrint()
        finally:
            engine.close_dispatcher()
        return rows

    def get(self, /, oids: Sequence[OID]) -> Mapping[OID, SNMPValue]:
        self.logger.debug(
            "GET %s from %s (%s)", ", ".join(oids), self.hostname, self.config.snmp_version.name
        )
        try:
            values = asyncio.run(self._get(oids))
        except PySnmpError as e:
            raise FetchFailure(f"{self.hostname}: {e}") from e
        self.logger.debug("Got %d values", len(values))
        return values

    def walk(self, /, base_oid: OID) -> Mapping[OID, SNMPValue]:
        self.logger.debug(
            "WALK %s on %s (%s)", base_oid, self.hostname, self.config.snmp_version.name
        )
        try:
            rows = asyncio.run(self._walk(base_oid))
        except PySnmpError as e:
            raise FetchFailure(f"{self.hostname}: {e}") from e
        self.logger.debug("Got %d rows", len(rows))
        return rows
