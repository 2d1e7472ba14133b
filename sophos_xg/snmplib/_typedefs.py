#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from __future__ import annotations

import abc
import enum
import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import TypeAlias

OID = str
SNMPValue = str


class SNMPVersion(enum.Enum):
    V2C = enum.auto()
    V3 = enum.auto()


class AuthProtocol(enum.Enum):
    MD5 = "md5"
    SHA = "sha"
    SHA224 = "sha-224"
    SHA256 = "sha-256"
    SHA384 = "sha-384"
    SHA512 = "sha-512"


class PrivProtocol(enum.Enum):
    DES = "des"
    AES = "aes"
    AES192 = "aes-192"
    AES256 = "aes-256"


@dataclass(frozen=True, kw_only=True)
class SNMPv3Credentials:
    username: str
    auth_protocol: AuthProtocol
    auth_password: str
    # no privacy protocol means authNoPriv
    priv_protocol: PrivProtocol | None = None
    priv_password: str | None = None

    @property
    def security_level(self) -> str:
        return "authNoPriv" if self.priv_password is None else "authPriv"


# if the credentials are a string, we use that as SNMPv2c community
SNMPCredentials: TypeAlias = str | SNMPv3Credentials


def select_credentials(
    *,
    community: str,
    username: str | None,
    auth_password: str | None,
    auth_protocol: AuthProtocol,
    priv_password: str | None,
    priv_protocol: PrivProtocol,
) -> SNMPCredentials:
    """SNMPv3 is used as soon as user name and authentication password are given

    >>> select_credentials(
    ...     community="public",
    ...     username="monitor",
    ...     auth_password=None,
    ...     auth_protocol=AuthProtocol.MD5,
    ...     priv_password="secret",
    ...     priv_protocol=PrivProtocol.DES,
    ... )
    'public'
    """
    if username is None or auth_password is None:
        return community
    if priv_password is None:
        return SNMPv3Credentials(
            username=username,
            auth_protocol=auth_protocol,
            auth_password=auth_password,
        )
    return SNMPv3Credentials(
        username=username,
        auth_protocol=auth_protocol,
        auth_password=auth_password,
        priv_protocol=priv_protocol,
        priv_password=priv_password,
    )


# Wraps the configuration of a device into a single object for the SNMP code
@dataclass(frozen=True, kw_only=True)
class SNMPHostConfig:
    hostname: str
    credentials: SNMPCredentials
    port: int = 161
    timeout: float = 5.0
    retries: int = 1

    @property
    def snmp_version(self) -> SNMPVersion:
        return SNMPVersion.V2C if isinstance(self.credentials, str) else SNMPVersion.V3


class SNMPBackend(abc.ABC):
    def __init__(self, snmp_config: SNMPHostConfig, logger: logging.Logger) -> None:
        super().__init__()
        self._logger = logger
        self.config = snmp_config

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def hostname(self) -> str:
        return self.config.hostname

    @abc.abstractmethod
    def get(self, /, oids: Sequence[OID]) -> Mapping[OID, SNMPValue]:
        """Fetch all given OIDs with one GET request

        Either all values are returned (keyed by the OIDs as given) or
        FetchFailure is raised.
        """
        raise NotImplementedError()

    @abc.abstractmethod
    def walk(self, /, base_oid: OID) -> Mapping[OID, SNMPValue]:
        """Fetch all OIDs below the given base OID

        The returned OIDs start with a dot. FetchFailure is raised on errors.
        """
        raise NotImplementedError()


BackendFactory = Callable[[SNMPHostConfig], SNMPBackend]
