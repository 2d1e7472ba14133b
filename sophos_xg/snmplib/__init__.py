#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Package with our SNMP stuff."""

from ._typedefs import AuthProtocol as AuthProtocol
from ._typedefs import BackendFactory as BackendFactory
from ._typedefs import OID as OID
from ._typedefs import PrivProtocol as PrivProtocol
from ._typedefs import select_credentials as select_credentials
from ._typedefs import SNMPBackend as SNMPBackend
from ._typedefs import SNMPCredentials as SNMPCredentials
from ._typedefs import SNMPHostConfig as SNMPHostConfig
from ._typedefs import SNMPv3Credentials as SNMPv3Credentials
from ._typedefs import SNMPValue as SNMPValue
from ._typedefs import SNMPVersion as SNMPVersion
