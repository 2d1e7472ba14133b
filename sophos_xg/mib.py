#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Object identifiers and enumerations of the SFOS-FIREWALL-MIB"""

from __future__ import annotations

import enum
from typing import Self

from sophos_xg.snmplib import OID
from sophos_xg.utils.exceptions import UnknownEnumerationValue, UnknownItemName

SFOS_BASE = ".1.3.6.1.4.1.2604.5.1"

# sfosDeviceStats
FIRMWARE_VERSION = f"{SFOS_BASE}.1.3.0"
WEBCAT_VERSION = f"{SFOS_BASE}.1.5.0"
IPS_VERSION = f"{SFOS_BASE}.1.6.0"

# sfosDiskStatus, capacity in MB
DISK_CAPACITY = f"{SFOS_BASE}.2.4.1.0"
DISK_PERCENT_USAGE = f"{SFOS_BASE}.2.4.2.0"

# sfosMemoryStatus, capacity in MB
MEMORY_CAPACITY = f"{SFOS_BASE}.2.5.1.0"
MEMORY_PERCENT_USAGE = f"{SFOS_BASE}.2.5.2.0"
SWAP_CAPACITY = f"{SFOS_BASE}.2.5.3.0"
SWAP_PERCENT_USAGE = f"{SFOS_BASE}.2.5.4.0"

SERVICE_STATUS_BASE = f"{SFOS_BASE}.3"

# sfosXGHAStats
HA_STATUS = f"{SFOS_BASE}.4.1.0"
HA_DEVICE_STATE = f"{SFOS_BASE}.4.4.0"
HA_PEER_STATE = f"{SFOS_BASE}.4.5.0"
HA_CONFIG_MODE = f"{SFOS_BASE}.4.6.0"
HA_LOAD_BALANCING = f"{SFOS_BASE}.4.7.0"

LICENSE_DETAILS_BASE = f"{SFOS_BASE}.5"

# sfosIPSecVpnTunnelEntry, the row index follows the column
VPN_TUNNEL_ENTRY = f"{SFOS_BASE}.6.1.1.1.1"
VPN_CONN_NAME = f"{VPN_TUNNEL_ENTRY}.2"
VPN_CONN_STATUS = f"{VPN_TUNNEL_ENTRY}.9"
VPN_ACTIVATED = f"{VPN_TUNNEL_ENTRY}.10"


class DeviceState(enum.IntEnum):
    """Base of all state enumerations reported by the device"""

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", "-")

    @classmethod
    def parse(cls, raw: str | int) -> Self:
        """Map a reported code to the enumeration

        >>> ServiceStatus.parse("3").label
        'running'
        >>> VPNConnectionStatus.parse(2).label
        'partially-active'
        """
        try:
            return cls(int(raw))
        except ValueError as e:
            raise UnknownEnumerationValue(cls.__name__, raw) from e

    @classmethod
    def labels(cls) -> list[str]:
        return [member.label for member in cls]


def render_code(error: UnknownEnumerationValue) -> str:
    return f"unknown({error.code})"


class ServiceStatus(DeviceState):
    UNTOUCHED = 0
    STOPPED = 1
    INITIALIZING = 2
    RUNNING = 3
    EXITING = 4
    DEAD = 5
    FROZEN = 6
    UNREGISTERED = 7


class HAStatus(DeviceState):
    DISABLED = 0
    ENABLED = 1


class HAState(DeviceState):
    NOTAPPLICABLE = 0
    AUXILIARY = 1
    STANDALONE = 2
    PRIMARY = 3
    FAULTY = 4
    READY = 5


class LoadBalancing(DeviceState):
    NOTAPPLICABLE = 0
    LOAD_BALANCE_OFF = 1
    LOAD_BALANCE_ON = 2

    @property
    def label(self) -> str:
        return {
            LoadBalancing.NOTAPPLICABLE: "notapplicable",
            LoadBalancing.LOAD_BALANCE_OFF: "loadBalanceOff",
            LoadBalancing.LOAD_BALANCE_ON: "loadBalanceOn",
        }[self]


class SubscriptionStatus(DeviceState):
    NONE = 0
    EVALUATING = 1
    NOTSUBSCRIBED = 2
    SUBSCRIBED = 3
    EXPIRED = 4
    DEACTIVATED = 5


class VPNConnectionStatus(DeviceState):
    INACTIVE = 0
    ACTIVE = 1
    PARTIALLY_ACTIVE = 2


class VPNActivation(DeviceState):
    INACTIVE = 0
    ACTIVE = 1


class Item(enum.Enum):
    """Base of the monitored items, the value is the name used on the command line

    Index and label of each member come from the table registered for its
    class in ``_ITEM_TABLES``.
    """

    @property
    def index(self) -> int:
        return _ITEM_TABLES[type(self)][self][0]

    @property
    def label(self) -> str:
        return _ITEM_TABLES[type(self)][self][1]

    @classmethod
    def from_name(cls, name: str) -> Self:
        try:
            return cls(name)
        except ValueError as e:
            raise UnknownItemName(name) from e

    @classmethod
    def names(cls) -> list[str]:
        return [member.value for member in cls]


class Service(Item):
    POP3 = "pop3"
    IMAP4 = "imap4"
    SMTP = "smtp"
    FTP = "ftp"
    HTTP = "http"
    AV = "av"
    AS = "as"
    DNS = "dns"
    HA = "ha"
    IPS = "ips"
    APACHE = "apache"
    NTP = "ntp"
    TOMCAT = "tomcat"
    VPN_SSL = "vpn-ssl"
    VPN_IPSEC = "vpn-ipsec"
    DATABASE = "database"
    NETWORK = "network"
    GARNER = "garner"
    DROUTING = "drouting"
    SSHD = "sshd"
    DGD = "dgd"

    @property
    def oid(self) -> OID:
        """
        >>> Service.SSHD.oid
        '.1.3.6.1.4.1.2604.5.1.3.20.0'
        """
        return f"{SERVICE_STATUS_BASE}.{self.index}.0"


class License(Item):
    BASE = "base"
    NET_PROTECTION = "net-protection"
    WEB_PROTECTION = "web-protection"
    MAIL_PROTECTION = "mail-protection"
    WEB_SERVER_PROTECTION = "web-server-protection"
    SANDSTROM = "sandstrom"
    ENHANCED_SUPPORT = "enhanced-support"
    ENHANCED_PLUS_SUPPORT = "enhanced-plus-support"

    @property
    def status_oid(self) -> OID:
        return f"{LICENSE_DETAILS_BASE}.{self.index}.1.0"

    @property
    def expiry_date_oid(self) -> OID:
        """
        >>> License.SANDSTROM.expiry_date_oid
        '.1.3.6.1.4.1.2604.5.1.5.6.2.0'
        """
        return f"{LICENSE_DETAILS_BASE}.{self.index}.2.0"


# (index in the MIB, label)
_ITEM_TABLES: dict[type[Item], dict[Item, tuple[int, str]]] = {
    Service: {
        Service.POP3: (1, "POP3"),
        Service.IMAP4: (2, "IMAP4"),
        Service.SMTP: (3, "SMTP"),
        Service.FTP: (4, "FTP"),
        Service.HTTP: (5, "HTTP"),
        Service.AV: (6, "AV"),
        Service.AS: (7, "AS"),
        Service.DNS: (8, "DNS"),
        Service.HA: (9, "HA"),
        Service.IPS: (10, "IPS"),
        Service.APACHE: (11, "Apache"),
        Service.NTP: (12, "NTP"),
        Service.TOMCAT: (13, "Tomcat"),
        Service.VPN_SSL: (14, "SSL-VPN"),
        Service.VPN_IPSEC: (15, "IPSec VPN"),
        Service.DATABASE: (16, "Database"),
        Service.NETWORK: (17, "Network"),
        Service.GARNER: (18, "Garner"),
        Service.DROUTING: (19, "Drouting"),
        Service.SSHD: (20, "SSHd"),
        Service.DGD: (21, "Device and Group Discovery"),
    },
    License: {
        License.BASE: (1, "Base"),
        License.NET_PROTECTION: (2, "Net Protection"),
        License.WEB_PROTECTION: (3, "Web Protection"),
        License.MAIL_PROTECTION: (4, "Mail Protection"),
        License.WEB_SERVER_PROTECTION: (5, "Web-Server Protection"),
        License.SANDSTROM: (6, "Sandstrom"),
        License.ENHANCED_SUPPORT: (7, "Enhanced Support"),
        License.ENHANCED_PLUS_SUPPORT: (8, "Enhanced Plus Support"),
    },
}
