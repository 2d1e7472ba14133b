#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Command line handling and error reporting shared by all Sophos XG plug-ins"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Iterable, Sequence
from typing import NoReturn, TypeVar

from pydantic import BaseModel, ValidationError

from sophos_xg.checkengine.checkresults import CheckReport
from sophos_xg.checkengine.states import State
from sophos_xg.mib import DeviceState, Item
from sophos_xg.snmplib import (
    AuthProtocol,
    BackendFactory,
    PrivProtocol,
    select_credentials,
    SNMPBackend,
    SNMPHostConfig,
)
from sophos_xg.snmplib.pysnmp_backend import PySNMPBackend
from sophos_xg.utils.exceptions import BailOut, FetchFailure, UnknownItemName, XGException
from sophos_xg.utils.log import logger, setup_console_logging, verbosity_to_log_level

_logger = logging.getLogger("sophos_xg.active_checks")

_ArgsT = TypeVar("_ArgsT", bound="SNMPArgs")
_ItemT = TypeVar("_ItemT", bound=Item)


class SNMPArgs(BaseModel):
    hostname: str
    community: str
    username: None | str
    authpassword: None | str
    authprotocol: AuthProtocol
    privpassword: None | str
    privprotocol: PrivProtocol
    port: int
    timeout: float
    retries: int
    verbose: int
    debug: bool

    def host_config(self) -> SNMPHostConfig:
        return SNMPHostConfig(
            hostname=self.hostname,
            credentials=select_credentials(
                community=self.community,
                username=self.username,
                auth_password=self.authpassword,
                auth_protocol=self.authprotocol,
                priv_password=self.privpassword,
                priv_protocol=self.privprotocol,
            ),
            port=self.port,
            timeout=self.timeout,
            retries=self.retries,
        )


class ArgumentParser(argparse.ArgumentParser):
    """Usage errors end up as UNKNOWN plug-in result instead of exit code 2"""

    def error(self, message: str) -> NoReturn:
        raise BailOut(State.UNKNOWN, f"{self.prog}: {message}")


def create_parser(prog: str, description: str) -> ArgumentParser:
    parser = ArgumentParser(prog=prog, description=description)
    parser.add_argument(
        "-H",
        "--hostname",
        required=True,
        help="Hostname or IP of the device with SNMP access enabled",
    )
    parser.add_argument(
        "-C", "--community", default="public", help="Community string (Default: public)"
    )
    parser.add_argument("-u", "--username", default=None, help="Username for SNMPv3")
    parser.add_argument(
        "-A", "--authpassword", default=None, help="Authentication protocol password"
    )
    parser.add_argument(
        "-a",
        "--authprotocol",
        type=str.lower,
        choices=[p.value for p in AuthProtocol],
        default=AuthProtocol.MD5.value,
        help="Authentication protocol (Default: md5)",
    )
    parser.add_argument("-X", "--privpassword", default=None, help="Privacy protocol password")
    parser.add_argument(
        "-x",
        "--privprotocol",
        type=str.lower,
        choices=[p.value for p in PrivProtocol],
        default=PrivProtocol.DES.value,
        help="Privacy protocol (Default: des)",
    )
    parser.add_argument("-p", "--port", type=int, default=161, help="SNMP port (Default: 161)")
    parser.add_argument(
        "-t",
        "--timeout",
        type=float,
        default=5.0,
        help="Timeout of one SNMP request in seconds (Default: 5)",
    )
    parser.add_argument(
        "--retries", type=int, default=1, help="Number of SNMP retries (Default: 1)"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Print verbose information to stderr, specify twice for debug output",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Debug mode: let Python exceptions come through",
    )
    return parser


def parse_args_into(
    model: type[_ArgsT], parser: argparse.ArgumentParser, argv: Sequence[str]
) -> _ArgsT:
    return model.model_validate(vars(parser.parse_args(argv)))


def select_items(
    item_type: type[_ItemT],
    include: Sequence[str],
    exclude: Sequence[str],
    kind: str,
) -> list[_ItemT]:
    """Resolve the include and exclude options, sorted by name

    No include or "all" selects every known item. The other include names are
    validated even next to "all".
    """
    try:
        named = [item_type.from_name(n) for n in include if n != "all"]
        excluded = {item_type.from_name(n) for n in exclude}
    except UnknownItemName as e:
        raise UnknownItemName(f"Unknown {kind} type: {e}") from e
    included = list(item_type) if not include or "all" in include else named
    return sorted(set(included) - excluded, key=lambda item: item.value)


def validate_state_labels(
    state_type: type[DeviceState], labels: Iterable[str], kind: str
) -> frozenset[str]:
    known = state_type.labels()
    for label in labels:
        if label not in known:
            raise UnknownItemName(f"Unknown {kind} state: {label}")
    return frozenset(labels)


def _default_backend_factory(config: SNMPHostConfig) -> SNMPBackend:
    return PySNMPBackend(config, logging.getLogger("sophos_xg.snmplib"))


def _output_check_result(shortname: str, report: CheckReport) -> int:
    exitcode, text = report.render(shortname)
    sys.stdout.write(f"{text}\n")
    return exitcode


def run_active_check(
    shortname: str,
    argv: Sequence[str],
    parse_arguments: Callable[[Sequence[str]], _ArgsT],
    check: Callable[[_ArgsT, SNMPBackend], CheckReport],
    backend_factory: BackendFactory | None = None,
) -> int:
    try:
        args = parse_arguments(argv)
    except BailOut as e:
        return _output_check_result(shortname, CheckReport.bail_out(e.state, e.message))
    except ValidationError as e:
        return _output_check_result(
            shortname, CheckReport.bail_out(State.UNKNOWN, f"Invalid arguments: {e}")
        )

    if args.verbose:
        setup_console_logging()
        logger.setLevel(verbosity_to_log_level(args.verbose))

    try:
        report = check(args, (backend_factory or _default_backend_factory)(args.host_config()))
    except BailOut as e:
        report = CheckReport.bail_out(e.state, e.message)
    except FetchFailure as e:
        _logger.warning("SNMP request failed: %s", e)
        report = CheckReport.bail_out(State.UNKNOWN, "Unable to get information")
        report.add_detail(str(e))
    except XGException as e:
        report = CheckReport.bail_out(State.UNKNOWN, str(e))
    except Exception as e:
        if args.debug:
            raise
        report = CheckReport.bail_out(State.UNKNOWN, f"Unhandled exception: {e}")

    return _output_check_result(shortname, report)
