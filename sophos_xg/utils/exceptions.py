#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""User-defined exceptions of the Sophos XG plug-ins."""

__all__ = [
    "BailOut",
    "FetchFailure",
    "InvalidCapacity",
    "InvalidThreshold",
    "UnknownEnumerationValue",
    "UnknownItemName",
    "UnparseableDate",
    "XGException",
]


# never used directly in the code. Just some wrapper to make all of our
# exceptions handleable with one call
class XGException(Exception):
    pass


class FetchFailure(XGException):
    """The SNMP collaborator could not deliver a complete set of values."""


class InvalidThreshold(XGException, ValueError):
    pass


class InvalidCapacity(XGException, ValueError):
    pass


class UnknownItemName(XGException, ValueError):
    pass


class UnknownEnumerationValue(XGException, LookupError):
    """The device reported a code that is not part of the known table"""

    def __init__(self, family: str, code: object) -> None:
        super().__init__(f"Unknown {family} code: {code}")
        self.family = family
        self.code = code


class UnparseableDate(XGException, ValueError):
    pass


# This exception terminates the plug-in immediately with the given state.
# The message is the summary of the plug-in output.
class BailOut(XGException):
    def __init__(self, state: int, message: str) -> None:
        super().__init__(message)
        self.state = state
        self.message = message
