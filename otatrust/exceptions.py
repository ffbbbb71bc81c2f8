#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2019-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""OTATrust exception classes and error handling utilities.

This module defines the hierarchy of custom exception classes used throughout
the OTATrust library for consistent error handling and reporting.
"""

from typing import Optional

#######################################################################
# # OTATrust Exceptions
#######################################################################


class OTATrustError(Exception):
    """OTATrust Base Exception.

    Base exception class for all OTATrust-related errors. It provides consistent
    error formatting across the library; all OTATrust-specific exceptions inherit
    from this class.

    :cvar fmt: Default error message format template.
    """

    fmt = "OTATrust: {description}"

    def __init__(self, desc: Optional[str] = None) -> None:
        """Initialize the base OTATrust Exception.

        :param desc: Optional description of the exception.
        """
        super().__init__()
        self.description = desc

    def __str__(self) -> str:
        """Return string representation of the exception.

        If no description is provided, defaults to "Unknown Error".

        :return: Formatted exception message as string.
        """
        return self.fmt.format(description=self.description or "Unknown Error")


class OTATrustKeyError(OTATrustError, KeyError):
    """OTATrust Key Error exception for missing dictionary keys or enum members."""


class OTATrustValueError(OTATrustError, ValueError):
    """OTATrust standard value error exception.

    Raised when an invalid value is provided to OTATrust operations, combining
    OTATrust error handling with standard ValueError semantics.
    """


class OTATrustTypeError(OTATrustError, TypeError):
    """OTATrust standard type error exception."""


class OTATrustIOError(OTATrustError, IOError):
    """OTATrust standard IO error exception.

    Raised when OTATrust encounters input/output related errors such as file
    access issues on caller-supplied destinations.
    """


class OTATrustParsingError(OTATrustError):
    """OTATrust parsing error exception.

    Raised when binary or textual input cannot be parsed, such as an invalid
    container structure or an undecodable encoding.
    """


class OTATrustUnsupportedOperation(OTATrustError):
    """OTATrust unsupported operation exception.

    Raised when an operation or algorithm is requested that the library does not
    support.
    """
