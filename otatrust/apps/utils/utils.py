#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2020-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""OTATrust application error handling and argument helpers."""

import logging
import sys
from functools import wraps
from typing import Any, Callable, Optional

import click

from otatrust import OTATRUST_DEBUG_LOG_FILE, OTATRUST_DEBUG_LOGGING_DISABLED
from otatrust.exceptions import OTATrustError
from otatrust.utils.misc import load_text

logger = logging.getLogger(__name__)


class OTATrustAppError(OTATrustError):
    """OTATrust application error exception for CLI tools.

    :cvar fmt: Format string template for error message display.
    """

    fmt = "{description}"

    def __init__(self, desc: Optional[str] = None, error_code: int = 1) -> None:
        """Initialize the AppError.

        :param desc: Description to print out on command line, defaults to None
        :param error_code: Error code passed to OS, defaults to 1
        """
        super().__init__(desc)
        self.description = desc
        self.error_code = error_code


def read_text_argument(value: str) -> str:
    """Get text of a command line argument.

    An argument starting with ``@`` names a file the text is read from.

    :param value: Literal text, or ``@`` followed by a file path.
    :return: The text, stripped of surrounding whitespace.
    """
    if value.startswith("@"):
        return load_text(value[1:]).strip()
    return value.strip()


def catch_otatrust_error(function: Callable) -> Callable:
    """Catch and handle OTATrustError and other exceptions.

    OTATrustAppError exits with its own error code, other OTATrustError and
    AssertionError exit with 2, anything else (including KeyboardInterrupt)
    exits with 3.

    :param function: The function to be decorated.
    :return: The decorated function.
    """

    @wraps(function)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return function(*args, **kwargs)
        except OTATrustAppError as app_exc:
            if app_exc.description:
                click.echo(f"{app_exc.__class__.__name__}: {app_exc}", err=True)
            if 0 < app_exc.error_code < 256:
                sys.exit(app_exc.error_code)
            sys.exit(1)
        except (AssertionError, OTATrustError) as ota_exc:
            click.echo(f"{ota_exc.__class__.__name__}: {ota_exc}", err=True)
            logger.debug(str(ota_exc), exc_info=True)
            if not OTATRUST_DEBUG_LOGGING_DISABLED:
                click.secho(
                    f"See debug log file: {OTATRUST_DEBUG_LOG_FILE} for more info", fg="yellow"
                )
            sys.exit(2)
        except (Exception, KeyboardInterrupt) as base_exc:  # pylint: disable=broad-except
            click.echo(f"GENERAL ERROR: {type(base_exc).__name__}: {base_exc}", err=True)
            logger.debug(str(base_exc), exc_info=True)
            if not OTATRUST_DEBUG_LOGGING_DISABLED:
                click.secho(
                    f"See debug log file: {OTATRUST_DEBUG_LOG_FILE} for more info.", fg="yellow"
                )
            sys.exit(3)

    return wrapper
