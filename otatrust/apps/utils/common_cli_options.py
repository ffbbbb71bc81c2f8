#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2020-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""CLI helper for Click."""

import logging
from typing import Any, Callable, TypeVar, Union

import click

from otatrust import __version__ as otatrust_version
from otatrust.crypto.keys import KeyType

FC = TypeVar("FC", bound=Union[Callable[..., Any], click.Command])


def otatrust_apps_common_options(options: FC) -> FC:
    """Common click options.

    Sets --help, --version; provides: `log_level: int` for logging.

    :return: click decorator
    """
    options = click.help_option("--help")(options)
    options = click.version_option(otatrust_version, "--version")(options)
    options = click.option(
        "-vv",
        "--debug",
        "log_level",
        flag_value=logging.DEBUG,
        help="Display more debugging information.",
    )(options)
    options = click.option(
        "-v",
        "--verbose",
        "log_level",
        flag_value=logging.INFO,
        help="Print more detailed information",
    )(options)
    return options


def otatrust_key_type_option(options: FC) -> FC:
    """Key type click option decorator.

    Provides: `key_type: str` name of the key type.

    :return: Click decorator
    """
    return click.option(
        "-t",
        "--key-type",
        type=click.Choice(
            KeyType.labels() + ["RSA2048", "RSA3072", "RSA4096"], case_sensitive=False
        ),
        required=True,
        help="Type of the public key.",
    )(options)
