#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2019-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""OTATrust - trust verification core of an over-the-air update client.

The package decides whether update metadata and bundled provisioning credentials
are authentic before the rest of the update client acts on them:

    - SHA-256 digest engine used for integrity checks and key fingerprints
    - RSA-PSS and Ed25519 signature verification over canonical key material
    - PKCS#12 credential bundle extraction with all-or-nothing output
"""

import os
from typing import Optional, Union

from packaging.version import Version, parse
from platformdirs import PlatformDirs


def get_otatrust_version() -> Version:
    """Get OTATrust version information.

    :return: Parsed version object containing OTATrust version information.
    """
    from .__version__ import __version__ as otatrust_version

    return parse(otatrust_version)


def value_to_bool(value: Optional[Union[bool, int, str]]) -> bool:
    """Convert value to boolean from various input formats.

    Supports conversion from string representations like "True", "true", "T", "1"
    and standard Python truthy/falsy values for other types.

    :param value: Value to convert to boolean (string, int, bool, or None).
    :return: Boolean representation of the input value.
    """
    if isinstance(value, str):
        return value in ("True", "true", "T", "1")
    return bool(value)


version = get_otatrust_version()

__author__ = "NXP"
__license__ = "BSD-3-Clause"
__version__ = str(version)
__release__ = "beta"


# The OTATrust behavior settings
OTATRUST_VERSION_BASE = version.base_version
OTATRUST_PLATFORM_DIRS = PlatformDirs(
    appauthor="nxp",
    appname="otatrust",
    version=OTATRUST_VERSION_BASE,
)

OTATRUST_DEBUG = value_to_bool(os.environ.get("OTATRUST_DEBUG"))

OTATRUST_DEBUG_LOGGING_DISABLED = value_to_bool(os.environ.get("OTATRUST_DEBUG_LOGGING_DISABLED"))
OTATRUST_DEBUG_LOG_FILE = os.environ.get(
    "OTATRUST_DEBUG_LOG_FILE", os.path.join(OTATRUST_PLATFORM_DIRS.user_log_dir, "debug.log")
)
