#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2021-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause
"""OTATrust provisioning bootstrap.

Reads the provisioning archive shipped with a device image. The archive is a zip
file holding the shared provisioning credentials as a PKCS#12 bundle and the URL of
the provisioning server.
"""

import logging
import zipfile
from typing import Optional

from otatrust.crypto.credentials import BufferSink, extract_credentials
from otatrust.exceptions import OTATrustError

logger = logging.getLogger(__name__)

CREDENTIALS_MEMBER = "autoprov_credentials.p12"
SERVER_URL_MEMBER = "autoprov.url"


class BootstrapError(OTATrustError):
    """Provisioning archive is missing or lacks one of its members."""


def _read_member(provision_path: str, member: str) -> bytes:
    """Read one member of the provisioning archive.

    :param provision_path: Path to the provisioning archive.
    :param member: Name of the archive member.
    :raises BootstrapError: The archive or the member cannot be read.
    :return: Member content.
    """
    if not provision_path:
        raise BootstrapError("Provisioning archive path is empty")
    try:
        with zipfile.ZipFile(provision_path) as archive:
            return archive.read(member)
    except KeyError as exc:
        raise BootstrapError(f"Unable to find {member} in {provision_path}") from exc
    except (OSError, zipfile.BadZipFile) as exc:
        raise BootstrapError(
            f"Unable to open provisioning archive {provision_path}: {exc}"
        ) from exc


def read_server_url(provision_path: str) -> str:
    """Read the provisioning server URL from the provisioning archive.

    :param provision_path: Path to the provisioning archive.
    :raises BootstrapError: The archive or the URL member cannot be read.
    :return: Server URL.
    """
    url = _read_member(provision_path, SERVER_URL_MEMBER)
    try:
        return url.decode("utf-8").strip()
    except UnicodeDecodeError as exc:
        raise BootstrapError(f"Invalid server URL in {provision_path}") from exc


class Bootstrap:
    """Shared provisioning credentials of a device image."""

    def __init__(self, provision_path: str, provision_password: Optional[str] = "") -> None:
        """Load provisioning credentials.

        :param provision_path: Path to the provisioning archive.
        :param provision_password: Password of the PKCS#12 bundle inside the archive.
        :raises BootstrapError: The archive or one of its members cannot be read.
        :raises MalformedBundle: The credentials member is not a PKCS#12 archive.
        :raises DecryptionFailed: The credentials cannot be decrypted.
        :raises IncompleteBundle: The credentials miss private key or certificate.
        """
        self.provision_path = provision_path
        bundle = _read_member(provision_path, CREDENTIALS_MEMBER)
        credentials = extract_credentials(
            bundle, provision_password, BufferSink(), BufferSink(), BufferSink()
        )
        self._private_key = credentials.private_key
        self._certificate = credentials.certificate
        self._ca = credentials.ca_chain
        self._server_url = read_server_url(provision_path)
        logger.debug(f"Provisioning credentials loaded from {provision_path}")

    @property
    def ca(self) -> str:
        """CA chain in PEM."""
        return self._ca

    @property
    def certificate(self) -> str:
        """Provisioning certificate in PEM."""
        return self._certificate

    @property
    def private_key(self) -> str:
        """Provisioning private key in PEM."""
        return self._private_key

    @property
    def server_url(self) -> str:
        """Provisioning server URL."""
        return self._server_url

    def __repr__(self) -> str:
        return f"Bootstrap({self.provision_path!r})"
