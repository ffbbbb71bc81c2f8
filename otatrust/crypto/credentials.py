#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2020-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause
"""OTATrust credential bundle extraction.

A credential bundle is a password-protected PKCS#12 archive carrying a device
private key, its certificate and the CA chain. Extraction is all-or-nothing: the
three PEM artifacts are produced in memory first and written to their sinks only
when all of them exist; a failed write rolls back the sinks written before it.
"""

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import IO, Optional, Union

from cryptography.exceptions import UnsupportedAlgorithm as CryptoUnsupportedAlgorithm
from cryptography.hazmat.primitives.serialization import Encoding, NoEncryption, PrivateFormat
from cryptography.hazmat.primitives.serialization.pkcs12 import load_key_and_certificates
from typing_extensions import Self

from otatrust.crypto._pkcs12_asn1 import check_pfx_structure
from otatrust.crypto.exceptions import (
    DecryptionFailed,
    IncompleteBundle,
    MalformedBundle,
    SinkError,
)
from otatrust.exceptions import OTATrustError, OTATrustIOError
from otatrust.utils.misc import load_binary, write_file

logger = logging.getLogger(__name__)


class CredentialSink(ABC):
    """Destination of one extracted PEM artifact."""

    def check(self) -> None:
        """Check that the sink can be written.

        :raises SinkError: The sink is not usable.
        """

    @abstractmethod
    def write(self, data: str) -> None:
        """Write the artifact.

        :param data: PEM text.
        :raises SinkError: The artifact cannot be written.
        """

    @abstractmethod
    def discard(self) -> None:
        """Undo a previous write."""


class FileSink(CredentialSink):
    """File destination.

    An existing file is overwritten; its previous content is kept until the whole
    extraction succeeds so that it can be restored on rollback. Directories created
    for the file are removed on rollback too.
    """

    def __init__(self, path: Union[str, "os.PathLike[str]"]) -> None:
        """Create file sink.

        :param path: Output file path.
        """
        self.path = os.fspath(path)
        self._previous: Optional[bytes] = None
        self._created_dirs: list[str] = []
        self._touched = False

    @property
    def real_path(self) -> str:
        """Absolute path of the file with symbolic links resolved."""
        return os.path.realpath(self.path)

    def check(self) -> None:
        """Check the file path can be written.

        :raises SinkError: Path is empty, is a directory, or is not writable.
        """
        if not self.path:
            raise SinkError("Output path is empty")
        if os.path.isdir(self.path):
            raise SinkError(f"Output path is a directory: {self.path}")
        if os.path.exists(self.path) and not os.access(self.path, os.W_OK):
            raise SinkError(f"Output file is not writable: {self.path}")
        parent = os.path.dirname(os.path.abspath(self.path))
        while not os.path.exists(parent):
            parent = os.path.dirname(parent)
        if not os.path.isdir(parent) or not os.access(parent, os.W_OK):
            raise SinkError(f"Output directory is not writable: {parent}")

    def _missing_dirs(self) -> list[str]:
        missing = []
        folder = os.path.dirname(os.path.abspath(self.path))
        while not os.path.exists(folder):
            missing.append(folder)
            folder = os.path.dirname(folder)
        return missing

    def write(self, data: str) -> None:
        """Write PEM text into the file.

        :param data: PEM text.
        :raises SinkError: File cannot be written.
        """
        try:
            self._previous = load_binary(self.path) if os.path.isfile(self.path) else None
            self._created_dirs = self._missing_dirs()
            self._touched = True
            write_file(data.encode("ascii"), self.path, mode="wb")
        except (OSError, OTATrustIOError) as exc:
            raise SinkError(f"Cannot write {self.path}: {exc}") from exc

    def discard(self) -> None:
        """Remove the written file, or restore its previous content."""
        if not self._touched:
            return
        self._touched = False
        try:
            if self._previous is None:
                if os.path.exists(self.path):
                    os.remove(self.path)
            else:
                write_file(self._previous, self.path, mode="wb")
            # deepest first
            for folder in self._created_dirs:
                if os.path.isdir(folder) and not os.listdir(folder):
                    os.rmdir(folder)
        except OSError as exc:
            logger.debug(f"Rollback of {self.path} failed: {exc}")
        self._created_dirs = []

    def __repr__(self) -> str:
        return f"FileSink({self.path!r})"


class BufferSink(CredentialSink):
    """In-memory destination; the artifact is available in ``value``."""

    def __init__(self) -> None:
        self.value: Optional[str] = None
        self._previous: Optional[str] = None

    def write(self, data: str) -> None:
        self._previous = self.value
        self.value = data

    def discard(self) -> None:
        self.value = self._previous

    def __repr__(self) -> str:
        return "BufferSink()"


SinkTarget = Union[CredentialSink, str, "os.PathLike[str]", None]


def get_sink(target: SinkTarget) -> CredentialSink:
    """Get sink object for the output target.

    :param target: Sink object, or path of the output file.
    :raises SinkError: Target is missing or of unknown type.
    :return: Credential sink.
    """
    if isinstance(target, CredentialSink):
        return target
    if target is None or target == "":
        raise SinkError("Output destination is not specified")
    if isinstance(target, (str, os.PathLike)):
        return FileSink(target)
    raise SinkError(f"Unsupported output destination: {type(target).__name__}")


def _check_distinct(sinks: list[CredentialSink]) -> None:
    """Check that every artifact goes to its own destination.

    :param sinks: Resolved sinks.
    :raises SinkError: Two sinks are the same object or the same file.
    """
    destinations = [
        ("file", sink.real_path) if isinstance(sink, FileSink) else ("sink", id(sink))
        for sink in sinks
    ]
    if len(set(destinations)) != len(destinations):
        raise SinkError(f"Output destinations must differ: {', '.join(repr(s) for s in sinks)}")


def _get_passwords(password: Optional[Union[str, bytes]]) -> list[Optional[bytes]]:
    if not password:
        # an empty password may be stored as empty string or as no password at all
        return [b"", None]
    if isinstance(password, str):
        password = password.encode("utf-8")
    return [password]


@dataclass(frozen=True)
class CredentialBundle:
    """Decrypted content of a credential bundle, as PEM text."""

    private_key: str = field(repr=False)
    certificate: str
    ca_chain: str

    @classmethod
    def parse(
        cls, data: Union[bytes, IO[bytes]], password: Optional[Union[str, bytes]] = ""
    ) -> Self:
        """Decrypt and decompose a PKCS#12 archive.

        :param data: Archive bytes, or a binary stream to read them from.
        :param password: Archive password; empty password is a valid password.
        :raises OTATrustIOError: The stream cannot be read.
        :raises MalformedBundle: Data is not a PKCS#12 archive.
        :raises DecryptionFailed: The archive cannot be decrypted.
        :raises IncompleteBundle: The archive misses private key or certificate.
        :return: Credential bundle.
        """
        if hasattr(data, "read"):
            try:
                data = data.read()  # type: ignore[union-attr]
            except OSError as exc:
                raise OTATrustIOError(f"Cannot read credential bundle: {exc}") from exc
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise MalformedBundle(
                f"Credential bundle must be binary data, got {type(data).__name__}"
            )
        data = bytes(data)
        check_pfx_structure(data)

        loaded = None
        for candidate in _get_passwords(password):
            try:
                loaded = load_key_and_certificates(data, candidate)
                break
            except (ValueError, TypeError, CryptoUnsupportedAlgorithm) as exc:
                logger.debug(f"PKCS#12 decryption attempt failed: {exc}")
        if loaded is None:
            raise DecryptionFailed("Cannot decrypt credential bundle")

        key, certificate, additional_certificates = loaded
        if key is None:
            raise IncompleteBundle("Credential bundle contains no private key")
        if certificate is None:
            raise IncompleteBundle("Credential bundle contains no certificate")

        return cls(
            private_key=key.private_bytes(
                Encoding.PEM, PrivateFormat.PKCS8, NoEncryption()
            ).decode("ascii"),
            certificate=certificate.public_bytes(Encoding.PEM).decode("ascii"),
            ca_chain="".join(
                ca.public_bytes(Encoding.PEM).decode("ascii") for ca in additional_certificates
            ),
        )

    def write(
        self,
        private_key_sink: SinkTarget,
        certificate_sink: SinkTarget,
        ca_sink: SinkTarget,
    ) -> None:
        """Write all three artifacts, or none of them.

        Every sink is resolved and checked before the first write, and no two sinks
        may share a destination. When a write fails, the sinks written so far are
        rolled back in reverse order.

        :param private_key_sink: Destination of the private key.
        :param certificate_sink: Destination of the certificate.
        :param ca_sink: Destination of the CA chain.
        :raises SinkError: A sink is missing, shared or cannot be written.
        """
        sinks = [get_sink(target) for target in (private_key_sink, certificate_sink, ca_sink)]
        _check_distinct(sinks)
        for sink in sinks:
            sink.check()

        written: list[CredentialSink] = []
        for sink, data in zip(sinks, (self.private_key, self.certificate, self.ca_chain)):
            written.append(sink)
            try:
                sink.write(data)
            except Exception as exc:  # pylint: disable=broad-except
                logger.debug(f"Writing {sink!r} failed, rolling back {len(written)} sink(s)")
                for done in reversed(written):
                    done.discard()
                if isinstance(exc, SinkError):
                    raise
                raise SinkError(f"Cannot write {sink!r}: {exc}") from exc
        logger.debug(f"Credentials written to {', '.join(repr(s) for s in sinks)}")


def extract_credentials(
    bundle: Union[bytes, IO[bytes]],
    password: Optional[Union[str, bytes]],
    private_key_sink: SinkTarget,
    certificate_sink: SinkTarget,
    ca_sink: SinkTarget,
) -> CredentialBundle:
    """Extract credential bundle into its three sinks.

    :param bundle: PKCS#12 archive bytes or binary stream.
    :param password: Archive password.
    :param private_key_sink: Destination of the private key.
    :param certificate_sink: Destination of the certificate.
    :param ca_sink: Destination of the CA chain.
    :raises MalformedBundle: Data is not a PKCS#12 archive.
    :raises DecryptionFailed: The archive cannot be decrypted.
    :raises IncompleteBundle: The archive misses private key or certificate.
    :raises SinkError: A sink is missing or cannot be written.
    :return: Extracted credential bundle.
    """
    credentials = CredentialBundle.parse(bundle, password)
    credentials.write(private_key_sink, certificate_sink, ca_sink)
    return credentials


def extract(
    bundle: Union[bytes, IO[bytes]],
    password: Optional[Union[str, bytes]],
    private_key_sink: SinkTarget,
    certificate_sink: SinkTarget,
    ca_sink: SinkTarget,
) -> bool:
    """Extract credential bundle into its three sinks.

    Same as :func:`extract_credentials`, with every failure reported as ``False``.

    :param bundle: PKCS#12 archive bytes or binary stream.
    :param password: Archive password.
    :param private_key_sink: Destination of the private key.
    :param certificate_sink: Destination of the certificate.
    :param ca_sink: Destination of the CA chain.
    :return: True if all three artifacts were written, False otherwise.
    """
    try:
        extract_credentials(bundle, password, private_key_sink, certificate_sink, ca_sink)
    except OTATrustError as exc:
        logger.debug(f"Credential extraction failed: {exc}")
        return False
    return True
