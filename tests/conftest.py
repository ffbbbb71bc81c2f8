#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2020-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""OTATrust pytest configuration and shared test fixtures.

Key material and credential bundles are generated once per test session, so the
test suite carries no private keys in its data.
"""

import datetime
import os

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ed25519, rsa
from cryptography.hazmat.primitives.serialization import (
    BestAvailableEncryption,
    Encoding,
    NoEncryption,
    PublicFormat,
    pkcs12,
)
from cryptography.x509.oid import NameOID

from tests.cli_runner import CliRunner

os.environ["OTATRUST_DEBUG_LOGGING_DISABLED"] = "True"

BUNDLE_PASSWORD = "secret"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Get CLI runner instance for testing.

    :return: CliRunner instance for testing CLI commands.
    """
    return CliRunner()


@pytest.fixture
def tests_root_dir() -> str:
    """Get the root directory of tests.

    :return: Absolute path to the tests root directory.
    """
    return os.path.dirname(os.path.abspath(__file__))


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    """RSA 2048 private key shared by the test session."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_public_pem(rsa_private_key: rsa.RSAPrivateKey) -> bytes:
    """PEM SubjectPublicKeyInfo of the session RSA key."""
    return rsa_private_key.public_key().public_bytes(
        Encoding.PEM, PublicFormat.SubjectPublicKeyInfo
    )


@pytest.fixture(scope="session")
def ed25519_private_key() -> ed25519.Ed25519PrivateKey:
    """Ed25519 private key shared by the test session."""
    return ed25519.Ed25519PrivateKey.generate()


@pytest.fixture(scope="session")
def ed25519_public_hex(ed25519_private_key: ed25519.Ed25519PrivateKey) -> str:
    """Hexadecimal raw point of the session Ed25519 key."""
    return ed25519_private_key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw).hex()


def _build_certificate(
    subject: str,
    public_key: rsa.RSAPublicKey,
    issuer: str,
    signing_key: rsa.RSAPrivateKey,
    ca: bool,
) -> x509.Certificate:
    now = datetime.datetime.now(datetime.timezone.utc)
    return (
        x509.CertificateBuilder()
        .subject_name(x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, subject)]))
        .issuer_name(x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, issuer)]))
        .public_key(public_key)
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=365))
        .add_extension(x509.BasicConstraints(ca=ca, path_length=None), critical=True)
        .sign(signing_key, hashes.SHA256())
    )


@pytest.fixture(scope="session")
def ca_certificate(rsa_private_key: rsa.RSAPrivateKey) -> x509.Certificate:
    """Self-signed CA certificate."""
    return _build_certificate(
        "OTATrust Test CA", rsa_private_key.public_key(), "OTATrust Test CA", rsa_private_key, True
    )


@pytest.fixture(scope="session")
def device_key() -> rsa.RSAPrivateKey:
    """Private key of the provisioned device."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def device_certificate(
    device_key: rsa.RSAPrivateKey, rsa_private_key: rsa.RSAPrivateKey
) -> x509.Certificate:
    """Device certificate issued by the test CA."""
    return _build_certificate(
        "otatrust-device", device_key.public_key(), "OTATrust Test CA", rsa_private_key, False
    )


@pytest.fixture(scope="session")
def bundle(
    device_key: rsa.RSAPrivateKey,
    device_certificate: x509.Certificate,
    ca_certificate: x509.Certificate,
) -> bytes:
    """Credential bundle protected by the empty password."""
    return pkcs12.serialize_key_and_certificates(
        b"device", device_key, device_certificate, [ca_certificate], NoEncryption()
    )


@pytest.fixture(scope="session")
def protected_bundle(
    device_key: rsa.RSAPrivateKey,
    device_certificate: x509.Certificate,
    ca_certificate: x509.Certificate,
) -> bytes:
    """Credential bundle protected by ``BUNDLE_PASSWORD``."""
    return pkcs12.serialize_key_and_certificates(
        b"device",
        device_key,
        device_certificate,
        [ca_certificate],
        BestAvailableEncryption(BUNDLE_PASSWORD.encode("utf-8")),
    )


@pytest.fixture(scope="session")
def bundle_without_ca(
    device_key: rsa.RSAPrivateKey, device_certificate: x509.Certificate
) -> bytes:
    """Credential bundle with no CA chain."""
    return pkcs12.serialize_key_and_certificates(
        b"device", device_key, device_certificate, None, NoEncryption()
    )


@pytest.fixture(scope="session")
def bundle_without_key(
    device_certificate: x509.Certificate, ca_certificate: x509.Certificate
) -> bytes:
    """Credential bundle with certificates only."""
    return pkcs12.serialize_key_and_certificates(
        b"device", None, device_certificate, [ca_certificate], NoEncryption()
    )


@pytest.fixture(scope="session")
def bundle_without_certificate(device_key: rsa.RSAPrivateKey) -> bytes:
    """Credential bundle with the private key only."""
    return pkcs12.serialize_key_and_certificates(b"device", device_key, None, None, NoEncryption())
