#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2020-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Console script for the OTATrust cryptographic core.

Computes digests and key identifiers, verifies update signatures and extracts
provisioning credentials from PKCS#12 bundles.
"""

import logging
import sys
from typing import Optional

import click

from otatrust.apps.utils import ota_logger
from otatrust.apps.utils.common_cli_options import (
    otatrust_apps_common_options,
    otatrust_key_type_option,
)
from otatrust.apps.utils.utils import catch_otatrust_error, read_text_argument
from otatrust.crypto.credentials import extract_credentials
from otatrust.crypto.hash import digest
from otatrust.crypto.keys import PublicKey
from otatrust.crypto.signature import Signature, SignatureMethod, verify
from otatrust.exceptions import OTATrustValueError
from otatrust.utils.misc import load_binary

logger = logging.getLogger(__name__)


@click.group(name="otacrypto", no_args_is_help=True)
@otatrust_apps_common_options
def main(log_level: int) -> None:
    """Collection of utilities for verifying OTA update trust material."""
    ota_logger.install(level=log_level)


@main.command(name="digest", no_args_is_help=True)
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def digest_command(file: str) -> None:
    """Print SHA-256 digest of the FILE in hexadecimal."""
    click.echo(digest(load_binary(file)).hex())


@main.command(name="keyid", no_args_is_help=True)
@otatrust_key_type_option
@click.argument("key_file", metavar="KEYFILE", type=click.Path(exists=True, dir_okay=False))
def keyid_command(key_type: str, key_file: str) -> None:
    """Print identifier of the public key in KEYFILE."""
    click.echo(PublicKey(load_binary(key_file), key_type).key_id)


@main.command(name="verify", no_args_is_help=True)
@otatrust_key_type_option
@click.option(
    "-k",
    "--key",
    "key_file",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="Path to the public key.",
)
@click.option(
    "-s",
    "--signature",
    required=True,
    help="Signature as hexadecimal or base64 text, or @path to a file containing it.",
)
@click.option(
    "-m",
    "--method",
    type=click.Choice(SignatureMethod.labels(), case_sensitive=False),
    help="Signature method declared for the signature; must match the key type.",
)
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def verify_command(
    key_type: str, key_file: str, signature: str, method: Optional[str], file: str
) -> None:
    """Verify signature of the FILE.

    Exit code is 0 when the signature is valid, 1 otherwise.
    """
    public_key = PublicKey(load_binary(key_file), key_type)
    signature_text = read_text_argument(signature)
    if method:
        try:
            is_valid = verify(
                public_key,
                Signature.from_text(signature_text, method, public_key.signature_size),
                load_binary(file),
            )
        except OTATrustValueError as exc:
            logger.debug(f"Cannot decode signature: {exc}")
            is_valid = False
    else:
        is_valid = verify(public_key, signature_text, load_binary(file))

    if not is_valid:
        click.echo("Signature is NOT valid")
        click.get_current_context().exit(1)
    click.echo("Signature is valid")


@main.command(name="extract", no_args_is_help=True)
@click.option(
    "-p",
    "--password",
    default="",
    help="Password of the bundle. If not provided, the empty password is used.",
)
@click.option(
    "-k",
    "--private-key",
    "private_key_path",
    type=click.Path(dir_okay=False),
    required=True,
    help="Output path of the private key.",
)
@click.option(
    "-c",
    "--certificate",
    "certificate_path",
    type=click.Path(dir_okay=False),
    required=True,
    help="Output path of the certificate.",
)
@click.option(
    "-a",
    "--ca",
    "ca_path",
    type=click.Path(dir_okay=False),
    required=True,
    help="Output path of the CA chain.",
)
@click.argument("bundle", type=click.Path(exists=True, dir_okay=False))
def extract_command(
    password: str, private_key_path: str, certificate_path: str, ca_path: str, bundle: str
) -> None:
    """Extract private key, certificate and CA chain from PKCS#12 BUNDLE."""
    credentials = extract_credentials(
        load_binary(bundle), password, private_key_path, certificate_path, ca_path
    )
    logger.info(f"Certificate:\n{credentials.certificate}")
    click.echo(f"Credentials extracted: {private_key_path}, {certificate_path}, {ca_path}")


@catch_otatrust_error
def safe_main() -> None:
    """Call the main function."""
    sys.exit(main())  # pylint: disable=no-value-for-parameter


if __name__ == "__main__":
    safe_main()
