#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2020-2023,2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""OTATrust cryptographic core.

This module provides the three call-level operations of the trust core: content
digest, signature verification and credential bundle extraction, together with the
key and signature values they operate on.
"""

from otatrust.crypto.credentials import (
    BufferSink,
    CredentialBundle,
    CredentialSink,
    FileSink,
    extract,
    extract_credentials,
)
from otatrust.crypto.exceptions import (
    DecryptionFailed,
    IncompleteBundle,
    MalformedBundle,
    MalformedKey,
    SinkError,
    UnsupportedAlgorithm,
)
from otatrust.crypto.hash import digest
from otatrust.crypto.keys import KeyType, PrivateKey, PublicKey
from otatrust.crypto.signature import Signature, SignatureMethod, sign, verify

__all__ = [
    "BufferSink",
    "CredentialBundle",
    "CredentialSink",
    "DecryptionFailed",
    "FileSink",
    "IncompleteBundle",
    "KeyType",
    "MalformedBundle",
    "MalformedKey",
    "PrivateKey",
    "PublicKey",
    "Signature",
    "SignatureMethod",
    "SinkError",
    "UnsupportedAlgorithm",
    "digest",
    "extract",
    "extract_credentials",
    "sign",
    "verify",
]
