#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2023,2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""OTATrust cryptographic exceptions module.

Named failure conditions of the verification and extraction core. A signature
that simply does not verify is not an error and never raises; these exceptions
report input that is not even well-formed, and caller-side setup mistakes.
"""

from otatrust.exceptions import (
    OTATrustError,
    OTATrustIOError,
    OTATrustParsingError,
    OTATrustUnsupportedOperation,
    OTATrustValueError,
)


class OTATrustCryptoError(OTATrustError):
    """General OTATrust Crypto Error.

    Base exception class for all failures of the cryptographic core.
    """


class MalformedKey(OTATrustCryptoError, OTATrustValueError):
    """Key material cannot be parsed into a valid key of its declared type."""


class UnsupportedAlgorithm(OTATrustCryptoError, OTATrustUnsupportedOperation):
    """Key type or signature method is outside the supported algorithm set."""


class BundleError(OTATrustCryptoError):
    """Base class for failures caused by the content of a credential bundle."""


class MalformedBundle(BundleError, OTATrustParsingError):
    """Input is not a structurally valid PKCS#12 archive."""


class DecryptionFailed(BundleError):
    """Archive could not be decrypted (wrong password, corrupted data or unsupported cipher)."""


class IncompleteBundle(BundleError):
    """Decrypted archive lacks the private key or the end-entity certificate."""


class SinkError(OTATrustCryptoError, OTATrustIOError):
    """Output destination for an extracted credential is missing or not writable.

    This is a resource error on the caller's side and not a
    :class:`BundleError`.
    """
