#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2019-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""OTATrust cryptographic hash algorithms implementation.

This module is the digest engine of the trust core. ``digest`` computes the
SHA-256 value used for content-integrity checks, as the canonical fingerprint of
key material and as the message digest of RSA-PSS verification. The remaining
helpers give a unified interface to the other hash algorithms update metadata
may reference.
"""

from typing import Union

from cryptography.hazmat.primitives import hashes

from otatrust.exceptions import OTATrustUnsupportedOperation
from otatrust.utils.ota_enum import OTAEnum

DIGEST_SIZE = 32


class EnumHashAlgorithm(OTAEnum):
    """Hash algorithm enumeration for cryptographic operations.

    Labels match the names used for target hashes in update metadata.
    """

    SHA256 = (1, "sha256", "SHA256")
    SHA384 = (2, "sha384", "SHA384")
    SHA512 = (3, "sha512", "SHA512")
    SHA3_256 = (6, "sha3_256", "SHA3_256")
    SHA3_384 = (7, "sha3_384", "SHA3_384")
    SHA3_512 = (8, "sha3_512", "SHA3_512")


def get_hash_algorithm(algorithm: EnumHashAlgorithm) -> hashes.HashAlgorithm:
    """Get hash algorithm instance for specified algorithm type.

    :param algorithm: Hash algorithm type enumeration value.
    :raises OTATrustUnsupportedOperation: If the specified algorithm is not supported.
    :return: Instance of the corresponding hash algorithm class.
    """
    cls_name = algorithm.label.upper()
    algo_cls = getattr(hashes, cls_name, None)  # hack: get class object by name
    if algo_cls is None:
        raise OTATrustUnsupportedOperation(f"Unsupported algorithm: hashes.{cls_name}")
    return algo_cls()  # pylint: disable=not-callable


def get_hash_length(algorithm: EnumHashAlgorithm) -> int:
    """Get hash algorithm binary length.

    :param algorithm: Hash algorithm type enumeration.
    :return: Length of hash digest in bytes.
    """
    return get_hash_algorithm(algorithm).digest_size


class Hash:
    """OTATrust Hash computation wrapper.

    Incremental interface used when the hashed content arrives in chunks, e.g.
    while an update image is being streamed to storage.
    """

    def __init__(self, algorithm: EnumHashAlgorithm = EnumHashAlgorithm.SHA256) -> None:
        """Initialize hash object.

        :param algorithm: Algorithm type enum, defaults to EnumHashAlgorithm.SHA256
        """
        self.hash_obj = hashes.Hash(get_hash_algorithm(algorithm))

    def update(self, data: bytes) -> None:
        """Update the hash object with new data.

        :param data: Binary data to be added to the hash calculation.
        """
        self.hash_obj.update(data)

    def finalize(self) -> bytes:
        """Finalize the hash computation and return the digest.

        After calling this method, the hash object cannot be used for further updates.

        :return: The computed hash digest as bytes.
        """
        return self.hash_obj.finalize()


def get_hash(data: bytes, algorithm: EnumHashAlgorithm = EnumHashAlgorithm.SHA256) -> bytes:
    """Compute hash digest from input data using specified algorithm.

    :param data: Input data to be hashed.
    :param algorithm: Hash algorithm to use for computation.
    :raises OTATrustUnsupportedOperation: If the specified algorithm is not supported.
    :return: Hash digest as bytes.
    """
    hash_obj = hashes.Hash(get_hash_algorithm(algorithm))
    hash_obj.update(data)
    return hash_obj.finalize()


def digest(data: Union[bytes, str]) -> bytes:
    """Compute the SHA-256 digest of the data.

    The function is total over its input: any byte sequence, the empty one included,
    yields exactly 32 bytes. Text is hashed as its UTF-8 encoding.

    :param data: Data to digest.
    :return: 32 bytes of SHA-256 digest.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    return get_hash(bytes(data), EnumHashAlgorithm.SHA256)
