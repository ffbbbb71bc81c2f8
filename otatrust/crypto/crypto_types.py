#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2024-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""OTATrust cryptographic type definitions and enumerations."""

from cryptography import utils
from cryptography.hazmat.primitives.serialization import Encoding

from otatrust.exceptions import OTATrustValueError


class OTAEncoding(utils.Enum):
    """OTATrust key encoding enumeration.

    Extends the cryptography library encodings with RAW, the canonical key
    material form: DER SubjectPublicKeyInfo for RSA keys and the bare 32-byte
    point for Ed25519 keys.
    """

    RAW = "RAW"
    PEM = "PEM"
    DER = "DER"

    @staticmethod
    def get_cryptography_encodings(encoding: "OTAEncoding") -> Encoding:
        """Get cryptography library encoding from OTATrust encoding.

        :param encoding: OTATrust encoding type to convert.
        :raises OTATrustValueError: If the encoding format is not supported by cryptography.
        :return: Corresponding cryptography library encoding.
        """
        cryptography_encoding = {
            OTAEncoding.RAW: Encoding.Raw,
            OTAEncoding.PEM: Encoding.PEM,
            OTAEncoding.DER: Encoding.DER,
        }.get(encoding)
        if cryptography_encoding is None:
            raise OTATrustValueError(f"{encoding} format is not supported by cryptography.")
        return cryptography_encoding

    @staticmethod
    def get_file_encodings(data: bytes) -> "OTAEncoding":
        """Determine encoding type of cryptographic data.

        Data that decodes as UTF-8 and carries PEM armor markers is PEM, anything
        else is treated as DER.

        :param data: Raw bytes of the data to analyze for encoding detection.
        :return: Detected encoding type (OTAEncoding.PEM or OTAEncoding.DER).
        """
        encoding = OTAEncoding.PEM
        try:
            decoded = data.decode("utf-8")
        except UnicodeDecodeError:
            encoding = OTAEncoding.DER
        else:
            if decoded.find("-----BEGIN") == -1:
                encoding = OTAEncoding.DER
        return encoding
