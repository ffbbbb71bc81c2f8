#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Copyright 2024-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""OTATrust PKCS#12 container structure.

ASN.1 representation of the outer PFX layer (RFC 7292). Only the unencrypted outer
structure is described; it is enough to tell a PKCS#12 archive apart from any other
input before a decryption attempt is made.
"""

from pyasn1.codec.ber.decoder import decode
from pyasn1.error import PyAsn1Error
from pyasn1.type import namedtype, tag, univ

from otatrust.crypto.exceptions import MalformedBundle

PFX_VERSION = 3
ID_DATA = "1.2.840.113549.1.7.1"
ID_SIGNED_DATA = "1.2.840.113549.1.7.2"


class AlgorithmIdentifier(univ.Sequence):
    """ASN.1 Algorithm Identifier.

    AlgorithmIdentifier  ::=  SEQUENCE  {
        algorithm            OBJECT IDENTIFIER,
        parameters           ANY DEFINED BY algorithm  OPTIONAL
    }
    """


AlgorithmIdentifier.componentType = namedtype.NamedTypes(
    namedtype.NamedType("algorithm", univ.ObjectIdentifier()),
    namedtype.OptionalNamedType("parameters", univ.Any()),
)


class DigestInfo(univ.Sequence):
    """ASN.1 Digest Info.

    DigestInfo  ::=  SEQUENCE  {
        digestAlgorithm      AlgorithmIdentifier,
        digest               OCTET STRING
    }
    """


DigestInfo.componentType = namedtype.NamedTypes(
    namedtype.NamedType("digestAlgorithm", AlgorithmIdentifier()),
    namedtype.NamedType("digest", univ.OctetString()),
)


class MacData(univ.Sequence):
    """ASN.1 PKCS#12 integrity data.

    MacData  ::=  SEQUENCE  {
        mac                  DigestInfo,
        macSalt              OCTET STRING,
        iterations           INTEGER DEFAULT 1
    }
    """


MacData.componentType = namedtype.NamedTypes(
    namedtype.NamedType("mac", DigestInfo()),
    namedtype.NamedType("macSalt", univ.OctetString()),
    namedtype.DefaultedNamedType("iterations", univ.Integer(1)),
)


class ContentInfo(univ.Sequence):
    """ASN.1 PKCS#7 Content Info.

    ContentInfo  ::=  SEQUENCE  {
        contentType          OBJECT IDENTIFIER,
        content              [0] EXPLICIT ANY DEFINED BY contentType OPTIONAL
    }
    """


ContentInfo.componentType = namedtype.NamedTypes(
    namedtype.NamedType("contentType", univ.ObjectIdentifier()),
    namedtype.OptionalNamedType(
        "content",
        univ.Any().subtype(explicitTag=tag.Tag(tag.tagClassContext, tag.tagFormatConstructed, 0)),
    ),
)


class PFX(univ.Sequence):
    """ASN.1 PKCS#12 Protocol Data Unit.

    PFX  ::=  SEQUENCE  {
        version              INTEGER {v3(3)},
        authSafe             ContentInfo,
        macData              MacData OPTIONAL
    }
    """


PFX.componentType = namedtype.NamedTypes(
    namedtype.NamedType("version", univ.Integer()),
    namedtype.NamedType("authSafe", ContentInfo()),
    namedtype.OptionalNamedType("macData", MacData()),
)


def check_pfx_structure(data: bytes) -> PFX:
    """Check that data is a structurally valid PKCS#12 archive.

    :param data: Archive bytes.
    :raises MalformedBundle: Data is not a PKCS#12 PFX structure.
    :return: Decoded outer PFX structure.
    """
    if not data:
        raise MalformedBundle("Credential bundle is empty")
    try:
        pfx, rest = decode(bytes(data), asn1Spec=PFX())
        version = int(pfx["version"])
        auth_safe = pfx["authSafe"]
        content_type = str(auth_safe["contentType"])
        has_content = auth_safe["content"].isValue
    except (PyAsn1Error, ValueError, TypeError, AttributeError, IndexError) as exc:
        raise MalformedBundle(f"Credential bundle is not a PKCS#12 archive: {exc}") from exc
    if rest:
        raise MalformedBundle(f"Credential bundle has {len(rest)} trailing bytes")
    if version != PFX_VERSION:
        raise MalformedBundle(f"Unsupported PKCS#12 version: {version}")
    if content_type not in (ID_DATA, ID_SIGNED_DATA):
        raise MalformedBundle(f"Unsupported PKCS#12 authSafe content type: {content_type}")
    if not has_content:
        raise MalformedBundle("PKCS#12 authSafe has no content")
    return pfx
