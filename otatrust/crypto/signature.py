#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2020-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause
"""OTATrust signature verification.

Verification is a pure function of (public key, signature, message). A signature
that does not verify is reported as ``False``; exceptions are reserved for keys
that cannot be used at all.
"""

import base64
import logging
from typing import Any, Callable, Optional, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ed25519, padding, rsa, utils
from typing_extensions import Self

from otatrust.crypto.exceptions import UnsupportedAlgorithm
from otatrust.crypto.hash import digest
from otatrust.crypto.keys import ED25519_SIGNATURE_SIZE, KeyType, PrivateKey, PublicKey
from otatrust.crypto.utils import decode_hex_or_base64
from otatrust.exceptions import OTATrustKeyError, OTATrustValueError
from otatrust.utils.ota_enum import OTAEnum

logger = logging.getLogger(__name__)


class SignatureMethod(OTAEnum):
    """Signature scheme; labels match the ``method`` field of update metadata."""

    RSASSA_PSS_SHA256 = (0, "rsassa-pss-sha256", "RSASSA-PSS, MGF1-SHA256, salt of digest length")
    ED25519 = (1, "ed25519", "PureEdDSA over Curve25519")


_KEY_TYPE_METHODS: dict[KeyType, SignatureMethod] = {
    KeyType.RSA: SignatureMethod.RSASSA_PSS_SHA256,
    KeyType.ED25519: SignatureMethod.ED25519,
}


def get_signature_method(key_type: Union[KeyType, str]) -> SignatureMethod:
    """Get signature method used with keys of given type.

    :param key_type: Key type or its name.
    :raises UnsupportedAlgorithm: Key type is not supported.
    :return: Signature method.
    """
    return _KEY_TYPE_METHODS[KeyType.get(key_type)]


class Signature:
    """Signature value with the method it was made by.

    The key identifier is optional; it is present when the signature comes from
    update metadata, where it names the key the signature claims to be made by.
    """

    def __init__(
        self,
        method: Union[SignatureMethod, str],
        raw_bytes: bytes,
        key_id: Optional[str] = None,
    ) -> None:
        """Create signature.

        :param method: Signature method or its label.
        :param raw_bytes: Raw signature bytes.
        :param key_id: Identifier of the signing key.
        :raises UnsupportedAlgorithm: Signature method is not supported.
        """
        if not isinstance(method, SignatureMethod):
            try:
                method = SignatureMethod.from_label(method)
            except OTATrustKeyError as exc:
                raise UnsupportedAlgorithm(f"Unsupported signature method: {method}") from exc
        self.method = method
        self.raw_bytes = bytes(raw_bytes)
        self.key_id = key_id

    @classmethod
    def from_text(
        cls,
        text: Union[str, bytes],
        method: Union[SignatureMethod, str],
        expected_size: Optional[int] = None,
        key_id: Optional[str] = None,
    ) -> Self:
        """Create signature from its hexadecimal or base64 text.

        :param text: Encoded signature.
        :param method: Signature method or its label.
        :param expected_size: Signature size used to choose between hex and base64.
        :param key_id: Identifier of the signing key.
        :raises OTATrustValueError: The text cannot be decoded.
        :return: Signature.
        """
        return cls(method, decode_hex_or_base64(text, expected_size), key_id)

    def to_text(self) -> str:
        """Get signature text: base64 for RSA-PSS, hex for Ed25519."""
        if self.method == SignatureMethod.ED25519:
            return self.raw_bytes.hex()
        return base64.b64encode(self.raw_bytes).decode("ascii")

    def to_dict(self) -> dict[str, Any]:
        """Get signature in the form used by update metadata.

        :return: Dictionary with ``keyid``, ``method`` and ``sig``.
        """
        return {"keyid": self.key_id, "method": self.method.label, "sig": self.to_text()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create signature from the form used by update metadata.

        :param data: Dictionary with ``keyid``, ``method`` and ``sig``.
        :raises OTATrustValueError: Dictionary misses fields or the signature cannot be decoded.
        :raises UnsupportedAlgorithm: Signature method is not supported.
        :return: Signature.
        """
        try:
            method, text = data["method"], data["sig"]
        except (KeyError, TypeError) as exc:
            raise OTATrustValueError(f"Invalid signature description: {exc}") from exc
        return cls.from_text(text, method, key_id=data.get("keyid"))

    def __eq__(self, obj: Any) -> bool:
        return (
            isinstance(obj, Signature)
            and self.method == obj.method
            and self.raw_bytes == obj.raw_bytes
        )

    def __hash__(self) -> int:
        return hash((self.method.label, self.raw_bytes))

    def __repr__(self) -> str:
        return f"Signature({self.method.label}, {len(self.raw_bytes)} bytes)"

    def __str__(self) -> str:
        return f"{self.method.label} signature by {self.key_id or 'unknown key'}"


def _verify_rsa_pss(key: rsa.RSAPublicKey, signature: bytes, message: bytes) -> bool:
    """Verify RSASSA-PSS signature over the SHA-256 digest of the message.

    :param key: RSA public key.
    :param signature: Raw signature, one modulus long.
    :param message: Signed message.
    :return: True if the signature is valid, False otherwise.
    """
    if len(signature) != (key.key_size + 7) // 8:
        logger.debug(f"RSA signature length {len(signature)} doesn't match the key size")
        return False
    try:
        key.verify(
            signature,
            digest(message),
            padding.PSS(
                mgf=padding.MGF1(algorithm=hashes.SHA256()),
                salt_length=padding.PSS.DIGEST_LENGTH,
            ),
            utils.Prehashed(hashes.SHA256()),
        )
    except InvalidSignature:
        return False
    return True


def _verify_ed25519(key: ed25519.Ed25519PublicKey, signature: bytes, message: bytes) -> bool:
    """Verify Ed25519 signature of the message.

    :param key: Ed25519 public key.
    :param signature: Raw 64-byte signature.
    :param message: Signed message.
    :return: True if the signature is valid, False otherwise.
    """
    if len(signature) != ED25519_SIGNATURE_SIZE:
        logger.debug(f"Ed25519 signature length {len(signature)} is invalid")
        return False
    try:
        key.verify(signature, message)
    except InvalidSignature:
        return False
    return True


_VERIFIERS: dict[KeyType, Callable[[Any, bytes, bytes], bool]] = {
    KeyType.RSA: _verify_rsa_pss,
    KeyType.ED25519: _verify_ed25519,
}


def verify(
    public_key: PublicKey,
    signature: Union[Signature, str, bytes],
    message: Union[bytes, str],
) -> bool:
    """Verify signature of the message.

    The key type selects the scheme: RSA keys verify RSASSA-PSS with SHA-256,
    MGF1-SHA256 and a salt of digest length, Ed25519 keys verify PureEdDSA over the
    message itself. A textual signature is decoded from hexadecimal or base64,
    whichever gives the signature size of the key.

    :param public_key: Key the signature is checked against.
    :param signature: Signature object, or its hexadecimal or base64 text.
    :param message: Signed message; text is taken as its UTF-8 encoding.
    :raises UnsupportedAlgorithm: Key type is not supported.
    :raises MalformedKey: Key material is not a valid key of its declared type.
    :return: True if the signature is valid, False otherwise.
    """
    verifier = _VERIFIERS.get(public_key.key_type)
    if verifier is None:
        raise UnsupportedAlgorithm(f"Unsupported key type: {public_key.key_type}")
    key = public_key.load_key_object()
    if isinstance(message, str):
        message = message.encode("utf-8")

    if isinstance(signature, Signature):
        if signature.method != _KEY_TYPE_METHODS[public_key.key_type]:
            logger.debug(
                f"Signature method {signature.method.label} doesn't match "
                f"{public_key.key_type.label} key"
            )
            return False
        raw_signature = signature.raw_bytes
    else:
        try:
            raw_signature = decode_hex_or_base64(signature, public_key.signature_size)
        except OTATrustValueError as exc:
            logger.debug(f"Cannot decode signature: {exc.description}")
            return False

    if not verifier(key, raw_signature, bytes(message)):
        logger.debug(f"Signature verification failed for key {public_key.key_id}")
        return False
    return True


def sign(private_key: PrivateKey, message: Union[bytes, str]) -> Signature:
    """Sign the message with the scheme ``verify`` checks for the key type.

    :param private_key: Signing key.
    :param message: Message to sign; text is taken as its UTF-8 encoding.
    :return: Signature carrying the method and the key identifier.
    """
    if isinstance(message, str):
        message = message.encode("utf-8")
    return Signature(
        _KEY_TYPE_METHODS[private_key.key_type],
        private_key.sign(message),
        private_key.get_public_key().key_id,
    )
