#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2020-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause
"""OTATrust cryptographic key values.

Keys are tagged values over a closed algorithm set (RSA, Ed25519). A public key is
reduced to canonical key material when constructed, so every textual encoding of
the same key yields the same key identifier.
"""

from typing import Any, Callable, Optional, Union

from cryptography.exceptions import UnsupportedAlgorithm as CryptoUnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ed25519, padding, rsa, utils
from cryptography.hazmat.primitives.serialization import (
    BestAvailableEncryption,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
    load_der_private_key,
    load_der_public_key,
    load_pem_private_key,
    load_pem_public_key,
)
from typing_extensions import Self

from otatrust.crypto.crypto_types import OTAEncoding
from otatrust.crypto.exceptions import MalformedKey, UnsupportedAlgorithm
from otatrust.crypto.hash import digest
from otatrust.crypto.utils import decode_hex_or_base64
from otatrust.exceptions import OTATrustKeyError, OTATrustValueError
from otatrust.utils.abstract import BaseClass
from otatrust.utils.misc import load_binary
from otatrust.utils.ota_enum import OTAEnum

ED25519_KEY_SIZE = 32
ED25519_SIGNATURE_SIZE = 64

PublicKeyObject = Union[rsa.RSAPublicKey, ed25519.Ed25519PublicKey]
PrivateKeyObject = Union[rsa.RSAPrivateKey, ed25519.Ed25519PrivateKey]


class KeyType(OTAEnum):
    """Algorithm tag of a key."""

    RSA = (0, "RSA", "RSA, verified with PSS padding and SHA-256")
    ED25519 = (1, "ED25519", "EdDSA over Curve25519")

    @classmethod
    def get(cls, key_type: Union["KeyType", str]) -> "KeyType":
        """Get key type from its name.

        Names are case-insensitive; the sized RSA names used in client
        configuration (RSA2048, RSA3072, RSA4096) all map to RSA.

        :param key_type: Key type member or its name.
        :raises UnsupportedAlgorithm: Key type is not supported.
        :return: Key type member.
        """
        if isinstance(key_type, KeyType):
            return key_type
        if not isinstance(key_type, str):
            raise UnsupportedAlgorithm(f"Unsupported key type: {key_type!r}")
        name = key_type.strip().upper()
        if name in ("RSA2048", "RSA3072", "RSA4096"):
            name = "RSA"
        try:
            return cls.from_label(name)
        except OTATrustKeyError as exc:
            raise UnsupportedAlgorithm(f"Unsupported key type: {key_type}") from exc


def _load_public_key_object(data: bytes) -> Any:
    """Load PEM or DER public key of any type known to cryptography.

    :param data: PEM or DER key data.
    :raises MalformedKey: The data is not a public key.
    :return: Public key object.
    """
    try:
        if OTAEncoding.get_file_encodings(data) == OTAEncoding.PEM:
            return load_pem_public_key(data)
        return load_der_public_key(data)
    except (ValueError, CryptoUnsupportedAlgorithm) as exc:
        raise MalformedKey(f"Cannot load public key: {exc}") from exc


def _load_rsa_public_key(data: bytes) -> rsa.RSAPublicKey:
    """Load RSA public key from PEM (SubjectPublicKeyInfo or PKCS#1) or DER.

    :param data: Key data.
    :raises MalformedKey: The data is not an RSA public key.
    :return: RSA public key object.
    """
    key = _load_public_key_object(data)
    if not isinstance(key, rsa.RSAPublicKey):
        raise MalformedKey(f"Key is not an RSA public key: {type(key).__name__}")
    return key


def _load_ed25519_public_key(data: bytes) -> ed25519.Ed25519PublicKey:
    """Load Ed25519 public key.

    Accepted forms are the bare 32-byte point (binary, hex or base64 text) and
    PEM/DER SubjectPublicKeyInfo.

    :param data: Key data.
    :raises MalformedKey: The data is not an Ed25519 public key.
    :return: Ed25519 public key object.
    """
    if OTAEncoding.get_file_encodings(data) == OTAEncoding.PEM:
        key = _load_public_key_object(data)
    else:
        try:
            raw = decode_hex_or_base64(data, expected_size=ED25519_KEY_SIZE)
        except OTATrustValueError:
            raw = data
        if len(raw) == ED25519_KEY_SIZE:
            try:
                key = ed25519.Ed25519PublicKey.from_public_bytes(raw)
            except ValueError as exc:
                raise MalformedKey(f"Invalid Ed25519 public key: {exc}") from exc
        else:
            key = _load_public_key_object(data)
    if not isinstance(key, ed25519.Ed25519PublicKey):
        raise MalformedKey(f"Key is not an Ed25519 public key: {type(key).__name__}")
    return key


def _export_canonical(key: PublicKeyObject) -> bytes:
    """Export canonical key material.

    :param key: Public key object.
    :return: DER SubjectPublicKeyInfo for RSA, the raw point for Ed25519.
    """
    if isinstance(key, ed25519.Ed25519PublicKey):
        return key.public_bytes(
            OTAEncoding.get_cryptography_encodings(OTAEncoding.RAW), PublicFormat.Raw
        )
    return key.public_bytes(
        OTAEncoding.get_cryptography_encodings(OTAEncoding.DER), PublicFormat.SubjectPublicKeyInfo
    )


_PUBLIC_KEY_LOADERS: dict[KeyType, Callable[[bytes], PublicKeyObject]] = {
    KeyType.RSA: _load_rsa_public_key,
    KeyType.ED25519: _load_ed25519_public_key,
}


class PublicKey(BaseClass):
    """OTATrust public key value.

    Immutable after construction. The verifier borrows the key for a single
    call and never stores it.
    """

    def __init__(self, key_text: Union[str, bytes], key_type: Union[KeyType, str]) -> None:
        """Create public key from its textual or binary encoding.

        :param key_text: PEM/DER key, or hex/base64 of the raw point for Ed25519.
        :param key_type: Declared algorithm of the key.
        :raises UnsupportedAlgorithm: Key type is not supported.
        :raises MalformedKey: Key text is not a valid key of the declared type.
        """
        key_type = KeyType.get(key_type)
        data = key_text.encode("utf-8") if isinstance(key_text, str) else bytes(key_text)
        key = _PUBLIC_KEY_LOADERS[key_type](data)
        self._key_type = key_type
        self._key_material = _export_canonical(key)

    @property
    def key_type(self) -> KeyType:
        """Algorithm of the key."""
        return self._key_type

    @property
    def key_material(self) -> bytes:
        """Canonical key material."""
        return self._key_material

    @property
    def key_id(self) -> str:
        """Key fingerprint: hex digest of the canonical key material."""
        return digest(self._key_material).hex()

    @property
    def value(self) -> str:
        """Textual form of the key used in metadata: PEM for RSA, hex for Ed25519."""
        if self._key_type == KeyType.ED25519:
            return self._key_material.hex()
        return self.export(OTAEncoding.PEM).decode("ascii")

    @property
    def signature_size(self) -> int:
        """Size of a signature made by this key in bytes."""
        key = self.load_key_object()
        if isinstance(key, rsa.RSAPublicKey):
            return (key.key_size + 7) // 8
        return ED25519_SIGNATURE_SIZE

    def load_key_object(self) -> PublicKeyObject:
        """Load cryptography key object from the canonical key material.

        :raises UnsupportedAlgorithm: Key type is not supported.
        :raises MalformedKey: Key material is not a valid key of the declared type.
        :return: Cryptography public key object.
        """
        loader = _PUBLIC_KEY_LOADERS.get(self._key_type)
        if loader is None:
            raise UnsupportedAlgorithm(f"Unsupported key type: {self._key_type}")
        return loader(self._key_material)

    def export(self, encoding: OTAEncoding = OTAEncoding.RAW) -> bytes:
        """Export key into bytes in requested encoding.

        :param encoding: RAW for canonical key material, or PEM/DER SubjectPublicKeyInfo.
        :return: Encoded key.
        """
        if encoding == OTAEncoding.RAW:
            return self._key_material
        return self.load_key_object().public_bytes(
            OTAEncoding.get_cryptography_encodings(encoding), PublicFormat.SubjectPublicKeyInfo
        )

    @classmethod
    def parse(cls, data: bytes, key_type: Optional[Union[KeyType, str]] = None) -> Self:
        """Parse public key, detecting its type when not given.

        :param data: PEM or DER key data.
        :param key_type: Declared algorithm, detected from the key structure if omitted.
        :raises MalformedKey: Data is not a supported public key.
        :return: Public key value.
        """
        if key_type is None:
            key = _load_public_key_object(data)
            if isinstance(key, rsa.RSAPublicKey):
                key_type = KeyType.RSA
            elif isinstance(key, ed25519.Ed25519PublicKey):
                key_type = KeyType.ED25519
            else:
                raise MalformedKey(f"Unsupported public key: {type(key).__name__}")
        return cls(data, key_type)

    @classmethod
    def load(cls, file_path: str, key_type: Optional[Union[KeyType, str]] = None) -> Self:
        """Load the public key from the given file.

        :param file_path: Path to the file where the key is stored.
        :param key_type: Declared algorithm, detected from the key structure if omitted.
        :return: Public key value.
        """
        return cls.parse(load_binary(file_path), key_type)

    def to_dict(self) -> dict[str, Any]:
        """Get key in the form used by update metadata.

        :return: Dictionary with ``keytype`` and ``keyval``.
        """
        return {"keytype": self._key_type.label, "keyval": {"public": self.value}}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create key from the form used by update metadata.

        :param data: Dictionary with ``keytype`` and ``keyval``.
        :raises MalformedKey: Dictionary misses the key fields.
        :return: Public key value.
        """
        try:
            return cls(data["keyval"]["public"], data["keytype"])
        except (KeyError, TypeError) as exc:
            raise MalformedKey(f"Invalid key description: {exc}") from exc

    def __eq__(self, obj: Any) -> bool:
        """Keys are equal when their type and canonical material match."""
        return (
            isinstance(obj, PublicKey)
            and self._key_type == obj.key_type
            and self._key_material == obj.key_material
        )

    def __hash__(self) -> int:
        return hash((self._key_type.label, self._key_material))

    def __repr__(self) -> str:
        return f"{self._key_type.label} Public Key"

    def __str__(self) -> str:
        return f"{self._key_type.label} Public key: {self.key_id}"


class PrivateKey(BaseClass):
    """OTATrust private key wrapper.

    Used by callers that need to sign, e.g. to wrap a private key extracted from
    a credential bundle. Keys are never generated here.
    """

    def __init__(self, key: PrivateKeyObject) -> None:
        """Create private key wrapper.

        :param key: RSA or Ed25519 private key object.
        :raises UnsupportedAlgorithm: Key algorithm is not supported.
        """
        if isinstance(key, rsa.RSAPrivateKey):
            self._key_type = KeyType.RSA
        elif isinstance(key, ed25519.Ed25519PrivateKey):
            self._key_type = KeyType.ED25519
        else:
            raise UnsupportedAlgorithm(f"Unsupported private key: {type(key).__name__}")
        self.key = key

    @property
    def key_type(self) -> KeyType:
        """Algorithm of the key."""
        return self._key_type

    def get_public_key(self) -> PublicKey:
        """Get public key from the private key.

        :return: Public key value.
        """
        return PublicKey(_export_canonical(self.key.public_key()), self._key_type)

    def sign(self, data: bytes) -> bytes:
        """Sign data with the private key.

        RSA keys sign with PSS padding, MGF1 and a salt of digest length over the
        SHA-256 digest of the data; Ed25519 keys sign the data directly.

        :param data: Data to sign.
        :return: Raw signature.
        """
        if isinstance(self.key, rsa.RSAPrivateKey):
            return self.key.sign(
                digest(data),
                padding.PSS(
                    mgf=padding.MGF1(algorithm=hashes.SHA256()),
                    salt_length=padding.PSS.DIGEST_LENGTH,
                ),
                utils.Prehashed(hashes.SHA256()),
            )
        return self.key.sign(data)

    def export(
        self, password: Optional[str] = None, encoding: OTAEncoding = OTAEncoding.PEM
    ) -> bytes:
        """Export the private key as PKCS#8.

        :param password: Password to encrypt private key; None to store without password.
        :param encoding: PEM or DER, default is PEM.
        :return: Private key in bytes.
        """
        enc = (
            BestAvailableEncryption(password=password.encode("utf-8"))
            if password
            else NoEncryption()
        )
        return self.key.private_bytes(
            OTAEncoding.get_cryptography_encodings(encoding), PrivateFormat.PKCS8, enc
        )

    @classmethod
    def parse(cls, data: bytes, password: Optional[str] = None) -> Self:
        """Parse private key from PEM or DER data.

        :param data: Key data.
        :param password: Password of an encrypted key; None for unencrypted keys.
        :raises MalformedKey: Data cannot be loaded as a private key.
        :return: Private key wrapper.
        """
        if isinstance(data, str):
            data = data.encode("utf-8")
        load_function = {
            OTAEncoding.PEM: load_pem_private_key,
            OTAEncoding.DER: load_der_private_key,
        }[OTAEncoding.get_file_encodings(data)]
        try:
            key = load_function(data, password.encode("utf-8") if password else None)
        except (ValueError, TypeError, CryptoUnsupportedAlgorithm) as exc:
            raise MalformedKey(f"Cannot load private key: {exc}") from exc
        return cls(key)  # type: ignore[arg-type]

    @classmethod
    def load(cls, file_path: str, password: Optional[str] = None) -> Self:
        """Load the private key from the given file.

        :param file_path: Path to the file where the key is stored.
        :param password: Password of an encrypted key; None for unencrypted keys.
        :return: Private key wrapper.
        """
        return cls.parse(load_binary(file_path), password)

    def __eq__(self, obj: Any) -> bool:
        """Private keys are equal when their public keys are equal."""
        return isinstance(obj, PrivateKey) and self.get_public_key() == obj.get_public_key()

    def __hash__(self) -> int:
        return hash(self.get_public_key())

    def __repr__(self) -> str:
        return f"{self._key_type.label} Private Key"

    def __str__(self) -> str:
        return f"{self._key_type.label} Private key for {self.get_public_key().key_id}"
