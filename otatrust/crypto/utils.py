#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2020-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""OTATrust helpers for textual encodings of binary cryptographic material."""

import base64
import binascii
import re
from typing import Optional, Union

from otatrust.exceptions import OTATrustValueError

_HEX_PATTERN = re.compile(r"[0-9a-fA-F]+")


def decode_hex_or_base64(text: Union[str, bytes], expected_size: Optional[int] = None) -> bytes:
    """Decode text that carries binary data as hexadecimal or base64.

    Whitespace (including PEM-style line breaks) is ignored. Some texts are valid in
    both alphabets; when ``expected_size`` is given, the decoding of that length
    wins, otherwise hexadecimal is preferred.

    :param text: Hexadecimal or base64 text.
    :param expected_size: Expected length of decoded data in bytes.
    :raises OTATrustValueError: Text is not hex nor base64, or has no decoding of expected size.
    :return: Decoded bytes.
    """
    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode("ascii")
        except UnicodeDecodeError as exc:
            raise OTATrustValueError("Encoded data must be ASCII text") from exc
    compact = "".join(text.split())

    candidates: list[bytes] = []
    if _HEX_PATTERN.fullmatch(compact) and len(compact) % 2 == 0:
        candidates.append(bytes.fromhex(compact))
    try:
        candidates.append(base64.b64decode(compact, validate=True))
    except (binascii.Error, ValueError):
        pass

    if not candidates:
        raise OTATrustValueError("Data is neither hexadecimal nor base64 encoded")
    if expected_size is None:
        return candidates[0]
    for candidate in candidates:
        if len(candidate) == expected_size:
            return candidate
    raise OTATrustValueError(
        f"Decoded data length {[len(c) for c in candidates]} doesn't match expected {expected_size}"
    )
