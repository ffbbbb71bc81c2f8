#!/usr/bin/env python
# -*- coding: UTF-8 -*-
# Copyright 2020-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""OTATrust miscellaneous file helpers.

Thin wrappers used by the file sinks, the provisioning bootstrap and the command
line tools to read and write caller-supplied files.
"""

import logging
import os
from typing import Union

from otatrust.exceptions import OTATrustIOError

logger = logging.getLogger(__name__)


def load_binary(path: str) -> bytes:
    """Load binary file into bytes.

    :param path: Path to the binary file to load.
    :return: Content of the binary file as bytes.
    """
    data = load_file(path, mode="rb")
    assert isinstance(data, bytes)
    return data


def load_text(path: str) -> str:
    """Load text file content into string.

    :param path: Path to the text file to load.
    :return: Content of the text file as string.
    """
    text = load_file(path, mode="r")
    assert isinstance(text, str)
    return text


def load_file(path: str, mode: str = "r") -> Union[str, bytes]:
    """Load file content from specified path.

    :param path: Path to the file to be loaded.
    :param mode: File reading mode, 'r' for text or 'rb' for binary.
    :raises OTATrustIOError: The file does not exist or cannot be read.
    :return: File content as string (text mode) or bytes (binary mode).
    """
    logger.debug(f"Loading {'binary' if 'b' in mode else 'text'} file from {path}")
    encoding = None if "b" in mode else "utf-8"
    try:
        with open(path, mode, encoding=encoding) as f:
            return f.read()
    except OSError as exc:
        raise OTATrustIOError(f"Cannot read file '{path}': {exc}") from exc


def write_file(
    data: Union[str, bytes],
    path: str,
    mode: str = "w",
    encoding: str = "utf-8",
) -> int:
    """Write data to a file with automatic directory creation.

    :param data: Data to write to the file.
    :param path: Path to the target file.
    :param mode: File writing mode ('w' for text, 'wb' for binary), defaults to 'w'.
    :param encoding: Text encoding ('ascii', 'utf-8'), defaults to 'utf-8'.
    :return: Number of characters or bytes written to the file.
    """
    path = path.replace("\\", "/")
    folder = os.path.dirname(path)
    if folder and not os.path.exists(folder):
        os.makedirs(folder, exist_ok=True)

    logger.debug(f"Storing {'binary' if 'b' in mode else 'text'} file at {path}")
    with open(path, mode, encoding=None if "b" in mode else encoding) as f:
        return f.write(data)
