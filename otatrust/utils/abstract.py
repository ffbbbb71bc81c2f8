#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2019-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""OTATrust abstract base classes for value objects.

Key and signature values share a common shape: they compare by content, render
themselves for logs, and serialize to and from a canonical byte form.
"""

from abc import ABC, abstractmethod
from typing import Any

from typing_extensions import Self


########################################################################################################################
# Abstract Class for Data Classes
########################################################################################################################
class RawBaseClass(ABC):
    """OTATrust abstract base class for common object operations.

    Provides standardized equality comparison and requires string
    representation methods in derived classes.
    """

    def __eq__(self, obj: Any) -> bool:
        """Check object equality.

        Objects are equal when they are instances of the same class and have
        identical attributes.

        :param obj: Object to compare with this instance.
        :return: True if objects are equal, False otherwise.
        """
        return isinstance(obj, self.__class__) and vars(obj) == vars(self)

    def __ne__(self, obj: Any) -> bool:
        """Check if this object is not equal to another object.

        :param obj: Object to compare with this instance.
        :return: True if objects are not equal, False if they are equal.
        """
        return not self.__eq__(obj)

    @abstractmethod
    def __repr__(self) -> str:
        """Get string representation of the object.

        :return: String representation of the object.
        """

    @abstractmethod
    def __str__(self) -> str:
        """Get string representation of the object.

        :return: Object description in string format.
        """


class BaseClass(RawBaseClass):
    """OTATrust abstract base class for serializable value objects."""

    @abstractmethod
    def export(self) -> bytes:
        """Export object into bytes array.

        :return: Object representation as bytes.
        """

    @classmethod
    @abstractmethod
    def parse(cls, data: bytes) -> Self:
        """Parse object from bytes array.

        :param data: Byte array containing the serialized object data.
        :return: Parsed object instance.
        """
