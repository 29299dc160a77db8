#
# Copyright (c) 2023 Nordic Semiconductor ASA
#
# SPDX-License-Identifier: Apache-2.0
#

"""
Small helpers shared by the model, the parser and the code generator.
"""

from __future__ import annotations

import enum
import re
from typing import List


class CaseInsensitiveStrEnum(enum.Enum):
    """String enum class that can be constructed from a case-insensitive string."""

    @classmethod
    def from_str(cls, value: str) -> CaseInsensitiveStrEnum:
        """Construct the enum from a case-insensitive string."""
        value_lower = value.lower()
        for member in cls:
            if member.value.lower() == value_lower:
                return member
        raise ValueError(
            f"Class {cls.__qualname__} has no member corresponding to '{value}'"
        )

    def __str__(self) -> str:
        return self.value


def to_int(number: str) -> int:
    """
    Convert a string representation of an integer following the SVD format to its corresponding
    integer representation.

    :param number: String representation of the integer.

    :return: Decoded integer.
    """
    number = number.strip()

    if number.lower().startswith("0x"):
        return int(number, base=16)

    if number.startswith("#"):
        return int(number[1:], base=2)

    return int(number)


def respace(text: str) -> str:
    """Collapse all runs of whitespace into single spaces."""
    return " ".join(text.split())


_SEPARATOR_RE = re.compile(r"[^A-Za-z0-9]+")

# Word boundaries inside a mixed case part: "fooBar", "cr1En", "FOOBar"
_CAMEL_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def _words(name: str) -> List[str]:
    words: List[str] = []
    for part in _SEPARATOR_RE.split(name):
        # All caps names such as "I2C1" or "DMA2D" are a single word
        if part.isupper() or part.islower():
            words.append(part)
        else:
            words.extend(_CAMEL_RE.split(part))
    return [word.lower() for word in words if word]


def to_snake_case(name: str) -> str:
    """
    Convert an SVD identifier to snake_case, e.g. "GPIOA" -> "gpioa", "I2C1_CR" -> "i2c1_cr".
    Words are separated by non-alphanumeric characters and by case changes in mixed case names.
    """
    return "_".join(_words(name))


def to_pascal_case(name: str) -> str:
    """Convert an SVD identifier to PascalCase, e.g. "GPIOA" -> "Gpioa", "CR1_EN" -> "Cr1En"."""
    return "".join(word.capitalize() for word in _words(name))
