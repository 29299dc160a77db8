#
# Copyright (c) 2023 Nordic Semiconductor ASA
#
# SPDX-License-Identifier: Apache-2.0
#

"""
Read-only Python representation of the parts of a SVD device that code is generated from.
Instances are produced by the parser (or built directly by callers) and are never mutated by
the code generator.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple

from .util import CaseInsensitiveStrEnum


@enum.unique
class Access(CaseInsensitiveStrEnum):
    """Access rights for a given register or field."""

    # Read access is permitted. Write operations have an undefined result.
    READ_ONLY = "read-only"
    # Write access is permitted. Read operations have an undefined result.
    WRITE_ONLY = "write-only"
    # Read and write accesses are permitted.
    READ_WRITE = "read-write"
    # Only the first write after reset has an effect. Read operations have an undefined results.
    WRITE_ONCE = "writeOnce"
    # Only the first write after reset has an effect. Read access is permitted.
    READ_WRITE_ONCE = "read-writeOnce"


class BitRange(NamedTuple):
    """Bit range of a field."""

    # Bit offset of the field.
    offset: int

    # Bit width of the field.
    width: int

    @property
    def msb(self) -> int:
        """Most significant bit covered by the range (inclusive)."""
        return self.offset + self.width - 1


@dataclass(frozen=True)
class Defaults:
    """Device level register properties used when a register omits them."""

    # Size of registers in bits.
    size: Optional[int] = None

    # Reset value of registers.
    reset_value: Optional[int] = None

    # Access rights of registers.
    access: Optional[Access] = None


@dataclass(frozen=True)
class Field:
    """Named bit range within a register."""

    name: str
    bit_range: BitRange
    description: Optional[str] = None
    access: Optional[Access] = None

    def __str__(self) -> str:
        return f"field {self.name}"


@dataclass(frozen=True)
class Register:
    """Fixed width register located at an offset from its peripheral base address."""

    name: str

    # Offset in bytes relative to the peripheral base address.
    address_offset: int

    description: Optional[str] = None

    # Size in bits. Falls back to Defaults.size.
    size: Optional[int] = None

    access: Optional[Access] = None
    reset_value: Optional[int] = None

    # None when the register has no <fields> element at all, as opposed to an empty field list.
    fields: Optional[Tuple[Field, ...]] = None

    def resolved_size(self, defaults: Defaults) -> Optional[int]:
        """Size of the register in bits, or None if neither the register nor the defaults set it."""
        return self.size if self.size is not None else defaults.size

    def resolved_reset_value(self, defaults: Defaults) -> Optional[int]:
        return self.reset_value if self.reset_value is not None else defaults.reset_value

    def byte_size(self, defaults: Defaults) -> Optional[int]:
        """Number of bytes occupied by the register."""
        size = self.resolved_size(defaults)
        if size is None:
            return None
        return math.ceil(size / 8)

    def __str__(self) -> str:
        return f"register {self.name} @ 0x{self.address_offset:x}"


@dataclass(frozen=True)
class Peripheral:
    """Named hardware unit with a base address and a set of registers."""

    name: str
    base_address: int
    description: Optional[str] = None

    # Name of the peripheral this one is an alias of.
    derived_from: Optional[str] = None

    registers: Tuple[Register, ...] = ()

    @property
    def is_derived(self) -> bool:
        """Return True if the peripheral is derived from another peripheral."""
        return self.derived_from is not None

    def __str__(self) -> str:
        return f"peripheral {self.name} @ 0x{self.base_address:08x}"


@dataclass(frozen=True)
class Device:
    """Parsed device: its register defaults and peripherals in document order."""

    name: str
    defaults: Defaults = Defaults()
    peripherals: Tuple[Peripheral, ...] = ()

    def find_peripheral(self, pattern: str) -> Optional[Peripheral]:
        """Return the first peripheral whose name contains the pattern, ignoring case."""
        pattern = pattern.lower()
        for peripheral in self.peripherals:
            if pattern in peripheral.name.lower():
                return peripheral
        return None
