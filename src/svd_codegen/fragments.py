#
# Copyright (c) 2023 Nordic Semiconductor ASA
#
# SPDX-License-Identifier: Apache-2.0
#

"""
Structured output of the code generator.

Each class in this module describes one declaration in the generated code without committing
to the syntax of any particular language. A printer (see the printer module) turns the fragments
into source text. Accessor fragments additionally know how to apply their body to a register
value, which is what the generated code does at run time.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union

from .errors import UnsupportedWidthError
from .model import Access


@enum.unique
class IntType(enum.Enum):
    """Unsigned integer types available to the generated code."""

    U8 = 8
    U16 = 16
    U32 = 32

    @property
    def bits(self) -> int:
        return self.value

    @property
    def max(self) -> int:
        """Largest value representable by the type."""
        return (1 << self.value) - 1


def uint_type(width: int, element: Any = None) -> IntType:
    """
    Get the smallest unsigned integer type that can hold the given number of bits.

    :param width: Bit width.
    :param element: Model element the width belongs to, used in the error message.

    :raises UnsupportedWidthError: If the width is outside 1..32.

    :return: Integer type.
    """
    if 1 <= width <= 8:
        return IntType.U8
    if 9 <= width <= 16:
        return IntType.U16
    if 17 <= width <= 32:
        return IntType.U32
    raise UnsupportedWidthError(element if element is not None else "bit width", width)


@dataclass(frozen=True)
class TypeAlias:
    """Alias binding a peripheral name to the type generated for another peripheral."""

    name: str

    # Namespace (module) the target type lives in.
    module: str

    target: str


@dataclass(frozen=True)
class Padding:
    """Reserved bytes between two registers."""

    name: str
    size: int


@dataclass(frozen=True)
class RegisterSlot:
    """Peripheral struct member holding a register."""

    name: str
    type_name: str
    access: Access
    doc: str


StructMember = Union[Padding, RegisterSlot]


@dataclass(frozen=True)
class PeripheralStruct:
    """Memory layout of a peripheral: registers and padding in address order."""

    name: str
    members: Tuple[StructMember, ...]
    doc: Optional[str] = None


@dataclass(frozen=True)
class RegisterStruct:
    """Wrapper type holding the raw bits of a register."""

    name: str
    bits_type: IntType


@dataclass(frozen=True)
class ResetConstructor:
    """Constructor returning a register value equal to its reset value."""

    value: int
    name: str = "reset_value"
    doc: str = "Reset value"


@dataclass(frozen=True)
class Getter:
    """Read accessor for a field."""

    name: str
    offset: int
    width: int

    # Type of the register bits.
    bits_type: IntType

    # Type returned by the accessor, None for single bit fields which are read as booleans.
    value_type: Optional[IntType]

    doc: str

    @property
    def mask(self) -> int:
        return (1 << self.width) - 1

    def read(self, bits: int) -> Union[bool, int]:
        """Extract the field from a register value."""
        if self.value_type is None:
            return (bits & (1 << self.offset)) != 0
        return (bits >> self.offset) & self.mask


@dataclass(frozen=True)
class Setter:
    """Write accessor for a field. Bits outside the field are preserved."""

    name: str
    offset: int
    width: int
    bits_type: IntType

    # Type of the value argument, None for single bit fields which are written as booleans.
    value_type: Optional[IntType]

    doc: str

    @property
    def mask(self) -> int:
        return (1 << self.width) - 1

    def write(self, bits: int, value: Union[bool, int]) -> int:
        """Return the register value with the field replaced by the given value."""
        if self.value_type is None:
            if value:
                bits |= 1 << self.offset
            else:
                bits &= ~(1 << self.offset)
        else:
            bits &= ~(self.mask << self.offset)
            bits |= (value & self.mask) << self.offset
        return bits & self.bits_type.max


Method = Union[ResetConstructor, Getter, Setter]


@dataclass(frozen=True)
class AccessorBlock:
    """Group of methods attached to a register wrapper type."""

    type_name: str
    methods: Tuple[Method, ...] = ()


Fragment = Union[TypeAlias, PeripheralStruct, RegisterStruct, AccessorBlock]
