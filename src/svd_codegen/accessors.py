#
# Copyright (c) 2023 Nordic Semiconductor ASA
#
# SPDX-License-Identifier: Apache-2.0
#

"""
Generation of register wrapper types and their field accessors.
"""

from __future__ import annotations

from typing import Iterator, List, Optional

from .errors import BitRangeError, UnresolvableSizeError
from .fragments import (
    AccessorBlock,
    Getter,
    IntType,
    Method,
    RegisterStruct,
    ResetConstructor,
    Setter,
    uint_type,
)
from .model import Access, Defaults, Field, Register
from .options import Options
from .util import respace, to_pascal_case, to_snake_case


def bits_type(register: Register, defaults: Defaults) -> IntType:
    """
    Get the integer type holding the bits of a register.

    :raises UnresolvableSizeError: If neither the register nor the defaults give a size.
    :raises UnsupportedWidthError: If the size is outside 1..32.
    """
    size = register.resolved_size(defaults)
    if size is None:
        raise UnresolvableSizeError(register)
    return uint_type(size, register)


def check_bit_ranges(register: Register, size: int) -> None:
    """Raise BitRangeError for the first field of the register that doesn't fit in size bits."""
    for field in register.fields or ():
        if field.bit_range.offset < 0 or field.bit_range.msb >= size:
            raise BitRangeError(field, size)


def field_doc(field: Field) -> str:
    """Describe the bits covered by a field, followed by its description if it has one."""
    bit_range = field.bit_range
    if bit_range.width == 1:
        bits = f"Bit {bit_range.offset}"
    else:
        bits = f"Bits {bit_range.offset}:{bit_range.msb}"

    if field.description:
        return f"{bits} - {respace(field.description)}"
    return bits


def getter_name(field: Field, options: Options) -> str:
    name = to_snake_case(field.name)
    if name in options.reserved_identifiers:
        name += options.reserved_suffix
    return name


def setter_name(field: Field) -> str:
    return f"set_{to_snake_case(field.name)}"


def _value_type(field: Field) -> Optional[IntType]:
    # Single bits are accessed as booleans
    if field.bit_range.width == 1:
        return None
    return uint_type(field.bit_range.width, field)


def gen_register(register: Register, defaults: Defaults) -> List[RegisterStruct]:
    """Generate the wrapper type of a register."""
    return [
        RegisterStruct(
            name=to_pascal_case(register.name),
            bits_type=bits_type(register, defaults),
        )
    ]


def _readable_fields(register: Register) -> Iterator[Field]:
    for field in register.fields or ():
        if field.access != Access.WRITE_ONLY:
            yield field


def _writable_fields(register: Register) -> Iterator[Field]:
    for field in register.fields or ():
        if field.access != Access.READ_ONLY:
            yield field


def gen_register_read_methods(
    register: Register, defaults: Defaults, options: Optional[Options] = None
) -> List[AccessorBlock]:
    """Generate getters for all fields of the register that are not write-only."""
    options = options if options is not None else Options()
    reg_bits = bits_type(register, defaults)

    methods: List[Method] = []
    for field in _readable_fields(register):
        methods.append(
            Getter(
                name=getter_name(field, options),
                offset=field.bit_range.offset,
                width=field.bit_range.width,
                bits_type=reg_bits,
                value_type=_value_type(field),
                doc=field_doc(field),
            )
        )

    return [AccessorBlock(type_name=to_pascal_case(register.name), methods=tuple(methods))]


def gen_register_write_methods(register: Register, defaults: Defaults) -> List[AccessorBlock]:
    """
    Generate the reset value constructor of the register, if it has a reset value, and setters
    for all fields of the register that are not read-only. The reset value is truncated to the
    register width.
    """
    reg_bits = bits_type(register, defaults)

    methods: List[Method] = []

    reset_value = register.resolved_reset_value(defaults)
    if reset_value is not None:
        # Device level reset values are given for 32 bits and also apply to narrower registers
        methods.append(ResetConstructor(value=reset_value & reg_bits.max))

    for field in _writable_fields(register):
        methods.append(
            Setter(
                name=setter_name(field),
                offset=field.bit_range.offset,
                width=field.bit_range.width,
                bits_type=reg_bits,
                value_type=_value_type(field),
                doc=field_doc(field),
            )
        )

    return [AccessorBlock(type_name=to_pascal_case(register.name), methods=tuple(methods))]
