#
# Copyright (c) 2023 Nordic Semiconductor ASA
#
# SPDX-License-Identifier: Apache-2.0
#

"""
Peripheral memory layout and the top level code generation entry point.

Registers are placed one after the other in address order. Gaps between registers are filled
with reserved padding members so that every register member of the generated peripheral struct
lands on the address offset given in the SVD model.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from typing_extensions import Self

from .access import resolve_access
from .accessors import (
    check_bit_ranges,
    gen_register,
    gen_register_read_methods,
    gen_register_write_methods,
)
from .errors import UnresolvableSizeError, UnsupportedAccessError
from .fragments import (
    Fragment,
    Padding,
    PeripheralStruct,
    RegisterSlot,
    StructMember,
    TypeAlias,
)
from .model import Access, Defaults, Peripheral, Register
from .options import Options
from .util import respace, to_pascal_case, to_snake_case

log = logging.getLogger(__name__)

# Register access modes that can be expressed by a peripheral struct member
_SLOT_ACCESS = (Access.READ_ONLY, Access.WRITE_ONLY, Access.READ_WRITE)


@dataclass(frozen=True)
class LayoutContext:
    """State of the layout of a single peripheral. Every step returns a new context."""

    # Byte offset just past the last register placed so far.
    offset: int = 0

    # Number of padding members emitted so far.
    num_reserved: int = 0

    members: Tuple[StructMember, ...] = ()

    # Registers that were placed, in placement order.
    registers: Tuple[Register, ...] = ()

    # Registers that were left out because they overlap a previously placed register.
    skipped: Tuple[Register, ...] = ()

    def pad(self, size: int) -> Self:
        """Append a padding member of the given number of bytes."""
        padding = Padding(name=f"_reserved{self.num_reserved}", size=size)
        return replace(
            self,
            num_reserved=self.num_reserved + 1,
            members=self.members + (padding,),
        )

    def place(self, register: Register, slot: RegisterSlot, end: int) -> Self:
        """Append a register member that ends at the given byte offset."""
        return replace(
            self,
            offset=end,
            members=self.members + (slot,),
            registers=self.registers + (register,),
        )

    def skip(self, register: Register) -> Self:
        return replace(self, skipped=self.skipped + (register,))


def slot_doc(register: Register) -> str:
    doc = f"0x{register.address_offset:02x}"
    if register.description:
        doc += f" - {respace(register.description)}"
    return doc


def layout_register(
    context: LayoutContext, register: Register, defaults: Defaults, options: Options
) -> LayoutContext:
    """
    Place a register after the registers already in the context.

    An overlapping register is recorded as skipped and leaves the layout unchanged. Any other
    problem with the register is fatal.
    """
    pad = register.address_offset - context.offset
    if pad < 0:
        log.warning(
            "%s overlaps with another register at offset 0x%x. Ignoring.",
            register.name,
            register.address_offset,
        )
        return context.skip(register)

    if pad > 0:
        context = context.pad(pad)

    access = resolve_access(register, defaults)
    if access not in _SLOT_ACCESS:
        raise UnsupportedAccessError(register, access)

    size = register.resolved_size(defaults)
    if size is None:
        raise UnresolvableSizeError(register)

    if options.strict_bit_ranges:
        check_bit_ranges(register, size)

    slot = RegisterSlot(
        name=to_snake_case(register.name),
        type_name=to_pascal_case(register.name),
        access=access,
        doc=slot_doc(register),
    )
    return context.place(register, slot, register.address_offset + register.byte_size(defaults))


def layout_peripheral(
    peripheral: Peripheral, defaults: Defaults, options: Optional[Options] = None
) -> LayoutContext:
    """
    Lay out all registers of a peripheral.

    Unless options.sort_registers is set, the registers of the peripheral must be in
    non-decreasing address offset order. Registers that appear after a register with a higher
    address offset are treated as overlapping.
    """
    options = options if options is not None else Options()

    registers = peripheral.registers
    if options.sort_registers:
        registers = tuple(sorted(registers, key=lambda r: r.address_offset))

    context = LayoutContext()
    for register in registers:
        context = layout_register(context, register, defaults, options)

    return context


def gen_derived_alias(peripheral: Peripheral) -> TypeAlias:
    """Generate the alias of a derived peripheral to the type of the peripheral it derives from."""
    if peripheral.derived_from is None:
        raise ValueError(f"{peripheral.name} is not a derived peripheral")

    return TypeAlias(
        name=to_pascal_case(peripheral.name),
        module=to_snake_case(peripheral.derived_from),
        target=to_pascal_case(peripheral.derived_from),
    )


def gen_peripheral(
    peripheral: Peripheral, defaults: Defaults, options: Optional[Options] = None
) -> List[Fragment]:
    """
    Generate code for a peripheral.

    A derived peripheral becomes a single type alias. Otherwise the output consists of the
    peripheral struct followed by, for each register that was placed in the struct, the register
    wrapper type, its read accessors and its write accessors.

    :param peripheral: Peripheral to generate code for.
    :param defaults: Register properties used when a register doesn't specify them.
    :param options: Generation options.

    :raises SvdDefinitionError: If code can't be generated for one of the registers.

    :return: Generated fragments, in output order.
    """
    if peripheral.is_derived:
        log.debug("%s is derived from %s", peripheral.name, peripheral.derived_from)
        return [gen_derived_alias(peripheral)]

    options = options if options is not None else Options()
    context = layout_peripheral(peripheral, defaults, options)

    log.debug(
        "Laid out %s: %d registers, %d reserved, %d skipped",
        peripheral.name,
        len(context.registers),
        context.num_reserved,
        len(context.skipped),
    )

    items: List[Fragment] = [
        PeripheralStruct(
            name=to_pascal_case(peripheral.name),
            members=context.members,
            doc=respace(peripheral.description) if peripheral.description else None,
        )
    ]

    for register in context.registers:
        items.extend(gen_register(register, defaults))
        items.extend(gen_register_read_methods(register, defaults, options))
        items.extend(gen_register_write_methods(register, defaults))

    return items
