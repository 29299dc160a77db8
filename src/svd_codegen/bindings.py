#
# Copyright (c) 2023 Nordic Semiconductor ASA
#
# SPDX-License-Identifier: Apache-2.0
#

"""
lxml element classes for the parts of an SVD file that code is generated from.

Only the device, peripheral, register and field elements get their own class. Their properties
read the text of the child elements the generator needs, so the remaining elements are left to
the default objectify lookup.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple, Type, TypeVar

from lxml import objectify

from .errors import SvdDefinitionError
from .model import Access, BitRange
from .util import to_int

T = TypeVar("T")

# Element classes, registered with the parser by their TAG.
BINDINGS: List[Type[SvdElement]] = []


def binding(klass: Type[T]) -> Type[T]:
    """Class decorator that registers an element class with the parser."""
    BINDINGS.append(klass)
    return klass


class SvdElement(objectify.ObjectifiedElement):
    """Base class of the element classes, with typed access to child element text."""

    TAG: str

    def child_text(self, tag: str) -> Optional[str]:
        """Stripped text of the child element with the given tag, or None if there is none."""
        child = self.find(tag)
        if child is None or child.text is None:
            return None
        return child.text.strip()

    def required_text(self, tag: str) -> str:
        text = self.child_text(tag)
        if text is None:
            raise SvdDefinitionError(f"<{self.tag}>", f"missing required element <{tag}>")
        return text

    def child_value(self, tag: str, converter: Callable[[str], T]) -> Optional[T]:
        text = self.child_text(tag)
        if text is None:
            return None
        try:
            return converter(text)
        except ValueError as e:
            raise SvdDefinitionError(f"<{self.tag}>", f"invalid <{tag}> value '{text}'") from e

    def children(self, path: str) -> Iterator[objectify.ObjectifiedElement]:
        """Iterate over the elements matching a path relative to this element."""
        return self.iterfind(path)


@dataclass
class RegisterProperties:
    """Register properties that can be given at the device, peripheral or register level."""

    # Size of the register in bits.
    size: Optional[int]

    # Access rights of the register.
    access: Optional[Access]

    # Reset value of the register.
    reset_value: Optional[int]

    def inherit(self, base: RegisterProperties) -> RegisterProperties:
        """Fill in the properties missing here from a higher level set of properties."""
        return RegisterProperties(
            size=self.size if self.size is not None else base.size,
            access=self.access if self.access is not None else base.access,
            reset_value=self.reset_value if self.reset_value is not None else base.reset_value,
        )


class RegisterPropertiesGroup(SvdElement):
    """Element that can contain a SVD 'registerPropertiesGroup'."""

    @property
    def register_properties(self) -> RegisterProperties:
        """Register properties specified in the element itself."""
        return RegisterProperties(
            size=self.child_value("size", to_int),
            access=self.child_value("access", Access.from_str),
            reset_value=self.child_value("resetValue", to_int),
        )


@binding
class FieldElement(SvdElement):
    """SVD field element."""

    TAG = "field"

    @property
    def name(self) -> str:
        return self.required_text("name")

    @property
    def description(self) -> Optional[str]:
        return self.child_text("description")

    @property
    def access(self) -> Optional[Access]:
        return self.child_value("access", Access.from_str)

    @property
    def bit_range(self) -> BitRange:
        """
        Bit range of the field, given in one of the lsb/msb, offset/width or "[msb:lsb]" styles.
        A field without any of them covers a whole 32-bit register.
        """
        lsb = self.child_value("lsb", to_int)
        msb = self.child_value("msb", to_int)
        if lsb is not None and msb is not None:
            return BitRange(offset=lsb, width=msb - lsb + 1)

        offset = self.child_value("bitOffset", to_int)
        if offset is not None:
            width = self.child_value("bitWidth", to_int)
            return BitRange(offset=offset, width=width if width is not None else 32)

        pattern = self.child_text("bitRange")
        if pattern is not None:
            msb, lsb = self._parse_bit_range(pattern)
            return BitRange(offset=lsb, width=msb - lsb + 1)

        return BitRange(offset=0, width=32)

    def _parse_bit_range(self, pattern: str) -> Tuple[int, int]:
        if not (pattern.startswith("[") and pattern.endswith("]")) or ":" not in pattern:
            raise SvdDefinitionError(f"field {self.name}", f"invalid bit range '{pattern}'")
        msb, lsb = pattern[1:-1].split(":", 1)
        return to_int(msb), to_int(lsb)


@binding
class RegisterElement(RegisterPropertiesGroup):
    """SVD register element."""

    TAG = "register"

    @property
    def name(self) -> str:
        return self.required_text("name")

    @property
    def description(self) -> Optional[str]:
        return self.child_text("description")

    @property
    def offset(self) -> int:
        """Address offset of the register, relative to the peripheral base address."""
        return to_int(self.required_text("addressOffset"))

    @property
    def has_fields(self) -> bool:
        """True if the register has a <fields> element, even an empty one."""
        return self.find("fields") is not None

    @property
    def fields(self) -> Iterator[FieldElement]:
        return self.children("fields/field")


@binding
class PeripheralElement(RegisterPropertiesGroup):
    """SVD peripheral element."""

    TAG = "peripheral"

    @property
    def name(self) -> str:
        return self.required_text("name")

    @property
    def description(self) -> Optional[str]:
        return self.child_text("description")

    @property
    def base_address(self) -> int:
        return to_int(self.required_text("baseAddress"))

    @property
    def derived_from(self) -> Optional[str]:
        """Name of the peripheral this one is derived from, if any."""
        return self.get("derivedFrom")

    @property
    def registers(self) -> Iterator[RegisterElement]:
        """Iterator over the registers that are direct children of this peripheral."""
        return self.children("registers/register")

    @property
    def num_clusters(self) -> int:
        return sum(1 for _ in self.children("registers/cluster"))


@binding
class DeviceElement(RegisterPropertiesGroup):
    """SVD device element."""

    TAG = "device"

    @property
    def name(self) -> str:
        return self.required_text("name")

    @property
    def peripherals(self) -> Iterator[PeripheralElement]:
        return self.children("peripherals/peripheral")
