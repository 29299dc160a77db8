#
# Copyright (c) 2023 Nordic Semiconductor ASA
#
# SPDX-License-Identifier: Apache-2.0
#

"""
Rendering of generated fragments to source text.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from functools import singledispatchmethod
from textwrap import indent
from typing import Iterable

from .fragments import (
    AccessorBlock,
    Fragment,
    Getter,
    IntType,
    Padding,
    PeripheralStruct,
    RegisterSlot,
    RegisterStruct,
    ResetConstructor,
    Setter,
    TypeAlias,
)
from .model import Access, Peripheral


class Printer(ABC):
    """Turns fragments into source text of a target language."""

    @abstractmethod
    def render(self, fragment: Fragment) -> str:
        """Render a single fragment."""
        ...

    @abstractmethod
    def render_base_address(self, peripheral: Peripheral) -> str:
        """Render a constant holding the base address of a peripheral."""
        ...

    def render_all(self, fragments: Iterable[Fragment]) -> str:
        """Render fragments in order, separated by blank lines."""
        return "\n\n".join(self.render(fragment) for fragment in fragments)


_INDENT = " " * 4

_RUST_INT = {
    IntType.U8: "u8",
    IntType.U16: "u16",
    IntType.U32: "u32",
}

_RUST_ACCESS = {
    Access.READ_ONLY: "volatile::ReadOnly",
    Access.WRITE_ONLY: "volatile::WriteOnly",
    Access.READ_WRITE: "volatile::ReadWrite",
}


def _doc(text: str) -> str:
    return f"/// {text}\n"


class RustPrinter(Printer):
    """Printer for `#[repr(C)]` Rust register maps built on the `volatile` crate."""

    @singledispatchmethod
    def render(self, fragment: Fragment) -> str:
        raise TypeError(f"Unable to render {fragment!r}")

    @render.register
    def _(self, fragment: TypeAlias) -> str:
        return f"pub type {fragment.name} = ::{fragment.module}::{fragment.target};"

    @render.register
    def _(self, fragment: PeripheralStruct) -> str:
        out = _doc(fragment.doc) if fragment.doc else ""
        out += "#[repr(C)]\n"
        out += f"pub struct {fragment.name} {{\n"
        out += indent("".join(self._member(m) for m in fragment.members), _INDENT)
        out += "}"
        return out

    @render.register
    def _(self, fragment: RegisterStruct) -> str:
        return (
            "#[derive(Debug, Clone, Copy)]\n"
            "#[repr(C)]\n"
            f"pub struct {fragment.name} {{\n"
            f"{_INDENT}bits: {_RUST_INT[fragment.bits_type]},\n"
            "}"
        )

    @render.register
    def _(self, fragment: AccessorBlock) -> str:
        if not fragment.methods:
            return f"impl {fragment.type_name} {{}}"

        methods = "\n".join(self._method(fragment.type_name, m) for m in fragment.methods)
        return f"impl {fragment.type_name} {{\n{indent(methods, _INDENT)}}}"

    def render_base_address(self, peripheral: Peripheral) -> str:
        return f"const {peripheral.name}: usize = 0x{peripheral.base_address:08x};"

    def _member(self, member: RegisterSlot | Padding) -> str:
        if isinstance(member, Padding):
            return f"{member.name}: [u8; {member.size}],\n"
        return (
            _doc(member.doc)
            + f"pub {member.name}: {_RUST_ACCESS[member.access]}<{member.type_name}>,\n"
        )

    def _method(self, type_name: str, method: ResetConstructor | Getter | Setter) -> str:
        if isinstance(method, ResetConstructor):
            body = f"{type_name} {{ bits: 0x{method.value:x} }}\n"
            return _doc(method.doc) + self._fn(f"{method.name}() -> Self", body)

        if isinstance(method, Getter):
            return _doc(method.doc) + self._fn(*self._getter(method))

        return _doc(method.doc) + self._fn(*self._setter(method))

    def _fn(self, signature: str, body: str) -> str:
        return f"pub fn {signature} {{\n{indent(body, _INDENT)}}}\n"

    def _getter(self, getter: Getter) -> tuple[str, str]:
        if getter.value_type is None:
            body = (
                f"const OFFSET: u8 = {getter.offset};\n"
                "\n"
                "self.bits & (1 << OFFSET) != 0\n"
            )
            return f"{getter.name}(&self) -> bool", body

        bits_ty = _RUST_INT[getter.bits_type]
        value_ty = _RUST_INT[getter.value_type]
        body = (
            f"const MASK: {bits_ty} = {getter.mask};\n"
            f"const OFFSET: u8 = {getter.offset};\n"
            "\n"
            f"((self.bits >> OFFSET) & MASK) as {value_ty}\n"
        )
        return f"{getter.name}(&self) -> {value_ty}", body

    def _setter(self, setter: Setter) -> tuple[str, str]:
        if setter.value_type is None:
            body = (
                f"const OFFSET: u8 = {setter.offset};\n"
                "\n"
                "if value {\n"
                f"{_INDENT}self.bits |= 1 << OFFSET;\n"
                "} else {\n"
                f"{_INDENT}self.bits &= !(1 << OFFSET);\n"
                "}\n"
                "self\n"
            )
            return f"{setter.name}(&mut self, value: bool) -> &mut Self", body

        bits_ty = _RUST_INT[setter.bits_type]
        value_ty = _RUST_INT[setter.value_type]
        body = (
            f"const OFFSET: u8 = {setter.offset};\n"
            f"const MASK: {value_ty} = {setter.mask};\n"
            "\n"
            f"self.bits &= !((MASK as {bits_ty}) << OFFSET);\n"
            f"self.bits |= ((value & MASK) as {bits_ty}) << OFFSET;\n"
            "self\n"
        )
        return f"{setter.name}(&mut self, value: {value_ty}) -> &mut Self", body
