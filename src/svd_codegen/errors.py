#
# Copyright (c) 2023 Nordic Semiconductor ASA
#
# SPDX-License-Identifier: Apache-2.0
#

from typing import Any, Iterable, Optional

from .model import Access


class CodegenError(Exception):
    """Base class for errors raised by the library"""

    ...


class SvdParseError(CodegenError):
    """Raised when an error occurs during SVD parsing."""

    ...


class SvdDefinitionError(CodegenError, ValueError):
    """Raised when code can't be generated due to an invalid definition in the SVD model"""

    def __init__(self, element: Any, explanation: str):
        super().__init__(f"Invalid SVD element ({element}): {explanation}")
        self.element = element


class UnresolvableSizeError(SvdDefinitionError):
    """Raised when neither a register nor the defaults specify the register size."""

    def __init__(self, register: Any) -> None:
        super().__init__(register, "register has no size and no default size is set")


class UnsupportedWidthError(SvdDefinitionError):
    """Raised when a bit width has no integer representation in the generated code."""

    def __init__(self, element: Any, width: int) -> None:
        super().__init__(element, f"bit width {width} is outside the supported range 1..32")
        self.width = width


class AmbiguousAccessError(SvdDefinitionError):
    """Raised when the access mode of a register can't be inferred from its fields."""

    def __init__(self, register: Any, field_access: Iterable[Optional[Access]]) -> None:
        observed = ", ".join(str(a) for a in field_access)
        super().__init__(register, f"unable to infer register access from fields: [{observed}]")


class MissingFieldsError(SvdDefinitionError):
    """Raised when a register has no access mode and no fields to infer it from."""

    def __init__(self, register: Any) -> None:
        super().__init__(register, "register has no access mode and no fields to infer it from")


class UnsupportedAccessError(SvdDefinitionError):
    """Raised when a register access mode has no register wrapper type."""

    def __init__(self, register: Any, access: Access) -> None:
        super().__init__(register, f"{access} registers are not supported")


class BitRangeError(SvdDefinitionError):
    """Raised when a field does not fit inside its register (strict mode only)."""

    def __init__(self, field: Any, register_size: int) -> None:
        super().__init__(
            field,
            f"bits {field.bit_range.offset}..{field.bit_range.msb} exceed the "
            f"{register_size}-bit register",
        )
