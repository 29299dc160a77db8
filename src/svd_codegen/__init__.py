#
# Copyright (c) 2022 Nordic Semiconductor ASA
#
# SPDX-License-Identifier: Apache-2.0
#

import importlib.metadata

from .model import (
    Access,
    BitRange,
    Defaults,
    Device,
    Field,
    Peripheral,
    Register,
)
from .errors import (
    CodegenError,
    SvdParseError,
    SvdDefinitionError,
    UnresolvableSizeError,
    UnsupportedWidthError,
    AmbiguousAccessError,
    MissingFieldsError,
    UnsupportedAccessError,
    BitRangeError,
)
from .fragments import (
    IntType,
    uint_type,
    TypeAlias,
    Padding,
    RegisterSlot,
    PeripheralStruct,
    RegisterStruct,
    ResetConstructor,
    Getter,
    Setter,
    AccessorBlock,
)
from .options import Options
from .access import resolve_access
from .accessors import gen_register, gen_register_read_methods, gen_register_write_methods
from .layout import LayoutContext, layout_peripheral, gen_derived_alias, gen_peripheral
from .parsing import parse
from .printer import Printer, RustPrinter

__version__ = importlib.metadata.version("svd-codegen")

__all__ = [
    "Access",
    "BitRange",
    "Defaults",
    "Device",
    "Field",
    "Peripheral",
    "Register",
    "CodegenError",
    "SvdParseError",
    "SvdDefinitionError",
    "UnresolvableSizeError",
    "UnsupportedWidthError",
    "AmbiguousAccessError",
    "MissingFieldsError",
    "UnsupportedAccessError",
    "BitRangeError",
    "IntType",
    "uint_type",
    "TypeAlias",
    "Padding",
    "RegisterSlot",
    "PeripheralStruct",
    "RegisterStruct",
    "ResetConstructor",
    "Getter",
    "Setter",
    "AccessorBlock",
    "Options",
    "resolve_access",
    "gen_register",
    "gen_register_read_methods",
    "gen_register_write_methods",
    "LayoutContext",
    "layout_peripheral",
    "gen_derived_alias",
    "gen_peripheral",
    "parse",
    "Printer",
    "RustPrinter",
]

del importlib.metadata
