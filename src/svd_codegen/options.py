#
# Copyright (c) 2023 Nordic Semiconductor ASA
#
# SPDX-License-Identifier: Apache-2.0
#

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, FrozenSet, Mapping

# Keywords (strict, reserved and weak) that a generated method name must not be equal to.
RUST_KEYWORDS: FrozenSet[str] = frozenset(
    {
        "abstract", "as", "async", "await", "become", "box", "break", "const", "continue",
        "crate", "do", "dyn", "else", "enum", "extern", "false", "final", "fn", "for", "gen",
        "if", "impl", "in", "let", "loop", "macro", "match", "mod", "move", "mut", "override",
        "priv", "pub", "ref", "return", "self", "Self", "static", "struct", "super", "trait",
        "true", "try", "type", "typeof", "union", "unsafe", "unsized", "use", "virtual",
        "where", "while", "yield",
    }
)


@dataclass(frozen=True)
class Options:
    """Settings that control code generation for a peripheral."""

    # Stably sort registers by address offset before laying out a peripheral.
    # When False, registers must already be in non-decreasing address order.
    sort_registers: bool = False

    # Raise BitRangeError for fields that do not fit inside their register.
    strict_bit_ranges: bool = False

    # Identifiers that field accessor names are not allowed to be equal to.
    reserved_identifiers: FrozenSet[str] = field(default=RUST_KEYWORDS)

    # Appended to an accessor name that collides with a reserved identifier.
    reserved_suffix: str = "_"

    def __post_init__(self) -> None:
        # Accept any iterable, e.g. a list coming from JSON
        object.__setattr__(self, "reserved_identifiers", frozenset(self.reserved_identifiers))

    def with_overrides(self, overrides: Mapping[str, Any]) -> Options:
        """
        Copy of the options with fields replaced by the given values, e.g. from a JSON object.

        :raises ValueError: If a name is not an option or a value has the wrong type.
        """
        fields = {f.name: f for f in dataclasses.fields(self)}

        for name, value in overrides.items():
            if name not in fields:
                raise ValueError(f"unknown option '{name}'")

            default = fields[name].default
            if isinstance(default, frozenset):
                valid = isinstance(value, (list, tuple, set, frozenset)) and all(
                    isinstance(v, str) for v in value
                )
                expected = "a list of strings"
            else:
                valid = type(value) is type(default)
                expected = f"a {type(default).__name__}"

            if not valid:
                raise ValueError(f"option '{name}' must be {expected}, got {value!r}")

        return dataclasses.replace(self, **overrides)
