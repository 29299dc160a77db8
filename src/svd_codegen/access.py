#
# Copyright (c) 2023 Nordic Semiconductor ASA
#
# SPDX-License-Identifier: Apache-2.0
#

"""
Resolution of register level access modes.
"""

from __future__ import annotations

from typing import Sequence

from .errors import AmbiguousAccessError, MissingFieldsError
from .model import Access, Defaults, Field, Register


def resolve_access(register: Register, defaults: Defaults) -> Access:
    """
    Get the access mode of a register.

    The access mode given by the register itself takes precedence. Otherwise the mode is
    inferred from the fields of the register. The default access mode is only used for
    registers without a list of fields.

    :raises AmbiguousAccessError: If the field access modes can't be reduced to a single mode.
    :raises MissingFieldsError: If there is no register access, no fields and no default access.
    """
    if register.access is not None:
        return register.access

    if register.fields is None:
        if defaults.access is not None:
            return defaults.access
        raise MissingFieldsError(register)

    return infer_access(register, register.fields)


def infer_access(register: Register, fields: Sequence[Field]) -> Access:
    """
    Infer a register access mode from the access modes of its fields.

    Fields without an access mode count as read-only. An empty list of fields gives a
    read-only register.
    """
    modes = [f.access for f in fields]

    if all(m in (Access.READ_ONLY, None) for m in modes):
        return Access.READ_ONLY
    if all(m == Access.WRITE_ONLY for m in modes):
        return Access.WRITE_ONLY
    if any(m == Access.READ_WRITE for m in modes):
        return Access.READ_WRITE

    raise AmbiguousAccessError(register, modes)
