import pytest

from svd_codegen.access import resolve_access
from svd_codegen.accessors import gen_register_read_methods
from svd_codegen.errors import AmbiguousAccessError, MissingFieldsError
from svd_codegen.model import Access, BitRange, Defaults, Field, Register

RO = Access.READ_ONLY
WO = Access.WRITE_ONLY
RW = Access.READ_WRITE


def _register(*field_access, access=None):
    fields = tuple(
        Field(name=f"F{i}", bit_range=BitRange(i, 1), access=a) for i, a in enumerate(field_access)
    )
    return Register(name="REG", address_offset=0, access=access, fields=fields)


class TestResolveAccess:
    def test_register_access_wins(self):
        register = _register(RO, RO, access=WO)
        assert resolve_access(register, Defaults()) is WO

    @pytest.mark.parametrize(
        "field_access, expected",
        [
            ((RO, RO), RO),
            ((WO, WO, WO), WO),
            ((RO, RW), RW),
            ((WO, RW), RW),
            ((RO, WO, RW), RW),
            ((RO, None), RO),
            ((None, None), RO),
            ((), RO),
        ],
    )
    def test_inferred_from_fields(self, field_access, expected):
        assert resolve_access(_register(*field_access), Defaults()) is expected

    def test_mixed_read_only_and_write_only(self):
        with pytest.raises(AmbiguousAccessError, match="read-only, write-only"):
            resolve_access(_register(RO, WO), Defaults())

    def test_write_once_fields_are_ambiguous(self):
        with pytest.raises(AmbiguousAccessError):
            resolve_access(_register(Access.WRITE_ONCE, RO), Defaults())

    @pytest.mark.parametrize("field_access", [(RO, None), (None, None)])
    def test_fields_without_access_ignore_default(self, field_access):
        register = _register(*field_access)
        assert resolve_access(register, Defaults(size=32, access=WO)) is RO

    def test_fields_without_access_stay_readable(self):
        register = _register(None, None)
        defaults = Defaults(size=32, access=WO)

        assert resolve_access(register, defaults) is RO
        [block] = gen_register_read_methods(register, defaults)
        assert [m.name for m in block.methods] == ["f0", "f1"]

    def test_write_only_with_unspecified_field(self):
        with pytest.raises(AmbiguousAccessError, match="write-only, None"):
            resolve_access(_register(WO, None), Defaults(access=RW))

    def test_no_fields_falls_back_to_default(self):
        register = Register(name="REG", address_offset=0)
        assert resolve_access(register, Defaults(access=RW)) is RW

    def test_no_fields_and_no_default(self):
        register = Register(name="REG", address_offset=4)
        with pytest.raises(MissingFieldsError, match=r"register REG @ 0x4"):
            resolve_access(register, Defaults())
