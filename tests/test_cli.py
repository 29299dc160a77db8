import logging

import pytest

from svd_codegen.__main__ import cli


@pytest.fixture(autouse=True)
def isolated_logging(monkeypatch):
    # cli() replaces the handlers of the root logger
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    level = root.level
    yield
    root.setLevel(level)


def _run(*argv):
    with pytest.raises(SystemExit) as exc_info:
        cli(list(argv))
    return exc_info.value.code


class TestCli:
    def test_lists_base_addresses(self, svd_file, capsys):
        assert _run("-i", str(svd_file)) == 0
        assert capsys.readouterr().out == (
            "const GPIOA: usize = 0x40020000;\n"
            "const GPIOB: usize = 0x40020400;\n"
        )

    def test_generates_matching_peripheral(self, svd_file, capsys):
        assert _run("-i", str(svd_file), "gpioa") == 0
        out = capsys.readouterr().out

        assert out.startswith("/// General-purpose I/Os\n#[repr(C)]\npub struct Gpioa {\n")
        assert "    _reserved0: [u8; 12],\n" in out
        assert "    pub idr: volatile::ReadOnly<Idr>,\n" in out
        assert "pub fn set_moder15(&mut self, value: u8) -> &mut Self {" in out
        assert "Moder { bits: 0xa8000000 }" in out
        assert "    bits: u16,\n" in out

    def test_derived_peripheral(self, svd_file, capsys):
        assert _run("-i", str(svd_file), "GPIOB") == 0
        assert capsys.readouterr().out == "pub type Gpiob = ::gpioa::Gpioa;\n"

    def test_output_file(self, svd_file, tmp_path):
        output = tmp_path / "gpiob.rs"
        assert _run("-i", str(svd_file), "-o", str(output), "gpiob") == 0
        assert output.read_text() == "pub type Gpiob = ::gpioa::Gpioa;\n"

    def test_no_match(self, svd_file, capsys):
        assert _run("-i", str(svd_file), "uart") == 1
        assert "No peripheral in STM32F4X matches 'uart'" in capsys.readouterr().err

    def test_generation_error(self, tmp_path, capsys):
        path = tmp_path / "device.svd"
        path.write_text(
            "<device><name>X</name><peripherals><peripheral><name>P</name>"
            "<baseAddress>0</baseAddress><registers><register><name>R</name>"
            "<addressOffset>0</addressOffset><access>read-write</access>"
            "</register></registers></peripheral></peripherals></device>"
        )
        assert _run("-i", str(path), "p") == 1
        assert "register R @ 0x0" in capsys.readouterr().err

    def test_options(self, svd_file, capsys):
        assert _run("-i", str(svd_file), "--options", '{"reserved_identifiers": ["idr0"]}', "gpioa") == 0
        assert "pub fn idr0_(&self) -> bool {" in capsys.readouterr().out

    def test_invalid_options(self, svd_file):
        assert _run("-i", str(svd_file), "--options", '{"bogus": 1}', "gpioa") == 2

    @pytest.mark.parametrize(
        "value, message",
        [
            ('{"sort_registers": "no"}', "option 'sort_registers' must be a bool, got 'no'"),
            ('{"reserved_identifiers": "match"}', "must be a list of strings"),
            ("[1]", "expected a JSON object"),
        ],
    )
    def test_options_with_wrong_type(self, svd_file, capsys, value, message):
        assert _run("-i", str(svd_file), "--options", value, "gpioa") == 2
        assert message in capsys.readouterr().err

    def test_missing_input(self, tmp_path):
        assert _run("-i", str(tmp_path / "missing.svd")) == 1
