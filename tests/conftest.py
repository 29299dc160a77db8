import pytest

from svd_codegen.model import Access, BitRange, Defaults, Field, Peripheral, Register


@pytest.fixture
def defaults():
    return Defaults(size=32, reset_value=0, access=None)


@pytest.fixture
def gpioa():
    """GPIO port with a gap between MODER and IDR."""
    return Peripheral(
        name="GPIOA",
        base_address=0x40020000,
        description="General-purpose\n        I/Os",
        registers=(
            Register(
                name="MODER",
                address_offset=0x00,
                description="GPIO port mode register",
                size=32,
                access=Access.READ_WRITE,
            ),
            Register(
                name="IDR",
                address_offset=0x10,
                description="GPIO port input   data register",
                size=32,
                access=Access.READ_ONLY,
                fields=(
                    Field(
                        name="PIN0",
                        bit_range=BitRange(offset=0, width=1),
                        description="Port input data",
                        access=Access.READ_ONLY,
                    ),
                ),
            ),
        ),
    )


@pytest.fixture
def ctrl():
    """Register with single and multi bit fields of all access modes."""
    return Register(
        name="CTRL",
        address_offset=0x0,
        size=32,
        reset_value=0x0000_0100,
        fields=(
            Field(name="EN", bit_range=BitRange(0, 1), description="Enable", access=Access.READ_WRITE),
            Field(name="MODE", bit_range=BitRange(4, 3), access=Access.READ_WRITE),
            Field(name="BUSY", bit_range=BitRange(8, 1), access=Access.READ_ONLY),
            Field(name="CMD", bit_range=BitRange(16, 12), access=Access.WRITE_ONLY),
            Field(name="MATCH", bit_range=BitRange(28, 4)),
        ),
    )


DEVICE_SVD = """\
<?xml version="1.0" encoding="utf-8"?>
<device schemaVersion="1.3" xmlns:xs="http://www.w3.org/2001/XMLSchema-instance">
  <name>STM32F4X</name>
  <version>1.0</version>
  <description>Test device</description>
  <addressUnitBits>8</addressUnitBits>
  <width>32</width>
  <size>0x20</size>
  <resetValue>0x00000000</resetValue>
  <!-- comments are dropped -->
  <peripherals>
    <peripheral>
      <name>GPIOA</name>
      <description>General-purpose I/Os</description>
      <baseAddress>0x40020000</baseAddress>
      <access>read-write</access>
      <registers>
        <register>
          <name>MODER</name>
          <description>GPIO port mode register</description>
          <addressOffset>0x0</addressOffset>
          <resetValue>0xA8000000</resetValue>
          <fields>
            <field>
              <name>MODER15</name>
              <bitOffset>30</bitOffset>
              <bitWidth>2</bitWidth>
            </field>
            <field>
              <name>MODER0</name>
              <bitRange>[1:0]</bitRange>
            </field>
          </fields>
        </register>
        <register>
          <name>IDR</name>
          <addressOffset>0x10</addressOffset>
          <size>16</size>
          <access>read-only</access>
          <fields>
            <field>
              <name>IDR0</name>
              <description>Port input data</description>
              <lsb>0</lsb>
              <msb>0</msb>
              <access>Read-Only</access>
            </field>
          </fields>
        </register>
        <register>
          <name>LCKR</name>
          <addressOffset>0x1C</addressOffset>
          <fields/>
        </register>
        <cluster>
          <name>UNUSED</name>
          <addressOffset>0x40</addressOffset>
        </cluster>
      </registers>
    </peripheral>
    <peripheral derivedFrom="GPIOA">
      <name>GPIOB</name>
      <baseAddress>0x40020400</baseAddress>
    </peripheral>
  </peripherals>
</device>
"""


@pytest.fixture
def svd_file(tmp_path):
    path = tmp_path / "device.svd"
    path.write_text(DEVICE_SVD)
    return path
