import pytest

from svd_codegen.model import Access
from svd_codegen.util import respace, to_int, to_pascal_case, to_snake_case


@pytest.mark.parametrize(
    "name, snake, pascal",
    [
        ("GPIOA", "gpioa", "Gpioa"),
        ("MODER", "moder", "Moder"),
        ("CR1", "cr1", "Cr1"),
        ("OTG_FS_GLOBAL", "otg_fs_global", "OtgFsGlobal"),
        ("pin0", "pin0", "Pin0"),
        ("fooBar", "foo_bar", "FooBar"),
        ("USART1_CR", "usart1_cr", "Usart1Cr"),
        ("cr1En", "cr1_en", "Cr1En"),
        ("I2C1", "i2c1", "I2c1"),
        ("DMA2D", "dma2d", "Dma2d"),
        ("SPI1_I2S1", "spi1_i2s1", "Spi1I2s1"),
        ("FOOBar", "foo_bar", "FooBar"),
        ("TIM2-CCR1", "tim2_ccr1", "Tim2Ccr1"),
    ],
)
def test_case_conversion(name, snake, pascal):
    assert to_snake_case(name) == snake
    assert to_pascal_case(name) == pascal


def test_respace():
    assert respace("  Port \n\t input   data ") == "Port input data"


@pytest.mark.parametrize("text, value", [("0x1F", 31), ("0X10", 16), ("#101", 5), ("42", 42), (" 7 ", 7)])
def test_to_int(text, value):
    assert to_int(text) == value


def test_access_from_str():
    assert Access.from_str("READ-WRITE") is Access.READ_WRITE
    assert str(Access.WRITE_ONCE) == "writeOnce"
    with pytest.raises(ValueError, match="no member corresponding to 'rw'"):
        Access.from_str("rw")
