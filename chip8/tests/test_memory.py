from __future__ import annotations

import pytest

from chip8.constants import FONT_SPRITES, MAX_PROGRAM_SIZE, PROGRAM_START
from chip8.errors import LoadError, MemoryFault
from chip8.memory import Chip8Memory


def test_font_table_installed_at_low_memory() -> None:
    mem = Chip8Memory()

    assert mem.read_block(0x000, len(FONT_SPRITES)) == FONT_SPRITES
    assert mem.read_byte(0x050) == 0
    assert mem.font_address(0xA) == 0x032
    assert mem.font_address(0x1F) == mem.font_address(0xF)


def test_read_word_is_big_endian() -> None:
    mem = Chip8Memory()
    mem.write_byte(0x300, 0xAB)
    mem.write_byte(0x301, 0xCD)

    assert mem.read_word(0x300) == 0xABCD


def test_write_byte_truncates_to_8_bits() -> None:
    mem = Chip8Memory()
    mem.write_byte(0x400, 0x1FF)
    assert mem.read_byte(0x400) == 0xFF


@pytest.mark.parametrize("address", [-1, 0x1000, 0xFFFF])
def test_byte_access_outside_range_faults(address: int) -> None:
    mem = Chip8Memory()
    with pytest.raises(MemoryFault):
        mem.read_byte(address)
    with pytest.raises(MemoryFault):
        mem.write_byte(address, 0)


def test_last_byte_is_addressable_but_word_fetch_faults() -> None:
    mem = Chip8Memory()
    mem.write_byte(0xFFF, 0x12)
    assert mem.read_byte(0xFFF) == 0x12

    with pytest.raises(MemoryFault) as excinfo:
        mem.read_word(0xFFF)
    assert excinfo.value.address == 0x1000


def test_block_write_validates_before_writing() -> None:
    mem = Chip8Memory()
    with pytest.raises(MemoryFault):
        mem.write_block(0xFFE, [1, 2, 3])
    assert mem.read_block(0xFFE, 2) == b"\x00\x00"


def test_load_program_copies_to_program_start() -> None:
    mem = Chip8Memory()
    mem.load_program(b"\x60\x05\x61\x03")

    assert mem.read_block(PROGRAM_START, 4) == b"\x60\x05\x61\x03"


def test_load_program_accepts_exact_maximum() -> None:
    mem = Chip8Memory()
    mem.load_program(bytes([0xAA]) * MAX_PROGRAM_SIZE)
    assert mem.read_byte(0xFFF) == 0xAA


def test_load_program_rejects_oversized_image() -> None:
    mem = Chip8Memory()
    with pytest.raises(LoadError):
        mem.load_program(bytes(MAX_PROGRAM_SIZE + 1))
    assert mem.read_byte(PROGRAM_START) == 0


def test_clear_restores_font() -> None:
    mem = Chip8Memory()
    mem.write_byte(0x000, 0x00)
    mem.write_byte(0x600, 0x77)
    mem.clear()

    assert mem.read_byte(0x000) == FONT_SPRITES[0]
    assert mem.read_byte(0x600) == 0
