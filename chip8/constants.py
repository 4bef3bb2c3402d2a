"""Shared architecture constants for the CHIP-8 virtual machine.

This module centralizes the fixed machine geometry used across the memory,
display, executor and scheduler modules.
"""

# Total addressable memory: 4 KiB, addresses 0x000-0xFFF.
MEMORY_SIZE = 0x1000
ADDRESS_MASK = 0x0FFF

# 0x000-0x1FF is reserved for the interpreter on original hardware.  Programs
# are loaded directly after it.
PROGRAM_START = 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START  # 0xE00 bytes

NUM_REGISTERS = 16
FLAG_REGISTER = 0xF
STACK_DEPTH = 16
NUM_KEYS = 16

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32
SPRITE_WIDTH = 8

# Timers and the display refresh run at a fixed rate regardless of CPU speed.
TIMER_HZ = 60
DEFAULT_CPU_HZ = 700
MIN_CPU_HZ = 1
MAX_CPU_HZ = 100_000

NS_PER_SECOND = 1_000_000_000

# Hexadecimal digit glyphs, 4x5 pixels each, stored at FONT_START.
FONT_START = 0x000
FONT_GLYPH_SIZE = 5
FONT_SPRITES = bytes(
    [
        0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
        0x20, 0x60, 0x20, 0x20, 0x70,  # 1
        0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
        0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
        0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
        0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
        0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
        0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
        0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
        0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
        0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
        0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
        0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
        0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
        0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
        0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
    ]
)
