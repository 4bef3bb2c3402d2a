"""Shared pytest fixtures for CHIP-8 core tests."""

from __future__ import annotations

from typing import Callable, Sequence

import pytest

from chip8.quirks import Quirks
from chip8.vm import Chip8VM

ProgramLoader = Callable[..., Chip8VM]


def assemble_words(words: Sequence[int]) -> bytes:
    """Pack 16-bit instruction words big-endian."""

    out = bytearray()
    for word in words:
        out.append((word >> 8) & 0xFF)
        out.append(word & 0xFF)
    return bytes(out)


@pytest.fixture
def load_words() -> ProgramLoader:
    """Return a factory building a VM with the given instruction words loaded."""

    def factory(words: Sequence[int], *, quirks: Quirks | None = None) -> Chip8VM:
        vm = Chip8VM(quirks=quirks, rng_seed=1234)
        vm.load_program(assemble_words(words))
        return vm

    return factory
