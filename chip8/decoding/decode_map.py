"""Nibble-keyed decoder table mapping 16-bit words to decoded instructions."""

from __future__ import annotations

from typing import Callable, Dict, Iterator, Optional, Tuple

from ..errors import UnknownOpcode
from .bind import DecodedInstr, Operation

DecoderFunc = Callable[[int], Optional[Operation]]

_GROUP_0: Dict[int, Operation] = {
    0x00E0: Operation.CLS,
    0x00EE: Operation.RET,
}

_GROUP_8: Dict[int, Operation] = {
    0x0: Operation.LD_REG,
    0x1: Operation.OR,
    0x2: Operation.AND,
    0x3: Operation.XOR,
    0x4: Operation.ADD_REG,
    0x5: Operation.SUB,
    0x6: Operation.SHR,
    0x7: Operation.SUBN,
    0xE: Operation.SHL,
}

_GROUP_E: Dict[int, Operation] = {
    0x9E: Operation.SKP,
    0xA1: Operation.SKNP,
}

_GROUP_F: Dict[int, Operation] = {
    0x07: Operation.LD_VX_DT,
    0x0A: Operation.LD_VX_K,
    0x15: Operation.LD_DT_VX,
    0x18: Operation.LD_ST_VX,
    0x1E: Operation.ADD_I_VX,
    0x29: Operation.LD_F_VX,
    0x33: Operation.LD_B_VX,
    0x55: Operation.LD_MEM_VX,
    0x65: Operation.LD_VX_MEM,
}


def _fixed(op: Operation) -> DecoderFunc:
    return lambda word: op


def _decode_0(word: int) -> Optional[Operation]:
    return _GROUP_0.get(word, Operation.SYS)


def _decode_reg_pair(op: Operation) -> DecoderFunc:
    # 5XY0 / 9XY0 are only defined with a zero low nibble.
    return lambda word: op if word & 0xF == 0 else None


def _decode_8(word: int) -> Optional[Operation]:
    return _GROUP_8.get(word & 0xF)


def _decode_e(word: int) -> Optional[Operation]:
    return _GROUP_E.get(word & 0xFF)


def _decode_f(word: int) -> Optional[Operation]:
    return _GROUP_F.get(word & 0xFF)


_DECODERS: Dict[int, DecoderFunc] = {
    0x0: _decode_0,
    0x1: _fixed(Operation.JP),
    0x2: _fixed(Operation.CALL),
    0x3: _fixed(Operation.SE_IMM),
    0x4: _fixed(Operation.SNE_IMM),
    0x5: _decode_reg_pair(Operation.SE_REG),
    0x6: _fixed(Operation.LD_IMM),
    0x7: _fixed(Operation.ADD_IMM),
    0x8: _decode_8,
    0x9: _decode_reg_pair(Operation.SNE_REG),
    0xA: _fixed(Operation.LD_I),
    0xB: _fixed(Operation.JP_V0),
    0xC: _fixed(Operation.RND),
    0xD: _fixed(Operation.DRW),
    0xE: _decode_e,
    0xF: _decode_f,
}


def decode_opcode(word: int) -> DecodedInstr:
    """Decode a 16-bit instruction word.

    Raises :class:`UnknownOpcode` when the word matches no encoding.
    """

    word &= 0xFFFF
    op = _DECODERS[word >> 12](word)
    if op is None:
        raise UnknownOpcode(word)
    return DecodedInstr(op=op, opcode=word)


def try_decode(word: int) -> Optional[DecodedInstr]:
    try:
        return decode_opcode(word)
    except UnknownOpcode:
        return None


def iter_encodings() -> Iterator[Tuple[Operation, int]]:
    """Yield ``(Operation, template_word)`` for every encoding in the table."""

    yield Operation.SYS, 0x0000
    for word, op in _GROUP_0.items():
        yield op, word
    for nibble, op in [
        (0x1, Operation.JP),
        (0x2, Operation.CALL),
        (0x3, Operation.SE_IMM),
        (0x4, Operation.SNE_IMM),
        (0x5, Operation.SE_REG),
        (0x6, Operation.LD_IMM),
        (0x7, Operation.ADD_IMM),
    ]:
        yield op, nibble << 12
    for low, op in _GROUP_8.items():
        yield op, 0x8000 | low
    yield Operation.SNE_REG, 0x9000
    for nibble, op in [
        (0xA, Operation.LD_I),
        (0xB, Operation.JP_V0),
        (0xC, Operation.RND),
        (0xD, Operation.DRW),
    ]:
        yield op, nibble << 12
    for low, op in _GROUP_E.items():
        yield op, 0xE000 | low
    for low, op in _GROUP_F.items():
        yield op, 0xF000 | low
