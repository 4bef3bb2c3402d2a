"""Pure instruction decoding for the CHIP-8 instruction set."""

from .bind import DecodedInstr, Operation
from .decode_map import decode_opcode, iter_encodings, try_decode

__all__ = [
    "DecodedInstr",
    "Operation",
    "decode_opcode",
    "iter_encodings",
    "try_decode",
]
