import pytest

from chip8.decoding import Operation, decode_opcode, iter_encodings, try_decode
from chip8.errors import UnknownOpcode
from chip8.executor import HANDLERS
from chip8.timing import INSTRUCTION_COST_US


def test_table_covers_every_operation_once() -> None:
    ops = [op for op, _ in iter_encodings()]
    assert len(ops) == 35
    assert set(ops) == set(Operation)


@pytest.mark.parametrize("op, template", list(iter_encodings()))
def test_template_decodes_to_its_operation(op: Operation, template: int) -> None:
    assert decode_opcode(template).op is op


@pytest.mark.parametrize("op, template", list(iter_encodings()))
def test_operand_bits_do_not_change_operation(op: Operation, template: int) -> None:
    if op in (Operation.CLS, Operation.RET):
        pytest.skip("fixed encoding")
    if template >> 12 in (0x5, 0x8, 0x9):
        word = template | 0x0AB0
    elif template >> 12 in (0xE, 0xF):
        word = template | 0x0C00
    else:
        word = template | 0x0ABC
    assert decode_opcode(word).op is op


def test_every_operation_has_handler_and_cost() -> None:
    assert set(HANDLERS) == set(Operation)
    assert set(INSTRUCTION_COST_US) == set(Operation)


@pytest.mark.parametrize(
    "word",
    [0x5001, 0x900F, 0x8008, 0x800D, 0x800F, 0xE000, 0xE09F, 0xF000, 0xF0FF, 0xFFFF],
)
def test_unmatched_words_are_unknown(word: int) -> None:
    with pytest.raises(UnknownOpcode) as excinfo:
        decode_opcode(word)
    assert excinfo.value.opcode == word
    assert try_decode(word) is None


def test_operand_fields() -> None:
    instr = decode_opcode(0xD12F)
    assert (instr.x, instr.y, instr.n) == (1, 2, 0xF)
    assert instr.nn == 0x2F
    assert instr.nnn == 0x12F


@pytest.mark.parametrize(
    "word, text",
    [
        (0x00E0, "CLS"),
        (0x0123, "SYS 0x123"),
        (0x2ABC, "CALL 0xABC"),
        (0x3F07, "SE VF, 0x07"),
        (0x8AB4, "ADD VA, VB"),
        (0x8CDE, "SHL VC, VD"),
        (0xB210, "JP V0, 0x210"),
        (0xD345, "DRW V3, V4, 5"),
        (0xE7A1, "SKNP V7"),
        (0xF20A, "LD V2, K"),
        (0xF955, "LD [I], V9"),
        (0xF965, "LD V9, [I]"),
    ],
)
def test_mnemonics(word: int, text: str) -> None:
    instr = decode_opcode(word)
    assert instr.mnemonic == text
    assert str(instr) == text
