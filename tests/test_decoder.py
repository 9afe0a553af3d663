import pytest

from intcode.decoder import Instruction, Mode, Opcode, Parameter, decode, mode_of
from intcode.errors import DecodeError, OperandError
from intcode.tape import MemoryTape


def test_mode_digits():
    assert [mode_of(1002, n) for n in (1, 2, 3)] == [0, 1, 0]
    assert [mode_of(21101, n) for n in (1, 2, 3)] == [1, 1, 2]


def test_decode_position_and_immediate():
    tape = MemoryTape([1002, 4, 3, 4, 33])
    instr = decode(tape, 0)
    assert instr.opcode is Opcode.MUL
    a, b, c = instr.params
    assert (a.mode, a.address, a.value) == (Mode.POSITION, 4, 33)
    assert (b.mode, b.address, b.value) == (Mode.IMMEDIATE, None, 3)
    assert instr.target() == 4
    assert instr.size == 4


def test_decode_relative():
    tape = MemoryTape([204, -1, 0, 0, 55])
    instr = decode(tape, 0, relative_base=5)
    (p,) = instr.params
    assert p.mode is Mode.RELATIVE
    assert p.address == 4
    assert p.value == 55


def test_relative_write_target():
    tape = MemoryTape([21101, 1, 2, 3, 99])
    instr = decode(tape, 0, relative_base=10)
    assert instr.target() == 13


@pytest.mark.parametrize("word", [11101, 10102, 103, 11107, 10108])
def test_immediate_write_target_is_operand_error(word):
    tape = MemoryTape([word, 0, 0, 0, 99])
    with pytest.raises(OperandError):
        decode(tape, 0)


def test_negative_address_is_operand_error():
    tape = MemoryTape([4, -3, 99])
    with pytest.raises(OperandError):
        decode(tape, 0)
    with pytest.raises(OperandError):
        decode(MemoryTape([204, 1, 99]), 0, relative_base=-5)


def test_unknown_opcode():
    with pytest.raises(DecodeError) as info:
        decode(MemoryTape([42, 0, 0]), 0)
    assert "42" in str(info.value)
    with pytest.raises(DecodeError):
        decode(MemoryTape([-1]), 0)


def test_unknown_mode_digit():
    with pytest.raises(DecodeError):
        decode(MemoryTape([304, 0, 99]), 0)


def test_truncated_instruction():
    with pytest.raises(DecodeError) as info:
        decode(MemoryTape([99, 1, 0]), 1)
    assert "wanted 3 parameters" in str(info.value)


def test_parameter_str():
    tape = MemoryTape([1001, 4, 7, 0, 5])
    a, b, _ = decode(tape, 0).params
    assert str(a) == "(*4 -> 5)"
    assert str(b) == "7"
    rel = decode(MemoryTape([204, 1, 99]), 0, relative_base=1).params[0]
    assert str(rel) == "(*2-1 -> 99)"


def test_target_rejects_literal_parameter():
    literal = Parameter(Mode.IMMEDIATE, 7, 7)
    instr = Instruction(0, 1101, Opcode.ADD, (literal, literal, literal))
    with pytest.raises(OperandError):
        instr.target()
    with pytest.raises(DecodeError):
        Instruction(0, 104, Opcode.OUT, (literal,)).target()
