import pytest

from intcode.errors import OperandError
from intcode.tape import INT64_MAX, INT64_MIN, MemoryTape, wrap64


def test_initial_contents():
    tape = MemoryTape([1, 9, 10, 3])
    assert len(tape) == 4
    assert tape.snapshot() == [1, 9, 10, 3]
    assert tape.get(2) == 10


def test_read_past_end_does_not_grow():
    tape = MemoryTape([1, 2, 3])
    before = len(tape)
    assert tape.get(3) == 0
    assert tape.get(1000) == 0
    assert len(tape) == before


def test_write_past_end_grows_and_zero_fills():
    tape = MemoryTape([7, 8])
    tape.set(5, 42)
    assert len(tape) == 6
    assert tape.snapshot() == [7, 8, 0, 0, 0, 42]


def test_growth_keeps_earlier_writes():
    tape = MemoryTape()
    highest = -1
    for addr in [3, 0, 17, 2, 100, 64, 1]:
        tape.set(addr, addr + 1)
        highest = max(highest, addr)
        assert len(tape) >= highest + 1
    for addr in [3, 0, 17, 2, 100, 64, 1]:
        assert tape.get(addr) == addr + 1


def test_capacity_doubles():
    tape = MemoryTape([0] * 4)
    tape.set(4, 1)
    assert tape.capacity == 8
    tape.set(20, 1)
    assert tape.capacity == 32
    assert len(tape) == 21


def test_length_never_shrinks():
    tape = MemoryTape([1, 2, 3, 4, 5])
    tape.set(0, 0)
    tape.set(4, 0)
    assert len(tape) == 5


@pytest.mark.parametrize("addr", [-1, -100])
def test_negative_address_rejected(addr):
    tape = MemoryTape([1, 2, 3])
    with pytest.raises(OperandError):
        tape.get(addr)
    with pytest.raises(OperandError):
        tape.set(addr, 1)


def test_values_wrap_to_int64():
    assert wrap64(INT64_MAX + 1) == INT64_MIN
    assert wrap64(INT64_MIN - 1) == INT64_MAX
    assert wrap64(-5) == -5
    tape = MemoryTape()
    tape.set(0, INT64_MAX + 2)
    assert tape.get(0) == INT64_MIN + 1


def test_from_text():
    tape = MemoryTape.from_text(" 1,0,0,3,99\n")
    assert tape.snapshot() == [1, 0, 0, 3, 99]


@pytest.mark.parametrize("addr", [10**15, 1 << 60])
def test_unreachable_growth_is_operand_error(addr):
    tape = MemoryTape([1, 2, 3])
    with pytest.raises(OperandError, match="cannot grow tape"):
        tape.set(addr, 1)
    assert len(tape) == 3
    assert tape.snapshot() == [1, 2, 3]
