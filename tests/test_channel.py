import threading
import time

import pytest

from intcode.channel import Channel
from intcode.errors import ChannelError, PortClosed


def test_fifo_order():
    ch = Channel()
    for v in (3, 1, 2):
        ch.put(v)
    assert [ch.get(), ch.get(), ch.get()] == [3, 1, 2]


def test_close_delivers_queued_values_then_end_of_stream():
    ch = Channel()
    ch.put(5)
    ch.close()
    assert ch.get() == 5
    with pytest.raises(PortClosed):
        ch.get()


def test_close_twice_is_error():
    ch = Channel()
    ch.close()
    with pytest.raises(ChannelError):
        ch.close()


def test_put_after_close_is_error():
    ch = Channel()
    ch.close()
    with pytest.raises(ChannelError):
        ch.put(1)


def test_blocked_get_sees_end_of_stream_once():
    ch = Channel()
    seen = []

    def consumer():
        try:
            ch.get()
        except PortClosed:
            seen.append("eos")

    t = threading.Thread(target=consumer)
    t.start()
    time.sleep(0.05)
    ch.close()
    t.join(timeout=2.0)
    assert not t.is_alive()
    assert seen == ["eos"]


def test_bounded_put_blocks_until_drained():
    ch = Channel(maxsize=1)
    ch.put(1)
    done = threading.Event()

    def producer():
        ch.put(2)
        done.set()

    t = threading.Thread(target=producer)
    t.start()
    assert not done.wait(0.05)
    assert ch.get() == 1
    assert done.wait(2.0)
    assert ch.get() == 2
    t.join(timeout=2.0)


def test_abandon_unblocks_producer():
    ch = Channel(maxsize=1)
    ch.put(1)
    errors = []

    def producer():
        try:
            ch.put(2)
        except PortClosed as exc:
            errors.append(exc)

    t = threading.Thread(target=producer)
    t.start()
    time.sleep(0.05)
    ch.abandon()
    ch.abandon()
    t.join(timeout=2.0)
    assert not t.is_alive()
    assert len(errors) == 1
    assert len(ch) == 0
    with pytest.raises(PortClosed):
        ch.put(3)


def test_abandoned_channel_can_still_be_closed_once():
    ch = Channel()
    ch.abandon()
    ch.close()
    with pytest.raises(ChannelError):
        ch.close()


def test_timeouts():
    ch = Channel(maxsize=1)
    with pytest.raises(TimeoutError):
        ch.get(timeout=0.01)
    ch.put(1)
    with pytest.raises(TimeoutError):
        ch.put(2, timeout=0.01)


def test_invalid_maxsize():
    with pytest.raises(ValueError):
        Channel(maxsize=0)
