import pytest

from declsound.ring_buffer import RingBuffer


def test_holds_capacity_minus_one():
    rb = RingBuffer(4)
    assert [rb.push(i) for i in range(4)] == [True, True, True, False]
    assert len(rb) == 3


def test_fifo_order():
    rb = RingBuffer(8)
    for item in "abc":
        rb.push(item)
    assert [rb.pop() for _ in range(3)] == ["a", "b", "c"]
    assert len(rb) == 0


def test_pop_empty_raises():
    rb = RingBuffer(2)
    with pytest.raises(IndexError):
        rb.pop()


def test_length_after_wraparound():
    rb = RingBuffer(4)
    for round_ in range(10):
        assert rb.push(round_)
        assert rb.push(round_ + 100)
        assert len(rb) == 2
        assert rb.pop() == round_
        assert len(rb) == 1
        assert rb.pop() == round_ + 100


def test_single_slot_is_always_full():
    rb = RingBuffer(1)
    assert rb.push("x") is False
    assert len(rb) == 0


def test_invalid_capacity():
    with pytest.raises(ValueError):
        RingBuffer(0)