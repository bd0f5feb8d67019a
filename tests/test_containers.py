import pytest

from rasterkit.containers import (
    Ring,
    RingBuffer,
    cpython_growth,
    next_power_of_two,
    simple_growth,
)


@pytest.mark.parametrize("n", [2, 3, 5, 7, 8, 9, 100, 1000, 1024, 1025])
def test_next_power_of_two_invariants(n):
    p = next_power_of_two(n)
    assert p & (p - 1) == 0
    assert n <= p < 2 * n


def test_next_power_of_two_small_values():
    assert next_power_of_two(0) == 1
    assert next_power_of_two(1) == 1


@pytest.mark.parametrize("cap", [0, 1, 7, 64, 1000])
def test_growth_functions_grow(cap):
    assert simple_growth(cap) > cap
    grown = cpython_growth(cap)
    assert grown > cap
    assert grown % 4 == 0


def test_ring_next_wraps_around():
    ring = Ring(4)
    for i in range(4):
        ring[i] = i * 10
    seen = [ring.next() for _ in range(4)]
    assert seen == [10, 20, 30, 0]
    assert ring.index == 0


def test_ring_prev_from_start_goes_to_last_slot():
    ring = Ring(4)
    for i in range(4):
        ring[i] = i
    assert ring.prev() == 3
    assert ring.index == 3
    assert ring.prev() == 2


def test_ring_fill_copies_values():
    ring = Ring(3).fill([1])
    items = list(ring)
    assert items == [[1], [1], [1]]
    items[0].append(2)
    assert ring[1] == [1]


def test_ring_current_follows_cursor():
    ring = Ring(2, "x")
    ring[1] = "y"
    assert ring.current() == "x"
    assert ring.next() == "y"
    assert ring.current() == "y"


def test_ring_rejects_zero_capacity():
    with pytest.raises(ValueError):
        Ring(0)


def test_ring_buffer_rounds_capacity():
    assert RingBuffer(5).capacity == next_power_of_two(5)


def test_ring_buffer_fifo_order():
    rb = RingBuffer(8)
    for v in "abcde":
        rb.push(v)
    assert len(rb) == 5
    assert [rb.pop() for _ in range(5)] == list("abcde")
    assert len(rb) == 0


def test_ring_buffer_pop_empty_raises():
    rb = RingBuffer(4)
    with pytest.raises(IndexError):
        rb.pop()


def test_ring_buffer_wraps_indices():
    rb = RingBuffer(4)
    out = []
    for v in range(10):
        rb.push(v)
        out.append(rb.pop())
    assert out == list(range(10))
    assert rb.head == rb.tail


def test_ring_buffer_full_push_restarts_count():
    rb = RingBuffer(2)
    rb.push("a")
    rb.push("b")
    rb.push("c")
    assert len(rb) == 1
    assert rb.pop() == "c"


def test_ring_buffer_drain_empties():
    rb = RingBuffer(4)
    for v in (1, 2, 3):
        rb.push(v)
    assert list(rb.drain()) == [1, 2, 3]
    assert len(rb) == 0
    assert list(rb.drain()) == []