import pytest

from schedsim.clock import SimulationClock
from schedsim.ready_queue import ReadyQueue


def test_fifo_order():
    q = ReadyQueue()
    for pid in (3, 1, 2):
        q.push_back(pid)
    assert q.peek_all() == (3, 1, 2)
    assert q.peek_front() == 3
    assert q.pop_front() == 3
    assert q.peek_all() == (1, 2)
    assert len(q) == 2
    assert 1 in q and 3 not in q


def test_no_duplicates():
    q = ReadyQueue()
    q.push_back(1)
    with pytest.raises(ValueError):
        q.push_back(1)


def test_empty_queue():
    q = ReadyQueue()
    assert not q
    with pytest.raises(IndexError):
        q.pop_front()
    with pytest.raises(IndexError):
        q.peek_front()


def test_clock():
    clock = SimulationClock()
    assert clock.tick() == 1
    assert clock.advance_to(5) == 5
    assert clock.now == 5
    with pytest.raises(ValueError):
        clock.advance_to(4)
