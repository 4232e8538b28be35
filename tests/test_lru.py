import threading

import pytest

from pagevict.errors import FrameReplacerFullError, PinnedFrameRemovalError
from pagevict.lru import LruReplacer
from pagevict.policy import AccessType


class _PointRead(AccessType):
    pass


def _filled(capacity, frames, register="unpin"):
    replacer = LruReplacer(capacity)
    for frame in frames:
        getattr(replacer, register)(frame)
    return replacer


def _drain(replacer, count):
    return [replacer.evict() for _ in range(count)]


def test_basic_ops():
    replacer = _filled(20, (1, 2, 3, 4, 5, 6, 1))
    assert replacer.capacity() == 20
    assert replacer.size() == 6

    assert _drain(replacer, 3) == [1, 2, 3]

    replacer.pin(3)
    replacer.pin(4)
    assert replacer.size() == 2

    replacer.unpin(4)
    assert _drain(replacer, 3) == [5, 6, 4]


@pytest.mark.parametrize("register", ["unpin", "touch"])
def test_touch(register):
    replacer = _filled(20, (1, 2, 3), register)
    assert replacer.size() == 3

    replacer.unpin(1)
    assert (replacer.size(), replacer.peek()) == (3, 1)

    replacer.touch(1)
    assert replacer.peek() == 2
    assert _drain(replacer, 3) == [2, 3, 1]


def test_remove():
    replacer = _filled(20, (1, 2, 3))
    assert replacer.size() == 3

    for frame, expected_size, expected_peek in ((2, 2, 1), (1, 1, 3)):
        replacer.remove(frame)
        assert (replacer.size(), replacer.peek()) == (expected_size, expected_peek)

    replacer.pin(3)
    with pytest.raises(PinnedFrameRemovalError) as info:
        replacer.remove(3)
    assert info.value.frame_id == 3


def test_multi_threaded():
    n, k = 100, 20
    replacer = LruReplacer(n * k)

    def work(i):
        for j in range(k):
            replacer.unpin(i * k + j)

    threads = [threading.Thread(target=work, args=(i,)) for i in range(n)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert replacer.size() == n * k


def test_empty_replacer_has_no_victim():
    replacer = LruReplacer(4)
    assert (replacer.peek(), replacer.evict(), replacer.size()) == (None, None, 0)


@pytest.mark.parametrize("frame", [3, 1])
def test_full_replacer_rejects_touch(frame):
    replacer = _filled(2, (1, 2))
    with pytest.raises(FrameReplacerFullError):
        replacer.touch(frame)
    assert (replacer.size(), replacer.peek()) == (2, 1)


def test_touch_with_moves_frame_to_back():
    replacer = _filled(5, (1, 2), "touch")
    replacer.touch_with(1, _PointRead())
    assert _drain(replacer, 2) == [2, 1]


def test_len_matches_size():
    replacer = _filled(5, ("a", "b"))
    replacer.pin("a")
    assert len(replacer) == replacer.size() == 1