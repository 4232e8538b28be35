from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest

from pagevict.clock import MAX_COUNTER, MAX_MILLIS, HlcGenerator, HlcTimestamp
from pagevict.errors import SequenceExhaustedError


def test_default_timestamp_is_zero():
    assert HlcTimestamp().as_int() == 0


def test_generator_is_strictly_increasing():
    gen = HlcGenerator()
    stamps = [gen.next_timestamp() for _ in range(1000)]
    assert all(a < b for a, b in zip(stamps, stamps[1:]))
    assert all(a.as_int() < b.as_int() for a, b in zip(stamps, stamps[1:]))


def test_as_int_preserves_order():
    a = HlcTimestamp(10, MAX_COUNTER)
    b = HlcTimestamp(11, 0)
    assert a < b
    assert a.as_int() < b.as_int()


def test_subtraction_is_in_millis_and_ignores_counter():
    base = HlcTimestamp(1_000, 5)
    later = base.shifted(250)
    assert later - base == 250
    assert base - later == -250
    assert later.counter == base.counter


def test_subtraction_with_other_type_fails():
    with pytest.raises(TypeError):
        HlcTimestamp(1, 0) - 5


def test_out_of_range_fields_rejected():
    with pytest.raises(ValueError):
        HlcTimestamp(MAX_MILLIS + 1, 0)
    with pytest.raises(ValueError):
        HlcTimestamp(0, MAX_COUNTER + 1)


def test_clock_going_backwards_bumps_counter():
    gen = HlcGenerator()
    with patch("time.time_ns", side_effect=[2_000_000_000, 1_000_000_000]):
        first = gen.next_timestamp()
        second = gen.next_timestamp()
    assert second > first
    assert second.millis == first.millis
    assert second.counter == first.counter + 1


def test_generator_exhausted_beyond_encodable_time():
    gen = HlcGenerator()
    with patch("time.time_ns", return_value=(MAX_MILLIS + 1) * 1_000_000):
        with pytest.raises(SequenceExhaustedError):
            gen.next_timestamp()


def test_concurrent_generation_yields_unique_values():
    gen = HlcGenerator()

    def work(_):
        return [gen.next_timestamp() for _ in range(200)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        batches = list(pool.map(work, range(8)))

    for batch in batches:
        assert all(a < b for a, b in zip(batch, batch[1:]))
    values = [stamp.as_int() for batch in batches for stamp in batch]
    assert len(values) == 8 * 200
    assert len(set(values)) == 8 * 200