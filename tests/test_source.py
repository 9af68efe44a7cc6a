import collections
import threading

import mock
import pytest

from gfycat.source import MAX_INT63, LockedRandomSource


def test_next63_non_negative_63_bits():
    source = LockedRandomSource(seed=42)
    for _ in range(1000):
        value = source.next63()
        assert 0 <= value <= MAX_INT63


def test_reseed_reproducible_sequence():
    source_a = LockedRandomSource(seed=1234)
    source_b = LockedRandomSource(seed=9876)
    seq_a = [source_a.next63() for _ in range(10)]
    source_b.reseed(1234)
    seq_b = [source_b.next63() for _ in range(10)]
    assert seq_a == seq_b
    source_a.reseed(1234)
    assert [source_a.next63() for _ in range(10)] == seq_a


def test_seed_from_time_when_omitted():
    with mock.patch("gfycat.source.time.time_ns", return_value=5555) as mocked_time:
        source = LockedRandomSource()
    assert mocked_time.call_count == 1
    expect = LockedRandomSource(seed=5555)
    assert [source.next63() for _ in range(5)] == [expect.next63() for _ in range(5)]


@pytest.mark.parametrize("bound", [0, -1])
def test_randbelow_invalid_bound(bound):
    with pytest.raises(ValueError):
        LockedRandomSource(seed=1).randbelow(bound)


def test_randbelow_in_bounds():
    source = LockedRandomSource(seed=7)
    assert all(source.randbelow(1) == 0 for _ in range(100))
    assert all(0 <= source.randbelow(3) < 3 for _ in range(1000))


def test_randbelow_rejects_biased_values():
    """
    Values in the last incomplete span of 63-bit integers must be drawn again instead of being folded by modulo.
    """
    source = LockedRandomSource(seed=1)
    draws = [MAX_INT63, MAX_INT63 - 1, 11]  # with n=3, both top values are above the accepted limit
    with mock.patch.object(source, "next63", side_effect=draws) as mocked_next:
        assert source.randbelow(3) == 11 % 3
    assert mocked_next.call_count == 3


def test_randbelow_uniform_distribution():
    """
    Chi-square goodness of fit of the drawn indices against the uniform distribution.
    """
    source = LockedRandomSource(seed=20240607)
    bound = 10
    samples = 100000
    counts = collections.Counter(source.randbelow(bound) for _ in range(samples))
    assert set(counts) == set(range(bound))
    expected = samples / bound
    chi2 = sum((counts[i] - expected) ** 2 / expected for i in range(bound))
    # critical value of 9 degrees of freedom is ~33.7 for p=0.0001
    assert chi2 < 40, f"Indices are not uniformly distributed (chi2={chi2:.2f}): {dict(counts)}"


def test_concurrent_draws_consistent():
    """
    Draws shared between threads must produce exactly the same values as a single sequential consumer.
    """
    seed = 31337
    threads_count = 8
    draws_count = 500
    expect = LockedRandomSource(seed=seed)
    expect_values = sorted(expect.next63() for _ in range(threads_count * draws_count))

    source = LockedRandomSource(seed=seed)
    results = []
    results_lock = threading.Lock()

    def draw():
        values = [source.next63() for _ in range(draws_count)]
        with results_lock:
            results.extend(values)

    threads = [threading.Thread(target=draw) for _ in range(threads_count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert sorted(results) == expect_values
