from __future__ import annotations

import pickle

import pytest

from record_collector.domain.models import CorruptedRecord, Record
from record_collector.domain.validation import is_valid
from record_collector.sources.synthetic import SyntheticSource

SEED = 2024
ITEMS = 200


def test_same_seed_gives_same_outcomes():
    first = SyntheticSource(seed=SEED, latency_ms=(0, 0))
    second = SyntheticSource(seed=SEED, latency_ms=(0, 0))
    assert [first(i) for i in range(1, ITEMS)] == [second(i) for i in range(1, ITEMS)]


def test_outcome_does_not_depend_on_call_order():
    source = SyntheticSource(seed=SEED, latency_ms=(0, 0))
    forward = {i: source(i) for i in range(1, 50)}
    backward = {i: source(i) for i in reversed(range(1, 50))}
    assert forward == backward


def test_uncorrupted_records_are_valid_and_shaped():
    source = SyntheticSource(seed=SEED, corruption_rate=0.0, latency_ms=(0, 0))
    for item_id in range(1, ITEMS):
        record = source(item_id)
        assert isinstance(record, Record)
        assert is_valid(record)
        assert record.title == f"Movie {item_id}"
        assert 2000 <= record.year <= 2020
        assert 5.0 <= record.score < 10.0


def test_full_corruption_rate_yields_only_corrupted_records():
    source = SyntheticSource(seed=SEED, corruption_rate=1.0, latency_ms=(0, 0))
    assert all(isinstance(source(i), CorruptedRecord) for i in range(1, 20))


def test_is_corrupted_matches_fetch():
    source = SyntheticSource(seed=SEED, corruption_rate=0.3, latency_ms=(0, 0))
    for item_id in range(1, ITEMS):
        assert source.is_corrupted(item_id) == isinstance(source(item_id), CorruptedRecord)


def test_is_corrupted_requires_seed():
    with pytest.raises(ValueError):
        SyntheticSource(seed=None).is_corrupted(1)


def test_latency_goes_through_injected_sleep():
    delays: list[float] = []
    source = SyntheticSource(seed=SEED, latency_ms=(50, 150), sleep=delays.append)
    source(1)
    source(2)
    assert len(delays) == 2
    assert all(0.05 <= d <= 0.15 for d in delays)


def test_zero_latency_never_sleeps():
    delays: list[float] = []
    SyntheticSource(seed=SEED, latency_ms=(0, 0), sleep=delays.append)(1)
    assert delays == []


@pytest.mark.parametrize(
    "kwargs",
    [{"corruption_rate": -0.1}, {"corruption_rate": 1.5}, {"latency_ms": (10, 5)}],
)
def test_invalid_parameters_are_rejected(kwargs):
    with pytest.raises(ValueError):
        SyntheticSource(**kwargs)


def test_source_is_picklable():
    source = SyntheticSource(seed=SEED, latency_ms=(0, 0))
    clone = pickle.loads(pickle.dumps(source))
    assert clone(5) == source(5)
