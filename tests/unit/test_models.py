from __future__ import annotations

import pickle

import pytest
from pydantic import ValidationError

from record_collector.domain.errors import ValidationFailure
from record_collector.domain.models import CollectionResult, Record


def _result(**overrides) -> CollectionResult:
    fields = dict(
        records=tuple(Record(id=i, title=f"Movie {i}", year=2000, score=6.0) for i in range(1, 9)),
        success_count=8,
        error_count=2,
        item_count=10,
        worker_count=3,
        duration_seconds=0.5,
    )
    fields.update(overrides)
    return CollectionResult(**fields)


def test_record_is_frozen():
    record = Record(id=1, title="Movie 1", year=2001, score=7.0)
    with pytest.raises(ValidationError):
        record.title = "changed"


def test_record_str():
    record = Record(id=7, title="Movie 7", year=2007, score=8.3)
    assert str(record) == "Record(id=7, title='Movie 7', year=2007, score=8.3)"


def test_error_rate_and_throughput():
    result = _result()
    assert result.error_rate == pytest.approx(20.0)
    assert result.throughput_items_per_sec == pytest.approx(20.0)


def test_empty_result_has_zero_rates():
    result = _result(records=(), success_count=0, error_count=0, item_count=0, duration_seconds=0.0)
    assert result.error_rate == 0.0
    assert result.throughput_items_per_sec == 0.0


def test_sample_keeps_arrival_order_and_caps_length():
    result = _result()
    assert [r.id for r in result.sample(3)] == [1, 2, 3]
    assert result.sample(0) == ()
    assert len(result.sample(100)) == 8


def test_validation_failure_survives_pickling():
    exc = pickle.loads(pickle.dumps(ValidationFailure(3, "missing title")))
    assert (exc.item_id, exc.reason) == (3, "missing title")
