from __future__ import annotations

import pytest

from record_collector.domain.errors import ValidationFailure
from record_collector.domain.models import CorruptedRecord, Record
from record_collector.domain.validation import (
    MAX_SCORE,
    MAX_YEAR,
    MIN_SCORE,
    MIN_YEAR,
    is_valid,
    validate_record,
)


def _record(**overrides) -> Record:
    fields = {"id": 1, "title": "Movie 1", "year": 2001, "score": 7.0}
    fields.update(overrides)
    return Record(**fields)


def test_valid_record_is_returned_unchanged():
    record = _record()
    assert validate_record(record) is record
    assert is_valid(record)


@pytest.mark.parametrize("title", [None, "", "   ", "\t\n"])
def test_missing_or_blank_title_is_rejected(title):
    with pytest.raises(ValidationFailure, match="missing title"):
        validate_record(_record(title=title))


@pytest.mark.parametrize("year", [MIN_YEAR - 1, MAX_YEAR + 1, 0])
def test_year_out_of_range_is_rejected(year):
    assert not is_valid(_record(year=year))


@pytest.mark.parametrize("year", [MIN_YEAR, MAX_YEAR])
def test_year_bounds_are_inclusive(year):
    assert is_valid(_record(year=year))


@pytest.mark.parametrize("score", [MIN_SCORE - 0.01, MAX_SCORE + 0.01, -1.0])
def test_score_out_of_range_is_rejected(score):
    assert not is_valid(_record(score=score))


@pytest.mark.parametrize("score", [MIN_SCORE, MAX_SCORE])
def test_score_bounds_are_inclusive(score):
    assert is_valid(_record(score=score))


def test_corrupted_record_is_rejected_with_its_reason():
    with pytest.raises(ValidationFailure) as excinfo:
        validate_record(CorruptedRecord(id=9, reason="truncated body"))
    assert excinfo.value.item_id == 9
    assert excinfo.value.reason == "truncated body"


def test_unexpected_value_is_rejected():
    assert not is_valid(None)  # type: ignore[arg-type]


def test_is_valid_is_idempotent():
    good, bad = _record(), _record(title="")
    assert [is_valid(good), is_valid(good)] == [True, True]
    assert [is_valid(bad), is_valid(bad)] == [False, False]


def test_unexpected_value_is_labelled_with_the_fetched_id():
    with pytest.raises(ValidationFailure) as excinfo:
        validate_record(None, item_id=7)  # type: ignore[arg-type]
    assert excinfo.value.item_id == 7
    assert "NoneType" in excinfo.value.reason
