"""Tests for repro_platform record types."""

from datetime import date

from repro_platform.models import UNKNOWN_FATHER_ID, Litter, PerformanceMetrics, Report


def _metrics(litters: int, offspring: int, weaned: int) -> PerformanceMetrics:
    return PerformanceMetrics(
        mother_id="EWE-1",
        start_date=date(2024, 1, 1),
        end_date=date(2024, 12, 31),
        litter_count=litters,
        offspring_count=offspring,
        weaned_count=weaned,
    )


def test_weaning_rate_rounds_to_two_places():
    assert _metrics(1, 3, 2).weaning_rate == 66.67


def test_weaning_rate_none_without_offspring():
    assert _metrics(2, 0, 0).weaning_rate is None


def test_avg_offspring_none_without_litters():
    assert _metrics(0, 0, 0).avg_offspring_per_litter is None
    assert _metrics(2, 3, 0).avg_offspring_per_litter == 1.5


def test_litter_from_dict_maps_father_sentinel():
    litter = Litter.from_dict({
        "id": "EWE-1-1",
        "mother_id": "EWE-1",
        "father_id": UNKNOWN_FATHER_ID,
        "birth_date": "2024-03-01",
        "reported_litter_size": 2,
    })
    assert litter.father_id is None
    assert litter.birth_date == date(2024, 3, 1)
    assert litter.to_dict()["birth_date"] == "2024-03-01"


def test_report_from_dict_defaults():
    report = Report.from_dict({"name": "spring", "summary": None})
    assert report.entries == []
    assert report.summary == ""
    assert report.targets == []
