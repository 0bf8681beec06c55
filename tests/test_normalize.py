import pytest

from eventhub.errors import (
    EmptyCollection,
    InvalidDate,
    InvalidMode,
    InvalidTime,
    MissingRequiredField,
)
from eventhub.normalize import normalize_date, normalize_event, normalize_mode, normalize_time


def test_date_is_zero_padded_iso():
    assert normalize_date("2024-3-5") == "2024-03-05"


@pytest.mark.parametrize("value", ["2024-03-05", "March 5, 2024", "2024/12/31", "5 Jan 2025"])
def test_date_normalization_is_a_fixed_point(value):
    once = normalize_date(value)
    assert normalize_date(once) == once


@pytest.mark.parametrize("value", ["not-a-date", "", "2024-02-30", "10:30", "5", None])
def test_bad_dates_rejected(value):
    with pytest.raises(InvalidDate):
        normalize_date(value)


@pytest.mark.parametrize("value,expected", [
    ("9:30", "09:30"),
    ("09:30", "09:30"),
    ("0:00", "00:00"),
    ("23:59", "23:59"),
    (" 7:05 ", "07:05"),
])
def test_time_is_zero_padded(value, expected):
    assert normalize_time(value) == expected


@pytest.mark.parametrize("value", ["24:00", "9:5", "23:60", "930", "ab:cd", "", "12:30pm"])
def test_bad_times_rejected(value):
    with pytest.raises(InvalidTime):
        normalize_time(value)


def test_mode_is_lowercased():
    assert normalize_mode("ONLINE") == "online"
    assert normalize_mode(" Hybrid ") == "hybrid"


def test_unknown_mode_rejected():
    with pytest.raises(InvalidMode):
        normalize_mode("virtual")


def test_full_record(event_data):
    out = normalize_event(event_data)
    assert out["slug"] == "tech-conf-2024-keynote"
    assert out["date"] == "2024-03-05"
    assert out["time"] == "09:30"
    assert out["mode"] == "hybrid"
    assert out["description"] == "A day of talks about the web platform."
    assert out["tags"] == ["web", "javascript"]
    assert out["agenda"] == ["Registration", "Keynote", "Panel"]


def test_input_record_is_not_mutated(event_data):
    before = dict(event_data)
    normalize_event(event_data)
    assert event_data == before


def test_empty_tags(event_data):
    event_data["tags"] = []
    with pytest.raises(EmptyCollection) as exc:
        normalize_event(event_data)
    assert exc.value.field == "tags"


def test_blank_agenda_items_count_as_empty(event_data):
    event_data["agenda"] = ["  ", ""]
    with pytest.raises(EmptyCollection):
        normalize_event(event_data)


def test_missing_tags(event_data):
    del event_data["tags"]
    with pytest.raises(MissingRequiredField) as exc:
        normalize_event(event_data)
    assert exc.value.field == "tags"


@pytest.mark.parametrize("field", ["title", "venue", "organizer", "date", "time", "mode"])
def test_blank_required_field(event_data, field):
    event_data[field] = "   "
    with pytest.raises(MissingRequiredField) as exc:
        normalize_event(event_data)
    assert exc.value.field == field


def test_punctuation_only_title_rejected(event_data):
    event_data["title"] = "!!!"
    with pytest.raises(MissingRequiredField) as exc:
        normalize_event(event_data)
    assert exc.value.field == "slug"


def test_unchanged_title_keeps_stored_slug(event_data):
    stored = normalize_event(event_data)
    stored["slug"] = "hand-picked"
    stored["venue"] = "Pier 27"
    out = normalize_event(stored, changed_fields={"venue"})
    assert out["slug"] == "hand-picked"
    assert out["venue"] == "Pier 27"


def test_changed_title_rederives_slug(event_data):
    stored = normalize_event(event_data)
    stored["title"] = "Closing Party"
    out = normalize_event(stored, changed_fields={"title"})
    assert out["slug"] == "closing-party"


def test_renormalizing_stored_values_is_stable(event_data):
    stored = normalize_event(event_data)
    out = normalize_event(stored, changed_fields={"date", "time"})
    assert out["time"] == "09:30"
    assert out["date"] == "2024-03-05"


def test_aware_datetimes_use_the_utc_date():
    assert normalize_date("2024-03-05T23:30:00-05:00") == "2024-03-06"
    assert normalize_date("2024-03-05T10:00:00+02:00") == "2024-03-05"


def test_time_with_trailing_newline_rejected():
    from eventhub.validators import match_time

    assert match_time("09:30\n") is None
