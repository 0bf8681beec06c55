import pytest

from eventhub.bookings import normalize_email, validate_booking
from eventhub.validators import is_valid_email
from eventhub.errors import (
    DanglingReference,
    InvalidEmail,
    LookupFailed,
    MissingRequiredField,
)

EVENTS = {1: {"slug": "tech-conf"}}


def lookup(event_id):
    return EVENTS.get(event_id)


def test_email_is_trimmed_and_lowercased():
    assert normalize_email("  Alice@Example.COM ") == "alice@example.com"


@pytest.mark.parametrize("value", ["no-at-sign.com", "a@b", "a b@c.com", "a@@b.com", "@example.com"])
def test_bad_emails(value):
    with pytest.raises(InvalidEmail):
        normalize_email(value)


def test_missing_email():
    with pytest.raises(MissingRequiredField):
        validate_booking({"eventId": 1}, lookup)


def test_valid_booking():
    out = validate_booking({"eventId": 1, "email": "Bob@Example.com"}, lookup)
    assert out == {"eventId": 1, "email": "bob@example.com"}


def test_missing_event_id():
    with pytest.raises(MissingRequiredField) as exc:
        validate_booking({"email": "bob@example.com"}, lookup)
    assert exc.value.field == "eventId"


def test_dangling_reference():
    with pytest.raises(DanglingReference) as exc:
        validate_booking({"eventId": 42, "email": "bob@example.com"}, lookup)
    assert exc.value.event_id == 42


def test_lookup_failure_is_not_a_dangling_reference():
    boom = ConnectionError("store unreachable")

    def broken(event_id):
        raise boom

    with pytest.raises(LookupFailed) as exc:
        validate_booking({"eventId": 1, "email": "bob@example.com"}, broken)
    assert not isinstance(exc.value, DanglingReference)
    assert exc.value.__cause__ is boom


def test_event_not_looked_up_when_reference_unchanged():
    calls = []

    def tracking(event_id):
        calls.append(event_id)
        return None

    out = validate_booking({"eventId": 7, "email": "Bob@Example.com"}, tracking, changed_fields={"email"})
    assert out["email"] == "bob@example.com"
    assert calls == []


def test_changed_reference_is_checked():
    with pytest.raises(DanglingReference):
        validate_booking({"eventId": 99, "email": "bob@example.com"}, lookup, changed_fields={"eventId"})


def test_email_shape_must_match_whole_value():
    assert is_valid_email("a@b.co")
    assert not is_valid_email("a@b.co\n")
