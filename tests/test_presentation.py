"""Presentation helper tests — time labels, sender labels, suggestion styling."""

from datetime import datetime, timedelta, timezone

from assistant_panel import Message
from assistant_panel.presentation import (
    avatar_initials,
    caption,
    format_time,
    is_suggestion,
    sender_label,
)

STAMP = datetime(2024, 5, 1, 14, 5, 59, tzinfo=timezone.utc)


def make(sender="assistant", kind="plain") -> Message:
    return Message(id="m1", content="hi", sender=sender, timestamp=STAMP, kind=kind)


def test_format_time_uses_two_digit_hour_and_minute():
    assert format_time(STAMP, timezone.utc) == "14:05"
    assert format_time(STAMP, timezone(timedelta(hours=2))) == "16:05"
    assert format_time(datetime(2024, 5, 1, 7, 3, tzinfo=timezone.utc), timezone.utc) == "07:03"


def test_labels_by_sender():
    assert sender_label(make("user")) == "You"
    assert sender_label(make("assistant")) == "Assistant"
    assert avatar_initials(make("user")) == "ME"
    assert avatar_initials(make("assistant")) == "AI"


def test_suggestion_detection():
    assert is_suggestion(make(kind="suggestion"))
    assert not is_suggestion(make(kind="plain"))
    assert not is_suggestion(make(kind="code"))


def test_caption():
    assert caption(make("assistant"), timezone.utc) == "Assistant · 14:05"
