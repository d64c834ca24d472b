"""Tests for log redaction."""

from resume_builder.redaction import redact_text


def test_redacts_email_and_phone():
    text = redact_text("Ada <ada@example.com>, +1 (555) 010-0199")
    assert "ada@example.com" not in text
    assert "[REDACTED_EMAIL]" in text
    assert "[REDACTED_PHONE]" in text


def test_redacts_google_api_keys():
    assert redact_text("key=AIzaSyD-1234567890abcdefghijklmn") == "key=[REDACTED_KEY]"


def test_truncates_long_values():
    assert redact_text("x" * 500, max_length=10) == "xxxxxxxxxx..."


def test_none_is_treated_as_empty():
    assert redact_text(None) == ""
