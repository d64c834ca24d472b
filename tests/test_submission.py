"""Tests for submission decoding and the required-field check."""

from __future__ import annotations

import pytest

from resume_builder.errors import MissingRequiredField, ValidationError
from resume_builder.submission import Submission, validate_submission


def test_from_mapping_defaults_missing_fields_to_empty():
    submission = Submission.from_mapping({"name": "Ada", "email": "a@x.com", "skills": "python"})
    assert submission.phone == ""
    assert submission.company == ""
    assert submission.experience == ""


def test_from_mapping_ignores_unknown_fields_and_none():
    submission = Submission.from_mapping({"name": "Ada", "email": None, "favorite_color": "teal"})
    assert submission.email == ""
    assert not hasattr(submission, "favorite_color")


def test_from_mapping_coerces_numbers_to_strings():
    submission = Submission.from_mapping({"name": "Ada", "year": 2024})
    assert submission.year == "2024"


def test_from_mapping_rejects_non_objects():
    with pytest.raises(ValidationError):
        Submission.from_mapping(["name", "Ada"])


def test_from_mapping_rejects_nested_values():
    with pytest.raises(ValidationError) as exc_info:
        Submission.from_mapping({"name": {"first": "Ada"}})
    assert exc_info.value.status_code == 400


def test_values_are_not_normalized():
    submission = Submission.from_mapping({"name": "  Ada  ", "email": "NOT-AN-EMAIL", "skills": "x"})
    assert submission.name == "  Ada  "
    assert validate_submission(submission) is submission


@pytest.mark.parametrize("missing", ["name", "email", "skills"])
def test_validate_rejects_each_missing_required_field(missing):
    data = {"name": "Ada", "email": "a@x.com", "skills": "python"}
    data[missing] = ""
    with pytest.raises(MissingRequiredField) as exc_info:
        validate_submission(Submission.from_mapping(data))
    assert exc_info.value.fields == [missing]
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Missing required fields: name, email, skills."


def test_validate_rejects_whitespace_only_required_fields():
    """Stricter than a plain truthiness check: blank-looking values are missing too."""
    submission = Submission.from_mapping({"name": "Ada", "email": "   ", "skills": "\t"})
    with pytest.raises(MissingRequiredField) as exc_info:
        validate_submission(submission)
    assert exc_info.value.fields == ["email", "skills"]


def test_to_document_has_every_form_field():
    submission = Submission.from_mapping({"name": "Ada"})
    assert set(submission.to_document()) == {
        "name", "email", "phone", "linkedin", "college", "degree", "year",
        "skills", "projects", "achievements", "experience", "company",
    }
