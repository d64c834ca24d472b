"""Resume form submission model and the required-field check."""

from __future__ import annotations

from typing import Any, Dict, Mapping

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from .errors import MissingRequiredField, ValidationError

REQUIRED_FIELDS = ("name", "email", "skills")


class Submission(BaseModel):
    """Free-text resume fields as posted by the form."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True, frozen=True)

    name: str = ""
    email: str = ""
    phone: str = ""
    linkedin: str = ""
    college: str = ""
    degree: str = ""
    year: str = ""
    skills: str = ""
    projects: str = ""
    achievements: str = ""
    experience: str = ""
    company: str = ""

    @classmethod
    def from_mapping(cls, data: Any) -> "Submission":
        """Build a submission from a decoded JSON object or form mapping.

        ``None`` values are treated as absent. Anything that is not a mapping,
        or holds values that cannot become strings, is a ``ValidationError``.
        """
        if not isinstance(data, Mapping):
            raise ValidationError(detail="request body must be an object")
        cleaned = {key: value for key, value in data.items() if value is not None}
        try:
            return cls.model_validate(cleaned)
        except PydanticValidationError as exc:
            raise ValidationError(detail=str(exc)) from exc

    def to_document(self) -> Dict[str, str]:
        return self.model_dump()


def validate_submission(submission: Submission) -> Submission:
    """Fail when name, email or skills is missing or blank."""
    missing = [name for name in REQUIRED_FIELDS if not getattr(submission, name).strip()]
    if missing:
        raise MissingRequiredField(missing)
    return submission
