"""Resume HTML rendering with Jinja2."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, select_autoescape

from ..errors import RenderError
from ..generation import NormalizedSections
from ..submission import Submission

TEMPLATE_DIR = Path(__file__).parent / "templates"
DEFAULT_TEMPLATE = "resume.html"


@dataclass(frozen=True)
class ResumeContext:
    """Exactly the fields the resume template reads."""

    name: str
    email: str
    phone: str
    linkedin: str
    college: str
    degree: str
    year: str
    skills: str
    projects: str
    achievements: str
    experience: str

    @classmethod
    def build(cls, submission: Submission, sections: NormalizedSections) -> "ResumeContext":
        return cls(
            name=submission.name,
            email=submission.email,
            phone=submission.phone,
            linkedin=submission.linkedin,
            college=submission.college,
            degree=submission.degree,
            year=submission.year,
            skills=sections.skills,
            projects=sections.projects,
            achievements=sections.achievements,
            experience=sections.experience,
        )

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ResumeRenderer:
    """Renders the resume template into a complete HTML document."""

    def __init__(self, template_dir: Optional[Path] = None, template_name: str = DEFAULT_TEMPLATE) -> None:
        self.template_name = template_name
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir or TEMPLATE_DIR)),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
        )

    def render(self, context: ResumeContext) -> str:
        try:
            template = self.env.get_template(self.template_name)
            return template.render(**context.as_dict())
        except TemplateError as exc:
            raise RenderError(detail=f"template {self.template_name!r} failed: {exc}") from exc
