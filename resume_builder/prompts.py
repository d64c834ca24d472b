"""Prompt templates for the four rewritten resume sections.

Each prompt frames the model as a resume writing expert, targets the company
the candidate is applying to, and fixes the output shape the template expects:
a comma-separated list for skills, Markdown bullets for everything else.
Experience and achievements must come back as the bare ``NA`` sentinel when
the candidate supplied nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .submission import Submission

DEFAULT_COMPANY = "a company"
SECTIONS = ("skills", "experience", "projects", "achievements")

SKILLS_PROMPT = """\
As a professional resume writing expert, your task is to enhance the provided skills for a software engineer's resume, specifically targeting a position at "{company}".
If the provided skills appear to be "gibberish," infer and list relevant and impactful technical and soft skills for a software engineer (e.g., Programming Languages, Frameworks, Tools, Databases, Cloud Platforms).
Format the output as a concise, professional, **comma-separated list of 5-10 key skills**. If skills are provided then do not add extra skills of your own.
**Strictly avoid bullet points, paragraphs, conversational text, or any preamble/postamble.** Provide only the comma-separated list. Keep the total output for skills under 50 words.

Skills to enhance: {skills}"""

EXPERIENCE_PROMPT = """\
As a professional resume writing expert, rewrite the following work experience for a software engineer's resume, targeting a position at "{company}".
Focus solely on achievements, quantifiable results, and responsibilities using strong action verbs.
If no experience is provided return "NA" ONLY.
**Format each experience entry using Markdown bullet points (e.g., '* Achieved X by doing Y').** Ensure each bullet point is concise (1-2 lines) and professional.
**Do not use paragraphs, conversational text, or any preamble/postamble.**
Keep the total output for experience concise, ideally under 100 words.

Experience to rewrite: {experience}"""

PROJECTS_PROMPT = """\
As a professional resume writing expert, enhance the descriptions of the following software engineering projects for a resume, targeting a position at "{company}".
For each project:
- Highlight technologies used (e.g., Python, React, AWS, SQL).
- Emphasize outcomes, impact, or features developed.
- Quantify results where possible.
If the provided project details are "gibberish", infer and create 2-3 realistic and impactful software engineering project descriptions for a software engineer. Fill in any missing details like technologies or outcomes to make them professional and complete.
If projects are provided then do not add extra projects of your own.
**Format each project as a concise Markdown bullet point, starting with the project name (e.g., '* Project Name: Description...').** Each bullet point should be professional and not a paragraph.
**Your output will be used directly in the resume. Do not use paragraphs, conversational text, or any preamble/postamble.**
Keep the total output for projects concise, ideally under 100 words.

Projects to enhance: {projects}"""

ACHIEVEMENTS_PROMPT = """\
As a professional resume writing expert, rewrite the following achievements, targeting a position at "{company}".
Focus solely on impact, recognition, and specific contributions. Quantify results whenever possible.
If no achievements are provided, return "NA" ONLY.
Fill in any missing details to make them professional.
**Format each achievement as a concise, professional Markdown bullet point.**
**Your output will be used directly in the resume. Do not use paragraphs, conversational text, or any preamble/postamble.**
Keep the total output for achievements concise, ideally under 100 words.

Achievements to rewrite: {achievements}"""


@dataclass(frozen=True)
class SectionPrompts:
    """One prompt per rewritten section."""

    skills: str
    experience: str
    projects: str
    achievements: str

    def as_dict(self) -> Dict[str, str]:
        return {section: getattr(self, section) for section in SECTIONS}


def target_company(submission: Submission) -> str:
    return submission.company.strip() or DEFAULT_COMPANY


def build_prompts(submission: Submission) -> SectionPrompts:
    """Build the four section prompts for one submission."""
    company = target_company(submission)
    return SectionPrompts(
        skills=SKILLS_PROMPT.format(company=company, skills=submission.skills),
        experience=EXPERIENCE_PROMPT.format(company=company, experience=submission.experience),
        projects=PROJECTS_PROMPT.format(company=company, projects=submission.projects),
        achievements=ACHIEVEMENTS_PROMPT.format(company=company, achievements=submission.achievements),
    )
