"""Tests for section prompt construction."""

from __future__ import annotations

from resume_builder.prompts import DEFAULT_COMPANY, SECTIONS, build_prompts
from resume_builder.submission import Submission


def _submission(**fields) -> Submission:
    base = {"name": "Ada", "email": "a@x.com", "skills": "python, sql"}
    base.update(fields)
    return Submission.from_mapping(base)


def test_builds_one_prompt_per_section():
    prompts = build_prompts(_submission(company="Acme"))
    assert tuple(prompts.as_dict()) == SECTIONS
    for prompt in prompts.as_dict().values():
        assert prompt.startswith("As a professional resume writing expert")
        assert '"Acme"' in prompt


def test_company_defaults_when_blank():
    prompts = build_prompts(_submission(company="  "))
    for prompt in prompts.as_dict().values():
        assert f'"{DEFAULT_COMPANY}"' in prompt


def test_user_input_is_appended_verbatim():
    prompts = build_prompts(
        _submission(
            skills="python, {sql}",
            experience="Intern at X",
            projects="Toy compiler",
            achievements="Hackathon win",
        )
    )
    assert prompts.skills.endswith("Skills to enhance: python, {sql}")
    assert prompts.experience.endswith("Experience to rewrite: Intern at X")
    assert prompts.projects.endswith("Projects to enhance: Toy compiler")
    assert prompts.achievements.endswith("Achievements to rewrite: Hackathon win")


def test_format_constraints_per_section():
    prompts = build_prompts(_submission())
    assert "comma-separated list" in prompts.skills
    assert "under 50 words" in prompts.skills
    for prompt in (prompts.experience, prompts.projects, prompts.achievements):
        assert "Markdown bullet point" in prompt
        assert "under 100 words" in prompt


def test_only_experience_and_achievements_request_na_sentinel():
    prompts = build_prompts(_submission())
    assert 'return "NA" ONLY' in prompts.experience
    assert 'return "NA" ONLY' in prompts.achievements
    assert '"NA"' not in prompts.skills
    assert '"NA"' not in prompts.projects
    assert "gibberish" in prompts.skills
    assert "gibberish" in prompts.projects
