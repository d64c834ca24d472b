"""Global pytest fixtures: deterministic env and fake collaborators."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Dict, List

import pytest

from resume_builder.config import ServiceConfig
from resume_builder.errors import RenderError
from resume_builder.stores import InMemoryRecordStore
from resume_builder.web.app import ServiceComponents, create_app

SECTION_MARKERS = {
    "Skills to enhance:": "skills",
    "Experience to rewrite:": "experience",
    "Projects to enhance:": "projects",
    "Achievements to rewrite:": "achievements",
}

DEFAULT_REPLIES = {
    "skills": "Python, SQL, Docker, AWS, Git",
    "experience": "* Built data pipelines processing 2M rows/day",
    "projects": "* Compiler: wrote a toy compiler in Python",
    "achievements": "* Won the 2023 campus hackathon",
}


@pytest.fixture(autouse=True)
def _isolate_service_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear service env that can leak into tests on developer machines."""
    for key in (
        "PORT",
        "GOOGLE_API_KEY",
        "MONGODB_URI",
        "RESUME_BUILDER_HOST",
        "RESUME_BUILDER_MODEL",
        "RESUME_BUILDER_OUTPUT_DIR",
        "RESUME_BUILDER_FRONTEND_DIR",
        "RESUME_BUILDER_GENERATION_MAX_ATTEMPTS",
        "RESUME_BUILDER_GENERATION_TIMEOUT_SECONDS",
        "RESUME_BUILDER_CORS_ORIGINS",
    ):
        monkeypatch.delenv(key, raising=False)


def section_of(prompt: str) -> str:
    for marker, section in SECTION_MARKERS.items():
        if marker in prompt:
            return section
    raise AssertionError(f"unrecognized prompt: {prompt[:80]!r}")


class FakeProvider:
    """TextProvider that answers by section and records every prompt."""

    def __init__(self, replies: Dict[str, Any] | None = None) -> None:
        self.replies = dict(DEFAULT_REPLIES)
        self.replies.update(replies or {})
        self.prompts: List[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        await asyncio.sleep(0)
        reply = self.replies[section_of(prompt)]
        if isinstance(reply, BaseException):
            raise reply
        if callable(reply):
            return reply(prompt)
        return reply


class FakePdfRenderer:
    """Writes the HTML into a fake PDF file instead of driving a browser."""

    def __init__(self, output_dir: Path, fail: bool = False) -> None:
        self.output_dir = output_dir
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.fail = fail
        self.rendered_html: List[str] = []
        self.written: List[Path] = []
        self.started = False
        self.stopped = False
        self._counter = 0

    async def start(self) -> None:
        self.started = True

    async def stop(self) -> None:
        self.stopped = True

    async def render_to_file(self, html: str) -> Path:
        if self.fail:
            raise RenderError(detail="browser crashed")
        self.rendered_html.append(html)
        self._counter += 1
        path = self.output_dir / f"resume-fake-{self._counter}.pdf"
        await asyncio.sleep(0)
        path.write_bytes(b"%PDF-1.4\n" + html.encode("utf-8"))
        self.written.append(path)
        return path


class FailingStore(InMemoryRecordStore):
    """Record store whose inserts always fail."""

    def __init__(self) -> None:
        super().__init__()
        self.insert_calls = 0

    async def insert(self, document: Dict[str, Any]) -> None:
        self.insert_calls += 1
        raise ConnectionError("store unreachable")


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def provider_factory():
    return FakeProvider


@pytest.fixture
def pdf_renderer(tmp_path: Path) -> FakePdfRenderer:
    return FakePdfRenderer(tmp_path / "pdfs")


@pytest.fixture
def memory_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def failing_store() -> FailingStore:
    return FailingStore()


@pytest.fixture
def service_config(tmp_path: Path) -> ServiceConfig:
    return ServiceConfig(
        database_uri="memory://",
        google_api_key="test-key",
        output_dir=tmp_path / "pdfs",
        frontend_dir=tmp_path / "missing-frontend",
    )


@pytest.fixture
def app_factory(service_config: ServiceConfig, fake_provider: FakeProvider, pdf_renderer: FakePdfRenderer, memory_store):
    """Build an app around fakes; keyword overrides replace single collaborators."""

    def _make(**overrides: Any):
        components = ServiceComponents(
            store=overrides.get("store", memory_store),
            provider=overrides.get("provider", fake_provider),
            pdf_renderer=overrides.get("pdf_renderer", pdf_renderer),
        )
        return create_app(overrides.get("config", service_config), components=components)

    return _make
