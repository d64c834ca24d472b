"""Request orchestration: submission in, temporary PDF file out."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .errors import RenderError
from .generation import generate_sections, normalize_sections
from .persistence import SubmissionRecorder
from .prompts import build_prompts, target_company
from .providers.base import TextProvider
from .redaction import redact_text
from .rendering.pdf import PdfRenderer
from .rendering.renderer import ResumeContext, ResumeRenderer
from .retry import RetryConfig
from .submission import Submission, validate_submission

logger = logging.getLogger(__name__)


class ResumeOrchestrator:
    """Runs one resume request against the shared collaborators.

    The provider, recorder and PDF renderer are created once at startup and
    shared by all requests; nothing here holds per-request state.
    """

    def __init__(
        self,
        provider: TextProvider,
        recorder: SubmissionRecorder,
        pdf_renderer: PdfRenderer,
        renderer: Optional[ResumeRenderer] = None,
        retry: Optional[RetryConfig] = None,
        generation_timeout_seconds: float = 0.0,
    ) -> None:
        self.provider = provider
        self.recorder = recorder
        self.pdf_renderer = pdf_renderer
        self.renderer = renderer or ResumeRenderer()
        self.retry = retry or RetryConfig()
        self.generation_timeout_seconds = generation_timeout_seconds

    async def build_resume(self, submission: Submission) -> Path:
        """Generate the resume PDF and return the path of the temporary file.

        The caller owns the returned file and must delete it.
        """
        validate_submission(submission)
        self.recorder.record(submission)

        prompts = build_prompts(submission)
        logger.info(
            "generating resume name=%s company=%s",
            redact_text(submission.name),
            target_company(submission),
        )
        results = await generate_sections(
            self.provider,
            prompts,
            retry=self.retry,
            timeout_seconds=self.generation_timeout_seconds,
        )
        sections = normalize_sections(results)

        html = self.renderer.render(ResumeContext.build(submission, sections))
        pdf_path = await self.pdf_renderer.render_to_file(html)
        if not pdf_path.exists():
            raise RenderError(detail=f"PDF export produced no file at {pdf_path}")
        return pdf_path
