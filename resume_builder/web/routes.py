"""Resume generation endpoint."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request

from ..errors import ResumeServiceError, ValidationError
from ..orchestrator import ResumeOrchestrator
from ..submission import Submission
from .deps import get_orchestrator
from .responses import TemporaryFileResponse

logger = logging.getLogger("resume_builder.web.api")

router = APIRouter(tags=["resume"])


async def read_submission(request: Request) -> Submission:
    """Decode a JSON or form-encoded body into a submission."""
    content_type = request.headers.get("content-type", "").lower()
    data: Any
    if content_type.startswith("application/json"):
        try:
            data = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ValidationError(detail=f"invalid JSON body: {exc}") from exc
    elif content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        form = await request.form()
        data = {key: value for key, value in form.items()}
    else:
        data = {}
    return Submission.from_mapping(data)


@router.post("/ask")
async def ask(
    request: Request,
    orchestrator: ResumeOrchestrator = Depends(get_orchestrator),
) -> TemporaryFileResponse:
    submission = await read_submission(request)
    try:
        pdf_path = await orchestrator.build_resume(submission)
    except ResumeServiceError:
        raise
    except Exception as exc:
        raise ResumeServiceError(detail=f"{type(exc).__name__}: {exc}") from exc
    return TemporaryFileResponse(pdf_path)
