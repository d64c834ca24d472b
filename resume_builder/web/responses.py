"""Download response that deletes its temporary file once the transfer ends."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

from fastapi.responses import FileResponse, PlainTextResponse
from starlette.types import Message, Receive, Scope, Send

from ..errors import CleanupError, DeliveryError

logger = logging.getLogger("resume_builder.web.api")

DOWNLOAD_FILENAME = "resume.pdf"


class TemporaryFileResponse(FileResponse):
    """Stream a file as an attachment, then unlink it whatever happened."""

    def __init__(self, path: Path, filename: str = DOWNLOAD_FILENAME, **kwargs: Any) -> None:
        kwargs.setdefault("media_type", "application/pdf")
        super().__init__(path, filename=filename, **kwargs)
        self.temp_path = Path(path)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        headers_sent = False

        async def tracking_send(message: Message) -> None:
            nonlocal headers_sent
            if message["type"] == "http.response.start":
                headers_sent = True
            await send(message)

        try:
            await super().__call__(scope, receive, tracking_send)
        except Exception as exc:
            error = DeliveryError(detail=str(exc))
            logger.error(
                "download_failed code=%s headers_sent=%s detail=%s",
                error.code,
                headers_sent,
                error.detail,
                exc_info=exc,
            )
            if not headers_sent:
                await PlainTextResponse(error.message, status_code=500)(scope, receive, send)
        finally:
            await remove_temporary_file(self.temp_path)


async def remove_temporary_file(path: Path) -> bool:
    """Delete ``path``; failures are logged and reported as ``False``."""
    try:
        await asyncio.to_thread(path.unlink)
    except Exception as exc:
        error = CleanupError(detail=str(exc))
        logger.error("file_cleanup_failed code=%s path=%s detail=%s", error.code, path, error.detail)
        return False
    return True
