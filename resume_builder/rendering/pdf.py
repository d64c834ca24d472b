"""Headless Chromium session and HTML-to-PDF export.

One browser is launched per process and shared by every request. Each
request gets a brand-new page in its own browser context, which is closed
as soon as the PDF is written, so no state leaks between requests.
"""

from __future__ import annotations

import logging
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Optional

from playwright.async_api import async_playwright

from ..errors import RenderError

logger = logging.getLogger(__name__)

LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]
_DEFAULT_RENDER_TIMEOUT_MS = 30_000


class BrowserSession:
    """Process-wide Playwright browser handle."""

    def __init__(self, headless: bool = True) -> None:
        self.headless = headless
        self._playwright: Any = None
        self._browser: Any = None

    @property
    def is_running(self) -> bool:
        return self._browser is not None

    async def start(self) -> None:
        """Launch Chromium; raises if the browser cannot start."""
        if self._browser is not None:
            return
        logger.info("Launching headless browser...")
        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(headless=self.headless, args=LAUNCH_ARGS)
        except Exception:
            await self._playwright.stop()
            self._playwright = None
            raise
        logger.info("Browser launched successfully.")

    async def stop(self) -> None:
        """Close browser and Playwright; errors are logged, not raised."""
        if self._browser is not None:
            logger.info("Closing browser...")
            try:
                await self._browser.close()
            except Exception as e:
                logger.warning("Browser close failed: %s", e)
            self._browser = None
        if self._playwright is not None:
            try:
                await self._playwright.stop()
            except Exception as e:
                logger.warning("Playwright stop failed: %s", e)
            self._playwright = None

    @asynccontextmanager
    async def page(self) -> AsyncIterator[Any]:
        """Yield a fresh page and always close it afterwards."""
        if self._browser is None:
            raise RuntimeError("Browser session is not started")
        # browser.new_page() creates a dedicated context; closing the page closes it.
        page = await self._browser.new_page()
        try:
            yield page
        finally:
            try:
                await page.close()
            except Exception as e:
                logger.warning("Page close failed: %s", e)


class PdfRenderer:
    """Turns a rendered HTML document into a temporary PDF file."""

    def __init__(
        self,
        session: BrowserSession,
        output_dir: Path,
        page_format: str = "A4",
        render_timeout_ms: int = _DEFAULT_RENDER_TIMEOUT_MS,
    ) -> None:
        self.session = session
        self.output_dir = output_dir
        self.page_format = page_format
        self.render_timeout_ms = render_timeout_ms

    async def start(self) -> None:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        await self.session.start()

    async def stop(self) -> None:
        await self.session.stop()

    def new_artifact_path(self) -> Path:
        return self.output_dir / f"resume-{uuid.uuid4()}.pdf"

    async def render_to_file(self, html: str) -> Path:
        """Load ``html`` into a new page and export it as a PDF file."""
        pdf_path = self.new_artifact_path()
        try:
            async with self.session.page() as page:
                await page.set_content(html, wait_until="networkidle", timeout=self.render_timeout_ms)
                await page.pdf(path=str(pdf_path), format=self.page_format, print_background=True)
        except Exception as exc:
            pdf_path.unlink(missing_ok=True)
            raise RenderError(detail=f"PDF export failed: {exc}") from exc
        return pdf_path
