"""FastAPI app entrypoint for the resume builder service."""

from __future__ import annotations

import asyncio
import logging
import os
import signal
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from time import perf_counter
from typing import Any, Callable, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from ..config import ServiceConfig, ensure_valid
from ..errors import ConfigurationError, ResumeServiceError, service_error_handler, unexpected_error_handler
from ..orchestrator import ResumeOrchestrator
from ..persistence import SubmissionRecorder
from ..providers import TextProvider, create_provider
from ..rendering.pdf import BrowserSession, PdfRenderer
from ..retry import RetryConfig
from ..stores import RecordStore, create_record_store
from .routes import router

logger = logging.getLogger("resume_builder.web.api")

STATIC_DIR = Path(__file__).resolve().parent / "static"

# Transport noise from disconnecting clients is not a crash.
_IGNORED_LOOP_ERRORS = (ConnectionResetError, BrokenPipeError)


@dataclass
class ServiceComponents:
    """Process-wide collaborators, created once and shared by all requests."""

    store: Optional[RecordStore]
    provider: TextProvider
    pdf_renderer: PdfRenderer


def build_components(config: ServiceConfig) -> ServiceComponents:
    """Construct the production collaborators from configuration."""
    return ServiceComponents(
        store=create_record_store(config),
        provider=create_provider(config),
        pdf_renderer=PdfRenderer(
            BrowserSession(headless=True),
            output_dir=config.output_dir,
            page_format=config.pdf_format,
            render_timeout_ms=config.render_timeout_ms,
        ),
    )


def request_shutdown() -> None:
    """Ask the server to shut down gracefully, as if it received SIGTERM."""
    os.kill(os.getpid(), signal.SIGTERM)


def install_crash_handler(
    loop: asyncio.AbstractEventLoop,
    on_crash: Callable[[], None] = request_shutdown,
) -> None:
    """Treat exceptions that reach the event loop as fatal.

    The process shuts down through the normal lifespan teardown instead of
    serving on in a possibly corrupt state.
    """

    def _handler(loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
        exc = context.get("exception")
        if exc is None or isinstance(exc, _IGNORED_LOOP_ERRORS):
            loop.default_exception_handler(context)
            return
        logger.critical("Unhandled exception: %s", context.get("message", exc), exc_info=exc)
        on_crash()

    loop.set_exception_handler(_handler)


def create_app(
    config: Optional[ServiceConfig] = None,
    components: Optional[ServiceComponents] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    config = config or ServiceConfig.from_env()
    if components is None:
        for issue in ensure_valid(config):
            logger.warning("config %s: %s", issue.field, issue.message)
        components = build_components(config)

    recorder = SubmissionRecorder(components.store)
    orchestrator = ResumeOrchestrator(
        provider=components.provider,
        recorder=recorder,
        pdf_renderer=components.pdf_renderer,
        retry=RetryConfig(max_attempts=config.generation_max_attempts),
        generation_timeout_seconds=config.generation_timeout_seconds,
    )

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        store = components.store
        try:
            if store is not None:
                await store.start()
                logger.info("Record store connected successfully.")
            try:
                await components.pdf_renderer.start()
            except Exception:
                if store is not None:
                    await store.stop()
                raise
        except Exception:
            logger.exception("Failed to start server")
            raise

        loop = asyncio.get_running_loop()
        previous_handler = loop.get_exception_handler()
        install_crash_handler(loop)
        try:
            yield
        finally:
            loop.set_exception_handler(previous_handler)
            await components.pdf_renderer.stop()
            await recorder.drain()
            if store is not None:
                await store.stop()

    app = FastAPI(title="Resume Builder", version="0.1.0", lifespan=lifespan)
    app.state.config = config
    app.state.orchestrator = orchestrator
    app.state.recorder = recorder

    app.include_router(router)
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        start = perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (perf_counter() - start) * 1000
            logger.info(
                "api_request method=%s path=%s status=%s duration_ms=%.2f",
                request.method,
                request.url.path,
                500,
                duration_ms,
            )
            raise

        duration_ms = (perf_counter() - start) * 1000
        logger.info(
            "api_request method=%s path=%s status=%s duration_ms=%.2f",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
        return response

    @app.get("/healthz", tags=["system"])
    async def healthz() -> dict:
        return {"status": "ok"}

    @app.get("/", include_in_schema=False)
    async def root() -> FileResponse:
        return FileResponse(STATIC_DIR / "index.html")

    app.add_exception_handler(ResumeServiceError, service_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    # Registered last so API routes and /static win over front-end files.
    if config.frontend_dir.is_dir():
        app.mount("/", StaticFiles(directory=config.frontend_dir), name="frontend")
    return app


def main() -> None:
    """Run the resume builder server."""
    import uvicorn
    from dotenv import load_dotenv

    from ..observability import configure_logging

    load_dotenv()
    configure_logging(os.getenv("RESUME_BUILDER_LOG_LEVEL", "INFO"))
    try:
        config = ServiceConfig.from_env()
        app = create_app(config)
    except ConfigurationError as exc:
        logger.error("Failed to start server: %s", exc)
        raise SystemExit(1) from exc
    logger.info("Starting server on %s:%s", config.host, config.port)
    uvicorn.run(app, host=config.host, port=config.port)
