"""Dependency providers for the web routes."""

from __future__ import annotations

from fastapi import Request

from ..orchestrator import ResumeOrchestrator


def get_orchestrator(request: Request) -> ResumeOrchestrator:
    """Access the shared orchestrator from app state."""
    return request.app.state.orchestrator
