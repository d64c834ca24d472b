"""Service configuration loaded from the environment, plus startup checks."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Mapping, Optional

from .errors import ConfigurationError

DEFAULT_PORT = 5000
DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_DB_NAME = "USERS"
DEFAULT_COLLECTION = "USERS"


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ConfigIssue:
    """A single configuration issue."""
    field: str
    message: str
    severity: Severity


@dataclass
class ServiceConfig:
    """Runtime settings for the resume builder service."""

    port: int = DEFAULT_PORT
    host: str = "0.0.0.0"
    google_api_key: str = ""
    database_uri: str = ""
    database_name: str = DEFAULT_DB_NAME
    collection_name: str = DEFAULT_COLLECTION
    model: str = DEFAULT_MODEL
    output_dir: Path = field(default_factory=lambda: Path(tempfile.gettempdir()))
    frontend_dir: Path = Path("../FRONTEND")
    pdf_format: str = "A4"
    render_timeout_ms: int = 30_000
    generation_timeout_seconds: float = 0.0
    generation_max_attempts: int = 1
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServiceConfig":
        env = os.environ if environ is None else environ
        output_dir = env.get("RESUME_BUILDER_OUTPUT_DIR", "").strip()
        return cls(
            port=_int(env, "PORT", DEFAULT_PORT),
            host=env.get("RESUME_BUILDER_HOST", "0.0.0.0"),
            google_api_key=env.get("GOOGLE_API_KEY", ""),
            database_uri=env.get("MONGODB_URI", ""),
            database_name=env.get("RESUME_BUILDER_DB_NAME", DEFAULT_DB_NAME),
            collection_name=env.get("RESUME_BUILDER_COLLECTION", DEFAULT_COLLECTION),
            model=env.get("RESUME_BUILDER_MODEL", DEFAULT_MODEL),
            output_dir=Path(output_dir) if output_dir else Path(tempfile.gettempdir()),
            frontend_dir=Path(env.get("RESUME_BUILDER_FRONTEND_DIR", "../FRONTEND")),
            pdf_format=env.get("RESUME_BUILDER_PDF_FORMAT", "A4"),
            render_timeout_ms=_int(env, "RESUME_BUILDER_RENDER_TIMEOUT_MS", 30_000),
            generation_timeout_seconds=_float(env, "RESUME_BUILDER_GENERATION_TIMEOUT_SECONDS", 0.0),
            generation_max_attempts=_int(env, "RESUME_BUILDER_GENERATION_MAX_ATTEMPTS", 1),
            log_level=env.get("RESUME_BUILDER_LOG_LEVEL", "INFO").upper(),
            cors_origins=_csv(env, "RESUME_BUILDER_CORS_ORIGINS", ["*"]),
        )


def validate_config(config: ServiceConfig) -> List[ConfigIssue]:
    """Validate configuration and return a list of issues.

    Returns:
        List of ConfigIssue (empty = valid)
    """
    issues: List[ConfigIssue] = []

    # --- Record store ---
    if not config.database_uri.strip():
        issues.append(ConfigIssue(
            field="MONGODB_URI",
            message="MONGODB_URI not set. The record store cannot be connected.",
            severity=Severity.ERROR,
        ))

    # --- API Key ---
    if not config.google_api_key.strip():
        issues.append(ConfigIssue(
            field="GOOGLE_API_KEY",
            message="GOOGLE_API_KEY not set. Every generation call will fail.",
            severity=Severity.WARNING,
        ))

    # --- Port ---
    if not 0 < config.port < 65536:
        issues.append(ConfigIssue(
            field="PORT",
            message=f"PORT must be between 1 and 65535, got {config.port}",
            severity=Severity.ERROR,
        ))

    # --- Generation ---
    if config.generation_max_attempts < 1:
        issues.append(ConfigIssue(
            field="RESUME_BUILDER_GENERATION_MAX_ATTEMPTS",
            message=f"must be a positive integer, got {config.generation_max_attempts}",
            severity=Severity.ERROR,
        ))
    if config.generation_timeout_seconds < 0:
        issues.append(ConfigIssue(
            field="RESUME_BUILDER_GENERATION_TIMEOUT_SECONDS",
            message=f"must be zero or positive, got {config.generation_timeout_seconds}",
            severity=Severity.ERROR,
        ))

    # --- Rendering ---
    if config.render_timeout_ms <= 0:
        issues.append(ConfigIssue(
            field="RESUME_BUILDER_RENDER_TIMEOUT_MS",
            message=f"must be a positive integer, got {config.render_timeout_ms}",
            severity=Severity.ERROR,
        ))

    # --- Front-end assets ---
    if not config.frontend_dir.exists():
        issues.append(ConfigIssue(
            field="RESUME_BUILDER_FRONTEND_DIR",
            message=f"Front-end directory does not exist: {config.frontend_dir}",
            severity=Severity.WARNING,
        ))

    return issues


def ensure_valid(config: ServiceConfig) -> List[ConfigIssue]:
    """Raise on the first ERROR issue, otherwise return the warnings."""
    issues = validate_config(config)
    errors = [issue for issue in issues if issue.severity is Severity.ERROR]
    if errors:
        summary = "; ".join(f"{issue.field}: {issue.message}" for issue in errors)
        raise ConfigurationError(summary)
    return issues


def _int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from exc


def _float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}") from exc


def _csv(env: Mapping[str, str], key: str, default: List[str]) -> List[str]:
    raw = env.get(key, "").strip()
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]
