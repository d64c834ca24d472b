"""Tests for environment configuration and startup validation."""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from resume_builder.config import ServiceConfig, Severity, ensure_valid, validate_config
from resume_builder.errors import ConfigurationError


def test_defaults_from_empty_environment():
    config = ServiceConfig.from_env({})
    assert config.port == 5000
    assert config.model == "gemini-2.5-flash"
    assert config.database_name == "USERS"
    assert config.collection_name == "USERS"
    assert config.output_dir == Path(tempfile.gettempdir())
    assert config.generation_max_attempts == 1
    assert config.generation_timeout_seconds == 0.0
    assert config.cors_origins == ["*"]


def test_reads_documented_variables():
    config = ServiceConfig.from_env(
        {
            "PORT": "8080",
            "GOOGLE_API_KEY": "key",
            "MONGODB_URI": "mongodb://db",
            "RESUME_BUILDER_OUTPUT_DIR": "/var/tmp/resumes",
            "RESUME_BUILDER_GENERATION_TIMEOUT_SECONDS": "12.5",
            "RESUME_BUILDER_LOG_LEVEL": "debug",
            "RESUME_BUILDER_CORS_ORIGINS": "https://a.example, https://b.example",
        }
    )
    assert config.port == 8080
    assert config.google_api_key == "key"
    assert config.database_uri == "mongodb://db"
    assert config.output_dir == Path("/var/tmp/resumes")
    assert config.generation_timeout_seconds == 12.5
    assert config.log_level == "DEBUG"
    assert config.cors_origins == ["https://a.example", "https://b.example"]


def test_reads_process_environment_by_default(monkeypatch):
    monkeypatch.setenv("PORT", "7000")
    assert ServiceConfig.from_env().port == 7000


@pytest.mark.parametrize("key", ["PORT", "RESUME_BUILDER_RENDER_TIMEOUT_MS", "RESUME_BUILDER_GENERATION_TIMEOUT_SECONDS"])
def test_non_numeric_values_raise(key):
    with pytest.raises(ConfigurationError):
        ServiceConfig.from_env({key: "soon"})


def test_missing_database_uri_is_an_error(tmp_path):
    issues = validate_config(ServiceConfig(google_api_key="k", frontend_dir=tmp_path))
    assert [(i.field, i.severity) for i in issues] == [("MONGODB_URI", Severity.ERROR)]


def test_missing_api_key_is_only_a_warning(tmp_path):
    config = ServiceConfig(database_uri="memory://", frontend_dir=tmp_path)
    warnings = ensure_valid(config)
    assert [(i.field, i.severity) for i in warnings] == [("GOOGLE_API_KEY", Severity.WARNING)]


def test_ensure_valid_raises_on_errors(tmp_path):
    config = ServiceConfig(database_uri="memory://", port=0, generation_max_attempts=0, frontend_dir=tmp_path)
    with pytest.raises(ConfigurationError) as exc_info:
        ensure_valid(config)
    assert "PORT" in str(exc_info.value)
    assert "RESUME_BUILDER_GENERATION_MAX_ATTEMPTS" in str(exc_info.value)
