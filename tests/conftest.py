"""Pytest configuration and fixtures."""

import os

import pytest

# Set before test modules import the app, which reads settings lazily
os.environ.setdefault("OPENAI_API_KEY", "test-openai-key")
os.environ.setdefault("RESUME_AGENT_ENV", "test")


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Set up test environment variables."""
    os.environ["OPENAI_API_KEY"] = "test-openai-key"
    os.environ["ANTHROPIC_API_KEY"] = "test-anthropic-key"
    os.environ["RESUME_AGENT_ENV"] = "test"
    os.environ["ADMIN_TOKEN"] = "test-admin-token"

    from resume_agent.core.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
