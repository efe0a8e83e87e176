"""Pytest configuration and fixtures."""

import os

import pytest


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Set up test environment variables."""
    os.environ["SUPABASE_URL"] = "https://test.supabase.co"
    os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "test-key"
    os.environ["OPENAI_API_KEY"] = "test-openai-key"
    os.environ["BRANDGUIDE_ENV"] = "test"


@pytest.fixture
def sample_guide_md():
    """A generated guide with free and pro sections."""
    return (
        "# Acme Style Guide\n"
        "\n"
        "Welcome to the guide.\n"
        "\n"
        "## About Brand\n"
        "\n"
        "Acme makes anvils.\n"
        "\n"
        "## Brand Voice\n"
        "\n"
        "Confident, plain, a little dry.\n"
        "\n"
        "### Traits\n"
        "\n"
        "- Direct\n"
        "- Warm\n"
        "\n"
        "## 25 Core Rules\n"
        "\n"
        "1. Use active voice.\n"
        "\n"
        "## Before / After\n"
        "\n"
        "Before: We are excited. After: Here it is.\n"
    )
