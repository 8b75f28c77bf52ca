# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides ProviderEnvironment fixtures for each provider setup
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-for-hs256-tokens")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest

from core.models.provider import ProviderEnvironment


GROQ_KEY = "gsk_" + "a" * 40
AZURE_KEY = "b" * 32


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def empty_env():
    """No provider configured."""
    return ProviderEnvironment()


@pytest.fixture
def groq_env():
    """Only Groq configured."""
    return ProviderEnvironment(groq_api_key=GROQ_KEY)


@pytest.fixture
def vertex_env():
    """Only Vertex AI configured."""
    return ProviderEnvironment(
        google_vertex_project="test-project",
        google_vertex_location="us-central1",
        google_vertex_api_key="vertex-key",
    )


@pytest.fixture
def azure_env():
    """Only Azure OpenAI configured."""
    return ProviderEnvironment(
        azure_resource_name="my-resource-1",
        azure_api_key=AZURE_KEY,
        azure_api_version="2024-06-01",
    )


@pytest.fixture
def full_env():
    """All three providers configured."""
    return ProviderEnvironment(
        groq_api_key=GROQ_KEY,
        google_vertex_project="test-project",
        google_vertex_location="us-central1",
        google_vertex_api_key="vertex-key",
        azure_resource_name="my-resource-1",
        azure_api_key=AZURE_KEY,
        azure_api_version="2024-06-01",
    )
