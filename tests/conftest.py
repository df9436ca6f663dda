"""Pytest configuration and shared fixtures."""

from datetime import datetime

import pytest

from ralph_bundle.generation import build_prd
from ralph_bundle.models import BundleConfig, BundleRequest, LlmProvider


SAMPLE_FEATURES = ["Add login form", "Add API endpoint for export"]


@pytest.fixture
def sample_request():
    """Brief used by most pipeline tests."""
    return BundleRequest(
        project_name="My Cool App!",
        description="A small app for testing bundle generation.",
        features=list(SAMPLE_FEATURES),
        llm_provider=LlmProvider.CLAUDE_4_5,
    )


@pytest.fixture
def sample_prd():
    """Accepted PRD built from the sample features."""
    return build_prd(
        "My Cool App!",
        "A small app for testing bundle generation.",
        SAMPLE_FEATURES,
        LlmProvider.CLAUDE_4_5,
    )


@pytest.fixture
def fast_config():
    """Config with no pause between ralph.sh iterations."""
    return BundleConfig(iteration_delay_seconds=0)


@pytest.fixture
def fixed_time():
    return datetime(2025, 1, 15, 9, 30, 0)
