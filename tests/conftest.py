"""Shared test configuration for actions-models tests.

Provides:
- Paths to the sample documents under tests/samples/
- Loaders that decode a sample and fail the test with the loader message
- A mock MCP context for calling tool functions directly
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from actions_models.context import AppContext
from actions_models.schema import (
    Action,
    Dependabot,
    Workflow,
    load_action_from_file,
    load_dependabot_from_file,
    load_workflow_from_file,
)

SAMPLES_DIR = Path(__file__).parent / "samples"
WORKFLOWS_DIR = SAMPLES_DIR / "workflows"
ACTIONS_DIR = SAMPLES_DIR / "actions"
DEPENDABOT_DIR = SAMPLES_DIR / "dependabot"


@pytest.fixture
def load_workflow():
    """Load a sample workflow by file name."""

    def _load(name: str) -> Workflow:
        result = load_workflow_from_file(WORKFLOWS_DIR / name)
        if not result.is_success:
            pytest.fail(result.error)
        return result.unwrap()

    return _load


@pytest.fixture
def load_action():
    """Load a sample action by file name."""

    def _load(name: str) -> Action:
        result = load_action_from_file(ACTIONS_DIR / name)
        if not result.is_success:
            pytest.fail(result.error)
        return result.unwrap()

    return _load


@pytest.fixture
def load_dependabot():
    """Load a sample Dependabot config by file name."""

    def _load(name: str) -> Dependabot:
        result = load_dependabot_from_file(DEPENDABOT_DIR / name)
        if not result.is_success:
            pytest.fail(result.error)
        return result.unwrap()

    return _load


@pytest.fixture
def mock_context():
    """Create mock MCP context with AppContext for unit testing MCP tools.

    Returns:
        Mock context object with request_context.lifespan_context structure
    """
    mock_ctx = MagicMock()
    mock_ctx.request_context.lifespan_context = AppContext()
    return mock_ctx


@pytest.fixture
def small_context():
    """Mock MCP context whose document size limit is 1 KiB."""
    mock_ctx = MagicMock()
    mock_ctx.request_context.lifespan_context = AppContext(max_document_bytes=1024)
    return mock_ctx
