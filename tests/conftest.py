# =============================================================================
# CONFTEST - Shared fixtures for all tests
# =============================================================================
# Environment, backend mocks, a fake FastAPI backend and sample payloads
# =============================================================================

import asyncio
import json
import os
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest


# =============================================================================
# ENVIRONMENT FIXTURES
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment():
    """Isolated environment and a fresh config cache for every test."""
    from learnkit.config import reset_config

    env_vars = {
        "LEARNKIT_API_BASE": "http://test",
        "LEARNKIT_FEEDBACK_DELAY": "0",
        "LOG_LEVEL": "ERROR",
    }
    reset_config()
    with patch.dict(os.environ, env_vars):
        yield
    reset_config()


@pytest.fixture
def clean_env():
    """Empty environment for config tests."""
    from learnkit.config import reset_config

    reset_config()
    with patch.dict(os.environ, {}, clear=True):
        yield
    reset_config()


# =============================================================================
# SAMPLE DATA
# =============================================================================


@pytest.fixture
def sample_questions_data() -> list[dict[str, Any]]:
    """Three valid questions as the backend would generate them."""
    return [
        {
            "id": 1,
            "question": "Which HTTP method is idempotent?",
            "options": ["POST", "PUT", "PATCH", "CONNECT"],
            "correctAnswer": 1,
            "explanation": "PUT replaces the resource, so repeating it has the same effect.",
        },
        {
            "id": 2,
            "question": "What does REST stand for?",
            "options": [
                "Remote Execution State Transfer",
                "Representational State Transfer",
                "Reliable Event Stream Transport",
                "Resource State Table",
            ],
            "correctAnswer": 1,
            "explanation": "",
        },
        {
            "id": 3,
            "question": "Which status code means 'Not Found'?",
            "options": ["200", "301", "404", "500"],
            "correctAnswer": 2,
            "explanation": "404 is returned when the resource does not exist.",
        },
    ]


@pytest.fixture
def sample_quiz_reply(sample_questions_data) -> str:
    """Quiz reply wrapped in prose and a json fence."""
    return (
        "Here are your questions:\n```json\n"
        + json.dumps(sample_questions_data)
        + "\n```\nGood luck!"
    )


@pytest.fixture
def sample_questions(sample_questions_data):
    from learnkit.models.schemas import QuizQuestion

    return [QuizQuestion.model_validate(item) for item in sample_questions_data]


@pytest.fixture
def sample_stages():
    from learnkit.models.schemas import WorkflowStage

    return [
        WorkflowStage(stage="Design", description="Plan the API", tools_used=["Figma"]),
        WorkflowStage(stage="Build", description="Write the code", tools_used=["VS Code", "Git"]),
    ]


@pytest.fixture
def sample_workflow_payload() -> dict[str, Any]:
    return {
        "success": True,
        "data": {
            "role": "Platform Engineer",
            "workflow": [
                {
                    "stage": "Provision",
                    "description": "Create the infrastructure",
                    "tools_used": ["Terraform"],
                    "activities": ["Write modules"],
                },
                {
                    "stage": "Deploy",
                    "description": "Ship the service",
                    "tools_used": ["Kubernetes", "Helm"],
                    "activities": [],
                },
            ],
        },
    }


@pytest.fixture
def sample_stage_detail_payload() -> dict[str, Any]:
    return {
        "success": True,
        "data": {
            "code_snippet": {"language": "bash", "code": "terraform apply"},
            "best_practices": ["Pin provider versions"],
            "checklist": ["State stored remotely"],
        },
    }


# =============================================================================
# BACKEND CLIENT MOCKS
# =============================================================================


@pytest.fixture
def mock_backend():
    """Mock BackendClient with one AsyncMock per operation."""
    mock = MagicMock()
    mock.generate_content = AsyncMock(return_value="")
    mock.generate_workflow = AsyncMock(return_value={"success": False})
    mock.get_stage_detail = AsyncMock(return_value={"success": False})
    return mock


@pytest.fixture
def controlled_responses():
    """Side effect factory whose calls complete when the test decides.

    Returns (side_effect, futures): every call to the mocked coroutine
    appends a Future and awaits it; resolve ``futures[i]`` to complete call i.
    """
    futures: list[asyncio.Future] = []

    async def side_effect(*args, **kwargs):
        future = asyncio.get_running_loop().create_future()
        futures.append(future)
        return await future

    return side_effect, futures


# =============================================================================
# FAKE BACKEND (FastAPI)
# =============================================================================


@pytest.fixture
def backend_app():
    """FastAPI app standing in for the generative backend.

    Responses are configured per test through ``app.state``.
    """
    from fastapi import FastAPI, Request
    from fastapi.responses import JSONResponse, PlainTextResponse

    app = FastAPI()
    app.state.requests = []
    app.state.chat_reply = "Hello"
    app.state.workflow_response = {"success": False}
    app.state.detail_response = {"success": False}
    app.state.status_code = 200
    app.state.raw_body = None

    def _respond(body: Any):
        if app.state.raw_body is not None:
            return PlainTextResponse(app.state.raw_body, status_code=app.state.status_code)
        return JSONResponse(body, status_code=app.state.status_code)

    @app.post("/api/ai/chat")
    async def chat(request: Request):
        app.state.requests.append(("chat", await request.json()))
        return _respond({"reply": app.state.chat_reply})

    @app.post("/api/role/workflow")
    async def workflow(request: Request):
        app.state.requests.append(("workflow", await request.json()))
        return _respond(app.state.workflow_response)

    @app.post("/api/role/stage-detail")
    async def stage_detail(request: Request):
        app.state.requests.append(("stage-detail", await request.json()))
        return _respond(app.state.detail_response)

    return app


@pytest.fixture
def async_client(backend_app):
    """httpx client routed to the fake backend."""
    from httpx import ASGITransport, AsyncClient

    return AsyncClient(transport=ASGITransport(app=backend_app), base_url="http://test")


@pytest.fixture
def backend_client(async_client):
    """BackendClient bound to the fake backend."""
    from learnkit.llm.client import BackendClient

    return BackendClient(http_client=async_client)
