"""Shared fixtures: a fake chat model so no test touches the network."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.messages import AIMessage
from langchain_core.outputs import ChatGeneration, LLMResult

from app_builder.core.llm_client import CompletionInvoker

GENERATED_CODE = (
    "/* file: index.html */\n<h1>Test App</h1>\n"
    "/* file: style.css */\nbody { color: blue; }\n"
    "/* file: script.js */\nconsole.log(\"Hello Test App\");"
)


def make_llm_result(text: str | list = GENERATED_CODE) -> LLMResult:
    """Build the payload ChatGoogleGenerativeAI.agenerate returns for one prompt."""
    return LLMResult(generations=[[ChatGeneration(message=AIMessage(content=text))]])


@pytest.fixture
def valid_spec() -> dict:
    return {
        "appName": "Test App",
        "description": "A simple testing application.",
        "features": ["Feature A", "Feature B"],
    }


@pytest.fixture
def fake_llm() -> MagicMock:
    llm = MagicMock()
    llm.agenerate = AsyncMock(return_value=make_llm_result())
    return llm


@pytest.fixture
def invoker(fake_llm: MagicMock) -> CompletionInvoker:
    return CompletionInvoker(fake_llm, debug=False)
