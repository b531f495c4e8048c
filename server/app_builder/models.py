from enum import Enum
from typing import Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_APP_NAME = "My Simple App"
DEFAULT_DESCRIPTION = "A basic web application."


class ErrorCategory(str, Enum):
    """Closed set of failure kinds a caller may present to an end user."""

    INVALID_INPUT = "InvalidInput"
    EMPTY_OR_MALFORMED_RESPONSE = "EmptyOrMalformedResponse"
    AUTHENTICATION_FAILED = "AuthenticationFailed"
    RATE_LIMITED = "RateLimited"
    PROVIDER_ERROR = "ProviderError"
    TRANSPORT_ERROR = "TransportError"


class NormalizedSpecification(BaseModel):
    model_config = ConfigDict(frozen=True)

    app_name: str = Field(DEFAULT_APP_NAME, min_length=1, description="Application name")
    description: str = Field(DEFAULT_DESCRIPTION, min_length=1, description="Application description")
    features: Tuple[str, ...] = Field(default_factory=tuple, description="Trimmed, non-empty feature entries")


class PromptPair(BaseModel):
    model_config = ConfigDict(frozen=True)

    system_instruction: str
    user_instruction: str


class CompletionRequest(BaseModel):
    """Parameters sent to the completion provider for a single call."""

    model_config = ConfigDict(frozen=True)

    model: str
    messages: List[Dict[str, str]]
    max_output_tokens: int = 2048
    temperature: float = 0.3
    candidate_count: int = 1


class CompletionSuccess(BaseModel):
    model_config = ConfigDict(frozen=True)

    ok: Literal[True] = True
    text: str


class CompletionFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    ok: Literal[False] = False
    category: ErrorCategory
    detail: str
    status_code: Optional[int] = Field(None, description="Provider HTTP status, set for ProviderError only")


CompletionOutcome = Union[CompletionSuccess, CompletionFailure]


# -------------------------
# HTTP payloads
# -------------------------
class GenerateResponse(BaseModel):
    code: str


class ErrorResponse(BaseModel):
    error: str
