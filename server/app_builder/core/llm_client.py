# app_builder/core/llm_client.py
import logging
import os
import time
from typing import Any, Iterator, List, Optional

from dotenv import load_dotenv
from google.api_core import exceptions as google_exceptions
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from app_builder.core.errors import (
    ConfigurationError,
    GenerationError,
    ProviderAPIError,
    ProviderAuthenticationError,
    ProviderRateLimitError,
    ProviderTransportError,
)
from app_builder.models import CompletionRequest, PromptPair
from app_builder.utils.file_helpers import debug_enabled, save_debug_log

load_dotenv()

logger = logging.getLogger(__name__)

API_KEY_ENV = "GOOGLE_API_KEY_GEMINI"
MODEL_NAME = "gemini-2.5-flash-lite"
MAX_OUTPUT_TOKENS = 2048
TEMPERATURE = 0.3
CANDIDATE_COUNT = 1

# values shipped in .env templates; compared case-insensitively
PLACEHOLDER_API_KEYS = {
    "YOUR_GOOGLE_API_KEY_HERE",
    "YOUR_GEMINI_API_KEY_HERE",
    "YOUR_API_KEY_HERE",
    "CHANGEME",
}

_AUTH_ERRORS = (google_exceptions.Unauthenticated, google_exceptions.PermissionDenied)
_RATE_LIMIT_ERRORS = (google_exceptions.ResourceExhausted, google_exceptions.TooManyRequests)


# -------------------------
# Credential + client init
# -------------------------
def resolve_api_key(api_key: Optional[str] = None) -> str:
    key = api_key if api_key is not None else os.getenv(API_KEY_ENV)
    if not isinstance(key, str) or not key.strip():
        raise ConfigurationError(f"Please set {API_KEY_ENV} environment variable for Gemini access.")
    key = key.strip()
    if key.upper() in PLACEHOLDER_API_KEYS:
        raise ConfigurationError(f"{API_KEY_ENV} still holds a placeholder value; set a real API key.")
    return key


def get_llm(api_key: str) -> ChatGoogleGenerativeAI:
    return ChatGoogleGenerativeAI(
        model=MODEL_NAME,
        google_api_key=api_key,
        temperature=TEMPERATURE,
        max_output_tokens=MAX_OUTPUT_TOKENS,
        n=CANDIDATE_COUNT,
        # single attempt; any retry policy belongs to the caller
        max_retries=1,
    )


def build_completion_request(prompt: PromptPair) -> CompletionRequest:
    return CompletionRequest(
        model=MODEL_NAME,
        messages=[
            {"role": "system", "content": prompt.system_instruction},
            {"role": "user", "content": prompt.user_instruction},
        ],
        max_output_tokens=MAX_OUTPUT_TOKENS,
        temperature=TEMPERATURE,
        candidate_count=CANDIDATE_COUNT,
    )


def _to_langchain_messages(request: CompletionRequest) -> List[BaseMessage]:
    message_types = {"system": SystemMessage, "user": HumanMessage}
    return [message_types[m["role"]](content=m["content"]) for m in request.messages]


# -------------------------
# Provider error classification
# -------------------------
def _iter_error_chain(exc: Optional[BaseException]) -> Iterator[BaseException]:
    seen = set()
    while exc is not None and id(exc) not in seen:
        seen.add(id(exc))
        yield exc
        exc = exc.__cause__ or exc.__context__


def _status_code(exc: BaseException) -> Optional[int]:
    for attr in ("code", "status_code"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return int(value)
    return None


def _is_invalid_api_key(exc: BaseException) -> bool:
    # Gemini rejects a bad key with 400 INVALID_ARGUMENT rather than 401
    if getattr(exc, "reason", None) == "API_KEY_INVALID":
        return True
    return "API key not valid" in str(exc)


def classify_provider_error(exc: BaseException) -> GenerationError:
    """
    Map an exception raised by the provider call to a categorised GenerationError.
    The wrapper exception and everything it was raised from are inspected in order.
    """
    for err in _iter_error_chain(exc):
        if isinstance(err, _AUTH_ERRORS) or _is_invalid_api_key(err):
            return ProviderAuthenticationError()
        if isinstance(err, _RATE_LIMIT_ERRORS):
            return ProviderRateLimitError()
        status = _status_code(err)
        if status in (401, 403):
            return ProviderAuthenticationError()
        if status == 429:
            return ProviderRateLimitError()
        if status is not None:
            return ProviderAPIError(status)
    return ProviderTransportError()


# -------------------------
# Completion invoker
# -------------------------
class CompletionInvoker:
    """
    Wraps exactly one provider call per `invoke`.

    `llm` is any LangChain chat model exposing `agenerate`; production code uses
    ChatGoogleGenerativeAI built by `build_completion_invoker`.
    """

    def __init__(self, llm: Any, debug: Optional[bool] = None) -> None:
        self._llm = llm
        self._debug = debug_enabled() if debug is None else debug

    async def invoke(self, prompt: PromptPair) -> Any:
        """
        Send the prompt pair and return the raw provider payload (an LLMResult).
        Raises a GenerationError subclass if the call fails.
        """
        request = build_completion_request(prompt)
        messages = _to_langchain_messages(request)

        start_ts = time.time()
        try:
            result = await self._llm.agenerate([messages])
        except Exception as e:
            duration = time.time() - start_ts
            logger.exception("Completion call to %s failed after %.2fs", request.model, duration)
            if self._debug:
                save_debug_log("llm_error", {"request": request.model_dump(), "error": repr(e)})
            raise classify_provider_error(e) from e

        duration = time.time() - start_ts
        logger.info("Completion call to %s finished in %.2fs", request.model, duration)
        if self._debug:
            raw_result_str = str(result)
            save_debug_log("llm_attempt", {
                "request": request.model_dump(),
                "duration_s": duration,
                "raw_result": raw_result_str if len(raw_result_str) <= 10000 else raw_result_str[:10000] + "...",
            })
        return result


def build_completion_invoker(api_key: Optional[str] = None, debug: Optional[bool] = None) -> CompletionInvoker:
    """
    Validate the credential and build the long-lived invoker.
    Raises ConfigurationError if the key is missing, blank or a placeholder.
    """
    key = resolve_api_key(api_key)
    llm = get_llm(key)
    logger.info("Completion client ready (model=%s)", MODEL_NAME)
    return CompletionInvoker(llm, debug=debug)
