# app_builder/core/validator.py
import logging
from typing import Any, Optional

from app_builder.core.errors import EmptyCompletionError

logger = logging.getLogger(__name__)


def _get(obj: Any, name: str) -> Any:
    # provider payloads are LangChain objects; dicts are accepted for fakes and fixtures
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def _first_choice(payload: Any) -> Any:
    """
    Return the first completion choice. LLMResult nests candidates per prompt:
    generations[prompt_index][candidate_index]; only one prompt is ever sent.
    """
    generations = _get(payload, "generations")
    if not isinstance(generations, (list, tuple)) or not generations:
        return None
    choices = generations[0]
    if not isinstance(choices, (list, tuple)) or not choices:
        return None
    return choices[0]


def _message_text(message: Any) -> Optional[str]:
    content = _get(message, "content")
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        # multi-part content: keep the text parts in order
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text" and isinstance(part.get("text"), str):
                parts.append(part["text"])
        return "".join(parts) if parts else None
    return None


def validate_completion(payload: Any) -> str:
    """
    Extract the generated text from a provider payload.

    Raises EmptyCompletionError when the payload is missing, has no choices,
    the first choice has no message or text content, or the text is blank.
    Returns the text untrimmed.
    """
    if payload is None:
        logger.error("Provider returned no payload")
        raise EmptyCompletionError()

    choice = _first_choice(payload)
    message = _get(choice, "message") if choice is not None else None
    text = _message_text(message) if message is not None else None

    if text is None or not text.strip():
        logger.error("Invalid response structure received from provider: %.500r", payload)
        raise EmptyCompletionError()
    return text
