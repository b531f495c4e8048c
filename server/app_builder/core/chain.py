# app_builder/core/chain.py
import logging
from typing import Any

from app_builder.core.errors import GenerationError
from app_builder.core.llm_client import CompletionInvoker
from app_builder.core.prompts import build_prompt_pair
from app_builder.core.spec_normalizer import normalize_specification
from app_builder.core.validator import validate_completion
from app_builder.models import CompletionFailure, CompletionOutcome, CompletionSuccess

logger = logging.getLogger(__name__)


class GenerationPipeline:
    """
    normalize -> build prompt -> one provider call -> validate.

    `run` never raises for an expected failure: every GenerationError is turned
    into a CompletionFailure here, once, with its category untouched.
    """

    def __init__(self, invoker: CompletionInvoker) -> None:
        self._invoker = invoker

    async def run(self, raw: Any) -> CompletionOutcome:
        try:
            spec = normalize_specification(raw)
            prompt = build_prompt_pair(spec)
            payload = await self._invoker.invoke(prompt)
            text = validate_completion(payload)
        except GenerationError as e:
            logger.warning("Generation failed: category=%s detail=%s", e.category.value, e.detail)
            return CompletionFailure(category=e.category, detail=e.detail, status_code=e.status_code)

        logger.info("Generated %d characters for app '%s'", len(text), spec.app_name)
        return CompletionSuccess(text=text)
