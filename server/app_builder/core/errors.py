# app_builder/core/errors.py
"""
Exceptions raised inside the generation pipeline.

Every GenerationError carries an ErrorCategory and a fixed, client-safe detail
message. The pipeline converts them into a CompletionFailure at its boundary;
ConfigurationError is the one fatal startup condition and is never categorised.
"""

from typing import Optional

from app_builder.models import ErrorCategory


class ConfigurationError(RuntimeError):
    """Raised when the service cannot be initialised (e.g. missing API key)."""


class GenerationError(Exception):
    category: ErrorCategory = ErrorCategory.TRANSPORT_ERROR
    default_detail: str = "Code generation failed."

    def __init__(self, detail: Optional[str] = None, status_code: Optional[int] = None) -> None:
        self.detail = detail or self.default_detail
        self.status_code = status_code
        super().__init__(self.detail)


class InvalidSpecificationError(GenerationError):
    category = ErrorCategory.INVALID_INPUT
    default_detail = "Invalid specifications provided."


class EmptyCompletionError(GenerationError):
    category = ErrorCategory.EMPTY_OR_MALFORMED_RESPONSE
    default_detail = "LLM returned an empty or invalid response."


class ProviderAuthenticationError(GenerationError):
    category = ErrorCategory.AUTHENTICATION_FAILED
    default_detail = "Provider authentication failed. Verify your API key."


class ProviderRateLimitError(GenerationError):
    category = ErrorCategory.RATE_LIMITED
    default_detail = "Provider rate limit exceeded. Please try again later."


class ProviderAPIError(GenerationError):
    category = ErrorCategory.PROVIDER_ERROR

    def __init__(self, status_code: int) -> None:
        super().__init__(
            f"Failed to generate code due to a provider API issue (Status: {status_code}).",
            status_code=status_code,
        )


class ProviderTransportError(GenerationError):
    category = ErrorCategory.TRANSPORT_ERROR
    default_detail = "Failed to communicate with the completion provider."
