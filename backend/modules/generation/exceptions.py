"""
Generation module exceptions.
"""

from typing import Optional

from shared.exceptions import ExternalServiceError


class GenerationError(ExternalServiceError):
    """Raised when the language model fails to produce an argument."""

    def __init__(
        self,
        message: str,
        provider: str = "llm",
        original_error: Optional[str] = None,
    ):
        super().__init__(
            message,
            service=provider,
            code="GENERATION_FAILED",
            details={"original_error": original_error},
        )


class JudgmentError(ExternalServiceError):
    """Raised when the language model fails to judge a debate."""

    def __init__(
        self,
        message: str,
        provider: str = "llm",
        original_error: Optional[str] = None,
    ):
        super().__init__(
            message,
            service=provider,
            code="JUDGMENT_FAILED",
            details={"original_error": original_error},
        )
