"""
Generation module.

Turns personas and transcripts into argument text and judgments.

Public API:
- IContentGenerator: Interface the orchestrator depends on
- Judgment, TranscriptEntry: Judging inputs and outputs
- GenerationError, JudgmentError: Failures of the model call
"""

from .interfaces import IContentGenerator
from .models import Judgment, TranscriptEntry
from .exceptions import GenerationError, JudgmentError

__all__ = [
    "IContentGenerator",
    "Judgment",
    "TranscriptEntry",
    "GenerationError",
    "JudgmentError",
]
