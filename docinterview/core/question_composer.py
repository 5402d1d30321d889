"""
Question Composer - Phrase the question for the active blank

Responsibilities:
- Fast path: return the canned question for types that have one
- Slow path: ask the generation service to phrase a question from context

Design principles:
- Canned text never depends on context
- The slow path context is cut from the current document with a wider radius
  than the scan uses
- Generation failures propagate; no local fallback question is invented
"""

import logging
from dataclasses import dataclass

from docinterview.contracts import BlankField
from docinterview.core.field_scanner import context_window
from docinterview.errors import UpstreamError
from docinterview.utils.field_types import get_canned_question
from docinterview.utils.prompt_templates import (
    QUESTION_SYSTEM_PROMPT,
    build_question_user_prompt,
)

logger = logging.getLogger(__name__)

QUESTION_CONTEXT_RADIUS = 150
QUESTION_TEMPERATURE = 0.7
QUESTION_MAX_TOKENS = 150

SOURCE_CANNED = "canned"
SOURCE_GENERATED = "generated"


@dataclass(frozen=True)
class ComposedQuestion:
    """
    Attributes:
        text: Question shown to the user
        source: 'canned' (fast path) or 'generated' (slow path)
    """
    text: str
    source: str


class QuestionComposer:
    """Builds the question for one blank field"""

    def __init__(self, generation_client, context_radius: int = QUESTION_CONTEXT_RADIUS):
        """
        Args:
            generation_client: Object with a complete(system_prompt, user_prompt,
                temperature=..., max_tokens=...) method
            context_radius: Context characters on each side for the slow path

        Raises:
            TypeError: If generation_client has no callable complete()
        """
        if not callable(getattr(generation_client, 'complete', None)):
            raise TypeError("generation_client must have callable complete() method")

        self.client = generation_client
        self.context_radius = context_radius

    def compose(self, document_text: str, field: BlankField) -> ComposedQuestion:
        """
        Produce question text for a blank

        Args:
            document_text: Document the field was scanned from
            field: Active blank

        Returns:
            ComposedQuestion

        Raises:
            UpstreamError: Slow path call failed or returned no content
        """
        canned = get_canned_question(field.type)
        if canned is not None:
            logger.debug(f"Canned question for {field.type} at {field.position}")
            return ComposedQuestion(text=canned, source=SOURCE_CANNED)

        context = context_window(document_text, field.position, field.length, self.context_radius)
        reply = self.client.complete(
            QUESTION_SYSTEM_PROMPT,
            build_question_user_prompt(context),
            temperature=QUESTION_TEMPERATURE,
            max_tokens=QUESTION_MAX_TOKENS
        )

        text = reply.strip() if reply else ""
        if not text:
            logger.error(f"No question generated for {field.type} blank at {field.position}")
            raise UpstreamError("Generation service produced no question")

        return ComposedQuestion(text=text, source=SOURCE_GENERATED)
