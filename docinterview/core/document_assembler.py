"""
Document Assembler - Template-driven interview and document generation

Responsibilities:
- Ask the generation service for the next question of a template interview
- Ask the generation service to render the final document from all answers

Design principles:
- Local code never branches on the document type; the question-flow rules
  and the full response history are forwarded in the prompt
- Response order is preserved exactly as the caller supplied it
- No retries, no local fallback text
"""

import logging
from typing import Any, Mapping, Optional

from docinterview.contracts import normalize_responses
from docinterview.errors import UpstreamError, ValidationError
from docinterview.utils.prompt_templates import (
    build_document_system_prompt,
    build_document_user_prompt,
    build_next_step_system_prompt,
    build_next_step_user_prompt,
)

logger = logging.getLogger(__name__)

TEMPERATURE = 0.7
NEXT_STEP_MAX_TOKENS = 150
DOCUMENT_MAX_TOKENS = 2000


class DocumentAssembler:
    """Drives the template-driven flow through the generation service"""

    def __init__(self, generation_client):
        """
        Args:
            generation_client: Object with a callable complete() method

        Raises:
            TypeError: If generation_client has no callable complete()
        """
        if not callable(getattr(generation_client, 'complete', None)):
            raise TypeError("generation_client must have callable complete() method")

        self.client = generation_client
        logger.info("Document Assembler initialized")

    # ==================== PUBLIC API ====================

    def next_step(
        self,
        document_type: str,
        current_answer: Optional[str] = None,
        previous_responses: Optional[Mapping[str, Any]] = None
    ) -> str:
        """
        Get the next interview question, or the final document when the
        service decides every question has been answered

        Args:
            document_type: Label such as 'Divorce Petition' or 'Lease Agreement'
            current_answer: Answer to the question just asked, if any
            previous_responses: Ordered question -> answer pairs so far

        Returns:
            str: Generated text, stripped

        Raises:
            ValidationError: document_type missing, or responses not a mapping
            UpstreamError: Generation failed or returned no content
        """
        document_type = self._require_document_type(document_type)
        responses = normalize_responses(previous_responses, field_name="previousResponses")

        logger.info(f"Next step for {document_type} ({len(responses)} previous responses)")

        reply = self.client.complete(
            build_next_step_system_prompt(responses),
            build_next_step_user_prompt(document_type, current_answer),
            temperature=TEMPERATURE,
            max_tokens=NEXT_STEP_MAX_TOKENS
        )
        return self._require_text(reply, "next question")

    def generate_document(self, document_type: str, responses: Optional[Mapping[str, Any]]) -> str:
        """
        Render a complete, formatted document from all question/answer pairs

        Args:
            document_type: Document label
            responses: Ordered question -> answer pairs

        Returns:
            str: Generated document, stripped

        Raises:
            ValidationError: document_type missing, or responses not a mapping
            UpstreamError: Generation failed or returned no content
        """
        document_type = self._require_document_type(document_type)
        responses = normalize_responses(responses)

        logger.info(f"Generating {document_type} from {len(responses)} responses")

        reply = self.client.complete(
            build_document_system_prompt(document_type, responses),
            build_document_user_prompt(document_type),
            temperature=TEMPERATURE,
            max_tokens=DOCUMENT_MAX_TOKENS
        )
        return self._require_text(reply, "document")

    # ==================== HELPERS ====================

    @staticmethod
    def _require_document_type(document_type: Any) -> str:
        if not isinstance(document_type, str) or not document_type.strip():
            raise ValidationError("Missing required field: documentType")
        return document_type.strip()

    @staticmethod
    def _require_text(reply: Optional[str], what: str) -> str:
        text = reply.strip() if reply else ""
        if not text:
            logger.error(f"Generation service produced no {what}")
            raise UpstreamError(f"Generation service produced no {what}")
        return text

