"""
Interview Manager - Per-request orchestration (Functional Core)

Responsibilities:
- Blank-driven flow: scan -> classify -> select -> compose question
- Blank-driven flow: apply one answer and report what is left
- Template-driven flow: delegate to the Document Assembler
- Command dispatch for the HTTP layer and the console harness

Design principles:
- Ephemeral per request (collaborators cached, interview state external)
- Field list recomputed from the submitted text on every call
- Thin orchestration layer (logic lives in the specialized modules)
- Errors propagate unchanged to the caller
"""

import logging
from typing import Any, Mapping, Optional, Union

from docinterview.commands import (
    ApplyAnswer,
    GenerateDocument,
    NextTemplateStep,
    ScanAndAsk,
)
from docinterview.contracts import FieldLocator, InterviewState
from docinterview.core.document_assembler import DocumentAssembler
from docinterview.core.field_scanner import FieldScanner
from docinterview.core.interview_cursor import InterviewCursor
from docinterview.core.question_composer import QuestionComposer
from docinterview.core.section_updater import SectionUpdater
from docinterview.errors import ValidationError
from docinterview.results import (
    CompletionResult,
    DocumentResult,
    IllegalCommand,
    QuestionResult,
    TemplateStepResult,
    UpdateResult,
)

logger = logging.getLogger(__name__)


class InterviewManager:
    """
    Orchestrates one request of either interview flow

    Functional core design:
    - Collaborators are stateless and safe to cache
    - handle() maps a command to a result deterministically (up to the
      generation service)
    - No implicit state accumulation between requests
    """

    def __init__(
        self,
        generation_client,
        scanner: Optional[FieldScanner] = None,
        composer: Optional[QuestionComposer] = None,
        updater: Optional[SectionUpdater] = None,
        assembler: Optional[DocumentAssembler] = None
    ):
        """
        Args:
            generation_client: Client with a callable complete() method. Used to
                build any collaborator not passed explicitly.
            scanner: FieldScanner (default radius 50)
            composer: QuestionComposer (default radius 150)
            updater: SectionUpdater
            assembler: DocumentAssembler
        """
        self.scanner = scanner or FieldScanner()
        self.cursor = InterviewCursor()
        self.composer = composer or QuestionComposer(generation_client)
        self.updater = updater or SectionUpdater()
        self.assembler = assembler or DocumentAssembler(generation_client)

        logger.info("Interview Manager initialized (functional core)")

    def handle(self, command) -> Union[QuestionResult, CompletionResult, UpdateResult,
                                       TemplateStepResult, DocumentResult, IllegalCommand]:
        """
        Dispatch a command

        Args:
            command: One of the docinterview.commands types

        Returns:
            The matching result type, or IllegalCommand for anything else

        Raises:
            ValidationError, ResolutionError, UpstreamError from the handlers
        """
        if isinstance(command, ScanAndAsk):
            return self.scan_and_ask(command.state)

        if isinstance(command, ApplyAnswer):
            return self.apply_answer(command.document_text, command.user_input, command.locator)

        if isinstance(command, NextTemplateStep):
            return TemplateStepResult(response_text=self.assembler.next_step(
                command.document_type,
                command.current_answer,
                command.previous_responses
            ))

        if isinstance(command, GenerateDocument):
            return DocumentResult(document=self.assembler.generate_document(
                command.document_type,
                command.responses
            ))

        command_type = type(command).__name__
        logger.error(f"Rejected unknown command type: {command_type}")
        return IllegalCommand(reason=f"Unsupported command: {command_type}", command_type=command_type)

    # ==================== BLANK-DRIVEN FLOW ====================

    def scan_and_ask(self, state: InterviewState) -> Union[QuestionResult, CompletionResult]:
        """
        Ask about the blank at the state's index

        Args:
            state: Caller-owned document text and index

        Returns:
            QuestionResult, or CompletionResult if the index is past the end
            (including a document with no blanks at all)
        """
        if not isinstance(state.document_text, str):
            raise ValidationError("documentText must be a string")

        fields = self.scanner.scan(state.document_text)
        position = self.cursor.select(fields, state.current_question_index)

        if position.complete:
            logger.info(f"Interview complete at index {position.index} ({position.total} blanks)")
            return CompletionResult(total_blanks=position.total)

        question = self.composer.compose(state.document_text, position.field)

        logger.info(
            f"Question {position.index + 1}/{position.total} "
            f"({position.field.type}, {question.source})"
        )

        return QuestionResult(
            question=question.text,
            question_source=question.source,
            current_index=position.index,
            total_blanks=position.total,
            blank=position.field,
            remaining_blanks=position.remaining
        )

    def apply_answer(
        self,
        document_text: Optional[str],
        user_input: Optional[str],
        locator: Optional[FieldLocator]
    ) -> UpdateResult:
        """
        Fill one blank and rescan the result

        Raises:
            ValidationError: Missing input
            ResolutionError: Locator no longer matches the text
        """
        outcome = self.updater.update(document_text, user_input, locator)
        remaining = self.scanner.count(outcome.text)

        return UpdateResult(updated_content=outcome.text, remaining_blanks=remaining)


def build_apply_answer(payload: Mapping[str, Any]) -> ApplyAnswer:
    """
    Validate an update-section request body into an ApplyAnswer command

    Raises:
        ValidationError: Any of userInput, questionContext, documentText missing
    """
    user_input = payload.get('userInput')
    question_context = payload.get('questionContext')
    document_text = payload.get('documentText')

    if not user_input or not question_context or not document_text:
        raise ValidationError("Missing required fields: userInput, questionContext, or documentText")
    if not isinstance(user_input, str) or not isinstance(document_text, str):
        raise ValidationError("userInput and documentText must be strings")

    return ApplyAnswer(
        document_text=document_text,
        user_input=user_input,
        locator=FieldLocator.from_payload(question_context)
    )
