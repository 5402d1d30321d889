"""
Result types returned by InterviewManager.handle()

Each result knows its JSON response body; the HTTP layer adds nothing but
the status code.
"""

from dataclasses import dataclass
from typing import Any, Dict

from docinterview.contracts import BlankField

ALL_FILLED_MESSAGE = "All blanks have been filled"
UPDATED_MESSAGE = "Document updated successfully"


@dataclass(frozen=True)
class QuestionResult:
    """
    Next question of the blank-driven interview.

    Attributes:
        question: Text to show the user
        question_source: 'canned' or 'generated'
        current_index: Index of the active blank
        total_blanks: Blanks in the current document
        blank: Active blank (echoed back by the client as questionContext)
        remaining_blanks: Blanks after the active one
    """
    question: str
    question_source: str
    current_index: int
    total_blanks: int
    blank: BlankField
    remaining_blanks: int

    def to_response(self) -> Dict[str, Any]:
        return {
            'success': True,
            'complete': False,
            'question': self.question,
            'currentIndex': self.current_index,
            'totalBlanks': self.total_blanks,
            'blankContext': self.blank.to_dict(),
            'remainingBlanks': self.remaining_blanks,
        }


@dataclass(frozen=True)
class CompletionResult:
    """Index is past the last blank; nothing left to ask."""
    total_blanks: int
    message: str = ALL_FILLED_MESSAGE

    def to_response(self) -> Dict[str, Any]:
        return {
            'success': True,
            'complete': True,
            'message': self.message,
        }


@dataclass(frozen=True)
class UpdateResult:
    """
    Document after one substitution.

    Attributes:
        updated_content: Patched document text
        remaining_blanks: Blanks found by rescanning the patched text
    """
    updated_content: str
    remaining_blanks: int
    message: str = UPDATED_MESSAGE

    def to_response(self) -> Dict[str, Any]:
        return {
            'success': True,
            'message': self.message,
            'updatedContent': self.updated_content,
            'remainingBlanks': self.remaining_blanks,
        }


@dataclass(frozen=True)
class TemplateStepResult:
    """Next question (or final document) from the template-driven flow."""
    response_text: str

    def to_response(self) -> Dict[str, Any]:
        return {
            'success': True,
            'responseText': self.response_text,
        }


@dataclass(frozen=True)
class DocumentResult:
    """Final generated document."""
    document: str

    def to_response(self) -> Dict[str, Any]:
        return {
            'success': True,
            'document': self.document,
        }


@dataclass(frozen=True)
class IllegalCommand:
    """
    Command rejected by the manager (unknown command type).

    Attributes:
        reason: Human-readable explanation
        command_type: Name of rejected command type
    """
    reason: str
    command_type: str

    def to_response(self) -> Dict[str, Any]:
        return {
            'success': False,
            'message': self.reason,
        }
