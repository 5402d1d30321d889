"""
Command types for InterviewManager control flow.

Commands are the public interface to InterviewManager.handle().
Each command carries everything a request needs; nothing is read from
server-side state.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from docinterview.contracts import FieldLocator, InterviewState


@dataclass(frozen=True)
class ScanAndAsk:
    """
    Scan the document and ask about the blank at the state's index.

    Returns: QuestionResult, or CompletionResult when the index is past the end.
    """
    state: InterviewState


@dataclass(frozen=True)
class ApplyAnswer:
    """
    Substitute an answer into one blank.

    Returns: UpdateResult with the patched document.
    """
    document_text: str
    user_input: str
    locator: FieldLocator


@dataclass(frozen=True)
class NextTemplateStep:
    """
    Ask the generation service for the next template-driven question.

    Returns: TemplateStepResult.
    """
    document_type: str
    current_answer: Optional[str] = None
    previous_responses: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class GenerateDocument:
    """
    Render the final document from all template-driven responses.

    Returns: DocumentResult.
    """
    document_type: str
    responses: Dict[str, Any] = field(default_factory=dict)


# Command union type for type hints
Command = ScanAndAsk | ApplyAnswer | NextTemplateStep | GenerateDocument
