"""
Unit tests for Interview Manager

Tests orchestration of both flows with a mocked generation service
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from docinterview.commands import ApplyAnswer, GenerateDocument, NextTemplateStep, ScanAndAsk
from docinterview.contracts import FieldLocator, InterviewState
from docinterview.core.interview_manager import InterviewManager, build_apply_answer
from docinterview.errors import ResolutionError, UpstreamError, ValidationError
from docinterview.results import (
    CompletionResult,
    DocumentResult,
    IllegalCommand,
    QuestionResult,
    TemplateStepResult,
    UpdateResult,
)


# ========================
# Mock Modules
# ========================

class MockGenerationClient:
    """Mock generation client returning canned text"""

    def __init__(self, response="What should go in this blank?", should_fail=False):
        self.response = response
        self.should_fail = should_fail
        self.call_count = 0

    def complete(self, system_prompt, user_prompt, temperature=0.7, max_tokens=150):
        self.call_count += 1
        if self.should_fail:
            raise UpstreamError("Generation service unreachable")
        return self.response


def ask(manager, document, index=0):
    return manager.handle(ScanAndAsk(state=InterviewState(document, index)))


# ========================
# Blank-driven flow
# ========================

def test_scenario_full_round():
    """Name/Age: ask, answer, rescan"""
    manager = InterviewManager(MockGenerationClient())
    document = "Name: ___, Age: ___"

    first = ask(manager, document, 0)
    assert isinstance(first, QuestionResult)
    assert first.question == "What should go in this blank?"
    assert first.total_blanks == 2
    assert first.remaining_blanks == 1
    assert first.blank.position == 6

    blank = first.blank
    update = manager.handle(ApplyAnswer(
        document_text=document,
        user_input="Asha",
        locator=FieldLocator(blank.position, blank.length, blank.token, blank.context)
    ))
    assert isinstance(update, UpdateResult)
    assert update.updated_content == "Name: Asha, Age: ___"
    assert update.remaining_blanks == 1

    second = ask(manager, update.updated_content, 0)
    assert second.total_blanks == 1
    assert second.blank.position == 17


def test_completion_boundary():
    manager = InterviewManager(MockGenerationClient())
    document = "A: ___ B: [blank] C: ( )"

    last = ask(manager, document, 2)
    done = ask(manager, document, 3)

    assert isinstance(last, QuestionResult)
    assert last.remaining_blanks == 0
    assert isinstance(done, CompletionResult)
    assert done.to_response() == {
        'success': True,
        'complete': True,
        'message': 'All blanks have been filled'
    }


def test_document_without_blanks_completes_immediately():
    client = MockGenerationClient()
    result = ask(InterviewManager(client), "Nothing to fill here.")

    assert isinstance(result, CompletionResult)
    assert result.total_blanks == 0
    assert client.call_count == 0


def test_canned_question_does_not_call_service():
    client = MockGenerationClient()
    result = ask(InterviewManager(client), "Mother's name: ___")

    assert result.question == "What is the petitioner's mother's name?"
    assert result.question_source == "canned"
    assert client.call_count == 0


def test_question_response_body():
    result = ask(InterviewManager(MockGenerationClient()), "Name: ___")
    body = result.to_response()

    assert body['success'] is True
    assert body['complete'] is False
    assert body['currentIndex'] == 0
    assert body['totalBlanks'] == 1
    assert body['remainingBlanks'] == 0
    assert body['blankContext']['position'] == 6
    assert body['blankContext']['token'] == body['blankContext']['blank'] == "___"
    assert body['blankContext']['type'] == "general"


def test_upstream_failure_propagates():
    manager = InterviewManager(MockGenerationClient(should_fail=True))

    with pytest.raises(UpstreamError):
        ask(manager, "Name: ___")


def test_stale_apply_rejected():
    manager = InterviewManager(MockGenerationClient())
    command = ApplyAnswer("Name: ___", "Asha", FieldLocator(6, 3, "___", "Name: ___"))

    updated = manager.handle(command).updated_content

    with pytest.raises(ResolutionError):
        manager.handle(ApplyAnswer(updated, "Asha", command.locator))


# ========================
# Template-driven flow
# ========================

def test_template_commands():
    manager = InterviewManager(MockGenerationClient(response=" Next? "))

    step = manager.handle(NextTemplateStep("Divorce Petition", None, {"Husband": "Ravi"}))
    document = manager.handle(GenerateDocument("Divorce Petition", {"Husband": "Ravi"}))

    assert isinstance(step, TemplateStepResult)
    assert step.to_response() == {'success': True, 'responseText': 'Next?'}
    assert isinstance(document, DocumentResult)
    assert document.to_response() == {'success': True, 'document': 'Next?'}


def test_unknown_command_is_illegal():
    result = InterviewManager(MockGenerationClient()).handle("not a command")

    assert isinstance(result, IllegalCommand)
    assert result.command_type == "str"
    assert result.to_response()['success'] is False


# ========================
# Request validation
# ========================

def test_build_apply_answer_from_payload():
    command = build_apply_answer({
        'userInput': 'Asha',
        'documentText': 'Name: ___',
        'questionContext': {'blank': '___', 'position': 6, 'length': 3, 'context': 'Name: ___'},
    })

    assert command.locator == FieldLocator(6, 3, '___', 'Name: ___')


@pytest.mark.parametrize("missing", ['userInput', 'questionContext', 'documentText'])
def test_build_apply_answer_missing_field(missing):
    payload = {
        'userInput': 'Asha',
        'documentText': 'Name: ___',
        'questionContext': {'position': 6, 'length': 3},
    }
    del payload[missing]

    with pytest.raises(ValidationError):
        build_apply_answer(payload)
