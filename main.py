"""
Console Test Harness for InterviewManager (Functional Core)

Runs the blank-driven interview over a text file in the console, the same
way a client of the HTTP API would: state is held in this loop and passed
in on every turn.

Usage:
    python main.py path/to/template.txt [--output filled.txt]
"""

import argparse
import logging
import sys
from pathlib import Path

from docinterview.commands import ApplyAnswer, ScanAndAsk
from docinterview.config import load_settings
from docinterview.contracts import FieldLocator, InterviewState
from docinterview.core.interview_manager import InterviewManager
from docinterview.errors import DocumentInterviewError
from docinterview.results import CompletionResult
from docinterview.utils.generation_client import GenerationClient

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

EXIT_COMMANDS = {"quit", "exit", "stop"}
SKIP_COMMAND = "skip"


def print_separator(char="=", length=60):
    """Print a separator line"""
    print(char * length)


def run_interview(manager, document_text, input_fn=input, output_fn=print):
    """
    Run the question/answer loop until every blank is filled or the user exits

    Typing 'skip' leaves the current blank and moves the index forward;
    answered blanks disappear from the rescan, so the index stays put.

    Args:
        manager: InterviewManager
        document_text: Starting document
        input_fn: Prompt function (injectable for tests)
        output_fn: Print function (injectable for tests)

    Returns:
        str: Final document text
    """
    index = 0

    while True:
        result = manager.handle(ScanAndAsk(state=InterviewState(document_text, index)))

        if isinstance(result, CompletionResult):
            output_fn(f"\nSystem: {result.message}\n")
            return document_text

        output_fn(f"\n[Blank {result.current_index + 1}/{result.total_blanks}] {result.blank.context!r}")
        output_fn(f"System: {result.question}")

        answer = input_fn("> ").strip()

        if answer.lower() in EXIT_COMMANDS:
            output_fn("\nInterview ended by user\n")
            return document_text

        if not answer or answer.lower() == SKIP_COMMAND:
            index += 1
            continue

        blank = result.blank
        update = manager.handle(ApplyAnswer(
            document_text=document_text,
            user_input=answer,
            locator=FieldLocator(
                position=blank.position,
                length=blank.length,
                token=blank.token,
                context=blank.context
            )
        ))
        document_text = update.updated_content
        output_fn(f"[{update.remaining_blanks} blanks remaining]")


def main(argv=None):
    """Run console interview"""
    parser = argparse.ArgumentParser(description="Fill the blanks of a legal document interactively")
    parser.add_argument("document", help="Path to a text document containing blanks")
    parser.add_argument("--output", help="Where to write the filled document (default: print)")
    args = parser.parse_args(argv)

    print_separator()
    print("LEGAL DOCUMENT INTERVIEW - CONSOLE")
    print_separator()
    print("Type 'skip' to leave a blank, or 'quit', 'exit', 'stop' to end early\n")

    try:
        document_text = Path(args.document).read_text(encoding="utf-8")
    except OSError as e:
        print(f"\nCould not read document: {e}")
        return 1

    settings = load_settings()
    client = GenerationClient(
        api_key=settings.api_key,
        base_url=settings.base_url,
        model=settings.model,
        timeout=settings.timeout
    )
    manager = InterviewManager(client)

    try:
        final_text = run_interview(manager, document_text)
    except DocumentInterviewError as e:
        logger.error(f"Interview failed: {e}")
        return 1
    except KeyboardInterrupt:
        print("\n\nInterrupted")
        return 1

    if args.output:
        Path(args.output).write_text(final_text, encoding="utf-8")
        print(f"Filled document written to {args.output}")
    else:
        print_separator()
        print(final_text)
        print_separator()

    return 0


if __name__ == "__main__":
    sys.exit(main())
