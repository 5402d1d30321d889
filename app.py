"""
Flask Web Application for the Legal Document Interview Service

JSON endpoints for both interview flows. Every request carries its own
interview state; the server keeps none between requests.
"""

from flask import Flask, request, jsonify
import logging

from docinterview.commands import GenerateDocument, NextTemplateStep, ScanAndAsk
from docinterview.config import load_settings
from docinterview.contracts import InterviewState
from docinterview.core.interview_manager import InterviewManager, build_apply_answer
from docinterview.errors import DocumentInterviewError, ResolutionError
from docinterview.utils.generation_client import GenerationClient

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize Flask app
app = Flask(__name__)

# Stateless collaborators, built once at startup
manager = None
generation_client = None


def initialize_manager(client=None, settings=None):
    """
    Build the interview manager (called once at startup)

    Args:
        client: Generation client to use. When None, one is built from
            settings; a missing credential only logs a warning.
        settings: Settings to build the client from (default: environment)
    """
    global manager, generation_client

    if client is None:
        settings = settings or load_settings()
        logging.getLogger().setLevel(settings.log_level)
        client = GenerationClient(
            api_key=settings.api_key,
            base_url=settings.base_url,
            model=settings.model,
            timeout=settings.timeout
        )

    generation_client = client
    manager = InterviewManager(generation_client)
    return manager


def get_manager():
    if manager is None:
        initialize_manager()
    return manager


def _request_body():
    """JSON object body, or {} for anything else"""
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def _failure(message, status):
    return jsonify({
        'success': False,
        'message': message
    }), status


@app.route('/health', methods=['GET'])
def health():
    """Liveness plus whether the generation credential is configured"""
    get_manager()
    configured = getattr(generation_client, 'is_configured', lambda: True)()
    return jsonify({
        'success': True,
        'generationConfigured': configured
    })


@app.route('/ai-text-query', methods=['POST'])
def ai_text_query():
    """Next question (or final document) of the template-driven flow"""
    data = _request_body()

    try:
        result = get_manager().handle(NextTemplateStep(
            document_type=data.get('documentType'),
            current_answer=data.get('currentAnswer'),
            previous_responses=data.get('previousResponses')
        ))
        return jsonify(result.to_response())

    except DocumentInterviewError as e:
        logger.error(f"Error processing text query: {e}")
        if e.status_code < 500:
            return _failure(str(e), e.status_code)
        return _failure('Error processing text query', e.status_code)
    except Exception as e:
        logger.error(f"Error processing text query: {e}", exc_info=True)
        return _failure('Error processing text query', 500)


@app.route('/generate-document', methods=['POST'])
def generate_document():
    """Render the final document from all template-driven responses"""
    data = _request_body()

    try:
        result = get_manager().handle(GenerateDocument(
            document_type=data.get('documentType'),
            responses=data.get('responses')
        ))
        return jsonify(result.to_response())

    except DocumentInterviewError as e:
        logger.error(f"Error generating document: {e}")
        if e.status_code < 500:
            return _failure(str(e), e.status_code)
        return _failure('Error generating document', e.status_code)
    except Exception as e:
        logger.error(f"Error generating document: {e}", exc_info=True)
        return _failure('Error generating document', 500)


@app.route('/process-document', methods=['POST'])
def process_document():
    """Scan the submitted document and ask about the blank at the given index"""
    data = _request_body()

    try:
        state = InterviewState.from_payload(data)
        result = get_manager().handle(ScanAndAsk(state=state))
        return jsonify(result.to_response())

    except DocumentInterviewError as e:
        logger.error(f"Error processing document: {e}")
        return _failure(str(e), e.status_code)
    except Exception as e:
        logger.error(f"Error processing document: {e}", exc_info=True)
        return _failure(str(e), 500)


@app.route('/update-section', methods=['POST'])
def update_section():
    """Substitute one answer into the submitted document"""
    data = _request_body()

    try:
        command = build_apply_answer(data)
        result = get_manager().handle(command)
        return jsonify(result.to_response())

    except ResolutionError as e:
        logger.error(f"Error in update-section: {e}")
        return jsonify({
            'success': False,
            'message': str(e),
            'documentText': data.get('documentText')
        }), e.status_code
    except DocumentInterviewError as e:
        logger.error(f"Error in update-section: {e}")
        return _failure(str(e) or 'Could not determine section to update', e.status_code)
    except Exception as e:
        logger.error(f"Error in update-section: {e}", exc_info=True)
        return _failure(str(e) or 'Could not determine section to update', 500)


if __name__ == '__main__':
    settings = load_settings()
    initialize_manager(settings=settings)

    print("\n" + "="*60)
    print("LEGAL DOCUMENT INTERVIEW SERVICE")
    print("="*60)
    print(f"\nServer starting on http://{settings.host}:{settings.port}")
    print("\nPress Ctrl+C to stop the server")
    print("="*60 + "\n")

    app.run(host=settings.host, port=settings.port, debug=False)
