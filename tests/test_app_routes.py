"""
Integration tests for the Flask endpoints

Uses Flask's test client with a mocked generation service.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

import app as app_module
from docinterview.errors import UpstreamError


class MockGenerationClient:
    """Mock generation client for route tests"""

    def __init__(self, response="What should go in this blank?", should_fail=False):
        self.response = response
        self.should_fail = should_fail

    def is_configured(self):
        return True

    def complete(self, system_prompt, user_prompt, temperature=0.7, max_tokens=150):
        if self.should_fail:
            raise UpstreamError("Generation service unreachable")
        return self.response


@pytest.fixture
def client():
    app_module.initialize_manager(client=MockGenerationClient())
    app_module.app.config['TESTING'] = True
    with app_module.app.test_client() as test_client:
        yield test_client


@pytest.fixture
def failing_client():
    app_module.initialize_manager(client=MockGenerationClient(should_fail=True))
    app_module.app.config['TESTING'] = True
    with app_module.app.test_client() as test_client:
        yield test_client


# ========== /process-document ==========

def test_process_document_first_question(client):
    response = client.post('/process-document', json={'documentText': 'Name: ___, Age: ___'})
    body = response.get_json()

    assert response.status_code == 200
    assert body['success'] is True
    assert body['complete'] is False
    assert body['question'] == "What should go in this blank?"
    assert body['currentIndex'] == 0
    assert body['totalBlanks'] == 2
    assert body['remainingBlanks'] == 1
    assert body['blankContext']['position'] == 6


def test_process_document_last_index(client):
    response = client.post('/process-document', json={
        'documentText': 'Name: ___, Age: ___',
        'currentQuestionIndex': 1
    })

    assert response.get_json()['remainingBlanks'] == 0


def test_process_document_complete(client):
    response = client.post('/process-document', json={
        'documentText': 'Name: ___, Age: ___',
        'currentQuestionIndex': 2
    })

    assert response.status_code == 200
    assert response.get_json() == {
        'success': True,
        'complete': True,
        'message': 'All blanks have been filled'
    }


def test_process_document_missing_text(client):
    response = client.post('/process-document', json={})

    assert response.status_code == 400
    assert response.get_json()['success'] is False


@pytest.mark.parametrize("index", ['--1', '\u00b2', '1.5'])
def test_process_document_malformed_index(client, index):
    response = client.post('/process-document', json={
        'documentText': 'Name: ___',
        'currentQuestionIndex': index
    })

    assert response.status_code == 400
    assert response.get_json()['success'] is False


def test_process_document_upstream_failure(failing_client):
    response = failing_client.post('/process-document', json={'documentText': 'Name: ___'})

    assert response.status_code == 500
    assert response.get_json()['success'] is False


# ========== /update-section ==========

def test_update_section_round_trip(client):
    ask = client.post('/process-document', json={'documentText': 'Name: ___, Age: ___'}).get_json()

    response = client.post('/update-section', json={
        'userInput': 'Asha',
        'questionContext': ask['blankContext'],
        'documentText': 'Name: ___, Age: ___'
    })
    body = response.get_json()

    assert response.status_code == 200
    assert body['success'] is True
    assert body['message'] == 'Document updated successfully'
    assert body['updatedContent'] == 'Name: Asha, Age: ___'
    assert body['remainingBlanks'] == 1


def test_update_section_missing_document_text(client):
    response = client.post('/update-section', json={
        'userInput': 'Asha',
        'questionContext': {'position': 6, 'length': 3, 'token': '___'}
    })

    assert response.status_code == 400
    assert response.get_json() == {
        'success': False,
        'message': 'Missing required fields: userInput, questionContext, or documentText'
    }


def test_update_section_stale_locator_returns_original(client):
    locator = {'position': 6, 'length': 3, 'token': '___', 'context': 'Name: ___, Age: ___'}
    response = client.post('/update-section', json={
        'userInput': 'Asha',
        'questionContext': locator,
        'documentText': 'Name: Asha, Age: ___'
    })
    body = response.get_json()

    assert response.status_code == 400
    assert body['success'] is False
    assert body['documentText'] == 'Name: Asha, Age: ___'


@pytest.mark.parametrize("question_context", [
    {'position': 6, 'token': 3},
    {'context': 5},
    {'position': '--1', 'length': 3},
])
def test_update_section_malformed_locator(client, question_context):
    response = client.post('/update-section', json={
        'userInput': 'Asha',
        'questionContext': question_context,
        'documentText': 'Name: ___'
    })

    assert response.status_code == 400
    assert response.get_json()['success'] is False


def test_update_section_non_json_body(client):
    response = client.post('/update-section', data='not json', content_type='text/plain')

    assert response.status_code == 400


# ========== template-driven ==========

def test_ai_text_query(client):
    response = client.post('/ai-text-query', json={
        'documentType': 'Divorce Petition',
        'currentAnswer': 'Ravi',
        'previousResponses': {"Husband's full name": 'Ravi'}
    })

    assert response.status_code == 200
    assert response.get_json() == {'success': True, 'responseText': 'What should go in this blank?'}


def test_ai_text_query_upstream_failure(failing_client):
    response = failing_client.post('/ai-text-query', json={'documentType': 'Divorce Petition'})

    assert response.status_code == 500
    assert response.get_json() == {'success': False, 'message': 'Error processing text query'}


def test_ai_text_query_missing_type(client):
    response = client.post('/ai-text-query', json={'previousResponses': {}})

    assert response.status_code == 400


def test_generate_document(client):
    response = client.post('/generate-document', json={
        'documentType': 'Lease Agreement',
        'responses': {'Landlord': 'A. Shah'}
    })

    assert response.status_code == 200
    assert response.get_json()['document'] == 'What should go in this blank?'


def test_generate_document_upstream_failure(failing_client):
    response = failing_client.post('/generate-document', json={
        'documentType': 'Lease Agreement',
        'responses': {'Landlord': 'A. Shah'}
    })

    assert response.status_code == 500
    assert response.get_json() == {'success': False, 'message': 'Error generating document'}


def test_health(client):
    body = client.get('/health').get_json()

    assert body == {'success': True, 'generationConfigured': True}
