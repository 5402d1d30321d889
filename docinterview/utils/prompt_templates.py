"""
Prompt Templates - Text sent to the generation service

Responsibilities:
- Question phrasing prompt for the blank-driven flow
- Next-step and full-document prompts for the template-driven flow
- Question-flow rules for the supported template document types

NOT responsible for:
- Deciding which question comes next (the generation service does that
  from the rules and the response history embedded here)
- Calling the generation service

Design principles:
- Deterministic: same inputs produce byte-identical prompts
- Response history is rendered in insertion order, one "key: value" per line
"""

from typing import Mapping, Optional


QUESTION_SYSTEM_PROMPT = (
    "Generate a clear, specific question to fill in the blank in this legal document context."
)

NOT_PROVIDED = "Not provided yet"


DIVORCE_PETITION_RULES = """For Divorce Petition:
1. Ask for husband's full name
2. Ask for wife's full name
3. Ask for marital address
4. Ask for date of marriage
5. Ask for grounds for divorce
6. Ask if child custody is requested (Yes/No)
   If Yes: Ask for custody details
   If No: Skip to question about spousal support
7. If custody requested, ask about child support (Yes/No)
   If Yes: Ask for support details
8. Ask if spousal support is requested (Yes/No)
   If Yes: Ask for spousal support details"""


BAIL_APPLICATION_TEMPLATE = """**Bail Application**

Before the Hon'ble Court of {{courtName}}

District: {{districtName}}

City: {{cityName}}

In the matter of:

{{petitionerName}}
Age: {{petitionerAge}}
Occupation: {{petitionerOccupation}}
Address: {{petitionerAddress}}

Petitioner

Versus

{{respondentName}}
Representative: {{respondentRepresentativeName}}
Age: {{respondentRepresentativeAge}}
Occupation: {{respondentRepresentativeOccupation}}
Address: {{respondentRepresentativeAddress}}

Respondent

**FIR Details:**
- FIR Number: {{firNumber}}
- Section of FIR: {{firSection}}
- Police Station: {{policeStation}}

Date of Arrest: {{dateOfArrest}}

Relevant Facts Supporting Petitioner's Innocence:
{{petitionerFacts}}"""


# (question, placeholder) pairs in asking order
BAIL_APPLICATION_QUESTIONS = (
    ("What is the name of the court?", "courtName"),
    ("What is the district name?", "districtName"),
    ("What is the city name?", "cityName"),
    ("What is the petitioner's full name?", "petitionerName"),
    ("What is the petitioner's age?", "petitionerAge"),
    ("What is the occupation of the petitioner?", "petitionerOccupation"),
    ("What is the petitioner's complete address?", "petitionerAddress"),
    ("What is the name of the respondent?", "respondentName"),
    ("What is the full name of the respondent's representative?", "respondentRepresentativeName"),
    ("What is the age of the respondent's representative?", "respondentRepresentativeAge"),
    ("What is the occupation of the respondent's representative?", "respondentRepresentativeOccupation"),
    ("What is the complete address of the respondent's representative?", "respondentRepresentativeAddress"),
    ("What is the FIR number?", "firNumber"),
    ("Under which section is the FIR filed?", "firSection"),
    ("Which police station registered the FIR?", "policeStation"),
    ("On what date was the petitioner arrested?", "dateOfArrest"),
    ("What are the relevant facts supporting the petitioner's innocence?", "petitionerFacts"),
)


LEASE_AGREEMENT_RULES = """For Lease Agreement:
1. Ask for landlord's full name
2. Ask for tenant's full name
3. Ask for property address
4. Ask for lease term
5. Ask for monthly rent amount
6. Ask for security deposit amount
7. Ask for any special terms or conditions"""


def format_responses(responses: Optional[Mapping[str, str]]) -> str:
    """
    Render question/answer pairs one per line, in insertion order

    >>> format_responses({'Husband': 'Ravi', 'Wife': 'Meera'})
    'Husband: Ravi\\nWife: Meera'
    """
    if not responses:
        return ""
    return "\n".join(f"{question}: {answer}" for question, answer in responses.items())


def build_question_user_prompt(context: str) -> str:
    return f"Context: {context}\nGenerate a question for the blank field."


def build_bail_application_section() -> str:
    """Bail template plus its question list with storage keys"""
    questions = "\n".join(
        f"{question} (store as {placeholder})"
        for question, placeholder in BAIL_APPLICATION_QUESTIONS
    )
    return (
        f"{BAIL_APPLICATION_TEMPLATE}\n\n"
        "Additional questions and details required for finalization:\n\n"
        f"{questions}\n"
        "After gathering all answers, substitute each placeholder with the respective "
        "answer, ensuring each detail is inserted into the final document."
    )


def build_next_step_system_prompt(previous_responses: Optional[Mapping[str, str]]) -> str:
    """System prompt for the one-question-at-a-time template flow"""
    return (
        "You are a specialized legal document assistant that asks one question at a time "
        "based on the document type selected. After receiving an answer, you should store it "
        "and proceed to ask the next relevant question. Only ask one question at a time.\n\n"
        "Current responses received:\n"
        f"{format_responses(previous_responses)}\n\n"
        "Please provide the next appropriate question based on the document type and "
        "previous responses. If all questions are answered, generate the final document."
    )


def build_next_step_user_prompt(document_type: str, current_answer: Optional[str]) -> str:
    """
    User prompt carrying the document type, the latest answer and the flow rules

    All document-type branching lives in this text.
    """
    return (
        f"Document Type: {document_type}\n"
        f"Current Answer: {current_answer or NOT_PROVIDED}\n\n"
        "Rules for question flow:\n\n"
        f"{DIVORCE_PETITION_RULES}\n\n"
        f"{build_bail_application_section()}\n\n"
        f"{LEASE_AGREEMENT_RULES}\n\n"
        "Please provide only the next appropriate question based on the previous responses. "
        "Do not include any other text or explanations.\n"
        f"Based on the following responses, generate a complete {document_type}.\n"
    )


def build_document_system_prompt(document_type: str, responses: Mapping[str, str]) -> str:
    """System prompt for rendering the final document from all responses"""
    return (
        "You are a legal document generator. Based on the following responses, generate a "
        f"complete {document_type}. Make it formal and professionally formatted.\n\n"
        "Responses:\n"
        f"{format_responses(responses)}"
    )


def build_document_user_prompt(document_type: str) -> str:
    return f"Please generate a complete {document_type} using the provided responses."
