"""LLM chain for answering a parent question from official university information."""

import json

from pydantic import ValidationError

from forum.core.config import Settings
from forum.core.errors import UpstreamModelError
from forum.core.llm import ANSWER_POLICY, CompletionClient, apply_failure_policy, parse_llm_json
from forum.core.logging import get_logger
from forum.core.schemas_ask import AnswerOutput, AskStatus

logger = get_logger(__name__)


# ruff: noqa: E501
SYSTEM_PROMPT_TEMPLATE = """You are a straightforward, kind, and professional virtual assistant for {university} students and parents.
Your role is to provide accurate, verified, and helpful information related only to {university} and the {community} community.

{context_preamble}

TONE AND STYLE:
- Maintain an encouraging, calm, and professional tone.
- Be direct and concise while remaining complete.
- Address the user's main question immediately.
- Avoid unnecessary commentary or speculation.

SCOPE (IN SCOPE):
- {university} student life, academics, administration, policies, deadlines, tuition, calendars, housing, dining, campus services, safety, and campus events.
- Official {university} offices, departments, and programs.
- Parent-related questions about supporting a student.
- {community} community topics that directly affect students or families (gameday logistics, transportation, nearby services).

OUT OF SCOPE:
- Topics unrelated to {university}, college life, or {community}.
- General knowledge questions not tied to the university.
- Medical, legal, or financial advice not specific to university policies or services.
- Speculation, opinions, or content sourced from unverified platforms.

KNOWLEDGE AND VERIFICATION RULES:
- Strictly limit facts and guidance to information available on verified and official university websites or authoritative university sources.
- Do NOT use unverified sources or general web knowledge.
- Every factual claim must be supported by a functional hyperlink to a specific official university webpage.
- Use the full, official name of any department or office the first time it is mentioned.

TIME-SENSITIVE INFORMATION:
- For information subject to change, include a brief disclaimer advising users to confirm details on the linked official webpage.

HANDLING UNANSWERABLE QUESTIONS:
- If a question cannot be answered using verified sources, clearly state that you cannot provide a confirmed answer.
- Suggest where the user can find the information.

HUMAN HAND-OFF REQUIREMENT:
- For questions that are sensitive, complex, or require human intervention, end the response with a clear direction to the best human point of contact.

YOUR TASK:
1) Determine whether the user's question is IN SCOPE or OUT OF SCOPE.
2) If IN SCOPE:
  - Provide a clear, helpful answer in Markdown.
  - Include at least one functional hyperlink to a verified official source that directly supports the answer.
  {context_instruction}
3) If OUT OF SCOPE:
  - Do NOT answer the question.
  - Provide a brief explanation that you can only respond to questions related to {university} or the {community} community.

OUTPUT FORMAT:
Return ONLY a single valid JSON object with no extra text:

{{
  "status": "answered" | "rejected",
  "answer": "Markdown answer here (required if status is 'answered')",
  "reason": "Short explanation (required if status is 'rejected')"
}}"""


def build_system_prompt(student_year: str | None, settings: Settings) -> str:
    """Render the scope-restricted system prompt for an audience tag."""
    year = student_year if student_year and student_year != "All" else "All"

    if year == "All":
        context_preamble = "A parent has a general question."
        context_instruction = ""
    else:
        context_preamble = f"A parent of a '{year}' student has a question."
        context_instruction = (
            f"When formulating the answer, keep the student's year ('{year}') in mind for context."
        )

    return SYSTEM_PROMPT_TEMPLATE.format(
        university=settings.UNIVERSITY_NAME,
        community=settings.COMMUNITY_NAME,
        context_preamble=context_preamble,
        context_instruction=context_instruction,
    )


def generate_answer(
    *,
    question_text: str,
    student_year: str | None,
    client: CompletionClient,
    settings: Settings,
) -> AnswerOutput:
    """
    Generate a fresh answer or a scope rejection for a question.

    This call fails closed: a model failure, an empty completion, unparsable
    output or an answered status with no answer all raise.

    Raises:
        UpstreamModelError: If no usable structured result came back
    """
    user_prompt = f'Parent question: "{question_text}"\nStudent year: "{student_year or "All"}"'

    logger.info(f"Calling {settings.FORUM_MODEL} for answer generation")

    try:
        raw_output = client.complete(
            system=build_system_prompt(student_year, settings),
            user=user_prompt,
            temperature=settings.ANSWER_TEMPERATURE,
        )
    except Exception as e:
        return apply_failure_policy("Answer generation", ANSWER_POLICY, e, None)

    if not raw_output or not raw_output.strip():
        raise UpstreamModelError("Empty response from language model")

    try:
        result = parse_llm_json(raw_output, AnswerOutput)
    except (json.JSONDecodeError, ValidationError) as e:
        preview = raw_output[:200]
        logger.error(f"Answer output failed validation: {e}", extra={"output_preview": preview})
        raise UpstreamModelError("Invalid JSON from language model") from e

    if result.status == AskStatus.ANSWERED and not (result.answer or "").strip():
        raise UpstreamModelError("Language model answered without an answer body")
    if result.status == AskStatus.REJECTED and not result.reason:
        result.reason = (
            f"I can only answer questions related to {settings.UNIVERSITY_NAME} "
            f"and the {settings.COMMUNITY_NAME} community."
        )
    return result
