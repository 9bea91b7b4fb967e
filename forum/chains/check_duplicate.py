"""LLM chain for spotting a meaning-equivalent duplicate among answered questions."""

import json

from pydantic import ValidationError

from forum.core.config import Settings
from forum.core.llm import (
    SEMANTIC_DUPLICATE_POLICY,
    CompletionClient,
    apply_failure_policy,
    parse_llm_json,
)
from forum.core.logging import get_logger
from forum.core.schemas_ask import DuplicateCandidate, DuplicateOutput

logger = get_logger(__name__)

NOT_DUPLICATE = DuplicateOutput(is_duplicate=False)

# ruff: noqa: E501
SYSTEM_PROMPT = """You are an expert at identifying duplicate questions.

You will receive:
- "new_question": a single question
- "existing_questions": an array of objects, each with an "id" and "question"

Task:
- Decide whether the new question is semantically identical or very similar to any existing question.
- If duplicate, return the matching "id".

Rules:
- If it is semantically identical or very similar, set "isDuplicate" to true and include "matchedId".
- Otherwise, set "isDuplicate" to false.

Output:
Return ONLY valid JSON:
{ "isDuplicate": true, "matchedId": "..." }
or
{ "isDuplicate": false }"""


def find_semantic_duplicate(
    *,
    question_text: str,
    candidates: list[DuplicateCandidate],
    client: CompletionClient,
    settings: Settings,
) -> DuplicateOutput:
    """
    Ask the model whether ``question_text`` duplicates one of ``candidates``.

    No call is made for an empty candidate list. Any model failure, empty
    completion or unparsable output counts as "not a duplicate".

    Returns:
        DuplicateOutput; ``matched_id`` is set only when ``is_duplicate`` is true
    """
    if not candidates:
        return NOT_DUPLICATE

    payload = {
        "new_question": question_text,
        "existing_questions": [{"id": c.id, "question": c.question_text} for c in candidates],
    }

    try:
        raw_output = client.complete(
            system=SYSTEM_PROMPT,
            user=json.dumps(payload),
            temperature=settings.CLASSIFIER_TEMPERATURE,
        )
        if not raw_output.strip():
            return NOT_DUPLICATE
        result = parse_llm_json(raw_output, DuplicateOutput)
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning(f"Unparsable duplicate check output: {e}")
        return NOT_DUPLICATE
    except Exception as e:
        return apply_failure_policy(
            "Semantic duplicate check", SEMANTIC_DUPLICATE_POLICY, e, NOT_DUPLICATE
        )

    if result.is_duplicate and result.matched_id:
        logger.info(
            "Semantic duplicate reported",
            extra={"matched_id": result.matched_id, "candidate_count": len(candidates)},
        )
        return result
    return NOT_DUPLICATE
