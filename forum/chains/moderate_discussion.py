"""LLM chain for approving or rejecting a discussion topic."""

from pydantic import BaseModel

from forum.core.config import Settings
from forum.core.llm import (
    CompletionClient,
    apply_failure_policy,
    moderation_policy,
    parse_llm_json,
)
from forum.core.logging import get_logger
from forum.core.schemas_ask import ModerationOutput

logger = get_logger(__name__)


class ModerationResult(BaseModel):
    approved: bool
    reason: str | None = None


APPROVED = ModerationResult(approved=True)

# ruff: noqa: E501
SYSTEM_PROMPT_TEMPLATE = """You are a moderator for a {university} parent forum. Your task is to determine if a discussion topic is appropriate for the forum.

**Scope:**
- {university} specific topics (academics, housing, student life, sports, events, etc.)
- College life in general (advice for students, parent experiences, etc.)
- Topics related to {community} and the surrounding local community.
- General parenting discussion appropriate for a college parent audience.

**Rejection Criteria (Out of Scope):**
- Hate speech, harassment, or threats.
- Spam, advertisements, or promotions.
- Topics completely unrelated to college, parenting, or the local community (e.g., international politics, celebrity gossip, niche hobbies).

**Your Task:**
Respond with a single JSON object.
- If the topic is IN SCOPE, set "isApproved" to true.
- If the topic is OUT OF SCOPE, set "isApproved" to false and provide a brief, polite "reason" for the user.

Output ONLY: {{ "isApproved": true }} or {{ "isApproved": false, "reason": "..." }}"""


def moderate_topic(
    *,
    topic: str,
    client: CompletionClient,
    settings: Settings,
) -> ModerationResult:
    """
    Decide whether a discussion topic may be posted.

    Model failures and unusable output follow the moderation failure policy,
    which approves by default (MODERATION_FAIL_OPEN).
    """
    system = SYSTEM_PROMPT_TEMPLATE.format(
        university=settings.UNIVERSITY_NAME, community=settings.COMMUNITY_NAME
    )
    try:
        raw_output = client.complete(
            system=system,
            user=f'Discussion Topic: "{topic}"',
            temperature=settings.CLASSIFIER_TEMPERATURE,
        )
        if not raw_output.strip():
            raise ValueError("Empty moderation response")
        output = parse_llm_json(raw_output, ModerationOutput)
    except Exception as e:
        # Covers transport errors as well as empty or unparsable output
        return apply_failure_policy(
            "Discussion moderation", moderation_policy(settings), e, APPROVED
        )

    if output.is_approved:
        return APPROVED

    logger.info("Discussion topic rejected by moderation", extra={"reason": output.reason})
    return ModerationResult(
        approved=False,
        reason=output.reason or "This topic is outside the scope of the forum.",
    )
