"""LLM chain that fixes clear spelling mistakes in a submitted question."""

from forum.core.config import Settings
from forum.core.llm import SPELLING_POLICY, CompletionClient, apply_failure_policy

SYSTEM_PROMPT = """You are a helpful assistant that corrects spelling mistakes in a user's text.
- Only correct clear spelling errors.
- Do not change the user's grammar.
- Do not change the user's punctuation.
- Do not alter the sentence structure.
- Return only the corrected text."""


def correct_spelling(*, text: str, client: CompletionClient, settings: Settings) -> str:
    """Return ``text`` with clear spelling errors fixed, or unchanged on any failure."""
    try:
        corrected = client.complete(
            system=SYSTEM_PROMPT,
            user=text,
            temperature=settings.CLASSIFIER_TEMPERATURE,
            json_mode=False,
        )
    except Exception as e:
        return apply_failure_policy("Spelling correction", SPELLING_POLICY, e, text)

    corrected = (corrected or "").strip()
    return corrected or text
