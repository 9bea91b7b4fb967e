"""Language-model capability used by every prompt chain.

Chains depend on the ``CompletionClient`` protocol rather than on the OpenAI SDK
directly, so tests can hand in scripted fakes through ``get_completion_client``.
"""

import json
import re
from enum import Enum
from functools import lru_cache
from typing import Any, Protocol, TypeVar

from openai import OpenAI
from pydantic import BaseModel

from forum.core.config import Settings, get_settings
from forum.core.errors import UpstreamModelError
from forum.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


class CompletionClient(Protocol):
    """Stateless text-in / text-out completion function."""

    def complete(
        self,
        *,
        system: str,
        user: str,
        temperature: float,
        json_mode: bool = True,
    ) -> str: ...


class OpenAICompletionClient:
    """CompletionClient backed by the OpenAI chat completions API."""

    def __init__(self, api_key: str, model: str):
        self.model = model
        self._client = OpenAI(api_key=api_key)

    def complete(
        self,
        *,
        system: str,
        user: str,
        temperature: float,
        json_mode: bool = True,
    ) -> str:
        kwargs = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        response = self._client.chat.completions.create(
            model=self.model,
            temperature=temperature,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            **kwargs,
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""


@lru_cache(maxsize=1)
def _default_client() -> OpenAICompletionClient:
    settings = get_settings()
    return OpenAICompletionClient(api_key=settings.OPENAI_API_KEY, model=settings.FORUM_MODEL)


def get_completion_client() -> CompletionClient:
    """FastAPI dependency returning the configured completion client."""
    return _default_client()


class FailurePolicy(str, Enum):
    """What a model-backed operation does when the upstream call fails."""

    OPEN = "fail_open"
    CLOSED = "fail_closed"


# Named policy per model-backed operation
SEMANTIC_DUPLICATE_POLICY = FailurePolicy.OPEN
SPELLING_POLICY = FailurePolicy.OPEN
ANSWER_POLICY = FailurePolicy.CLOSED


def moderation_policy(settings: Settings) -> FailurePolicy:
    """Moderation fails open unless MODERATION_FAIL_OPEN is turned off."""
    if settings.MODERATION_FAIL_OPEN:
        return FailurePolicy.OPEN
    return FailurePolicy.CLOSED


def apply_failure_policy(
    operation: str, policy: FailurePolicy, error: Exception, fallback: Any
) -> Any:
    """
    Resolve a failed model call according to its policy.

    Args:
        operation: Operation name, used for logging and the error message
        policy: FailurePolicy for the operation
        error: The exception that ended the call
        fallback: Value returned when the policy is fail-open

    Returns:
        The fallback value (fail-open)

    Raises:
        UpstreamModelError: If the policy is fail-closed
    """
    if policy is FailurePolicy.CLOSED:
        logger.error(
            f"{operation} failed, failing closed: {error}",
            extra={"operation": operation},
        )
        raise UpstreamModelError(f"{operation} failed: {error}") from error

    logger.warning(
        f"{operation} failed, failing open: {error}",
        extra={"operation": operation},
    )
    return fallback


def _strip_llm_fences(raw_output: str) -> str:
    """Strip markdown code fences from LLM output.

    Handles: ```json ... ```, ``` ... ```, leading/trailing whitespace.
    """
    cleaned = raw_output.strip()

    fence_match = re.search(r"```(?:json)?\s*\n?(.*?)```", cleaned, re.DOTALL)
    if fence_match:
        return fence_match.group(1).strip()

    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def parse_llm_json(raw_output: str, model: type[T]) -> T:
    """
    Parse LLM output as JSON and validate against a Pydantic model.

    Args:
        raw_output: Raw string from LLM response
        model: Pydantic model class to validate against

    Returns:
        Validated Pydantic model instance

    Raises:
        json.JSONDecodeError: If JSON parsing fails after cleanup
        pydantic.ValidationError: If parsed JSON doesn't match schema
    """
    cleaned = _strip_llm_fences(raw_output)
    parsed = json.loads(cleaned)
    return model.model_validate(parsed)
