"""Async HTTP client for the forum API.

Uses httpx for requests; responses are parsed into the same pydantic records
the server emits.
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx

from forum.core.logging import get_logger
from forum.core.schemas_ask import AskResult
from forum.core.schemas_engagement import (
    LikeTargetType,
    ToggleBookmarkResponse,
    ToggleLikeResponse,
)
from forum.core.schemas_profiles import ProfileRecord, SettingsResponse
from forum.core.schemas_questions import (
    ActivityResponse,
    CommentRecord,
    QuestionKind,
    QuestionRecord,
    StudentYear,
)

logger = get_logger(__name__)


class ForumApiError(Exception):
    """Non-2xx response from the forum API."""

    def __init__(self, status_code: int, code: str, detail: str):
        super().__init__(f"{status_code} {code}: {detail}")
        self.status_code = status_code
        self.code = code
        self.detail = detail


class ForumApiClient:
    """Client for the forum endpoints under ``/api``."""

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.token = token
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/api",
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> ForumApiClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    def _headers(self) -> dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        resp = await self._http.request(
            method, path, params=params, json=json, headers=self._headers()
        )
        if resp.status_code >= 400:
            try:
                body = resp.json()
            except ValueError:
                body = {}
            if not isinstance(body, dict):
                body = {}
            code = body.get("error") or "http_error"
            detail = body.get("detail") or resp.reason_phrase
            logger.warning(f"{method} {path} failed: {resp.status_code} {code}")
            raise ForumApiError(resp.status_code, code, str(detail))
        return resp.json()

    # Questions

    async def list_questions(
        self, kind: QuestionKind = QuestionKind.AI, limit: int | None = None
    ) -> list[QuestionRecord]:
        data = await self._request("GET", "/questions", params={"type": kind.value, "limit": limit})
        return [QuestionRecord.model_validate(q) for q in data.get("questions", [])]

    async def create_discussion(
        self, topic: str, student_year: StudentYear | None = None
    ) -> QuestionRecord:
        body = {"questionText": topic}
        if student_year:
            body["studentYear"] = student_year.value
        data = await self._request("POST", "/questions", json=body)
        return QuestionRecord.model_validate(data["question"])

    async def ask(self, question: str, student_year: StudentYear | None = None) -> AskResult:
        body = {"question": question}
        if student_year:
            body["studentYear"] = student_year.value
        data = await self._request("POST", "/ask", json=body)
        return AskResult.model_validate(data)

    # Comments

    async def list_comments(self, question_id: str) -> list[CommentRecord]:
        data = await self._request("GET", "/comments", params={"questionId": question_id})
        return [CommentRecord.model_validate(c) for c in data.get("comments", [])]

    async def add_comment(self, question_id: str, text: str) -> CommentRecord:
        data = await self._request(
            "POST", "/comments", json={"questionId": question_id, "text": text}
        )
        return CommentRecord.model_validate(data["comment"])

    # Likes and bookmarks

    async def toggle_like(self, target_type: LikeTargetType, target_id: str) -> ToggleLikeResponse:
        data = await self._request(
            "POST", "/likes", json={"targetType": target_type.value, "targetId": target_id}
        )
        return ToggleLikeResponse.model_validate(data)

    async def toggle_bookmark(self, question_id: str) -> ToggleBookmarkResponse:
        data = await self._request("POST", "/bookmarks", json={"questionId": question_id})
        return ToggleBookmarkResponse.model_validate(data)

    async def list_bookmarks(self, limit: int | None = None) -> list[QuestionRecord]:
        data = await self._request("GET", "/bookmarks", params={"limit": limit})
        return [QuestionRecord.model_validate(q) for q in data.get("bookmarks", [])]

    # Profile

    async def sync_profile(self, student_year: StudentYear | None = None) -> ProfileRecord:
        body = {"studentYear": student_year.value} if student_year else {}
        data = await self._request("POST", "/me", json=body)
        return ProfileRecord.model_validate(data["user"])

    async def update_settings(
        self, post_anonymously: bool, audience_tags: list[StudentYear] | None = None
    ) -> SettingsResponse:
        body: dict[str, Any] = {"postAnonymously": post_anonymously}
        if audience_tags is not None:
            body["audienceTags"] = [t.value for t in audience_tags]
        data = await self._request("POST", "/me/settings", json=body)
        return SettingsResponse.model_validate(data)

    async def my_activity(self, limit: int | None = None) -> ActivityResponse:
        data = await self._request("GET", "/my/activity", params={"limit": limit})
        return ActivityResponse.model_validate(data)

    async def load_dashboard(
        self, limit: int | None = None
    ) -> tuple[ActivityResponse, list[QuestionRecord]]:
        """Fetch own activity and bookmarks concurrently."""
        activity, bookmarks = await asyncio.gather(
            self.my_activity(limit), self.list_bookmarks(limit)
        )
        return activity, bookmarks
