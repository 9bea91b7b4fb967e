"""Pydantic schemas for user profiles and posting settings."""

from typing import Any

from pydantic import StrictBool

from forum.core.schemas_questions import CamelModel, StudentYear, coerce_student_year


def _known_tags(tags: list[str] | None) -> list[StudentYear] | None:
    if tags is None:
        return None
    return [t for t in (coerce_student_year(tag) for tag in tags) if t is not None]


class ProfileRecord(CamelModel):
    id: str | None = None
    user_id: str
    first_name: str | None = None
    last_name: str | None = None
    avatar_url: str | None = None
    student_year: StudentYear | None = None
    post_anonymously: bool = False
    audience_tags: list[StudentYear] | None = None

    @property
    def display_name(self) -> str | None:
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) or None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "ProfileRecord":
        return cls(
            id=str(row["id"]) if row.get("id") is not None else None,
            user_id=str(row["user_id"]),
            first_name=row.get("first_name"),
            last_name=row.get("last_name"),
            avatar_url=row.get("avatar_url"),
            student_year=coerce_student_year(row.get("student_year")),
            post_anonymously=bool(row.get("post_anonymously")),
            audience_tags=_known_tags(row.get("audience_tags")),
        )


class SyncProfileRequest(CamelModel):
    student_year: StudentYear | None = None


class ProfileResponse(CamelModel):
    user: ProfileRecord


class UpdateSettingsRequest(CamelModel):
    post_anonymously: StrictBool
    audience_tags: list[StudentYear] | None = None


class SettingsResponse(CamelModel):
    post_anonymously: bool
    audience_tags: list[StudentYear] | None = None
