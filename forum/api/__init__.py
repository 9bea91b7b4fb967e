"""API router for forum endpoints."""

from fastapi import APIRouter

from forum.api import activity, ask, bookmarks, comments, likes, me, questions

router = APIRouter()

router.include_router(questions.router, tags=["questions"])
router.include_router(ask.router, tags=["ask"])
router.include_router(comments.router, tags=["comments"])
router.include_router(likes.router, tags=["likes"])
router.include_router(bookmarks.router, tags=["bookmarks"])
router.include_router(me.router, tags=["me"])
router.include_router(activity.router, tags=["activity"])
