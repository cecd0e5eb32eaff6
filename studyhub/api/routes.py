"""
Route Registration

Centralizes all route registration for the FastAPI application.

Route Hierarchy:
================
    /health, /ready, /live  → Health check endpoints
    /auth                   → Registration, login, tokens, password reset
    /profile                → Own profile, password change, account deletion
    /notes                  → Notes, their votes, comments and approval
    /questions              → Past questions, same surface as notes
    /comments               → Edit / delete comments
    /bookmarks              → Bookmark toggle and listing
    /reports                → Content reports and moderation queue
    /groups                 → Study groups, membership and group chat
    /notifications          → In-app notifications
    /uploads                → File uploads (metadata; files under the static mount)
    /search                 → Global search
    /statistics             → Engagement and contribution numbers
    /categories             → Subject categories

Usage:
======
    from studyhub.api.routes import register_routes

    app = FastAPI()
    register_routes(app)
"""

from fastapi import FastAPI

from studyhub.api.handlers import (
    auth_handler,
    bookmark_handler,
    category_handler,
    comment_handler,
    group_chat_handler,
    group_handler,
    health_handler,
    note_handler,
    notification_handler,
    profile_handler,
    question_handler,
    report_handler,
    search_handler,
    statistics_handler,
    upload_handler,
)


def register_routes(app: FastAPI) -> None:
    """
    Register all API routes.

    Args:
        app: FastAPI application instance
    """
    # Health check endpoints (no prefix, root level)
    app.include_router(
        health_handler.router,
        tags=["Health"],
    )

    # Authentication endpoints
    app.include_router(
        auth_handler.router,
        prefix="/auth",
        tags=["Authentication"],
    )
    app.include_router(
        profile_handler.router,
        prefix="/profile",
        tags=["Profile"],
    )

    # Moderated content
    app.include_router(
        note_handler.router,
        prefix="/notes",
        tags=["Notes"],
    )
    app.include_router(
        question_handler.router,
        prefix="/questions",
        tags=["Questions"],
    )
    app.include_router(
        comment_handler.router,
        prefix="/comments",
        tags=["Comments"],
    )

    # Engagement
    app.include_router(
        bookmark_handler.router,
        prefix="/bookmarks",
        tags=["Bookmarks"],
    )
    app.include_router(
        report_handler.router,
        prefix="/reports",
        tags=["Reports"],
    )

    # Study groups (chat routes share the /groups prefix)
    app.include_router(
        group_handler.router,
        prefix="/groups",
        tags=["Groups"],
    )
    app.include_router(
        group_chat_handler.router,
        prefix="/groups",
        tags=["Group Chat"],
    )

    app.include_router(
        notification_handler.router,
        prefix="/notifications",
        tags=["Notifications"],
    )
    app.include_router(
        upload_handler.router,
        prefix="/uploads",
        tags=["Uploads"],
    )
    app.include_router(
        search_handler.router,
        prefix="/search",
        tags=["Search"],
    )
    app.include_router(
        statistics_handler.router,
        prefix="/statistics",
        tags=["Statistics"],
    )
    app.include_router(
        category_handler.router,
        prefix="/categories",
        tags=["Categories"],
    )
