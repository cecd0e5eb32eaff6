"""
API Handlers

Route handlers for the StudyHub API.

Handlers follow the pattern:
- Parse HTTP requests
- Call service methods
- Wrap the result in the ApiResponse envelope

All business logic is delegated to the service layer, and domain errors
are rendered by the exception handlers.
"""

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

__all__ = [
    "auth_handler",
    "bookmark_handler",
    "category_handler",
    "comment_handler",
    "group_chat_handler",
    "group_handler",
    "health_handler",
    "note_handler",
    "notification_handler",
    "profile_handler",
    "question_handler",
    "report_handler",
    "search_handler",
    "statistics_handler",
    "upload_handler",
]
