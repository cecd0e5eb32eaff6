"""
Repository Pattern Implementations

Repositories encapsulate database queries and provide a clean API for data
access. They flush but never commit; the request-scoped session does that.

Repository Hierarchy:
=====================
    BaseRepository[ModelType]             ← Generic CRUD operations
         │
         ├── UserRepository               ← Email / reset-token lookups, search
         ├── ContentRepository[Note|Question]
         │      ├── NoteRepository
         │      └── QuestionRepository    ← Visibility-filtered listing, tallies
         ├── VoteRepository               ← Per-pair vote rows, tally counts
         ├── BookmarkRepository
         ├── CommentRepository
         ├── ReportRepository
         ├── CategoryRepository
         ├── TagRepository
         ├── GroupRepository              ← Groups and memberships
         ├── GroupMessageRepository
         ├── NotificationRepository
         └── UploadedFileRepository

Usage Example:
==============
    from studyhub.shared.repositories import NoteRepository

    notes, total = await NoteRepository(db).list_visible(
        viewer=current_user,
        include_unapproved=True,
        offset=0,
        limit=10,
    )
"""

from studyhub.shared.repositories.base import BaseRepository
from studyhub.shared.repositories.user_repository import UserRepository
from studyhub.shared.repositories.content_repository import (
    ContentRepository,
    NoteRepository,
    QuestionRepository,
    content_repository_for,
    visibility_clause,
)
from studyhub.shared.repositories.vote_repository import VoteRepository
from studyhub.shared.repositories.bookmark_repository import BookmarkRepository
from studyhub.shared.repositories.comment_repository import CommentRepository
from studyhub.shared.repositories.report_repository import ReportRepository
from studyhub.shared.repositories.category_repository import CategoryRepository
from studyhub.shared.repositories.tag_repository import TagRepository, normalize_tags
from studyhub.shared.repositories.group_repository import GroupRepository
from studyhub.shared.repositories.group_message_repository import GroupMessageRepository
from studyhub.shared.repositories.notification_repository import NotificationRepository
from studyhub.shared.repositories.uploaded_file_repository import UploadedFileRepository

__all__ = [
    # Base class
    "BaseRepository",
    # Entity-specific repositories
    "UserRepository",
    "ContentRepository",
    "NoteRepository",
    "QuestionRepository",
    "VoteRepository",
    "BookmarkRepository",
    "CommentRepository",
    "ReportRepository",
    "CategoryRepository",
    "TagRepository",
    "GroupRepository",
    "GroupMessageRepository",
    "NotificationRepository",
    "UploadedFileRepository",
    # Query helpers
    "content_repository_for",
    "visibility_clause",
    "normalize_tags",
]
