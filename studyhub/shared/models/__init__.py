"""
StudyHub SQLAlchemy Models

This package contains all database models for the StudyHub application.

Model Hierarchy:
================
    User
       ├── Note / Question          (owner, moderated, votable)
       │      ├── Comment           ─┐
       │      ├── Vote               ├─ note_id XOR question_id
       │      ├── Bookmark          ─┘
       │      ├── Category (many-to-one)
       │      └── Tag (many-to-many via note_tags / question_tags)
       ├── Report                   (content_type + content_id)
       ├── Group ── GroupMember ── GroupMessage
       ├── Notification
       └── UploadedFile

Usage:
======
    from studyhub.shared.models import Note, Vote, VoteType

    note = await note_repo.get(note_id)
    note.author.full_name
    note.tag_names
"""

from studyhub.shared.models.base import Base, TimestampMixin
from studyhub.shared.models.enums import (
    ContentType,
    VoteType,
    VoteAction,
    ReportStatus,
    ContentSort,
    GroupType,
    GroupRole,
    MessageType,
    NotificationType,
)
from studyhub.shared.models.user import User
from studyhub.shared.models.category import Category
from studyhub.shared.models.tag import Tag, note_tags, question_tags
from studyhub.shared.models.note import Note
from studyhub.shared.models.question import Question
from studyhub.shared.models.comment import Comment
from studyhub.shared.models.vote import Vote
from studyhub.shared.models.bookmark import Bookmark
from studyhub.shared.models.report import Report
from studyhub.shared.models.group import Group, GroupMember
from studyhub.shared.models.group_message import GroupMessage, DELETED_MESSAGE_PLACEHOLDER
from studyhub.shared.models.notification import Notification
from studyhub.shared.models.uploaded_file import UploadedFile

__all__ = [
    # Base classes and mixins
    "Base",
    "TimestampMixin",
    # Enums
    "ContentType",
    "VoteType",
    "VoteAction",
    "ReportStatus",
    "ContentSort",
    "GroupType",
    "GroupRole",
    "MessageType",
    "NotificationType",
    # Models
    "User",
    "Category",
    "Tag",
    "note_tags",
    "question_tags",
    "Note",
    "Question",
    "Comment",
    "Vote",
    "Bookmark",
    "Report",
    "Group",
    "GroupMember",
    "GroupMessage",
    "DELETED_MESSAGE_PLACEHOLDER",
    "Notification",
    "UploadedFile",
]
