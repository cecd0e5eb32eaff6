"""
Enums used across the application.
"""

from enum import Enum


class ContentType(str, Enum):
    """
    Discriminator for the things users can vote on, bookmark, comment on and report.

    Votes, bookmarks and comments only target NOTE and QUESTION.
    Reports can also target a COMMENT.
    """

    NOTE = "note"
    QUESTION = "question"
    COMMENT = "comment"


class VoteType(str, Enum):
    """Direction of a single user's vote."""

    UPVOTE = "upvote"
    DOWNVOTE = "downvote"

    @property
    def opposite(self) -> "VoteType":
        return VoteType.DOWNVOTE if self is VoteType.UPVOTE else VoteType.UPVOTE


class VoteAction(str, Enum):
    """Outcome of resolving a vote request against the existing vote."""

    ADDED = "added"
    REMOVED = "removed"
    CHANGED = "changed"


class ReportStatus(str, Enum):
    """Moderation lifecycle of a report."""

    PENDING = "pending"
    REVIEWED = "reviewed"
    RESOLVED = "resolved"


class ContentSort(str, Enum):
    """Ordering options for note and question listings."""

    RECENT = "recent"
    POPULAR = "popular"
    TRENDING = "trending"


class GroupType(str, Enum):
    """Whether anyone may join a group."""

    PUBLIC = "public"
    PRIVATE = "private"


class GroupRole(str, Enum):
    """Role of a member within a group."""

    ADMIN = "admin"
    MODERATOR = "moderator"
    MEMBER = "member"


class MessageType(str, Enum):
    """Kind of payload carried by a group chat message."""

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    FILE = "file"


class NotificationType(str, Enum):
    """Severity/presentation of a notification."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
