"""
Business Logic Services

Services encapsulate business logic and coordinate between repositories
and domain rules.

Service Pattern:
================
    Handler → Service → Repository → Database

Services should:
- Contain business logic, ownership checks and validation
- Coordinate multiple repositories if needed
- Log state changes
- NOT handle HTTP concerns (that's for handlers)

Each service is constructed per request with that request's AsyncSession.

Available Services:
===================
- AuthService: Registration, login, token refresh, password reset
- NoteService / QuestionService: Moderated content, comments, approval
- VoteService: Up/down vote resolution and tallies
- BookmarkService: Bookmark toggling and listing
- CommentService: Editing and deleting comments
- ReportService: Filing and moderating reports
- GroupService / GroupChatService: Study groups and their chat
- NotificationService: In-app notifications
- ProfileService: Profile edits, password change, account deletion
- UploadService: File uploads on local disk
- SearchService: Cross-entity search
- StatisticsService: Engagement and contribution numbers
- CategoryService: Subject categories
- EmailService: SMTP delivery

Usage:
======
    from studyhub.shared.services import VoteService

    result = await VoteService(db).cast_vote(user, "note", note_id, "upvote")
"""

from studyhub.shared.services.auth_service import AuthService, TokenPair
from studyhub.shared.services.bookmark_service import BookmarkService
from studyhub.shared.services.category_service import CategoryService
from studyhub.shared.services.comment_service import CommentService
from studyhub.shared.services.common import Page
from studyhub.shared.services.content_service import (
    ContentService,
    NoteService,
    QuestionService,
    UserInteraction,
)
from studyhub.shared.services.email_service import EmailService
from studyhub.shared.services.group_chat_service import ChatStats, GroupChatService
from studyhub.shared.services.group_service import GroupService, GroupView
from studyhub.shared.services.notification_service import NotificationService
from studyhub.shared.services.profile_service import ProfileService, PublicProfile
from studyhub.shared.services.report_service import ReportService
from studyhub.shared.services.search_service import SearchResults, SearchService
from studyhub.shared.services.statistics_service import ContentStats, StatisticsService
from studyhub.shared.services.upload_service import UploadService
from studyhub.shared.services.vote_service import VoteResult, VoteService

__all__ = [
    "AuthService",
    "TokenPair",
    "BookmarkService",
    "CategoryService",
    "CommentService",
    "Page",
    "ContentService",
    "NoteService",
    "QuestionService",
    "UserInteraction",
    "EmailService",
    "ChatStats",
    "GroupChatService",
    "GroupService",
    "GroupView",
    "NotificationService",
    "ProfileService",
    "PublicProfile",
    "ReportService",
    "SearchResults",
    "SearchService",
    "ContentStats",
    "StatisticsService",
    "UploadService",
    "VoteResult",
    "VoteService",
]
