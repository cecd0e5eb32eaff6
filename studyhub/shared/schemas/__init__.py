"""
Pydantic Schemas

Request validation and response serialization models.

Schema Categories:
==================
- common: ApiResponse envelope, pagination, health
- user: Registration, login, tokens, profiles
- content: Notes, questions, votes, approval
- comment / bookmark / report / category
- group: Groups, members and chat messages
- notification / upload
- search: Search results and statistics

Usage:
======
    from studyhub.shared.schemas import ApiResponse, NoteCreate, NoteResponse
"""

from studyhub.shared.schemas.common import (
    ApiResponse,
    BaseSchema,
    CountResponse,
    ErrorResponse,
    HealthResponse,
    PaginatedData,
    PaginationMeta,
)
from studyhub.shared.schemas.user import (
    AuthResponse,
    ForgotPasswordRequest,
    RefreshTokenRequest,
    ResetPasswordRequest,
    UserCreate,
    UserLogin,
    UserResponse,
    UserSummary,
)
from studyhub.shared.schemas.category import (
    CategoryCreate,
    CategoryResponse,
    CategorySummary,
    CategoryUpdate,
)
from studyhub.shared.schemas.content import (
    ApprovalRequest,
    NoteCreate,
    NoteDetailResponse,
    NoteResponse,
    NoteUpdate,
    QuestionCreate,
    QuestionDetailResponse,
    QuestionResponse,
    QuestionUpdate,
    UserInteractionResponse,
    VoteRequest,
    VoteResultResponse,
)
from studyhub.shared.schemas.comment import CommentCreate, CommentResponse, CommentUpdate
from studyhub.shared.schemas.bookmark import (
    BookmarkResponse,
    BookmarkStatusResponse,
    BookmarkToggleRequest,
)
from studyhub.shared.schemas.report import ReportCreate, ReportResponse, ReportStatusUpdate
from studyhub.shared.schemas.group import (
    ChatStatsResponse,
    GroupCreate,
    GroupMemberResponse,
    GroupResponse,
    GroupSummary,
    GroupUpdate,
    MemberRoleUpdate,
    MessageCreate,
    MessageResponse,
    MessageUpdate,
)
from studyhub.shared.schemas.notification import NotificationResponse
from studyhub.shared.schemas.upload import UploadedFileResponse
from studyhub.shared.schemas.search import (
    ContentStatsResponse,
    OverviewResponse,
    SearchResponse,
    UserStatsResponse,
)

__all__ = [
    # Common
    "ApiResponse",
    "BaseSchema",
    "CountResponse",
    "ErrorResponse",
    "HealthResponse",
    "PaginatedData",
    "PaginationMeta",
    # Users / auth
    "AuthResponse",
    "ForgotPasswordRequest",
    "RefreshTokenRequest",
    "ResetPasswordRequest",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "UserSummary",
    # Categories
    "CategoryCreate",
    "CategoryResponse",
    "CategorySummary",
    "CategoryUpdate",
    # Notes / questions
    "ApprovalRequest",
    "NoteCreate",
    "NoteDetailResponse",
    "NoteResponse",
    "NoteUpdate",
    "QuestionCreate",
    "QuestionDetailResponse",
    "QuestionResponse",
    "QuestionUpdate",
    "UserInteractionResponse",
    "VoteRequest",
    "VoteResultResponse",
    # Comments / bookmarks / reports
    "CommentCreate",
    "CommentResponse",
    "CommentUpdate",
    "BookmarkResponse",
    "BookmarkStatusResponse",
    "BookmarkToggleRequest",
    "ReportCreate",
    "ReportResponse",
    "ReportStatusUpdate",
    # Groups
    "ChatStatsResponse",
    "GroupCreate",
    "GroupMemberResponse",
    "GroupResponse",
    "GroupSummary",
    "GroupUpdate",
    "MemberRoleUpdate",
    "MessageCreate",
    "MessageResponse",
    "MessageUpdate",
    # Misc
    "NotificationResponse",
    "UploadedFileResponse",
    "ContentStatsResponse",
    "OverviewResponse",
    "SearchResponse",
    "UserStatsResponse",
]
