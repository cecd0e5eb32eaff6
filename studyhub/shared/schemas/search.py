"""
Search and Statistics Schemas
"""

from pydantic import BaseModel

from studyhub.shared.schemas.content import NoteResponse, QuestionResponse
from studyhub.shared.schemas.group import GroupSummary
from studyhub.shared.schemas.user import UserSummary
from studyhub.shared.services.search_service import SearchResults


class SearchResponse(BaseModel):
    notes: list[NoteResponse]
    questions: list[QuestionResponse]
    groups: list[GroupSummary]
    users: list[UserSummary]
    total: int

    @classmethod
    def from_results(cls, results: SearchResults) -> "SearchResponse":
        return cls(
            notes=[NoteResponse.model_validate(n) for n in results.notes],
            questions=[QuestionResponse.model_validate(q) for q in results.questions],
            groups=[GroupSummary.model_validate(g) for g in results.groups],
            users=[UserSummary.model_validate(u) for u in results.users],
            total=results.total,
        )


class ContentStatsResponse(BaseModel):
    content_id: str
    content_type: str
    views: int
    upvotes: int
    downvotes: int
    vote_ratio: float
    comments: int
    bookmarks: int
    total_engagement: int


class UserStatsResponse(BaseModel):
    user_id: str
    notes: int
    questions: int
    comments: int
    total_views: int
    upvotes_received: int
    downvotes_received: int
    vote_ratio: float


class OverviewResponse(BaseModel):
    users: int
    notes: int
    questions: int
    pending_notes: int
    pending_questions: int
    comments: int
    groups: int
    pending_reports: int


class ContentTotals(BaseModel):
    count: int
    views: int
    upvotes: int
    downvotes: int


class CategoryStatsResponse(BaseModel):
    category_id: str
    name: str
    notes: ContentTotals
    questions: ContentTotals
    total_views: int
    total_upvotes: int


class TrendingResponse(BaseModel):
    notes: list[NoteResponse]
    questions: list[QuestionResponse]

    @classmethod
    def from_items(cls, trending: dict[str, list]) -> "TrendingResponse":
        return cls(
            notes=[NoteResponse.model_validate(n) for n in trending["notes"]],
            questions=[QuestionResponse.model_validate(q) for q in trending["questions"]],
        )
