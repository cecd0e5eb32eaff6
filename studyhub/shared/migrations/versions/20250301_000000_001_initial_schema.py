# pylint: skip-file
# ruff: noqa
"""Initial schema - create all tables

Revision ID: 001
Revises:
Create Date: 2025-03-01 00:00:00

This migration creates all database tables for the StudyHub application.

Tables created:
- users: Accounts, refresh token and password reset state
- categories, tags: Subject categories and free-form tags
- notes, questions: Moderated content (plus note_tags / question_tags)
- comments, votes, bookmarks: Per-user rows targeting exactly one note or question
- reports: One report per (user, content)
- groups, group_members, group_messages: Study groups and their chat
- notifications: In-app notifications
- uploaded_files: Metadata for files on local disk

Enums created (labels are the Python enum member names):
- votetype: UPVOTE, DOWNVOTE
- contenttype: NOTE, QUESTION, COMMENT
- reportstatus: PENDING, REVIEWED, RESOLVED
- grouptype: PUBLIC, PRIVATE
- grouprole: ADMIN, MODERATOR, MEMBER
- messagetype: TEXT, IMAGE, VIDEO, AUDIO, FILE
- notificationtype: INFO, SUCCESS, WARNING, ERROR
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


# Enum types
ENUMS = {
    "votetype": ("UPVOTE", "DOWNVOTE"),
    "contenttype": ("NOTE", "QUESTION", "COMMENT"),
    "reportstatus": ("PENDING", "REVIEWED", "RESOLVED"),
    "grouptype": ("PUBLIC", "PRIVATE"),
    "grouprole": ("ADMIN", "MODERATOR", "MEMBER"),
    "messagetype": ("TEXT", "IMAGE", "VIDEO", "AUDIO", "FILE"),
    "notificationtype": ("INFO", "SUCCESS", "WARNING", "ERROR"),
}


def _enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUMS[name], name=name, create_type=False)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def _user_fk(name: str = "user_id") -> sa.Column:
    return sa.Column(
        name,
        sa.Uuid(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


def _content_columns() -> list[sa.Column]:
    """Columns shared by notes and questions."""
    return [
        sa.Column("id", sa.Uuid(), primary_key=True),
        _user_fk(),
        sa.Column(
            "category_id",
            sa.Uuid(),
            sa.ForeignKey("categories.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        ),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("file_url", sa.Text(), nullable=True),
        sa.Column("is_approved", sa.Boolean(), nullable=False, server_default=sa.false(), index=True),
        sa.Column("upvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("downvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("view_count", sa.Integer(), nullable=False, server_default="0"),
    ]


def _target_columns() -> list[sa.Column]:
    """note_id / question_id pair; exactly one is set (see the CHECK constraints)."""
    return [
        sa.Column(
            "note_id",
            sa.Uuid(),
            sa.ForeignKey("notes.id", ondelete="CASCADE"),
            nullable=True,
            index=True,
        ),
        sa.Column(
            "question_id",
            sa.Uuid(),
            sa.ForeignKey("questions.id", ondelete="CASCADE"),
            nullable=True,
            index=True,
        ),
    ]


def _single_target(table: str) -> sa.CheckConstraint:
    return sa.CheckConstraint(
        "(note_id IS NULL) <> (question_id IS NULL)",
        name=f"ck_{table}_single_target",
    )


def upgrade() -> None:
    """Upgrade database schema."""
    # Create enum types
    for name, labels in ENUMS.items():
        quoted = ", ".join(f"'{label}'" for label in labels)
        op.execute(f"CREATE TYPE {name} AS ENUM ({quoted})")

    # Create users table
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True, index=True),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("refresh_token", sa.Text(), nullable=True),
        sa.Column("password_reset_token_hash", sa.String(64), nullable=True, index=True),
        sa.Column("password_reset_expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("full_name", sa.String(150), nullable=False),
        sa.Column("avatar", sa.Text(), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("is_moderator", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )

    # Create categories and tags
    op.create_table(
        "categories",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(120), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        "tags",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True, index=True),
    )

    # Create notes and questions
    op.create_table(
        "notes",
        *_content_columns(),
        sa.Column("file_type", sa.String(50), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_notes_is_approved_created_at", "notes", ["is_approved", "created_at"])

    op.create_table(
        "questions",
        *_content_columns(),
        sa.Column("year", sa.Integer(), nullable=True, index=True),
        *_timestamps(),
    )
    op.create_index(
        "ix_questions_is_approved_created_at", "questions", ["is_approved", "created_at"]
    )

    # Tag association tables
    op.create_table(
        "note_tags",
        sa.Column("note_id", sa.Uuid(), sa.ForeignKey("notes.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("tag_id", sa.Uuid(), sa.ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
    )
    op.create_table(
        "question_tags",
        sa.Column(
            "question_id",
            sa.Uuid(),
            sa.ForeignKey("questions.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("tag_id", sa.Uuid(), sa.ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
    )

    # Create comments, votes and bookmarks
    op.create_table(
        "comments",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _user_fk(),
        *_target_columns(),
        sa.Column("content", sa.Text(), nullable=False),
        *_timestamps(),
        _single_target("comments"),
    )

    op.create_table(
        "votes",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _user_fk(),
        *_target_columns(),
        sa.Column("vote_type", _enum("votetype"), nullable=False),
        *_timestamps(),
        _single_target("votes"),
        # One vote per user per item
        sa.UniqueConstraint("user_id", "note_id", name="uq_votes_user_note"),
        sa.UniqueConstraint("user_id", "question_id", name="uq_votes_user_question"),
    )

    op.create_table(
        "bookmarks",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _user_fk(),
        *_target_columns(),
        *_timestamps(),
        _single_target("bookmarks"),
        sa.UniqueConstraint("user_id", "note_id", name="uq_bookmarks_user_note"),
        sa.UniqueConstraint("user_id", "question_id", name="uq_bookmarks_user_question"),
    )

    # Create reports table
    op.create_table(
        "reports",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _user_fk(),
        sa.Column("content_type", _enum("contenttype"), nullable=False),
        sa.Column("content_id", sa.Uuid(), nullable=False, index=True),
        sa.Column("reason", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "status",
            _enum("reportstatus"),
            nullable=False,
            server_default="PENDING",
            index=True,
        ),
        *_timestamps(),
        sa.UniqueConstraint(
            "user_id",
            "content_type",
            "content_id",
            name="uq_reports_user_content",
        ),
    )

    # Create groups, members and messages
    op.create_table(
        "groups",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(150), nullable=False, index=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("group_type", _enum("grouptype"), nullable=False, server_default="PUBLIC"),
        sa.Column("category", sa.String(120), nullable=True, index=True),
        sa.Column("avatar", sa.Text(), nullable=True),
        _user_fk("created_by"),
        *_timestamps(),
    )

    op.create_table(
        "group_members",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "group_id",
            sa.Uuid(),
            sa.ForeignKey("groups.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        _user_fk(),
        sa.Column("role", _enum("grouprole"), nullable=False, server_default="MEMBER"),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("group_id", "user_id", name="uq_group_members_group_user"),
    )

    op.create_table(
        "group_messages",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "group_id",
            sa.Uuid(),
            sa.ForeignKey("groups.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _user_fk(),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("message_type", _enum("messagetype"), nullable=False, server_default="TEXT"),
        sa.Column("file_url", sa.Text(), nullable=True),
        sa.Column("file_name", sa.Text(), nullable=True),
        sa.Column("file_size", sa.BigInteger(), nullable=True),
        sa.Column("reply_to_id", sa.Uuid(), nullable=True),
        sa.Column("is_edited", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index(
        "ix_group_messages_group_created_at", "group_messages", ["group_id", "created_at"]
    )

    # Create notifications and uploaded_files
    op.create_table(
        "notifications",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _user_fk(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("type", _enum("notificationtype"), nullable=False, server_default="INFO"),
        sa.Column("data", sa.JSON(), nullable=True),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_notifications_user_is_read", "notifications", ["user_id", "is_read"])

    op.create_table(
        "uploaded_files",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _user_fk(),
        sa.Column("file_name", sa.String(255), nullable=False, unique=True),
        sa.Column("original_name", sa.String(255), nullable=False),
        sa.Column("mime_type", sa.String(150), nullable=True),
        sa.Column("size", sa.BigInteger(), nullable=False),
        sa.Column("path", sa.Text(), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("category", sa.String(50), nullable=False, index=True),
        *_timestamps(),
    )


def downgrade() -> None:
    """Downgrade database schema."""
    # Drop tables in reverse order (respect foreign keys)
    op.drop_table("uploaded_files")
    op.drop_table("notifications")
    op.drop_table("group_messages")
    op.drop_table("group_members")
    op.drop_table("groups")
    op.drop_table("reports")
    op.drop_table("bookmarks")
    op.drop_table("votes")
    op.drop_table("comments")
    op.drop_table("question_tags")
    op.drop_table("note_tags")
    op.drop_table("questions")
    op.drop_table("notes")
    op.drop_table("tags")
    op.drop_table("categories")
    op.drop_table("users")

    # Drop enum types
    for name in reversed(list(ENUMS)):
        op.execute(f"DROP TYPE IF EXISTS {name}")
