"""
StudyHub Backend

API for sharing study notes and past questions, voting and bookmarking
them, reporting abuse, and chatting in study groups.

Package Structure:
==================
    studyhub/
    ├── api/        ← FastAPI application (handlers, dependencies, middleware)
    ├── shared/     ← Models, repositories, services, schemas, migrations
    └── config/     ← Configuration

Running the Application:
========================
    # API Server
    uvicorn studyhub.api.main:app --reload

    # Database migrations
    alembic upgrade head
"""
