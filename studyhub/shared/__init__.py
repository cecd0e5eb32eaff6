"""
Shared Module

Everything below the HTTP layer:
- Models: SQLAlchemy ORM models
- Repositories: Data access layer
- Services: Business logic layer
- Schemas: Pydantic request/response models
- Core: Logging, exceptions

Package Structure:
==================
    shared/
    ├── core/           ← Logging, exceptions
    ├── db/             ← Database session management
    ├── migrations/     ← Alembic environment and revisions
    ├── models/         ← SQLAlchemy models
    ├── repositories/   ← Data access layer
    ├── services/       ← Business logic
    ├── schemas/        ← Pydantic schemas
    └── utils/          ← Password hashing and tokens

Usage:
======
    from studyhub.shared.models import User, Note
    from studyhub.shared.repositories import UserRepository
    from studyhub.shared.services import AuthService
    from studyhub.shared.schemas import UserCreate, AuthResponse
    from studyhub.shared.core import logger, StudyHubException
"""
