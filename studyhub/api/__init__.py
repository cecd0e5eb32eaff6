"""
API Module

FastAPI application and route handlers.

Package Structure:
==================
    api/
    ├── main.py           ← Application entry point
    ├── routes.py         ← Route registration
    ├── dependencies/     ← FastAPI dependencies (db, auth, services, paging)
    ├── handlers/         ← Route handlers, one module per resource
    └── middleware/       ← Exception handlers and request context

Usage:
======
    # Run the API
    uvicorn studyhub.api.main:app --reload

    # Import the app
    from studyhub.api.main import app, create_application
"""
