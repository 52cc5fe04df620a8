"""
Floreria Backend — Application Package Initializer
====================================================

What: Marks the `app` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← envelopes, path matching
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← field rules, image lifecycle
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never touch the session directly except for the health probe;
    services own every statement and every file written to the image store.
"""

__version__ = "1.0.0"
