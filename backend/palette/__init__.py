"""
Palette Backend: Application Package
=====================================

What: Palette service that stores named hex colors and serves them either raw
      or as derived color objects (RGB channels, chroma, hue, saturation,
      value, luma).
Who:  Imported by uvicorn (`palette.main:app`), Alembic and pytest.

Architecture Note:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │  Services (queries + transform)     │  ← ColorService, transform pipeline
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    The color transform (services/transform.py) is pure: it never touches the
    database or the settings, so it can be tested and reused on its own.
"""

__version__ = "1.0.0"
