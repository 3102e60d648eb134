"""
Feature modules for the challenge board.

Each feature is a self-contained module with:
- models.py - SQLAlchemy models
- schemas.py - Pydantic schemas (optional)
- repository.py - Data access
- service/logic modules (ingestion.py, streak.py, projector.py, ...)
"""
