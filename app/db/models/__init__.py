"""
Database models module.

Imports all database models so they are registered with SQLAlchemy's Base.metadata
before table creation.
"""
from app.db.models.ats_scan import ATSScan

__all__ = [
    "ATSScan",
]
