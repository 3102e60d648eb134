"""
Strava sync services.

Provides:
- StravaSyncService: fetch + ingest cycle for one user
"""

from .service import StravaSyncService, SyncResult

__all__ = [
    "StravaSyncService",
    "SyncResult",
]
