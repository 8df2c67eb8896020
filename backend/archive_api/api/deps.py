# backend/archive_api/api/deps.py
"""FastAPI dependencies"""
from functools import lru_cache

from archive_api.core.config import settings
from archive_api.services.archive_client import ArchiveClient


@lru_cache
def get_archive_client() -> ArchiveClient:
    """One client per process, built from settings; override in tests."""
    return ArchiveClient(settings.archive_config())
