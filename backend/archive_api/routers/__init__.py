# backend/archive_api/routers/__init__.py
"""
Router modules for API endpoints
"""

from . import nytimes

__all__ = ["nytimes"]
