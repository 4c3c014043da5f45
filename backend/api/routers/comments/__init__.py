"""
Comments router package.

Exports the router for page comment endpoints.
"""

from .comments_router import router

__all__ = ["router"]
