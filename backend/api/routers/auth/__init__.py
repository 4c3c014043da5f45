"""
Auth router package.

Exports the router for signup, signin, signout and identity endpoints.
"""

from .auth_router import router

__all__ = ["router"]
