"""
Horses router package.

Exports the router for horse management endpoints.
"""

from .horses_router import router

__all__ = ["router"]
