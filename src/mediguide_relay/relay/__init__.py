"""HTTP relay routes for the MediGuide web client."""

from .router import router

__all__ = ["router"]
