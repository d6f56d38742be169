"""
Data models for the MediGuide relay.

Relay-side models describe error bodies; client-side models describe what
the MediBot prompts ask Gemini to return and what Places sends back.
"""

from .base import BaseRelayModel
from .errors import ErrorResponse
from .medicine import ChatMessage, MedicineDetails, MedicineSuggestion
from .places import Place, PlacesSearchResult

__all__ = [
    "BaseRelayModel",
    "ChatMessage",
    "ErrorResponse",
    "MedicineDetails",
    "MedicineSuggestion",
    "Place",
    "PlacesSearchResult",
]
