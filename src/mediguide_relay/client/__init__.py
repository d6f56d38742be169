"""
Python client for the MediGuide relay.

Builds the same generateContent payloads as the MediBot web client and parses
the model's answers into typed models.
"""

from .exceptions import MediBotAPIError, MediBotClientError, MediBotResponseError
from .medibot_client import MediBotClient
from .prompts import SYSTEM_PROMPT, build_generate_request

__all__ = [
    "SYSTEM_PROMPT",
    "MediBotAPIError",
    "MediBotClient",
    "MediBotClientError",
    "MediBotResponseError",
    "build_generate_request",
]
