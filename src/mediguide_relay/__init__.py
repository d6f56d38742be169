"""MediGuide relay: credential-injecting proxy for Google Places and Gemini."""

__version__ = "0.1.0"
