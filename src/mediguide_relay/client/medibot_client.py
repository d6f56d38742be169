import base64
import json
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from mediguide_relay.models import (
    ChatMessage,
    MedicineDetails,
    MedicineSuggestion,
    PlacesSearchResult,
)

from .exceptions import MediBotAPIError, MediBotResponseError
from .prompts import (
    CHAT_PROMPT,
    DETAILS_PROMPT,
    IMAGE_PROMPT,
    SUGGESTIONS_PROMPT,
    build_generate_request,
)

logger = logging.getLogger(__name__)

MIN_SUGGESTION_QUERY_LENGTH = 3
CHAT_CONTEXT_MESSAGES = 2
CHAT_FALLBACK_ANSWER = "I'm sorry, I couldn't process that request right now."


class MediBotClient:
    """Async client driving the relay the way the MediBot web client does."""

    def __init__(self, base_url: str, timeout: float = 60.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.request(method, f"{self.base_url}{path}", **kwargs)

        try:
            data = resp.json()
        except ValueError:
            data = None

        if resp.status_code >= 400:
            error = data.get("error") if isinstance(data, dict) else None
            message = data.get("message") if isinstance(data, dict) else None
            if isinstance(error, dict):
                # Gemini error bodies are passed through: {"error": {"message": ...}}
                message = error.get("message", message)
                error = error.get("status")
            raise MediBotAPIError(resp.status_code, error, message)
        if data is None:
            raise MediBotResponseError(f"Relay returned non-JSON body for {path}")
        return data

    async def generate(
        self,
        prompt: str,
        image_base64: str | None = None,
        json_mode: bool = False,
        image_mime_type: str = "image/png",
    ) -> str | None:
        """Send a prompt through the relay and return the first candidate's text."""
        payload = build_generate_request(prompt, image_base64, json_mode, image_mime_type)
        data = await self._request("POST", "/gemini", json=payload)
        try:
            return data["candidates"][0]["content"]["parts"][0]["text"] or None
        except (KeyError, IndexError, TypeError):
            logger.warning("Gemini response has no candidate text")
            return None

    async def suggest_medicines(self, query: str) -> list[MedicineSuggestion]:
        """Suggest medicines for a partial name."""
        if len(query) < MIN_SUGGESTION_QUERY_LENGTH:
            return []

        text = await self.generate(SUGGESTIONS_PROMPT.format(query=query), json_mode=True)
        if not text:
            return []
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError as e:
            logger.error(f"Suggestion parse error: {e}")
            return []
        if not isinstance(parsed, list):
            return []

        suggestions = []
        for item in parsed:
            try:
                suggestions.append(MedicineSuggestion.model_validate(item))
            except ValidationError:
                logger.debug(f"Skipping malformed suggestion: {item!r}")
        return suggestions

    async def get_medicine_details(self, name: str) -> MedicineDetails | None:
        """Fetch comprehensive details for a selected medicine."""
        text = await self.generate(DETAILS_PROMPT.format(name=name), json_mode=True)
        if not text:
            return None
        try:
            return _parse_details(text)
        except MediBotResponseError as e:
            logger.error(f"Details parse error: {e}")
            return None

    async def identify_medicine(
        self, image: bytes, mime_type: str = "image/png"
    ) -> MedicineDetails | None:
        """Identify a medicine from a package or pill photo.

        Returns None when the model recognises no medicine in the image.

        Raises:
            MediBotResponseError: If the model answered with something other
                than the details JSON.
        """
        image_base64 = base64.b64encode(image).decode("ascii")
        text = await self.generate(
            IMAGE_PROMPT, image_base64=image_base64, json_mode=True, image_mime_type=mime_type
        )
        if not text:
            raise MediBotResponseError("Model returned no answer for the image")
        return _parse_details(text)

    async def ask(self, question: str, history: list[ChatMessage] | None = None) -> str:
        """Ask MediBot a free-form question."""
        context = [
            message.model_dump() for message in (history or [])[-CHAT_CONTEXT_MESSAGES:]
        ]
        # Compact separators, as JSON.stringify produces in the web client
        context_json = json.dumps(context, separators=(",", ":"))
        prompt = CHAT_PROMPT.format(question=question, context=context_json)
        answer = await self.generate(prompt)
        return answer or CHAT_FALLBACK_ANSWER

    async def search_places(self, query: str) -> PlacesSearchResult:
        """Search nearby places (e.g. pharmacies) through the relay."""
        data = await self._request("GET", "/google", params={"query": query})
        try:
            return PlacesSearchResult.model_validate(data)
        except ValidationError as e:
            raise MediBotResponseError(f"Unexpected Places response: {e}") from e


def _parse_details(text: str) -> MedicineDetails | None:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MediBotResponseError(f"Model answer is not JSON: {e}") from e
    if not isinstance(data, dict) or not data.get("name"):
        return None
    try:
        return MedicineDetails.model_validate(data)
    except ValidationError as e:
        raise MediBotResponseError(f"Model answer does not match schema: {e}") from e
