"""Prompts and request payloads used by the MediBot client."""

from typing import Any

SYSTEM_PROMPT = """
You are MediBot, a medical information AI assistant.

CORE RESPONSIBILITIES:

1. SEARCH SUGGESTIONS
- Return STRICT JSON Array: [{"name": "Brand", "generic": "Generic"}]

2. MEDICINE DETAILS (From Text Search OR Image Analysis)
- Trigger: User selects medicine OR uploads/captures image.
- Action: Identify medicine and provide comprehensive details.
- Output: STRICT JSON Object:
  {
    "name": "Medicine Name",
    "genericName": "Generic/Scientific name",
    "activeIngredients": "List of active ingredients with quantities",
    "indications": "Medical uses and conditions it treats",
    "dosageForms": "Available forms and strengths",
    "commonSideEffects": "List of common side effects",
    "contraindications": "Conditions/situations when NOT to use",
    "manufacturer": "Known manufacturers",
    "priceRange": "Approx. price (INR/USD)",
    "warnings": "Important warnings",
    "alternatives": ["Alt 1", "Alt 2", "Alt 3"]
  }

3. CHATBOT
- Safety: ALWAYS include disclaimers. NEVER diagnose.
- Output: Plain text.

CRITICAL:
- If an image is provided, recognize the medicine package/pill and return the full detailed JSON object for this medicine (name, ingredients, sideEffects, etc) as per the schema. If not a medicine, return empty JSON.
"""

SUGGESTIONS_PROMPT = (
    'User search query: "{query}". Return JSON array of medicine suggestions only.'
)
DETAILS_PROMPT = (
    'User selected medicine: "{name}". '
    "Provide comprehensive details in the specified JSON format."
)
IMAGE_PROMPT = (
    "Analyze this image. Identify the medicine. If found, return the full "
    "detailed JSON object for this medicine (name, ingredients, sideEffects, "
    "etc) as per the schema. If not a medicine, return empty JSON."
)
CHAT_PROMPT = (
    'User Question: "{question}". Previous Context: {context}. '
    "Answer accurately but concisely with safety disclaimers."
)


def build_generate_request(
    prompt: str,
    image_base64: str | None = None,
    json_mode: bool = False,
    image_mime_type: str = "image/png",
) -> dict[str, Any]:
    """Build a generateContent payload with the MediBot system prompt."""
    parts: list[dict[str, Any]] = [{"text": prompt}]
    if image_base64:
        parts.append({"inlineData": {"mimeType": image_mime_type, "data": image_base64}})

    return {
        "contents": [{"role": "user", "parts": parts}],
        "systemInstruction": {"parts": [{"text": SYSTEM_PROMPT}]},
        "generationConfig": (
            {"responseMimeType": "application/json"} if json_mode else {}
        ),
    }
