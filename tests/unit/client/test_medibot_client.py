import base64
import json

import pytest

from mediguide_relay.client import (
    MediBotAPIError,
    MediBotClient,
    MediBotResponseError,
)
from mediguide_relay.client.medibot_client import CHAT_FALLBACK_ANSWER
from mediguide_relay.models import ChatMessage, MedicineDetails

RELAY = "http://relay.test"

CROCIN = {
    "name": "Crocin",
    "genericName": "Paracetamol",
    "activeIngredients": "Paracetamol 500mg",
    "alternatives": ["Dolo 650"],
}


def gemini_answer(text):
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


def sent_payload(upstream, index=0):
    return upstream.calls[index]["json"]


@pytest.fixture
def medibot():
    return MediBotClient(RELAY + "/")


@pytest.mark.asyncio
async def test_short_query_skips_relay(medibot, mock_httpx):
    upstream = mock_httpx()

    assert await medibot.suggest_medicines("cr") == []
    assert upstream.calls == []


@pytest.mark.asyncio
async def test_suggest_medicines(medibot, mock_httpx, fake_response):
    suggestions = [
        {"name": "Crocin", "generic": "Paracetamol"},
        {"generic": "missing name"},
        {"name": "Calpol", "generic": "Paracetamol"},
    ]
    upstream = mock_httpx(fake_response(gemini_answer(json.dumps(suggestions))))

    result = await medibot.suggest_medicines("croc")

    assert [s.name for s in result] == ["Crocin", "Calpol"]
    call = upstream.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == f"{RELAY}/gemini"
    payload = sent_payload(upstream)
    assert payload["generationConfig"] == {"responseMimeType": "application/json"}
    assert '"croc"' in payload["contents"][0]["parts"][0]["text"]


@pytest.mark.asyncio
async def test_suggest_medicines_non_list(medibot, mock_httpx, fake_response):
    mock_httpx(fake_response(gemini_answer('{"name": "Crocin"}')))

    assert await medibot.suggest_medicines("crocin") == []


@pytest.mark.asyncio
async def test_suggest_medicines_unparsable(medibot, mock_httpx, fake_response):
    mock_httpx(fake_response(gemini_answer("Sure! Here are some")))

    assert await medibot.suggest_medicines("crocin") == []


@pytest.mark.asyncio
async def test_get_medicine_details(medibot, mock_httpx, fake_response):
    upstream = mock_httpx(fake_response(gemini_answer(json.dumps(CROCIN))))

    details = await medibot.get_medicine_details("Crocin")

    assert isinstance(details, MedicineDetails)
    assert details.generic_name == "Paracetamol"
    assert '"Crocin"' in sent_payload(upstream)["contents"][0]["parts"][0]["text"]


@pytest.mark.asyncio
async def test_get_medicine_details_without_name(medibot, mock_httpx, fake_response):
    mock_httpx(fake_response(gemini_answer("{}")))

    assert await medibot.get_medicine_details("Unknownol") is None


@pytest.mark.asyncio
async def test_identify_medicine(medibot, mock_httpx, fake_response):
    image = b"\x89PNG\r\n\x1a\nfake"
    upstream = mock_httpx(fake_response(gemini_answer(json.dumps(CROCIN))))

    details = await medibot.identify_medicine(image, mime_type="image/jpeg")

    assert details.name == "Crocin"
    parts = sent_payload(upstream)["contents"][0]["parts"]
    assert parts[1]["inlineData"] == {
        "mimeType": "image/jpeg",
        "data": base64.b64encode(image).decode("ascii"),
    }


@pytest.mark.asyncio
async def test_identify_medicine_not_a_medicine(medibot, mock_httpx, fake_response):
    mock_httpx(fake_response(gemini_answer("{}")))

    assert await medibot.identify_medicine(b"cat photo") is None


@pytest.mark.asyncio
async def test_identify_medicine_unexpected_format(medibot, mock_httpx, fake_response):
    mock_httpx(fake_response(gemini_answer("This looks like a cat.")))

    with pytest.raises(MediBotResponseError):
        await medibot.identify_medicine(b"cat photo")


@pytest.mark.asyncio
async def test_identify_medicine_no_answer(medibot, mock_httpx, fake_response):
    mock_httpx(fake_response({"candidates": []}))

    with pytest.raises(MediBotResponseError):
        await medibot.identify_medicine(b"blurry")


@pytest.mark.asyncio
async def test_ask_uses_last_two_messages(medibot, mock_httpx, fake_response):
    upstream = mock_httpx(fake_response(gemini_answer("Take with food. Consult a doctor.")))
    history = [
        ChatMessage(role="assistant", text="Hello! I'm MediBot."),
        ChatMessage(role="user", text="I have a headache"),
        ChatMessage(role="assistant", text="Paracetamol may help."),
    ]

    answer = await medibot.ask("How should I take it?", history)

    assert answer == "Take with food. Consult a doctor."
    payload = sent_payload(upstream)
    prompt = payload["contents"][0]["parts"][0]["text"]
    assert "How should I take it?" in prompt
    assert "I have a headache" in prompt
    assert "Hello! I'm MediBot." not in prompt
    assert (
        'Previous Context: [{"role":"user","text":"I have a headache"},'
        '{"role":"assistant","text":"Paracetamol may help."}]'
    ) in prompt
    assert payload["generationConfig"] == {}


@pytest.mark.asyncio
async def test_ask_fallback(medibot, mock_httpx, fake_response):
    mock_httpx(fake_response({"promptFeedback": {"blockReason": "SAFETY"}}))

    assert await medibot.ask("something blocked") == CHAT_FALLBACK_ANSWER


@pytest.mark.asyncio
async def test_relay_error(medibot, mock_httpx, fake_response):
    mock_httpx(
        fake_response(
            {"error": "Server Error", "message": "Upstream service is unreachable"},
            status_code=500,
        )
    )

    with pytest.raises(MediBotAPIError) as exc_info:
        await medibot.ask("hello")

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "Upstream service is unreachable"


@pytest.mark.asyncio
async def test_passed_through_gemini_error(medibot, mock_httpx, fake_response):
    mock_httpx(
        fake_response(
            {
                "error": {
                    "code": 400,
                    "message": "API key not valid.",
                    "status": "INVALID_ARGUMENT",
                }
            },
            status_code=400,
        )
    )

    with pytest.raises(MediBotAPIError) as exc_info:
        await medibot.get_medicine_details("Crocin")

    assert exc_info.value.error == "INVALID_ARGUMENT"
    assert exc_info.value.message == "API key not valid."


@pytest.mark.asyncio
async def test_search_places(medibot, mock_httpx, fake_response):
    upstream = mock_httpx(
        fake_response(
            {"status": "OK", "results": [{"name": "Apollo Pharmacy", "rating": 4.2}]}
        )
    )

    result = await medibot.search_places("pharmacy near me")

    assert result.ok
    assert result.results[0].name == "Apollo Pharmacy"
    call = upstream.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == f"{RELAY}/google"
    assert call["params"] == {"query": "pharmacy near me"}
