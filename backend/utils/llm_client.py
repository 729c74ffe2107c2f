import logging

import httpx

from config import settings

logger = logging.getLogger(__name__)

_client: httpx.AsyncClient | None = None


def get_client() -> httpx.AsyncClient:
    global _client
    if _client is None:
        _client = httpx.AsyncClient(
            timeout=settings.http_timeout_seconds,
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
        )
    return _client


async def close_client():
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None


class EmptyGenerationError(Exception):
    """The service answered 200 but produced no candidate text."""


def _extract_text(data: dict) -> str:
    candidates = data.get("candidates") or []
    if not candidates:
        feedback = data.get("promptFeedback", {})
        raise EmptyGenerationError(f"No candidates returned (feedback: {feedback})")
    parts = candidates[0].get("content", {}).get("parts", [])
    text = "".join(p.get("text", "") for p in parts)
    if not text.strip():
        reason = candidates[0].get("finishReason", "unknown")
        raise EmptyGenerationError(f"Empty candidate text (finishReason: {reason})")
    return text


async def generate_content(
    prompt: str,
    response_schema: dict | None = None,
    temperature: float = 0.7,
    model: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> str:
    """Single generateContent call against the Gemini REST API.

    With a ``response_schema`` the service is told to answer with JSON text
    only, shaped by that schema.
    """
    if not settings.gemini_api_key:
        raise RuntimeError("GEMINI_API_KEY not configured")

    generation_config: dict = {"temperature": temperature}
    if response_schema is not None:
        generation_config["responseMimeType"] = "application/json"
        generation_config["responseSchema"] = response_schema

    client = client or get_client()
    response = await client.post(
        f"{settings.gemini_base_url}/models/{model or settings.gemini_model}:generateContent",
        headers={
            "x-goog-api-key": settings.gemini_api_key,
            "Content-Type": "application/json",
        },
        json={
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": generation_config,
        },
    )
    if response.status_code != 200:
        logger.error("Gemini error %s: %s", response.status_code, response.text)
    response.raise_for_status()
    return _extract_text(response.json())
