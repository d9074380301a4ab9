# miledesigns/services/consultant.py
# AI construction consultant backed by the Gemini generateContent REST API.
# get_advice() never raises: every failure degrades to a fixed message.
from __future__ import annotations

import logging
from typing import Iterable, Mapping

import httpx

from miledesigns.core.settings import settings

log = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "API key is missing. Please ensure it is configured."
EMPTY_REPLY_MESSAGE = "I'm sorry, I couldn't generate a response. Please try again."
APOLOGY_MESSAGE = "An error occurred while connecting to our AI Architect. Please try again later."

SYSTEM_INSTRUCTION = (
    "You are 'MILEDESIGNS AI', a world-class senior consultant for MILEDESIGNS Design & Build. "
    "You specialize in residential and commercial construction, architectural design, material selection, "
    "and sustainable building practices. Keep your answers professional, technical but accessible, and always "
    "prioritize safety and local building codes. If asked about costs, provide general ranges but emphasize "
    "that an official quote requires a site visit. Mention that MILEDESIGNS Design & Build offers these services."
)

GENERATION_CONFIG = {"temperature": 0.7, "topP": 0.9, "maxOutputTokens": 1000}


def build_contents(prompt: str, history: Iterable[Mapping[str, str]] = ()) -> list[dict]:
    contents = [{"role": "user", "parts": [{"text": SYSTEM_INSTRUCTION}]}]
    for turn in history or ():
        role = "user" if turn.get("role") == "user" else "model"
        contents.append({"role": role, "parts": [{"text": turn.get("content", "")}]})
    contents.append({"role": "user", "parts": [{"text": prompt}]})
    return contents


def _reply_text(body: dict) -> str:
    parts = (((body.get("candidates") or [{}])[0].get("content") or {}).get("parts")) or []
    return "".join(p.get("text", "") for p in parts if isinstance(p, dict))


async def get_advice(
    prompt: str,
    history: Iterable[Mapping[str, str]] = (),
    *,
    client: httpx.AsyncClient | None = None,
) -> str:
    api_key = settings.GEMINI_API_KEY
    if not api_key:
        return MISSING_KEY_MESSAGE

    url = f"{settings.GEMINI_API_BASE}/models/{settings.GEMINI_MODEL}:generateContent"
    payload = {"contents": build_contents(prompt, history), "generationConfig": GENERATION_CONFIG}
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=settings.GEMINI_TIMEOUT_SECONDS) as c:
                resp = await c.post(url, params={"key": api_key}, json=payload)
        else:
            resp = await client.post(url, params={"key": api_key}, json=payload)
        resp.raise_for_status()
        text = _reply_text(resp.json())
    except (httpx.HTTPError, ValueError, TypeError, AttributeError, IndexError) as e:
        log.error("Gemini API error: %s", e)
        return APOLOGY_MESSAGE
    return text or EMPTY_REPLY_MESSAGE
