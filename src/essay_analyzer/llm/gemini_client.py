"""Client for the Google Gemini ``generateContent`` REST endpoint."""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List

import requests

from ..config import GeminiSettings

logger = logging.getLogger(__name__)

RETRY_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})
BACKOFF_INITIAL_SECONDS = 1.0
BACKOFF_MAX_SECONDS = 8.0


class GeminiEssayClient:
    """Send prompts to Gemini over plain HTTP and return the generated text."""

    def __init__(
        self,
        settings: GeminiSettings,
        api_key: str,
        session: requests.Session | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("Gemini API key is required when provider is 'gemini'.")
        self._settings = settings
        self._api_key = api_key
        self._session = session or requests.Session()

    @property
    def settings(self) -> GeminiSettings:
        return self._settings

    @property
    def endpoint(self) -> str:
        root = self._settings.api_root.rstrip("/")
        return f"{root}/{self._settings.model}:generateContent"

    def build_payload(
        self, system_prompt: str, user_prompt: str, temperature: float | None = None
    ) -> Dict[str, Any]:
        settings = self._settings
        return {
            "systemInstruction": {"parts": [{"text": system_prompt}]},
            "contents": [{"role": "user", "parts": [{"text": user_prompt}]}],
            "generationConfig": {
                "temperature": settings.temperature if temperature is None else temperature,
                "maxOutputTokens": settings.max_output_tokens,
                "topP": settings.top_p,
                "topK": settings.top_k,
            },
        }

    def generate(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        temperature: float | None = None,
    ) -> str:
        """POST the prompt, retrying transient failures with exponential back-off."""
        payload = self.build_payload(system_prompt, user_prompt, temperature)
        max_attempts = max(1, self._settings.max_attempts)
        backoff = BACKOFF_INITIAL_SECONDS
        last_error: Exception | None = None
        for attempt in range(1, max_attempts + 1):
            try:
                response = self._session.post(
                    self.endpoint,
                    params={"key": self._api_key},
                    json=payload,
                    timeout=self._settings.request_timeout,
                )
                response.raise_for_status()
                text = extract_text(response.json())
                logger.info(
                    "Gemini request succeeded model=%s chars=%s",
                    self._settings.model,
                    len(text),
                )
                return text
            except requests.HTTPError as exc:
                last_error = exc
                status = exc.response.status_code if exc.response is not None else None
                if status not in RETRY_STATUS_CODES:
                    logger.error("Gemini HTTP error %s: %s", status, exc)
                    break
                logger.warning(
                    "Gemini HTTP %s (attempt %s/%s)", status, attempt, max_attempts
                )
            except (requests.Timeout, requests.ConnectionError) as exc:
                last_error = exc
                logger.warning(
                    "Gemini connection problem (attempt %s/%s): %s",
                    attempt,
                    max_attempts,
                    exc,
                )
            except ValueError as exc:
                # Undecodable body or a response with no text candidates.
                last_error = exc
                logger.warning("Gemini returned an unusable response: %s", exc)
                break
            except requests.RequestException as exc:
                last_error = exc
                logger.error("Gemini request could not be sent: %s", exc)
                break
            if attempt < max_attempts:
                time.sleep(min(backoff, BACKOFF_MAX_SECONDS))
                backoff *= 2
        raise RuntimeError("Gemini request failed after retries.") from last_error


def extract_text(data: Any) -> str:
    """Concatenate the text parts of the first candidate."""
    if not isinstance(data, dict):
        raise ValueError("Gemini response is not a JSON object.")
    candidates: List[Any] = data.get("candidates") or []
    if not candidates:
        raise ValueError("Gemini response contained no candidates.")
    first = candidates[0] if isinstance(candidates, list) else None
    if not isinstance(first, dict):
        raise ValueError("Gemini candidate is not a JSON object.")
    content = first.get("content") or {}
    if not isinstance(content, dict):
        raise ValueError("Gemini candidate content is not a JSON object.")
    parts = content.get("parts") or []
    if not isinstance(parts, list):
        raise ValueError("Gemini candidate parts are not a list.")
    texts = [part.get("text") for part in parts if isinstance(part, dict)]
    text = "".join(item for item in texts if isinstance(item, str))
    if not text:
        finish = first.get("finishReason")
        raise ValueError(f"Gemini response contained empty text (finishReason={finish}).")
    return text
