from __future__ import annotations

from typing import Dict, List, Optional

import google.generativeai as genai

from .config import Settings

SAFETY_SETTINGS = [
    {"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    {"category": "HARM_CATEGORY_HATE_SPEECH", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    {"category": "HARM_CATEGORY_SEXUALLY_EXPLICIT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    {"category": "HARM_CATEGORY_DANGEROUS_CONTENT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
]


class GeminiClient:
    """Thin wrapper around the Gemini SDK with per-instruction model caching."""

    def __init__(self, settings: Settings) -> None:
        """Purpose: Configure the Gemini SDK for the advisor.
        Inputs/Outputs: Input is Settings; no return value.
        Side Effects / State: Configures the SDK global API key.
        Dependencies: Uses google.generativeai and Settings from config.
        Failure Modes: Raises ValueError if the API key or model name is missing.
        Testing Notes: Missing key must raise before any network call.
        """
        if not settings.gemini_api_key:
            raise ValueError("GEMINI_API_KEY is required")
        self._model_name = normalize_model_name(settings.gemini_model)
        if not self._model_name:
            raise ValueError("Gemini model name is required")
        genai.configure(api_key=settings.gemini_api_key)
        self._models: Dict[Optional[str], genai.GenerativeModel] = {}

    @property
    def model_name(self) -> str:
        return self._model_name

    def _model(self, system_instruction: Optional[str]) -> genai.GenerativeModel:
        # The system instruction is bound at construction time in this SDK.
        if system_instruction not in self._models:
            self._models[system_instruction] = genai.GenerativeModel(
                self._model_name,
                system_instruction=system_instruction,
            )
        return self._models[system_instruction]

    def generate_content(
        self,
        contents: List[dict],
        system_instruction: Optional[str] = None,
        temperature: float = 0.7,
        max_output_tokens: int = 2048,
    ) -> str:
        """Purpose: Generate a reply from role-tagged chat contents.
        Inputs/Outputs: Input is a list of {"role", "parts"} entries and an optional
            system prompt; returns the stripped response text ("" if none).
        Side Effects / State: May add a model to the internal cache.
        Failure Modes: SDK and network errors propagate to the caller.
        """
        response = self._model(system_instruction).generate_content(
            contents,
            generation_config={
                "temperature": temperature,
                "max_output_tokens": max_output_tokens,
            },
            safety_settings=SAFETY_SETTINGS,
        )
        text: Optional[str] = getattr(response, "text", None)
        return (text or "").strip()


def normalize_model_name(name: Optional[str]) -> str:
    """Strip whitespace and a leading "models/" prefix."""
    if not name:
        return ""
    cleaned = name.strip()
    if cleaned.startswith("models/"):
        return cleaned.split("/", 1)[1]
    return cleaned


def user_contents(text: str) -> List[dict]:
    return [{"role": "user", "parts": [{"text": text}]}]
