from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .config import Settings
from .gemini_client import GeminiClient, user_contents
from .models import Record
from .prompt_loader import load_prompt, render_prompt

logger = logging.getLogger("motocat.advisor")

SUMMARY_SPEC_KEYS = ["displacement", "maxPower", "seatHeight", "curbWeight", "absTcs"]


class AdvisorUnavailable(RuntimeError):
    """The recommendation backend could not produce a reply."""


def build_catalog_summary(records: Sequence[Record]) -> str:
    """Purpose: Render one compact line per record for the system prompt.
    Inputs/Outputs: Input is the catalog; output is a newline-joined string.
    Side Effects / State: None.
    Testing Notes: Each line carries name, series, category and price.
    """
    lines: List[str] = []
    for record in records:
        specs = ", ".join(
            f"{key}={record.specs[key]}" for key in SUMMARY_SPEC_KEYS if record.specs.get(key)
        )
        line = f"- {record.name}（{record.series}，{record.category.value}，¥{record.price}）"
        if specs:
            line += f" {specs}"
        lines.append(line)
    return "\n".join(lines)


class GeminiAdvisor:
    """Recommendation service backed by Gemini, grounded on the catalog."""

    def __init__(
        self,
        settings: Settings,
        records: Sequence[Record],
        client_factory: Callable[[Settings], GeminiClient] = GeminiClient,
    ) -> None:
        """Purpose: Prepare the advisor's system instruction and client factory.
        Inputs/Outputs: Inputs are Settings, the catalog and an optional client
            factory; no return value.
        Side Effects / State: Reads the advisor prompt template from prompts_dir.
        Dependencies: Uses load_prompt/render_prompt and GeminiClient.
        Failure Modes: Missing prompt file raises FileNotFoundError. The client is
            created on first use so a missing API key only affects chat replies.
        """
        self._settings = settings
        self._client_factory = client_factory
        self._client: Optional[GeminiClient] = None
        template = load_prompt(Path(settings.prompts_dir) / "advisor_system.txt")
        self._system_instruction = render_prompt(template, {"CATALOG": build_catalog_summary(records)})

    @property
    def system_instruction(self) -> str:
        return self._system_instruction

    def _get_client(self) -> GeminiClient:
        if self._client is None:
            try:
                self._client = self._client_factory(self._settings)
            except ValueError as exc:
                raise AdvisorUnavailable(str(exc)) from exc
        return self._client

    async def recommend(self, text: str) -> str:
        """Purpose: Ask Gemini for advice on one free-text user message.
        Inputs/Outputs: Input is the user's text; output is the advisor reply.
        Side Effects / State: Performs a blocking SDK call in a worker thread.
        Failure Modes: AdvisorUnavailable on configuration problems or an empty
            reply; SDK/network exceptions propagate.
        """
        client = self._get_client()
        answer = await asyncio.to_thread(
            client.generate_content,
            user_contents(text),
            system_instruction=self._system_instruction,
        )
        if not answer:
            raise AdvisorUnavailable("Gemini returned an empty reply")
        logger.debug("advisor model=%s chars=%d", client.model_name, len(answer))
        return answer
