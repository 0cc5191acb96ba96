"""Advisory chat session.

Role:
    Keeps the append-only chat transcript and runs a strictly serialized
    request/response exchange with the recommendation service.

Submission contract:
    - Accepted only when the trimmed input is non-empty and no reply is pending.
      Anything else is a silent no-op.
    - On acceptance the user message is appended, the input box is cleared,
      the pending flag is set and the service call is scheduled as a task.
    - The task always appends exactly one advisor message and clears the
      pending flag, falling back to FALLBACK_REPLY when the service fails,
      times out, or answers with nothing.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Protocol, Tuple

from .models import ChatMessage, Role

logger = logging.getLogger("motocat.advisory")

GREETING = "你好！我是光阳智选顾问。你可以问我：“哪款车适合长途旅行？”或者“1.5万预算推荐什么车？”"
FALLBACK_REPLY = "抱歉，顾问暂时无法连接，请稍后再试。"
DEFAULT_TIMEOUT = 30.0


class RecommendationService(Protocol):
    async def recommend(self, text: str) -> str:
        ...


class AdvisorySession:
    """Chat transcript plus the single-flight guard around the advisor call."""

    def __init__(
        self,
        service: RecommendationService,
        timeout: float = DEFAULT_TIMEOUT,
        session_id: str = "-",
    ) -> None:
        self._service = service
        self._timeout = timeout
        self._session_id = session_id
        self._messages: List[ChatMessage] = [ChatMessage(role=Role.ADVISOR, text=GREETING)]
        self._input = ""
        self._pending = False
        self._task: Optional[asyncio.Task] = None

    @property
    def transcript(self) -> Tuple[ChatMessage, ...]:
        return tuple(self._messages)

    @property
    def pending(self) -> bool:
        return self._pending

    @property
    def input(self) -> str:
        return self._input

    def set_input(self, text: str) -> None:
        self._input = text

    def can_submit(self) -> bool:
        return bool(self._input.strip()) and not self._pending

    def submit(self, text: Optional[str] = None) -> Optional[asyncio.Task]:
        """Purpose: Submit the pending input to the advisor.
        Inputs/Outputs: Optional text replaces the input box first; returns the
            task resolving to the advisor reply, or None if rejected.
        Side Effects / State: Appends the user message, clears the input, sets
            pending and schedules the service call on the running loop.
        Dependencies: Must be called from inside a running event loop.
        Failure Modes: Blank input or an outstanding reply reject silently.
        Testing Notes: A second submit while pending leaves the transcript unchanged.
        """
        if text is not None:
            self._input = text
        if not self.can_submit():
            logger.debug(
                "session=%s chat rejected pending=%s blank=%s",
                self._session_id,
                self._pending,
                not self._input.strip(),
            )
            return None

        question = self._input.strip()
        self._input = ""
        self._messages.append(ChatMessage(role=Role.USER, text=question))
        self._pending = True
        logger.info("session=%s question=%s", self._session_id, question)
        self._task = asyncio.get_running_loop().create_task(self._resolve(question))
        return self._task

    async def ask(self, text: str) -> Optional[ChatMessage]:
        """Submit and wait for the reply; None when the submission was rejected."""
        task = self.submit(text)
        if task is None:
            return None
        return await task

    async def wait(self) -> None:
        """Wait for the outstanding reply, if any."""
        if self._task is not None and not self._task.done():
            await self._task

    async def _resolve(self, question: str) -> ChatMessage:
        reply = FALLBACK_REPLY
        try:
            answer = await asyncio.wait_for(self._service.recommend(question), timeout=self._timeout)
            if isinstance(answer, str) and answer.strip():
                reply = answer.strip()
            else:
                logger.warning("session=%s advisor route=empty_reply", self._session_id)
        except asyncio.TimeoutError:
            logger.warning("session=%s advisor route=timeout timeout=%.1fs", self._session_id, self._timeout)
        except Exception as exc:
            logger.warning("session=%s advisor route=exception error=%s", self._session_id, exc)
        finally:
            message = ChatMessage(role=Role.ADVISOR, text=reply)
            self._messages.append(message)
            self._pending = False
        logger.info("session=%s advisor replied chars=%d", self._session_id, len(reply))
        return message
