"""Learning Assistant - Free-form chat and task guides over GenerateContent."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..exceptions import BackendError, InvalidInputError
from ..extraction.extractor import LENIENT_STRATEGIES, extract, record_shape
from ..models.schemas import TaskGuide
from ..prompts.templates import (
    CHAT_FALLBACK_REPLY,
    CHAT_GREETING,
    TASK_GUIDE_PROMPT,
    TASK_GUIDE_ROLE,
    task_guide_fallback,
)

if TYPE_CHECKING:
    from ..llm.client import BackendClient

logger = logging.getLogger(__name__)


@dataclass
class ChatMessage:
    """One entry of the conversation ("user" or "assistant")."""

    role: str
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content}


class LearningAssistant:
    """Chat helper for a learner, scoped to one roadmap context.

    Backend failures never surface as exceptions: the chat answers with a
    fixed apology and the task guide degrades to a placeholder guide.
    """

    def __init__(self, client: BackendClient, role: str = "", context: str = ""):
        self.client = client
        self.role = role
        self.context = context
        self.history: list[ChatMessage] = []

    def greet(self) -> str:
        """Seed the conversation with the greeting for the current context."""
        text = CHAT_GREETING.format(context=self.context)
        self.history.append(ChatMessage(role="assistant", content=text))
        return text

    async def ask(self, message: str) -> str:
        """Send a question and return the assistant's reply.

        Args:
            message: The learner's question

        Returns:
            Reply text, or ``CHAT_FALLBACK_REPLY`` if the backend failed

        Raises:
            InvalidInputError: If the message is blank
        """
        text = (message or "").strip()
        if not text:
            raise InvalidInputError(message="Message cannot be empty")

        self.history.append(ChatMessage(role="user", content=text))
        try:
            reply = await self.client.generate_content(self.role, text, self.context)
        except BackendError as e:
            logger.error(f"[Assistant] Chat error: {e.message}")
            reply = CHAT_FALLBACK_REPLY

        self.history.append(ChatMessage(role="assistant", content=reply))
        return reply

    def reset(self) -> None:
        self.history.clear()

    async def fetch_task_guide(self, task: str, project_title: str = "Project") -> TaskGuide:
        """Generate a step-by-step guide for a project task.

        The reply is often prose wrapped around the JSON object, so parsing
        falls back to the outermost ``{...}`` span.

        Args:
            task: Task text
            project_title: Project the task belongs to

        Returns:
            TaskGuide, with ``generated=False`` when the placeholder was used
        """
        message = TASK_GUIDE_PROMPT.format(task=task)
        context = f"Project: {project_title}, Current task: {task}"
        fallback = task_guide_fallback(task)

        try:
            reply = await self.client.generate_content(TASK_GUIDE_ROLE, message, context)
        except BackendError as e:
            logger.error(f"[Assistant] Task guide error: {e.message}")
            return fallback

        return extract(reply, fallback, record_shape(TaskGuide), LENIENT_STRATEGIES)
