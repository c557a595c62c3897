"""Text generation backed by a LangChain chat model."""

import logging
from collections.abc import AsyncIterator, Sequence

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from valocoach.core.generation import ChatTurn, GenerationError
from valocoach.core.messages import MessageRole, apply_context_window
from valocoach.core.persona import SYSTEM_PROMPT

logger = logging.getLogger(__name__)


def _content_text(content: str | list) -> str:
    """Flatten LangChain message content into plain text."""
    if isinstance(content, str):
        return content
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


class ChatModelGenerator:
    """Generates coach replies from a chat model.

    The persona system prompt is prepended to every request and only the
    most recent ``context_window`` turns are sent to the model.

    Example:
        generator = ChatModelGenerator(provider.get_chat_model())
        text = await generator.generate([{"role": "user", "content": "hi"}])
    """

    def __init__(
        self,
        chat_model: BaseChatModel,
        system_prompt: str = SYSTEM_PROMPT,
        context_window: int = 0,
    ):
        """Initialize the generator.

        Args:
            chat_model: LangChain chat model to use.
            system_prompt: Persona instruction sent ahead of the history.
            context_window: Maximum number of turns sent, 0 for all.
        """
        self.model = chat_model
        self.system_prompt = system_prompt
        self.context_window = context_window

    def _convert_to_langchain_messages(
        self, messages: Sequence[ChatTurn]
    ) -> list[BaseMessage]:
        """Convert role/content pairs to LangChain message format."""
        lc_messages: list[BaseMessage] = [SystemMessage(content=self.system_prompt)]

        for turn in apply_context_window(messages, self.context_window):
            match turn["role"]:
                case MessageRole.USER:
                    lc_messages.append(HumanMessage(content=turn["content"]))
                case MessageRole.ASSISTANT:
                    lc_messages.append(AIMessage(content=turn["content"]))
                case role:
                    raise GenerationError(f"Unsupported message role: {role}")

        return lc_messages

    async def generate(self, messages: Sequence[ChatTurn]) -> str:
        """Return the complete reply for a conversation."""
        lc_messages = self._convert_to_langchain_messages(messages)
        try:
            response = await self.model.ainvoke(lc_messages)
        except Exception as e:
            logger.exception("Chat model invocation failed")
            raise GenerationError("Text generation failed") from e
        return _content_text(response.content or "")

    async def stream(self, messages: Sequence[ChatTurn]) -> AsyncIterator[str]:
        """Yield reply fragments as the model produces them."""
        lc_messages = self._convert_to_langchain_messages(messages)
        try:
            async for chunk in self.model.astream(lc_messages):
                text = _content_text(chunk.content or "")
                if text:
                    yield text
        except Exception as e:
            logger.exception("Chat model streaming failed")
            raise GenerationError("Text generation failed") from e
