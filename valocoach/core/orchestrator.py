"""Chat session orchestration."""

import logging
from dataclasses import dataclass

from valocoach.auth.context import AuthContext
from valocoach.core.generation import GenerationError, TextGenerator
from valocoach.core.messages import Conversation, Message
from valocoach.core.observable import Observable
from valocoach.store.base import RecordStoreError
from valocoach.store.history import ChatHistoryStore, ChatSession

logger = logging.getLogger(__name__)

ERROR_REPLY = "Sorry, I encountered an error. Please try again."
EMPTY_REPLY = "Sorry, I couldn't generate a response."


@dataclass(frozen=True)
class ChatEvent:
    """State change published to observers."""

    kind: str
    partial: str | None = None


class ChatOrchestrator(Observable):
    """Owns one conversation's message log and submission lifecycle.

    The orchestrator:
    1. Appends the user's message to the log
    2. Sends the whole log to the text generator
    3. Appends the reply, or a fixed apology when generation fails
    4. Mirrors both messages into the chat history store when signed in

    At most one submission is in flight; ``submit`` while pending is a no-op.

    Example:
        orchestrator = ChatOrchestrator(generator, auth=auth, history=history)
        reply = await orchestrator.submit("How do I hold B site on Ascent?")
        print(reply.content)
    """

    def __init__(
        self,
        generator: TextGenerator,
        auth: AuthContext | None = None,
        history: ChatHistoryStore | None = None,
        streaming: bool = False,
    ):
        """Initialize the orchestrator.

        Args:
            generator: Client for the generation endpoint.
            auth: Auth state; persistence only happens for signed-in users.
            history: Chat history store used for persistence.
            streaming: Consume the reply as a stream of fragments.
        """
        super().__init__()
        self.generator = generator
        self.auth = auth
        self.history = history
        self.streaming = streaming
        self.conversation = Conversation()
        self.session: ChatSession | None = None
        self.input_buffer = ""
        self._pending = False

    @property
    def messages(self) -> list[Message]:
        return list(self.conversation.messages)

    @property
    def is_pending(self) -> bool:
        return self._pending

    @property
    def is_authenticated(self) -> bool:
        return self.auth is not None and self.auth.is_authenticated

    @property
    def greeting(self) -> str:
        return self.auth.greeting if self.auth else "Good evening"

    def set_input(self, text: str) -> None:
        self.input_buffer = text

    async def submit(self, text: str | None = None) -> Message | None:
        """Submit a user message and wait for the assistant's reply.

        Args:
            text: Message text, defaults to the input buffer.

        Returns:
            The assistant message appended to the log, or None when the
            submission was rejected (empty text or already pending).
        """
        content = (self.input_buffer if text is None else text).strip()
        if not content or self._pending:
            return None

        user_message = self.conversation.add_user(content)
        self._pending = True
        self.input_buffer = ""
        self._notify(ChatEvent("user_message"))

        await self._ensure_session()
        try:
            reply = await self._generate()
            assistant_message = self.conversation.add_assistant(reply or EMPTY_REPLY)
        except GenerationError:
            logger.warning("Generation failed, replying with error message")
            assistant_message = self.conversation.add_assistant(ERROR_REPLY)
        except Exception:
            logger.exception("Unexpected failure during chat submission")
            assistant_message = self.conversation.add_assistant(ERROR_REPLY)
        finally:
            self._pending = False

        self._notify(ChatEvent("assistant_message"))
        await self._persist(user_message, assistant_message)
        return assistant_message

    async def _generate(self) -> str:
        turns = self.conversation.to_turns()
        if not self.streaming:
            return await self.generator.generate(turns)

        fragments: list[str] = []
        async for fragment in self.generator.stream(turns):
            fragments.append(fragment)
            self._notify(ChatEvent("partial", "".join(fragments)))
        return "".join(fragments)

    async def _ensure_session(self) -> None:
        """Bind a chat session when a signed-in user's log becomes non-empty.

        Only the first message of a conversation triggers creation, so a
        failed attempt leaves the rest of the conversation memory-only.
        """
        if self.session is not None or self.history is None or not self.is_authenticated:
            return
        if len(self.conversation) != 1:
            return
        try:
            self.session = await self.history.create_session(self.auth.user)
        except RecordStoreError:
            logger.warning("Chat session creation failed, continuing without persistence")
        except Exception:
            logger.exception("Unexpected chat session failure, continuing without persistence")

    async def _persist(self, user_message: Message, assistant_message: Message) -> None:
        if self.session is None or self.history is None or not self.is_authenticated:
            return
        for message in (user_message, assistant_message):
            try:
                await self.history.save_message(self.session.id, message.role, message.content)
            except RecordStoreError:
                logger.warning(
                    "Failed to persist %s message to session %s",
                    message.role.value,
                    self.session.id,
                )

    async def recent_sessions(self) -> list[ChatSession]:
        """Stored sessions of the signed-in user, most recent first. Best-effort."""
        if self.history is None or not self.is_authenticated:
            return []
        try:
            return await self.history.list_sessions(self.auth.user)
        except RecordStoreError:
            logger.warning("Could not list chat sessions for user %s", self.auth.user.id)
            return []

    async def resume(self, session: ChatSession) -> bool:
        """Replace the log with a stored session's messages and bind to it.

        Ignored while a submission is pending. Returns False when the
        messages could not be loaded; the current log is kept then.
        """
        if self._pending or self.history is None:
            return False
        try:
            stored = await self.history.list_messages(session.id)
        except RecordStoreError:
            logger.warning("Could not load chat session %s", session.id)
            return False

        self.conversation.clear()
        for message in stored:
            self.conversation.add(Message(role=message.role, content=message.content, id=message.id))
        self.session = session
        self.input_buffer = ""
        self._notify(ChatEvent("resumed"))
        return True

    def reset(self) -> None:
        """Start a new conversation. Ignored while a submission is pending."""
        if self._pending:
            return
        self.conversation.clear()
        self.session = None
        self.input_buffer = ""
        self._notify(ChatEvent("reset"))
