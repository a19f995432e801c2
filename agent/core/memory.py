"""In-process conversation memory.

Each client gets one ``ChatSession`` holding an append-only message list
whose first entry is the welcome message. Nothing is persisted: sessions
live in the process until evicted.
"""

from __future__ import annotations

from collections import OrderedDict
from typing import List, Optional, Tuple

from agent.core.i18n import resolve_language, t
from agent.core.records import Message, Record


class ConversationStore:
    def __init__(self, welcome_text: str) -> None:
        self._messages: List[Message] = [Message(text=welcome_text, is_user=False)]

    @property
    def messages(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def append_user(self, text: str) -> Message:
        message = Message(text=text, is_user=True)
        self._messages.append(message)
        return message

    def append_assistant(self, text: str, data: Optional[Record] = None) -> Message:
        message = Message(text=text, is_user=False, data=data)
        self._messages.append(message)
        return message

    def reset_welcome(self, text: str) -> None:
        """Replace the welcome message, keeping everything after it."""
        self._messages[0] = Message(text=text, is_user=False)


class ChatSession:
    def __init__(self, client_id: str, language: str) -> None:
        self.client_id = client_id
        self.language = resolve_language(language)
        self.store = ConversationStore(t("chatbotWelcome", self.language))
        self.busy = False

    def set_language(self, language: str) -> bool:
        """Switch language and re-localize the welcome message.

        Returns False when the language did not change.
        """
        language = resolve_language(language)
        if language == self.language:
            return False
        self.language = language
        self.store.reset_welcome(t("chatbotWelcome", language))
        return True


class SessionRegistry:
    """Sessions by client id, least recently used first.

    Once more than ``max_sessions`` are held, the oldest idle sessions are
    dropped. A busy session is never evicted.
    """

    def __init__(self, default_language: str = "en", max_sessions: int = 1000) -> None:
        self.default_language = default_language
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, ChatSession] = OrderedDict()

    def get(self, client_id: str, language: Optional[str] = None) -> ChatSession:
        session = self._sessions.get(client_id)
        if session is None:
            session = ChatSession(client_id, language or self.default_language)
            self._sessions[client_id] = session
            self._evict(keep=client_id)
        else:
            self._sessions.move_to_end(client_id)
        return session

    def _evict(self, keep: str) -> None:
        overflow = len(self._sessions) - self.max_sessions
        if overflow <= 0:
            return
        idle = [
            cid for cid, s in self._sessions.items() if not s.busy and cid != keep
        ][:overflow]
        for client_id in idle:
            del self._sessions[client_id]

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, client_id: str) -> bool:
        return client_id in self._sessions
