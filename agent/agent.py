from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple

from agent.classifier import ClassifierClient
from agent.core.errors import ClassifierError, EmptyMessageError, SessionBusyError
from agent.core.i18n import t
from agent.core.interpreter import interpret_reply
from agent.core.memory import ChatSession, SessionRegistry
from agent.core.prompt import build_system_prompt
from agent.core.records import Message
from agent.dispatcher import Dispatcher
from agent.tools import LedgerClient
from config.settings import get_settings


logger = logging.getLogger("pockit.chatbot")

ErrorHook = Callable[[str, Exception], None]


class Chatbot:
    """Runs chat submissions: classify the text, record it, answer.

    One submission per client may be in flight at a time. Once the user
    message is appended, no failure raises out of ``send``; the client gets
    the localized apology instead.
    """

    def __init__(
        self,
        classifier: ClassifierClient,
        dispatcher: Dispatcher,
        sessions: Optional[SessionRegistry] = None,
        on_error: Optional[ErrorHook] = None,
    ) -> None:
        self.classifier = classifier
        self.dispatcher = dispatcher
        settings = get_settings()
        self.sessions = sessions or SessionRegistry(
            settings.default_language, max_sessions=settings.max_sessions
        )
        self.on_error = on_error

    def session(self, client_id: str, language: Optional[str] = None) -> ChatSession:
        return self.sessions.get(client_id, language)

    def history(self, client_id: str) -> Tuple[Message, ...]:
        return self.session(client_id).store.messages

    def set_language(self, client_id: str, language: str) -> Tuple[Message, ...]:
        session = self.session(client_id, language)
        if session.set_language(language):
            logger.info("Client %s switched language to %s", client_id, session.language)
        return session.store.messages

    async def send(
        self, client_id: str, text: str, language: Optional[str] = None
    ) -> Message:
        if not text or not text.strip():
            raise EmptyMessageError("Message text is empty")

        session = self.session(client_id, language)
        if session.busy:
            raise SessionBusyError(f"A message from {client_id} is already being handled")
        if language:
            session.set_language(language)

        # Missing model configuration raises here, before anything is appended.
        self.classifier.ensure_ready()

        session.store.append_user(text)
        session.busy = True
        logger.info(
            "Incoming chat: client_id=%s language=%s text_len=%s",
            client_id,
            session.language,
            len(text),
        )
        try:
            raw = await self.classifier.classify(text, build_system_prompt(session.language))
            reply = interpret_reply(raw, session.language)
            kind = await self.dispatcher.dispatch(reply.record)
            logger.info("Classified message from %s as %s", client_id, kind or "no record")
            return session.store.append_assistant(reply.message, reply.record)
        except ClassifierError as exc:
            logger.warning(
                "Classification failed: client_id=%s kind=%s error=%s",
                client_id,
                exc.kind,
                exc,
            )
            if self.on_error is not None:
                self.on_error(exc.kind, exc)
            return session.store.append_assistant(t("chatbotError", session.language))
        except Exception as exc:
            logger.exception("Chat processing failed: client_id=%s", client_id)
            if self.on_error is not None:
                self.on_error("unexpected", exc)
            return session.store.append_assistant(t("chatbotError", session.language))
        finally:
            session.busy = False


def build_chatbot(on_error: Optional[ErrorHook] = None) -> Chatbot:
    ledger = LedgerClient()
    dispatcher = Dispatcher(
        record_milestone=ledger.record_milestone,
        record_transaction=ledger.record_transaction,
    )
    return Chatbot(ClassifierClient(), dispatcher, on_error=on_error)
