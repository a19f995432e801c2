from __future__ import annotations


class ChatbotError(Exception):
    """Base class for errors raised by the chatbot core."""


class ClassifierError(ChatbotError):
    """A submission could not be classified.

    ``kind`` is reported to logs and telemetry; users only ever see the
    generic apology message.
    """

    kind = "classifier"


class TransportError(ClassifierError):
    kind = "transport"


class ClassifierTimeout(TransportError):
    kind = "timeout"


class ParseError(ClassifierError):
    kind = "parse"


class EmptyMessageError(ChatbotError):
    pass


class SessionBusyError(ChatbotError):
    pass
