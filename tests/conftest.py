from unittest.mock import MagicMock

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from agent.agent import Chatbot
from agent.classifier import ClassifierClient
from agent.core.memory import SessionRegistry
from agent.dispatcher import Dispatcher


@pytest.fixture
def recorders():
    return MagicMock(name="record_milestone"), MagicMock(name="record_transaction")


@pytest.fixture
def make_chatbot(recorders):
    def factory(*responses, llm=None, timeout=5.0, on_error=None):
        record_milestone, record_transaction = recorders
        model = llm if llm is not None else FakeListChatModel(responses=list(responses))
        return Chatbot(
            ClassifierClient(llm=model, timeout=timeout),
            Dispatcher(record_milestone, record_transaction),
            sessions=SessionRegistry("en"),
            on_error=on_error,
        )

    return factory
