from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from langchain_core.language_models import BaseChatModel
from langchain_core.prompts import ChatPromptTemplate
from langchain_google_genai import ChatGoogleGenerativeAI

from agent.core.errors import ClassifierTimeout, TransportError
from config.settings import get_settings


logger = logging.getLogger("pockit.classifier")

# The system text goes in as a variable so the JSON braces it contains are
# never read as template fields.
CLASSIFIER_PROMPT = ChatPromptTemplate.from_messages(
    [
        ("system", "{system_prompt}"),
        ("human", "{input}"),
    ]
)


def build_classifier_llm() -> BaseChatModel:
    settings = get_settings()
    if not settings.google_api_key:
        raise RuntimeError(
            "GOOGLE_API_KEY not set. Please configure it in environment or .env"
        )

    return ChatGoogleGenerativeAI(
        model=settings.gemini_model,
        google_api_key=settings.google_api_key,
        temperature=settings.temperature,
        top_p=settings.top_p,
        max_output_tokens=settings.classifier_max_tokens,
    )


def extract_text(content: Any) -> str:
    """Join the text blocks of a chat model reply, in order."""
    if isinstance(content, str):
        return content
    parts = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif (
            isinstance(block, dict)
            and block.get("type") == "text"
            and isinstance(block.get("text"), str)
        ):
            parts.append(block["text"])
    return "".join(parts)


class ClassifierClient:
    """Single-turn client for the remote classification model.

    Every failure of the remote call surfaces as ``TransportError``; a call
    running past ``timeout`` seconds surfaces as ``ClassifierTimeout``.
    """

    def __init__(
        self, llm: Optional[BaseChatModel] = None, timeout: Optional[float] = None
    ) -> None:
        self._llm = llm
        self.timeout = timeout if timeout is not None else get_settings().classifier_timeout

    @property
    def llm(self) -> BaseChatModel:
        if self._llm is None:
            self._llm = build_classifier_llm()
        return self._llm

    def ensure_ready(self) -> None:
        self._llm = self.llm

    async def classify(self, text: str, system_prompt: str) -> str:
        chain = CLASSIFIER_PROMPT | self.llm
        try:
            response = await asyncio.wait_for(
                chain.ainvoke({"system_prompt": system_prompt, "input": text}),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as exc:
            raise ClassifierTimeout(
                f"Classifier did not answer within {self.timeout:g}s"
            ) from exc
        except Exception as exc:
            raise TransportError(f"Classifier request failed: {exc}") from exc

        output = extract_text(getattr(response, "content", None))
        logger.info("Classifier replied with %s chars", len(output))
        return output
