from __future__ import annotations

import json
from typing import Any, Dict

from pydantic import ValidationError

from agent.core.errors import ParseError
from agent.core.i18n import t
from agent.core.records import ClassifierReply, MilestonePayload, TransactionPayload


def _strip_code_fences(text: str) -> str:
    stripped = text.strip()
    if stripped.startswith("```"):
        stripped = stripped[3:]
        if stripped.startswith("json"):
            stripped = stripped[len("json"):].lstrip()
        stripped = stripped.rstrip()
        if stripped.endswith("```"):
            stripped = stripped[:-3]
    return stripped.strip()


def _build_record(data: Dict[str, Any]):
    # Key presence decides the branch, even for a null or zero savedAmount.
    if "savedAmount" in data:
        return MilestonePayload.model_validate(data)
    return TransactionPayload.model_validate(data)


def interpret_reply(raw_text: str, language: str) -> ClassifierReply:
    """Turn the model's raw text into a normalized ``ClassifierReply``.

    Raises ``ParseError`` when the text is not a JSON object, when ``json``
    is present but not an object, or when an amount is not numeric.
    """
    try:
        parsed = json.loads(_strip_code_fences(raw_text))
    except json.JSONDecodeError as exc:
        raise ParseError(f"Classifier reply is not valid JSON: {exc}") from exc
    except RecursionError as exc:
        raise ParseError("Classifier reply is nested too deeply") from exc
    if not isinstance(parsed, dict):
        raise ParseError(
            f"Classifier reply must be a JSON object, got {type(parsed).__name__}"
        )

    message = parsed.get("message")
    if not isinstance(message, str) or not message.strip():
        message = t("chatbotNotUnderstood", language)

    data = parsed.get("json")
    record = None
    if data is not None:
        if not isinstance(data, dict):
            raise ParseError(
                f"Classifier 'json' field must be an object, got {type(data).__name__}"
            )
        try:
            record = _build_record(data)
        except ValidationError as exc:
            raise ParseError(f"Invalid classifier payload: {exc}") from exc

    return ClassifierReply(message=message, record=record)
