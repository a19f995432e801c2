from __future__ import annotations

import math
from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


def _to_number(value: Any) -> float:
    """Coerce a model-supplied amount to a number.

    ``None`` and blank strings count as zero; anything that does not read as
    a finite number is rejected.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            raise ValueError(f"not a finite number: {value!r}")
    elif isinstance(value, str):
        cleaned = value.strip()
        if not cleaned:
            return 0.0
        try:
            number = float(cleaned)
        except OverflowError:
            raise ValueError(f"not a finite number: {value!r}")
        except ValueError:
            raise ValueError(f"not a number: {value!r}")
    else:
        raise ValueError(f"not a number: {value!r}")
    if not math.isfinite(number):
        raise ValueError(f"not a finite number: {value!r}")
    return number


def _to_text(value: Any) -> str:
    if not value:
        return "null"
    return value if isinstance(value, str) else str(value)


class MilestonePayload(BaseModel):
    """Savings-goal update extracted from a user message."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    kind: Literal["milestone"] = "milestone"
    saved_amount: float = Field(..., alias="savedAmount")
    goal_amount: float = Field(..., alias="goalAmount")
    duration: str = Field("null", description="Time period for saving")

    @model_validator(mode="before")
    @classmethod
    def _coerce_fields(cls, values):
        if not isinstance(values, dict):
            return values
        values = dict(values)
        for key, field_name in (("savedAmount", "saved_amount"), ("goalAmount", "goal_amount")):
            if key in values:
                values[key] = _to_number(values[key])
            elif field_name in values:
                values[field_name] = _to_number(values[field_name])
            else:
                values[key] = 0.0
        duration = values.get("duration")
        values["duration"] = "null" if duration is None else str(duration)
        return values

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude={"kind"})


class TransactionPayload(BaseModel):
    """Spending record extracted from a user message."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    kind: Literal["transaction"] = "transaction"
    phone_number: str = Field("null", alias="phoneNumber")
    amount: float = 0.0
    spent_category: str = Field("null", alias="spentCategory")
    methode_of_payment: str = Field("null", alias="methodeOfPayment")
    receiver: str = "null"

    @model_validator(mode="before")
    @classmethod
    def _apply_defaults(cls, values):
        if not isinstance(values, dict):
            return values
        values = dict(values)
        for key, field_name in (
            ("phoneNumber", "phone_number"),
            ("spentCategory", "spent_category"),
            ("methodeOfPayment", "methode_of_payment"),
            ("receiver", "receiver"),
        ):
            if field_name in values and key not in values:
                key = field_name
            values[key] = _to_text(values.get(key))
        amount = values.get("amount")
        values["amount"] = _to_number(amount) if amount else 0.0
        return values

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude={"kind"})


Record = Annotated[
    Union[MilestonePayload, TransactionPayload], Field(discriminator="kind")
]


class ClassifierReply(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str
    record: Optional[Record] = None


class Message(BaseModel):
    """One entry of the conversation, never changed after creation."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    text: str
    is_user: bool = Field(..., alias="isUser")
    data: Optional[Record] = None
