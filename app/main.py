from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
import logging
import uvicorn
from pydantic import BaseModel, Field

from agent.agent import Chatbot, build_chatbot
from agent.core.errors import EmptyMessageError, SessionBusyError
from agent.core.i18n import ASSISTANT_NAME, Language, t
from agent.core.records import Message
from config.settings import get_settings


logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s - %(message)s")
logger = logging.getLogger("pockit")


@asynccontextmanager
async def lifespan(_: FastAPI):
    yield
    # background ledger writes finish before the loop closes
    await _chatbot.dispatcher.drain()


app = FastAPI(title="Pockit Chatbot", version="1.0.0", lifespan=lifespan)

# CORS: allow the mobile/web client during development
settings = get_settings()
if settings.app_env.lower() in {"dev", "development", "local"}:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


class SendRequest(BaseModel):
    client_id: str = Field(..., description="Unique identifier for user/session")
    text: str = Field(..., max_length=500, description="User's latest message")
    language: Optional[Language] = Field(
        None, description="UI language; switches the session language when it differs"
    )


class LanguageRequest(BaseModel):
    language: Language


_chatbot = build_chatbot()


async def get_chatbot() -> Chatbot:
    return _chatbot


def _dump(messages) -> List[Dict[str, Any]]:
    return [m.model_dump(by_alias=True) for m in messages]


@app.post("/chatbot/messages")
async def send_message(req: SendRequest, chatbot: Chatbot = Depends(get_chatbot)) -> Dict[str, Any]:
    try:
        reply: Message = await chatbot.send(req.client_id, req.text, req.language)
    except EmptyMessageError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SessionBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.exception("Chat processing failed: %s", e)
        raise HTTPException(status_code=500, detail=str(e))

    return {
        "reply": reply.model_dump(by_alias=True),
        "messages": _dump(chatbot.history(req.client_id)),
    }


@app.get("/chatbot/{client_id}/messages")
async def get_messages(client_id: str, chatbot: Chatbot = Depends(get_chatbot)) -> Dict[str, Any]:
    return {"messages": _dump(chatbot.history(client_id))}


@app.put("/chatbot/{client_id}/language")
async def set_language(
    client_id: str, req: LanguageRequest, chatbot: Chatbot = Depends(get_chatbot)
) -> Dict[str, Any]:
    return {"messages": _dump(chatbot.set_language(client_id, req.language))}


@app.get("/chatbot/strings/{language}")
def get_strings(language: Language) -> Dict[str, str]:
    return {
        "assistantName": ASSISTANT_NAME,
        "chatbotTitle": t("chatbotTitle", language),
        "chatbotWelcome": t("chatbotWelcome", language),
        "chatbotPlaceholder": t("chatbotPlaceholder", language),
    }


@app.get("/health")
def health():
    return {"status": "ok"}


def serve() -> None:
    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", "8000")))
