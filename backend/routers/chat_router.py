"""Scam help chatbot router."""

from fastapi import APIRouter, Request, Response, status

from helpers.rate_limiter import CHAT_RATE_LIMIT, limiter
from models.schemas import ChatRequest, ChatResponse
from services.chat_service import ChatService

router = APIRouter(prefix="/ai-chat", tags=["ai-chat"])


@router.post("", response_model=ChatResponse, response_model_exclude_none=True)
@limiter.limit(CHAT_RATE_LIMIT)
async def ai_chat(
    request: Request, body: ChatRequest, response: Response
) -> ChatResponse:
    """
    Ask the scam help assistant.

    Upstream failures answer 500 with source "error" and an apology the
    client can display as-is.
    """
    answer = await ChatService.ask(body.messages)
    if answer.source == "error":
        response.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return answer
