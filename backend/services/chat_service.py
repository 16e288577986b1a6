"""
Scam help chatbot backed by the Perplexity chat completions API.

Without an API key the assistant answers with a fixed limited-mode
message. Upstream failures never raise to the caller; they come back as a
response with source "error" so the client can show the apology text.
"""

import httpx
from loguru import logger

from models.config import settings
from models.schemas import ChatMessage, ChatResponse

SYSTEM_PROMPT = (
    "You are a helpful assistant for scam victims. Provide specific, actionable "
    "advice for people who've been scammed. Be supportive and empathetic, but "
    "focus on practical steps they can take. Include references to official "
    "resources when appropriate. Keep your responses concise and direct."
)

FALLBACK_RESPONSE = (
    "I'm sorry, but I'm currently operating in limited mode. My responses are "
    "based on pre-defined information about common scams. For more detailed "
    "assistance, please try again later when my full capabilities are available."
)

ERROR_MESSAGE = "Failed to get AI response"
ERROR_RESPONSE = (
    "I'm having trouble connecting to my knowledge base right now. "
    "Please try again in a moment."
)


class ChatService:
    """Service for the scam help assistant."""

    @staticmethod
    def build_payload(messages: list[ChatMessage]) -> dict:
        return {
            "model": settings.PERPLEXITY_MODEL,
            "messages": [{"role": "system", "content": SYSTEM_PROMPT}]
            + [{"role": msg.role.value, "content": msg.content} for msg in messages],
            "temperature": 0.2,
            "max_tokens": 1000,
            "presence_penalty": 0,
            "frequency_penalty": 1,
            "return_related_questions": False,
            "stream": False,
        }

    @staticmethod
    async def ask(messages: list[ChatMessage]) -> ChatResponse:
        """
        Send the conversation to the assistant.

        Args:
            messages: Conversation so far, oldest first

        Returns:
            ChatResponse with source "perplexity", "fallback" or "error"
        """
        api_key = settings.PERPLEXITY_API_KEY
        if not api_key:
            logger.warning("Perplexity API key not configured, using fallback response")
            return ChatResponse(response=FALLBACK_RESPONSE, source="fallback")

        try:
            async with httpx.AsyncClient(timeout=settings.PERPLEXITY_TIMEOUT) as client:
                response = await client.post(
                    settings.PERPLEXITY_API_URL,
                    json=ChatService.build_payload(messages),
                    headers={"Authorization": f"Bearer {api_key}"},
                )
                response.raise_for_status()
                data = response.json()

            return ChatResponse(
                response=data["choices"][0]["message"]["content"],
                citations=data.get("citations") or [],
                source="perplexity",
            )
        except httpx.TimeoutException:
            logger.warning("Perplexity API timeout")
        except httpx.HTTPStatusError as e:
            logger.error(f"Perplexity API error: HTTP {e.response.status_code}")
        except httpx.HTTPError as e:
            logger.error(f"Perplexity API request failed: {e}")
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"Unexpected Perplexity API response: {e}")

        return ChatResponse(response=ERROR_RESPONSE, source="error", error=ERROR_MESSAGE)
