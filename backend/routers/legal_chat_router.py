# backend/routers/legal_chat_router.py
"""
Legal-chat router - thin web layer that delegates to LegalChatService.
Handles HTTP concerns only (CORS headers, the {error} body contract and its
status codes); business logic is in services.legal_chat.LegalChatService.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from deps import get_document_store, get_legal_chat_service, get_message_store
from schemas import ErrorResponse, LegalChatRequest, LegalChatResponse
from services.legal_chat import LegalChatService
from services.llm_gateway_client import CreditsExhaustedError, RateLimitError
from services.stores import DocumentStore, MessageStore

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again later."
CREDITS_EXHAUSTED_MESSAGE = "AI credits depleted. Please add credits to continue."

# --- Router Setup ---
router = APIRouter(
    tags=["legal-chat"],
)


def _json_response(content: dict, status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=CORS_HEADERS)


# --- API Endpoints ---
@router.options("/legal-chat")
async def legal_chat_preflight():
    """CORS preflight: empty body with the permissive CORS headers."""
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post(
    "/legal-chat",
    response_model=LegalChatResponse,
    responses={
        402: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {
                    "schema": LegalChatRequest.model_json_schema(by_alias=True)
                }
            },
        }
    },
)
async def legal_chat_endpoint(
    request: Request,
    chat_service: LegalChatService = Depends(get_legal_chat_service),
    messages: MessageStore = Depends(get_message_store),
    documents: DocumentStore = Depends(get_document_store),
):
    """
    Answer the latest message of a conversation with the legal advisor model.

    The body ({conversationId, message, hasFile}) is parsed inside the error
    contract: malformed JSON or missing fields answer 500 {error}.

    Args:
        request: Raw request carrying the JSON body
        chat_service: Injected LegalChatService instance
        messages: Injected message store (conversation history)
        documents: Injected document store (latest upload)

    Returns:
        {response, references} on success, {error} with 429/402/500 otherwise
    """
    try:
        chat_request = LegalChatRequest.model_validate(await request.json())
        result = await chat_service.generate_reply(chat_request, messages, documents)
    except RateLimitError:
        return _json_response({"error": RATE_LIMIT_MESSAGE}, status_code=429)
    except CreditsExhaustedError:
        return _json_response({"error": CREDITS_EXHAUSTED_MESSAGE}, status_code=402)
    except Exception as e:
        logger.error("Error in legal-chat function: %s", e, exc_info=True)
        return _json_response({"error": str(e) or "Unknown error"}, status_code=500)

    return _json_response(result.model_dump())
