"""
Legal chat service layer - the proxy between the chat flow and the LLM gateway.
Separated from the web layer for better testability and maintainability.

Each call is independent: history and document context are read from the
stores, the gateway is called once, and the reply is split into display
text and references.
"""

import logging
from typing import Optional

from config import DOCUMENT_CONTEXT_TEMPLATE_STR, LEGAL_SYSTEM_PROMPT
from schemas import LegalChatRequest, LegalChatResponse
from services.llm_gateway_client import LLMGatewayClient
from services.stores import DocumentStore, MessageStore
from utils.message_converter import MessageConverter
from utils.reference_extractor import apply_default_references, extract_references

logger = logging.getLogger(__name__)


class LegalChatService:
    """Service class composing prompts and post-processing model replies."""

    def __init__(
        self,
        llm_client: Optional[LLMGatewayClient] = None,
        system_prompt: str = LEGAL_SYSTEM_PROMPT,
    ):
        self.llm_client = llm_client or LLMGatewayClient()
        self.system_prompt = system_prompt

    async def generate_reply(
        self,
        request: LegalChatRequest,
        messages: MessageStore,
        documents: DocumentStore,
    ) -> LegalChatResponse:
        """
        Answer the latest user message of a conversation.

        Args:
            request: Conversation id, the user's message and the attachment flag
            messages: Store providing the conversation history
            documents: Store providing the latest uploaded document

        Returns:
            LegalChatResponse with display text and references (never empty)
        """
        prompt = self.build_prompt(request, messages, documents)

        logger.info(
            f"Calling LLM gateway for conversation {request.conversation_id} "
            f"with {len(prompt)} messages"
        )
        raw_reply = await self.llm_client.generate_reply(prompt)

        extracted = extract_references(raw_reply)
        return LegalChatResponse(
            response=extracted.display_text,
            references=apply_default_references(extracted.references),
        )

    def build_prompt(
        self,
        request: LegalChatRequest,
        messages: MessageStore,
        documents: DocumentStore,
    ) -> list[dict[str, str]]:
        """Build the system prompt, stored history and current message."""
        history = messages.list_for_conversation(request.conversation_id)
        history = MessageConverter.drop_trailing_duplicate(history, request.message)

        current_message = request.message + self._document_context(request, documents)

        return MessageConverter.history_to_llm_messages(
            history,
            current_query=current_message,
            system_prompt=self.system_prompt,
        )

    def _document_context(
        self, request: LegalChatRequest, documents: DocumentStore
    ) -> str:
        if not request.has_file:
            return ""

        upload = documents.latest_for_conversation(request.conversation_id)
        if upload is None or not upload.extracted_text:
            return ""

        return DOCUMENT_CONTEXT_TEMPLATE_STR.format(
            file_name=upload.file_name, extracted_text=upload.extracted_text
        )
