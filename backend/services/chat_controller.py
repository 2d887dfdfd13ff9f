"""
Chat controller - owns the chat view state and sequences a send.

The controller replaces the page-level globals of a chat UI with explicit
state (conversation list, current conversation, messages, references,
pending attachment, sending flag). Rendering code reads that state; all
mutations go through the operations below.

A send is: persist the user message -> upload the attachment (if any) ->
invoke the legal-chat proxy -> persist the assistant message and replace
the references -> name the conversation after its first message. Failures
are reported as notifications and stop the sequence, except for a failed
upload, after which the proxy is still invoked. Steps already done are not
rolled back.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

import httpx

from config import LEGAL_CHAT_URL, MAX_UPLOAD_SIZE_BYTES
from enums import MessageRole
from schemas import ConversationInfo, LegalChatRequest, LegalChatResponse, MessageInfo
from services.legal_chat import LegalChatService
from services.llm_gateway_client import LLMGatewayError
from services.stores import ConversationStore, DocumentStore, MessageStore, StoreError
from services.upload import Attachment, UploadService

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 50
DEFAULT_CONVERSATION_TITLE = "New Conversation"


def derive_title(content: str) -> str:
    """First 50 characters of the first message, with an ellipsis if truncated."""
    title = content[:TITLE_MAX_LENGTH]
    if len(content) > TITLE_MAX_LENGTH:
        title += "..."
    return title


@dataclass
class Notification:
    """A user-facing message, e.g. shown as a toast."""

    title: str
    description: str
    variant: str = "destructive"


@dataclass
class UserSession:
    user_id: str


class AssistantError(Exception):
    """Raised when the legal-chat proxy cannot produce a reply."""


class AssistantClient(ABC):
    """Invokes the legal-chat proxy."""

    @abstractmethod
    async def invoke(
        self, conversation_id: str, message: str, has_file: bool
    ) -> LegalChatResponse:
        ...


class HttpAssistantClient(AssistantClient):
    """Calls the legal-chat proxy over HTTP."""

    def __init__(
        self,
        url: str = LEGAL_CHAT_URL,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def invoke(
        self, conversation_id: str, message: str, has_file: bool
    ) -> LegalChatResponse:
        body = LegalChatRequest(
            conversation_id=conversation_id, message=message, has_file=has_file
        ).model_dump(by_alias=True)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(self.url, json=body)
        except httpx.HTTPError as e:
            raise AssistantError(f"Failed to reach the legal-chat function: {e}") from e

        if response.status_code != 200:
            raise AssistantError(self._error_message(response))

        return LegalChatResponse.model_validate(response.json())

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            error = response.json().get("error")
        except ValueError:
            error = None
        return error or f"Legal-chat function returned status {response.status_code}"


class LocalAssistantClient(AssistantClient):
    """Runs the legal-chat service in-process against the same stores."""

    def __init__(
        self,
        service: LegalChatService,
        messages: MessageStore,
        documents: DocumentStore,
    ):
        self.service = service
        self.messages = messages
        self.documents = documents

    async def invoke(
        self, conversation_id: str, message: str, has_file: bool
    ) -> LegalChatResponse:
        request = LegalChatRequest(
            conversation_id=conversation_id, message=message, has_file=has_file
        )
        try:
            return await self.service.generate_reply(request, self.messages, self.documents)
        except (LLMGatewayError, StoreError, ValueError) as e:
            raise AssistantError(str(e)) from e


@dataclass
class ChatController:
    """Explicit state and operations of one user's chat view."""

    conversation_store: ConversationStore
    message_store: MessageStore
    document_store: DocumentStore
    upload_service: UploadService
    assistant: AssistantClient
    session: Optional[UserSession] = None

    conversations: list[ConversationInfo] = field(default_factory=list)
    current_conversation_id: Optional[str] = None
    messages: list[MessageInfo] = field(default_factory=list)
    references: list[str] = field(default_factory=list)
    pending_attachment: Optional[Attachment] = None
    sending: bool = False
    notifications: list[Notification] = field(default_factory=list)

    def notify(self, title: str, description: str) -> None:
        logger.warning(f"{title}: {description}")
        self.notifications.append(Notification(title=title, description=description))

    # --- Conversations ---
    def load_conversations(self) -> None:
        if self.session is None:
            return
        try:
            self.conversations = self.conversation_store.list_for_user(self.session.user_id)
        except StoreError as e:
            self.notify("Error loading conversations", str(e))

    def new_conversation(self) -> Optional[ConversationInfo]:
        if self.session is None:
            return None
        try:
            conversation = self.conversation_store.create(
                self.session.user_id, DEFAULT_CONVERSATION_TITLE
            )
        except StoreError as e:
            self.notify("Error creating conversation", str(e))
            return None

        self.conversations = [conversation, *self.conversations]
        self.current_conversation_id = conversation.id
        self.messages = []
        self.references = []
        return conversation

    def select_conversation(self, conversation_id: str) -> None:
        self.current_conversation_id = conversation_id
        self.load_messages(conversation_id)

    def load_messages(self, conversation_id: str) -> None:
        try:
            self.messages = self.message_store.list_for_conversation(conversation_id)
        except StoreError as e:
            self.notify("Error loading messages", str(e))

    def delete_conversation(self, conversation_id: str) -> None:
        try:
            self.conversation_store.delete(conversation_id)
        except StoreError as e:
            self.notify("Error deleting conversation", str(e))
            return

        self.conversations = [c for c in self.conversations if c.id != conversation_id]
        if self.current_conversation_id == conversation_id:
            self.current_conversation_id = None
            self.messages = []
            self.references = []

    def sign_out(self) -> None:
        self.session = None
        self.conversations = []
        self.current_conversation_id = None
        self.messages = []
        self.references = []
        self.pending_attachment = None

    # --- Attachments ---
    def attach_file(self, attachment: Attachment) -> bool:
        """Select a file to send with the next message; oversized files are refused."""
        if attachment.size > MAX_UPLOAD_SIZE_BYTES:
            self.notify("File too large", "File size must be less than 10MB")
            return False
        self.pending_attachment = attachment
        return True

    def clear_attachment(self) -> None:
        self.pending_attachment = None

    # --- Sending ---
    def can_send(self, content: str) -> bool:
        return (bool(content.strip()) or self.pending_attachment is not None) and not self.sending

    async def send_message(self, content: str) -> Optional[MessageInfo]:
        """
        Send a message (and the pending attachment) in the current conversation.

        Args:
            content: Text typed by the user

        Returns:
            The persisted assistant message, or None if nothing was sent or a
            step failed
        """
        if not self.can_send(content):
            return None
        if self.current_conversation_id is None or self.session is None:
            return None

        self.sending = True
        try:
            return await self._send(
                self.session.user_id,
                self.current_conversation_id,
                content,
                self.pending_attachment,
            )
        finally:
            self.pending_attachment = None
            self.sending = False

    async def _send(
        self,
        user_id: str,
        conversation_id: str,
        content: str,
        attachment: Optional[Attachment],
    ) -> Optional[MessageInfo]:
        is_first_exchange = not self.messages

        try:
            user_message = self.message_store.add(conversation_id, MessageRole.USER, content)
        except StoreError as e:
            self.notify("Error sending message", str(e))
            return None
        self.messages = [*self.messages, user_message]

        if attachment is not None:
            try:
                self.upload_service.store_attachment(
                    self.document_store, user_id, conversation_id, attachment
                )
            except (StoreError, ValueError) as e:
                self.notify("Error uploading file", str(e))

        try:
            reply = await self.assistant.invoke(
                conversation_id, content, has_file=attachment is not None
            )
        except AssistantError as e:
            self.notify("Error getting AI response", str(e))
            return None

        try:
            assistant_message = self.message_store.add(
                conversation_id, MessageRole.ASSISTANT, reply.response
            )
        except StoreError as e:
            self.notify("Error saving AI response", str(e))
            return None
        self.messages = [*self.messages, assistant_message]
        self.references = list(reply.references)

        if is_first_exchange:
            try:
                self.conversation_store.update_title(conversation_id, derive_title(content))
            except StoreError as e:
                self.notify("Error updating conversation title", str(e))
            else:
                self.load_conversations()

        return assistant_message
