"""
Conversation Router - API endpoints for conversations and their messages.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from deps import get_conversation_store, get_current_user_id, get_message_store
from schemas import (
    ConversationCreate,
    ConversationInfo,
    ConversationUpdate,
    MessageCreate,
    MessageInfo,
)
from services.stores import ConversationStore, MessageStore
from utils.error_handlers import handle_service_errors, require_found
from utils.markdown_renderer import render

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/conversations", tags=["conversations"])


def get_owned_conversation(
    store: ConversationStore, conversation_id: str, user_id: str
) -> ConversationInfo:
    """Fetch a conversation of the caller; foreign conversations look missing."""
    conversation = store.get(conversation_id)
    if conversation is not None and conversation.user_id != user_id:
        conversation = None
    return require_found(conversation, "Conversation", conversation_id)


@router.get("", response_model=list[ConversationInfo])
@handle_service_errors("list conversations")
async def list_conversations(
    user_id: str = Depends(get_current_user_id),
    store: ConversationStore = Depends(get_conversation_store),
):
    """List the caller's conversations, most recently updated first."""
    return store.list_for_user(user_id)


@router.post("", response_model=ConversationInfo, status_code=201)
@handle_service_errors("create conversation")
async def create_conversation(
    request: ConversationCreate,
    user_id: str = Depends(get_current_user_id),
    store: ConversationStore = Depends(get_conversation_store),
):
    return store.create(user_id, request.title)


@router.patch("/{conversation_id}", response_model=ConversationInfo)
@handle_service_errors("rename conversation")
async def rename_conversation(
    conversation_id: str,
    request: ConversationUpdate,
    user_id: str = Depends(get_current_user_id),
    store: ConversationStore = Depends(get_conversation_store),
):
    get_owned_conversation(store, conversation_id, user_id)
    return require_found(
        store.update_title(conversation_id, request.title), "Conversation", conversation_id
    )


@router.delete("/{conversation_id}")
@handle_service_errors("delete conversation")
async def delete_conversation(
    conversation_id: str,
    user_id: str = Depends(get_current_user_id),
    store: ConversationStore = Depends(get_conversation_store),
):
    """
    Delete a conversation together with its messages and upload records.

    This is a permanent operation that cannot be undone.
    """
    get_owned_conversation(store, conversation_id, user_id)
    store.delete(conversation_id)
    return {"message": f"Conversation {conversation_id} deleted successfully"}


@router.get("/{conversation_id}/messages", response_model=list[MessageInfo])
@handle_service_errors("load messages")
async def list_messages(
    conversation_id: str,
    render_blocks: bool = Query(
        False, alias="render", description="Include rendered display blocks"
    ),
    user_id: str = Depends(get_current_user_id),
    conversations: ConversationStore = Depends(get_conversation_store),
    messages: MessageStore = Depends(get_message_store),
):
    """Messages of a conversation, oldest first."""
    get_owned_conversation(conversations, conversation_id, user_id)
    thread = messages.list_for_conversation(conversation_id)
    if render_blocks:
        thread = [
            message.model_copy(update={"blocks": render(message.content)})
            for message in thread
        ]
    return thread


@router.post("/{conversation_id}/messages", response_model=MessageInfo, status_code=201)
@handle_service_errors("send message")
async def create_message(
    conversation_id: str,
    request: MessageCreate,
    user_id: str = Depends(get_current_user_id),
    conversations: ConversationStore = Depends(get_conversation_store),
    messages: MessageStore = Depends(get_message_store),
):
    get_owned_conversation(conversations, conversation_id, user_id)
    if not request.content.strip():
        raise ValueError("Message content must not be empty")
    return messages.add(conversation_id, request.role, request.content)
