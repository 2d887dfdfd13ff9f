"""Tests for LegalChatService."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from enums import MessageRole
from schemas import DocumentUploadInfo, LegalChatRequest, MessageInfo
from services.legal_chat import LegalChatService
from services.llm_gateway_client import LLMGatewayClient, RateLimitError
from services.stores import DocumentStore, MessageStore
from utils.reference_extractor import DEFAULT_REFERENCES

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def make_message(message_id: int, role: MessageRole, content: str) -> MessageInfo:
    return MessageInfo(
        id=message_id, conversation_id="conv-1", role=role, content=content, created_at=NOW
    )


def make_upload(extracted_text) -> DocumentUploadInfo:
    return DocumentUploadInfo(
        id=1,
        conversation_id="conv-1",
        file_name="lease.pdf",
        file_type="application/pdf",
        file_size=1024,
        storage_path="user-1/conv-1/lease.pdf",
        extracted_text=extracted_text,
        created_at=NOW,
    )


class TestBuildPrompt:
    """Tests for build_prompt."""

    @pytest.fixture
    def service(self):
        """Create a LegalChatService with a mocked gateway client."""
        return LegalChatService(
            llm_client=MagicMock(spec=LLMGatewayClient), system_prompt="SYSTEM"
        )

    @pytest.fixture
    def messages(self):
        store = MagicMock(spec=MessageStore)
        store.list_for_conversation.return_value = []
        return store

    @pytest.fixture
    def documents(self):
        store = MagicMock(spec=DocumentStore)
        store.latest_for_conversation.return_value = None
        return store

    def test_system_prompt_then_message(self, service, messages, documents):
        """Test prompt with empty history."""
        request = LegalChatRequest(conversation_id="conv-1", message="What is bail?")

        prompt = service.build_prompt(request, messages, documents)

        assert prompt == [
            {"role": "system", "content": "SYSTEM"},
            {"role": "user", "content": "What is bail?"},
        ]
        messages.list_for_conversation.assert_called_once_with("conv-1")

    def test_history_in_order(self, service, messages, documents):
        """Test that stored history sits between system prompt and message."""
        messages.list_for_conversation.return_value = [
            make_message(1, MessageRole.USER, "Hi"),
            make_message(2, MessageRole.ASSISTANT, "Hello!"),
        ]
        request = LegalChatRequest(conversation_id="conv-1", message="Next question")

        prompt = service.build_prompt(request, messages, documents)

        assert [m["role"] for m in prompt] == ["system", "user", "assistant", "user"]
        assert prompt[-1]["content"] == "Next question"

    def test_persisted_current_message_not_sent_twice(self, service, messages, documents):
        """Test that the already-stored copy of the message is replaced."""
        messages.list_for_conversation.return_value = [
            make_message(1, MessageRole.USER, "What is bail?"),
        ]
        request = LegalChatRequest(conversation_id="conv-1", message="What is bail?")

        prompt = service.build_prompt(request, messages, documents)

        assert prompt == [
            {"role": "system", "content": "SYSTEM"},
            {"role": "user", "content": "What is bail?"},
        ]

    def test_document_context_appended(self, service, messages, documents):
        """Test that extracted text of the latest upload is appended."""
        documents.latest_for_conversation.return_value = make_upload("Rent is 500.")
        request = LegalChatRequest(
            conversation_id="conv-1", message="Review my lease", has_file=True
        )

        prompt = service.build_prompt(request, messages, documents)

        assert prompt[-1]["content"] == (
            "Review my lease\n\nDocument Context from lease.pdf:\nRent is 500."
        )

    def test_document_ignored_without_flag(self, service, messages, documents):
        """Test that uploads are not read when hasFile is false."""
        request = LegalChatRequest(conversation_id="conv-1", message="Question")

        service.build_prompt(request, messages, documents)

        documents.latest_for_conversation.assert_not_called()

    def test_upload_without_text(self, service, messages, documents):
        """Test that an upload with no extracted text adds nothing."""
        documents.latest_for_conversation.return_value = make_upload(None)
        request = LegalChatRequest(
            conversation_id="conv-1", message="Look at this photo", has_file=True
        )

        prompt = service.build_prompt(request, messages, documents)

        assert prompt[-1]["content"] == "Look at this photo"


class TestGenerateReply:
    """Tests for generate_reply."""

    @pytest.fixture
    def llm_client(self):
        client = MagicMock(spec=LLMGatewayClient)
        client.generate_reply = AsyncMock()
        return client

    @pytest.fixture
    def stores(self):
        messages = MagicMock(spec=MessageStore)
        messages.list_for_conversation.return_value = []
        documents = MagicMock(spec=DocumentStore)
        return messages, documents

    @pytest.mark.asyncio
    async def test_references_split_from_reply(self, llm_client, stores):
        """Test that the reference block is removed from the response."""
        llm_client.generate_reply.return_value = (
            "# Bail\n\nBail is release pending trial.\n\n"
            'REFERENCES: ["CrPC Section 436", "CrPC Section 437"]'
        )
        service = LegalChatService(llm_client=llm_client)

        result = await service.generate_reply(
            LegalChatRequest(conversation_id="conv-1", message="What is bail?"), *stores
        )

        assert result.response == "# Bail\n\nBail is release pending trial."
        assert result.references == ["CrPC Section 436", "CrPC Section 437"]

    @pytest.mark.asyncio
    async def test_default_references_when_missing(self, llm_client, stores):
        """Test the fallback citations for a reply without a block."""
        llm_client.generate_reply.return_value = "Plain answer."
        service = LegalChatService(llm_client=llm_client)

        result = await service.generate_reply(
            LegalChatRequest(conversation_id="conv-1", message="Question"), *stores
        )

        assert result.response == "Plain answer."
        assert result.references == list(DEFAULT_REFERENCES)

    @pytest.mark.asyncio
    async def test_gateway_errors_propagate(self, llm_client, stores):
        """Test that gateway errors reach the caller unchanged."""
        llm_client.generate_reply.side_effect = RateLimitError("Rate limit exceeded", 429)
        service = LegalChatService(llm_client=llm_client)

        with pytest.raises(RateLimitError):
            await service.generate_reply(
                LegalChatRequest(conversation_id="conv-1", message="Question"), *stores
            )

    @pytest.mark.asyncio
    async def test_system_prompt_is_sent(self, llm_client, stores):
        """Test that the legal advisor system prompt leads the prompt."""
        llm_client.generate_reply.return_value = "ok"
        service = LegalChatService(llm_client=llm_client)

        await service.generate_reply(
            LegalChatRequest(conversation_id="conv-1", message="Question"), *stores
        )

        prompt = llm_client.generate_reply.call_args.args[0]
        assert prompt[0]["role"] == "system"
        assert "REFERENCES:" in prompt[0]["content"]
        assert "not legal advice" in prompt[0]["content"]
