"""
Message conversion utilities.
Handles conversion between stored conversation messages and the
chat-completions message format sent to the LLM gateway.
"""

from enum import Enum
from typing import Any, Optional


# Role constants
ROLE_SYSTEM = "system"
ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"


class MessageConverter:
    """Utility class for converting message formats."""

    @staticmethod
    def history_to_llm_messages(
        history: list[Any],
        current_query: Optional[str] = None,
        system_prompt: Optional[str] = None,
    ) -> list[dict[str, str]]:
        """
        Convert stored conversation history to LLM-compatible message format.

        Args:
            history: Messages with 'role' and 'content' attributes, oldest first
            current_query: Optional current user query to append
            system_prompt: Optional system prompt to place first

        Returns:
            List of message dicts with 'role' and 'content' keys
        """
        messages: list[dict[str, str]] = []

        if system_prompt:
            messages.append({"role": ROLE_SYSTEM, "content": system_prompt})

        for msg in history:
            messages.append(
                {
                    "role": MessageConverter.normalize_role(msg.role),
                    "content": msg.content,
                }
            )

        if current_query is not None:
            messages.append({"role": ROLE_USER, "content": current_query})

        return messages

    @staticmethod
    def drop_trailing_duplicate(history: list[Any], query: str) -> list[Any]:
        """
        Drop the last history entry when it is the same user message as `query`.

        The chat flow persists the user's message before the proxy is invoked,
        so the stored history usually already ends with it.
        """
        if history:
            last = history[-1]
            if (
                MessageConverter.normalize_role(last.role) == ROLE_USER
                and last.content == query
            ):
                return history[:-1]
        return history

    @staticmethod
    def normalize_role(role: Any) -> str:
        """
        Normalize a role to standard format.

        Args:
            role: Role string or enum member (e.g., 'assistant', MessageRole.USER)

        Returns:
            Normalized role ('user' or 'assistant')
        """
        if isinstance(role, Enum):
            role = role.value
        if str(role).lower() == ROLE_ASSISTANT:
            return ROLE_ASSISTANT
        return ROLE_USER
