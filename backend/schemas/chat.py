"""Schemas for the legal-chat proxy function."""

from pydantic import BaseModel, ConfigDict, Field


class LegalChatRequest(BaseModel):
    """Request body of the legal-chat proxy."""

    conversation_id: str = Field(
        ..., alias="conversationId", description="Conversation the message belongs to"
    )
    message: str = Field(..., description="The user's latest message")
    has_file: bool = Field(
        False,
        alias="hasFile",
        description="Whether a document was attached to this message",
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "conversationId": "3f6c1f3e-8f8e-4b8e-9d5e-2f1b7a0c9e11",
                "message": "Can my landlord keep my security deposit?",
                "hasFile": False,
            }
        },
    )


class LegalChatResponse(BaseModel):
    """Successful reply of the legal-chat proxy."""

    response: str = Field(..., description="Model reply with the reference block removed")
    references: list[str] = Field(
        default_factory=list, description="Citations for the reply"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "response": "# Security Deposits\n\nA landlord may only deduct...",
                "references": ["Transfer of Property Act, 1882 - Section 108"],
            }
        }
    )
