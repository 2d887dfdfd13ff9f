"""Common/shared schemas used across the application."""

from pydantic import BaseModel, ConfigDict


class ErrorResponse(BaseModel):
    """Error body returned by the legal-chat function."""

    error: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"error": "Rate limit exceeded. Please try again later."}
        }
    )
