"""
Route error mapping for the conversation and upload endpoints.

Services raise `StoreError` for persistence and blob-storage failures and
`ValueError` (including `AttachmentTooLargeError`) for rejected input; this
module turns those into HTTP responses. The legal-chat function does not use
it: that route answers with its own {error} body.
"""

import logging
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

from fastapi import HTTPException

from services.stores import StoreError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def handle_service_errors(operation: str) -> Callable[[F], F]:
    """
    Map service exceptions raised by a route to HTTP errors.

    - HTTPException (401 identity, 404 ownership): passed through
    - ValueError, AttachmentTooLargeError: 400 with the message as detail
    - StoreError: 500 "Failed to <operation>: ..." (database or blob store down)
    - anything else: 500, logged with traceback

    Args:
        operation: What the route does, used in the detail (e.g. "upload document")
    """
    def decorator(func: F) -> F:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except ValueError as e:
                logger.info("Rejected %s: %s", operation, e)
                raise HTTPException(status_code=400, detail=str(e)) from e
            except StoreError as e:
                logger.error("Storage failure during %s: %s", operation, e)
                raise HTTPException(
                    status_code=500, detail=f"Failed to {operation}: {e}"
                ) from e
            except Exception as e:
                logger.error("Failed to %s: %s", operation, e, exc_info=True)
                raise HTTPException(
                    status_code=500, detail=f"Failed to {operation}: {e}"
                ) from e
        return wrapper  # type: ignore
    return decorator


def require_found(
    record: Optional[Any],
    record_name: str = "Conversation",
    record_id: Optional[str] = None,
) -> Any:
    """
    Return a store lookup result, or raise 404 when it is None.

    Example:
        conversation = require_found(store.get(conversation_id), "Conversation", conversation_id)
    """
    if record is None:
        detail = f"{record_name} not found"
        if record_id is not None:
            detail = f"{record_name} with id {record_id} not found"
        raise HTTPException(status_code=404, detail=detail)
    return record
