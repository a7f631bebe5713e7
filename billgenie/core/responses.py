"""Standardized API response envelope.

Every endpoint answers with the same envelope:
    {"success": true, "data": ...}
    {"success": true, "message": "..."}            (deletes)
    {"success": false, "error": "..."}             (failures)

Routes declare ``response_model=Envelope[SomeSchema]`` and return
``success_response(...)``; failures are produced by the exception handlers
registered in ``billgenie.main``.
"""

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Generic response wrapper."""

    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None


def success_response(data: Any = None, message: Optional[str] = None) -> dict:
    """Wrap a payload in the success envelope."""
    body: dict = {"success": True}
    if data is not None:
        body["data"] = data
    if message is not None:
        body["message"] = message
    return body


def error_response(error: str, message: Optional[str] = None) -> dict:
    """Build the failure envelope."""
    body: dict = {"success": False, "error": error}
    if message is not None:
        body["message"] = message
    return body
