"""Standardized response payloads for MCP tools.

Every tool returns a JSON string in one envelope:
``{"success": bool, "data": ..., "message": str}``.
"""

import json
from typing import Any, Dict, Optional

from pydantic import BaseModel


def _to_jsonable(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, (list, tuple)):
        return [_to_jsonable(item) for item in data]
    if isinstance(data, dict):
        return {key: _to_jsonable(value) for key, value in data.items()}
    return data


def success_payload(data: Any = None, message: str = "") -> str:
    """Create a successful response envelope.

    Args:
        data: The response data (dicts, lists, or pydantic models)
        message: Human-readable summary

    Returns:
        JSON string ``{"success": true, "data": ..., "message": ...}``
    """
    return json.dumps({
        "success": True,
        "data": _to_jsonable(data),
        "message": message,
    }, default=str)


def error_payload(message: str, data: Optional[Any] = None) -> str:
    """Create an error response envelope.

    Args:
        message: Error message
        data: Optional data to include alongside the error

    Returns:
        JSON string ``{"success": false, "message": ...}``
    """
    payload: Dict[str, Any] = {"success": False, "message": message}
    if data is not None:
        payload["data"] = _to_jsonable(data)
    return json.dumps(payload, default=str)
