"""
Standard JSON response envelope.

Every resource endpoint answers with ``{"success": ..., "data": ..., "message": ...}``.
"""

from typing import Any, Dict, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success(data: Any, message: str = "") -> Dict[str, Any]:
    """
    Build a success envelope.

    Args:
        data: Payload (record dict or list of record dicts)
        message: Human readable status message

    Returns:
        dict: Envelope with success flag, data and message
    """
    return {
        "success": True,
        "data": data,
        "message": message,
    }


def error(message: str, errors: Optional[Any] = None) -> Dict[str, Any]:
    """
    Build an error envelope.

    Args:
        message: Human readable error message
        errors: Optional extra error details, attached as ``data`` when non-empty

    Returns:
        dict: Envelope with success flag and message
    """
    response = {
        "success": False,
        "message": message,
    }

    if errors:
        response["data"] = errors

    return response


def envelope_response(body: Dict[str, Any], status_code: int = 200) -> JSONResponse:
    """Serialize an envelope into a JSON response."""
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))
