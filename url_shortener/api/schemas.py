"""
Request/response models and the JSON envelope used by every endpoint.

Envelope:
    {"status": "OK"}                       success without payload
    {"status": "OK", "alias": "ab12cd"}    successful save
    {"status": "Error", "error": "..."}    any failure
"""

from typing import Any, Dict, Iterable, Optional

from pydantic import BaseModel

STATUS_OK = "OK"
STATUS_ERROR = "Error"


class SaveRequest(BaseModel):
    """Request payload for creating a new short URL."""
    url: str
    alias: Optional[str] = None


class Response(BaseModel):
    status: str
    error: Optional[str] = None


class SaveResponse(Response):
    alias: Optional[str] = None


def ok(**fields: Any) -> Dict[str, Any]:
    model = SaveResponse(status=STATUS_OK, **fields) if fields else Response(status=STATUS_OK)
    return model.model_dump(exclude_none=True)


def error(msg: str) -> Dict[str, Any]:
    return Response(status=STATUS_ERROR, error=msg).model_dump(exclude_none=True)


def validation_error(errors: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Turn pydantic/FastAPI validation errors into one readable message.

    e.g. "field url is a required field, field alias is not valid"
    """
    messages = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        field = ".".join(loc) or "body"
        if err.get("type") == "missing":
            messages.append(f"field {field} is a required field")
        else:
            messages.append(f"field {field} is not valid")
    return error(", ".join(messages))
