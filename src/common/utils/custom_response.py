from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, Optional


class APIResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    success: bool
    message: Optional[str] = None
    error: Optional[str] = None


def send_custom_response(
    status_code: int,
    message: Optional[str] = None,
    data: Optional[Dict[str, Any]] = None,
):
    success = status_code < 400
    body = APIResponse(
        success=success,
        message=message if success else None,
        error=None if success else message,
        **(data or {}),
    )
    return {
        "statusCode": status_code,
        "headers": {
            "Content-Type": "application/json",
        },
        "body": body.model_dump_json(exclude_none=True),
    }
