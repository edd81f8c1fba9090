from typing import Optional

from fastapi import Request

from ..schemas.common import ErrorResponse


def fail(request: Request, error: str, message: str, details: Optional[dict] = None) -> ErrorResponse:
    req_id = getattr(request.state, "request_id", None)
    return ErrorResponse(error=error, message=message, request_id=req_id or "", details=details or {})
