"""
Uniform response envelope: ``{success, message, data?, count?}``.

Handlers return ``format_api_response(...)`` bodies; failures raise
``ApiError`` and the app-level handler renders the same envelope.
"""

from typing import Any, Dict, List, Optional

from fastapi.responses import JSONResponse


def format_api_response(
    success: bool,
    data: Any = None,
    message: str = "",
    count: Optional[int] = None,
) -> Dict[str, Any]:
    """``data`` is included only when not None; ``count`` only when supplied (0 is kept)."""
    response: Dict[str, Any] = {"success": success, "message": message}
    if data is not None:
        response["data"] = data
    if count is not None:
        response["count"] = count
    return response


class ApiError(Exception):
    """A handled failure with its HTTP status and client-facing message."""

    def __init__(
        self,
        status_code: int,
        message: str,
        errors: Optional[List[str]] = None,
        error: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.errors = errors
        self.error = error

    def to_body(self) -> Dict[str, Any]:
        body = format_api_response(False, None, self.message)
        if self.errors:
            body["errors"] = self.errors
        if self.error:
            body["error"] = self.error
        return body

    def to_response(self) -> JSONResponse:
        return JSONResponse(status_code=self.status_code, content=self.to_body())
