# lunarscope/errors.py
# Error types shared by the validator, the model client and the HTTP/CLI surfaces.

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCategory(str, Enum):
    """Error categories for structured error responses."""
    CLIENT_ERROR = "client_error"  # Malformed request, missing field, bad data URI
    EXTERNAL_ERROR = "external_error"  # Model call failed or replied off-schema


class LunarScopeError(Exception):
    """Base exception for every failure an analysis can report."""

    code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.EXTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.details = details or {}


class InputValidationError(LunarScopeError):
    """
    The request failed structural checks. Raised before any model call.
    `issues` is a list of {"field": <dotted path>, "reason": <text>}.
    """

    code = "INVALID_REQUEST"

    def __init__(self, message: str, issues: Optional[List[Dict[str, str]]] = None):
        self.issues = issues or []
        super().__init__(
            message=message,
            category=ErrorCategory.CLIENT_ERROR,
            details={"issues": self.issues},
        )


class UnknownAnalysisError(InputValidationError):
    """The requested analysis kind is not registered."""

    code = "UNKNOWN_ANALYSIS"

    def __init__(self, kind: str, known: List[str]):
        super().__init__(
            message=f"Unknown analysis kind '{kind}'. Expected one of: {', '.join(known)}",
            issues=[{"field": "kind", "reason": "not a registered analysis"}],
        )
        self.kind = kind


class UpstreamError(LunarScopeError):
    """The model call failed, or its reply could not be parsed into the declared schema."""

    code = "UPSTREAM_FAILED"

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        error_details = dict(details or {})
        if service:
            error_details["service"] = service
        super().__init__(message=message, category=ErrorCategory.EXTERNAL_ERROR, details=error_details)


def format_error_response(error: Exception) -> Dict[str, Any]:
    """Format an exception into the {"error": {...}} envelope used by the API and CLI."""
    if isinstance(error, LunarScopeError):
        return {
            "error": {
                "code": error.code,
                "message": error.message,
                "category": error.category.value,
                "details": error.details,
            }
        }

    return {
        "error": {
            "code": LunarScopeError.code,
            "message": str(error),
            "category": "server_error",
            "details": {"type": type(error).__name__},
        }
    }
