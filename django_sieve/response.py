"""
Django-Sieve Response Utilities

Builds JSON responses for sieve endpoints.

Features:
- Paged result bodies with pagination metadata
- 400 bodies carrying parse errors and warnings
- Response code management
"""

from django_sieve.conf import sieve_settings


class SieveResponse:
    """
    Response builder for sieve endpoints.

    Success/error is indicated by HTTP status codes.
    When ALWAYS_HTTP_200=True, all responses return HTTP 200 with status_code in payload.

    Example:
        >>> response = SieveResponse.ok_query(data=[{"id": 1}], pagination={"page": 1})
        >>> response.to_dict()
        {"data": [{"id": 1}], "pagination": {"page": 1}}

        >>> response = SieveResponse.error("BAD_REQUEST", "Invalid query")
        >>> response.to_dict()
        {"error": "Invalid query"}
    """

    # Map response codes to HTTP status codes
    STATUS_MAP = {
        "OK": 200,
        "OK_QUERY": 200,
        "BAD_REQUEST": 400,
        "INTERNAL_ERROR": 500,
    }

    # Messages for response codes
    MSG_MAP = {
        "OK": "Success",
        "OK_QUERY": "Query successful",
        "BAD_REQUEST": "Invalid query parameters",
        "INTERNAL_ERROR": "Internal server error",
    }

    def __init__(self, code="OK", error_message=None, **data):
        """
        Initialize a SieveResponse.

        Args:
            code: Response code key (e.g., "OK", "BAD_REQUEST")
            error_message: Optional error message for error responses
            **data: Additional data to include in response
        """
        self.code = code
        self.error_message = error_message
        self.data = data

    @property
    def success(self):
        """Whether the response indicates success."""
        return self.code in ("OK", "OK_QUERY")

    @property
    def http_status(self):
        """Get HTTP status code for this response."""
        return self.STATUS_MAP.get(self.code, 500)

    @classmethod
    def ok(cls, **data):
        """Create a successful response."""
        return cls(code="OK", **data)

    @classmethod
    def ok_query(cls, data, pagination=None, warnings=None, **extra):
        """Create a successful query response."""
        response_data = {"data": data}
        if pagination:
            response_data["pagination"] = pagination
        if warnings:
            response_data["warnings"] = list(warnings)
        response_data.update(extra)
        return cls(code="OK_QUERY", **response_data)

    @classmethod
    def error(cls, code, message=None, **data):
        """Create an error response."""
        return cls(code=code, error_message=message, **data)

    @classmethod
    def from_outcome(cls, outcome):
        """
        Create a BAD_REQUEST response from a ParseOutcome with errors.

        The first error's message becomes the top-level ``error``; the
        full list is included under ``errors``.
        """
        message = outcome.errors[0].message if outcome.errors else cls.MSG_MAP["BAD_REQUEST"]
        return cls.error(
            "BAD_REQUEST",
            message,
            errors=[e.to_dict() for e in outcome.errors],
            warnings=list(outcome.warnings),
        )

    def to_dict(self, include_status_code=False):
        """
        Convert response to dictionary for JSON serialization.

        Args:
            include_status_code: If True, include standardized response fields
                (status_code, success, error)
        """
        result = {}

        if include_status_code:
            result["status_code"] = self.http_status
            result["success"] = self.success

            if self.error_message:
                result["error"] = self.error_message
            elif not self.success:
                result["error"] = self.MSG_MAP.get(self.code, "An error occurred")
        elif self.error_message:
            result["error"] = self.error_message

        result.update(self.data)

        return result

    def to_json_response(self):
        """
        Convert to Django JsonResponse.

        When ALWAYS_HTTP_200 is True every response is HTTP 200 and the
        real status travels in the payload. Internal errors carry an
        ``exception`` field when DEBUG is on.
        """
        from django.conf import settings
        from django.http import JsonResponse

        if sieve_settings.ALWAYS_HTTP_200:
            response_dict = self.to_dict(include_status_code=True)

            # Exception details only in DEBUG mode
            if settings.DEBUG and self.code == "INTERNAL_ERROR" and self.error_message:
                response_dict["exception"] = self.error_message

            return JsonResponse(response_dict, status=200)
        return JsonResponse(self.to_dict(), status=self.http_status)
