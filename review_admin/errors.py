import httpx

DEFAULT_ERROR_MESSAGE = "An unexpected error occurred"

_STATUS_MESSAGES = {
    400: "Invalid or malformed data",
    401: "Unauthorized - invalid or missing token",
    403: "Access denied - administrator rights required",
    409: "A conflicting resource already exists",
    422: "Validation failed for the submitted data",
}


class ReviewServiceError(Exception):
    """Raised by the review service with a message ready to show to the admin."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def _upstream_message(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str) and body["message"]:
        return body["message"]
    return None


def describe_http_error(exc: Exception) -> str:
    """
    Collapse a transport or HTTP status error into one human-readable message.
    Upstream `message` wins; known statuses fall back to a fixed message.
    """
    if isinstance(exc, httpx.HTTPStatusError):
        upstream = _upstream_message(exc.response)
        if upstream:
            return upstream
        status = exc.response.status_code
        if status in _STATUS_MESSAGES:
            return _STATUS_MESSAGES[status]
    if str(exc):
        return str(exc)
    return DEFAULT_ERROR_MESSAGE
