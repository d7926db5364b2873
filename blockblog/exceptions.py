"""
Errors raised by blockblog operations.

Every error carries the HTTP status the API answers with, so views only
need to catch ``BlogError``.
"""


class BlogError(Exception):
    """Base class for all blockblog errors."""

    status_code = 500
    default_message = "Server error"

    def __init__(self, message=None, errors=None):
        self.message = message or self.default_message
        self.errors = errors or {}
        super().__init__(self.message)

    def as_dict(self):
        data = {"message": self.message}
        if self.errors:
            data["errors"] = self.errors
        return data


class ValidationError(BlogError):
    status_code = 400
    default_message = "Invalid blog data"


class Unauthenticated(BlogError):
    status_code = 401
    default_message = "Not authorized, no token"


class Forbidden(BlogError):
    status_code = 403
    default_message = "Not authorized"


class NotFound(BlogError):
    status_code = 404
    default_message = "Blog not found"


class UpstreamFailure(BlogError):
    """The document store or the media host failed."""

    status_code = 502
    default_message = "Upstream service failure"
