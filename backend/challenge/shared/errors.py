"""
Application error hierarchy.

Every error carries the HTTP status it maps to. The API layer turns them
into the uniform ``{"success": false, "message", "error"}`` envelope.
"""


class ChallengeError(Exception):
    """Base error for the challenge backend."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, error: str | None = None, *, message: str | None = None,
                 status_code: int | None = None):
        self.error = error or self.message
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.error)


class AuthError(ChallengeError):
    """Missing (401) or invalid/expired (403) session credential."""

    status_code = 401
    message = "Authentication required"

    @classmethod
    def missing(cls) -> "AuthError":
        return cls("Missing bearer token", status_code=401)

    @classmethod
    def invalid(cls, reason: str = "Invalid token") -> "AuthError":
        return cls(reason, message="Invalid token", status_code=403)


class NotFoundError(ChallengeError):
    """Unknown user, activity or credential."""

    status_code = 404
    message = "Not found"


class UpstreamError(ChallengeError):
    """Strava returned non-2xx or could not be reached."""

    status_code = 502
    message = "Strava request failed"


class ValidationError(ChallengeError):
    """Malformed request input."""

    status_code = 400
    message = "Invalid request"
