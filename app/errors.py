"""
Fatal replication failures.  Each one maps to a JSON error envelope and an
HTTP status; the exception handler in app.main does the rendering.
"""
from __future__ import annotations

from typing import Any, Optional


class ReplicationError(Exception):
    status_code: int = 500

    def __init__(
        self,
        error: str,
        details: Optional[str] = None,
        response: Any = None,
    ) -> None:
        super().__init__(error)
        self.error = error
        self.details = details
        self.response = response


class AuthenticationFailure(ReplicationError):
    """Signature header absent or not matching the body."""
    status_code = 401


class MalformedInput(ReplicationError):
    """Body is not JSON / not a product, or a required field is missing."""
    status_code = 400


class DownstreamUnavailable(ReplicationError):
    """The target catalog failed during the existence check or product creation."""
    status_code = 500
