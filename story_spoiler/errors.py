"""Error types raised by the suite.

Two classes of failure exist. Setup errors abort the whole run before any
scenario executes; assertion-style errors are reported per scenario.
"""

from __future__ import annotations


class SetupError(RuntimeError):
    """Fatal failure while preparing the session."""


class AuthenticationError(SetupError):
    """The authentication endpoint answered with a non-200 status."""

    def __init__(self, status_code: int, body: str, user_name: str) -> None:
        self.status_code = status_code
        self.body = body
        self.user_name = user_name
        super().__init__(
            f"Failed to authenticate. Status: {status_code}, Content: {body}, UserName: {user_name}"
        )


class TokenRetrievalError(SetupError):
    """Authentication succeeded but no usable access token came back."""

    def __init__(self, message: str = "Failed to retrieve JWT token.") -> None:
        super().__init__(message)


class PreconditionError(AssertionError):
    """A scenario depends on state an earlier scenario never produced."""


__all__ = [
    "SetupError",
    "AuthenticationError",
    "TokenRetrievalError",
    "PreconditionError",
]
