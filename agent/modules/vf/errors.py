"""Error types raised by VectorForge tool handlers.

Every failure a handler can produce is one of these, so the envelope mapper
has a single place to turn them into a caller-facing message.
"""

from __future__ import annotations


class GatewayError(Exception):
    """Base class for tool gateway errors."""

    kind = "internal"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailure(GatewayError):
    """Caller input is missing or has the wrong shape.

    Always raised before any remote call is made.
    """

    kind = "validation"

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class UnknownModeError(ValidationFailure):
    """A ``hash_mode`` value outside the supported set."""

    kind = "unknown_selector"

    def __init__(self, value: object, field: str = "hash_mode"):
        super().__init__(f"Unknown mode for {field}: {value!r}", field=field)
        self.value = value


class UnknownToolError(GatewayError):
    """No handler is registered under the requested tool name."""

    kind = "unknown_selector"

    def __init__(self, tool_name: str):
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name


class RemoteError(GatewayError):
    """The VectorForge API answered with a non-success status or was unreachable."""

    kind = "remote"

    def __init__(
        self,
        label: str,
        status: int | None,
        remote_message: str,
    ):
        if status is None:
            message = f"{label} API error: {remote_message}"
        else:
            message = f"{label} API error ({status}): {remote_message}"
        super().__init__(message)
        self.label = label
        self.status = status
        self.remote_message = remote_message


class NotFoundError(RemoteError):
    """The API reported that the referenced record does not exist."""

    kind = "not_found"
