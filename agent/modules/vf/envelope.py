"""Conversion of handler outcomes into ``ToolResult`` envelopes."""

from __future__ import annotations

import json
from typing import Any

import structlog

from modules.vf.errors import GatewayError, ValidationFailure
from shared.schemas.tools import ToolResult

logger = structlog.get_logger()


def error_message(exc: BaseException) -> str:
    if isinstance(exc, GatewayError):
        return exc.message
    return str(exc) or type(exc).__name__


def to_envelope(tool_name: str, result: Any = None, exc: Exception | None = None) -> ToolResult:
    """Wrap a handler result, or the exception it raised, as a ``ToolResult``.

    Never raises: any exception becomes an error envelope with a single
    non-empty message.
    """
    if exc is None:
        return ToolResult(tool_name=tool_name, success=True, result=result)

    message = error_message(exc)
    if isinstance(exc, ValidationFailure):
        logger.warning("tool_validation_error", tool=tool_name, field=exc.field, error=message)
    elif isinstance(exc, GatewayError):
        logger.warning("tool_execution_error", tool=tool_name, kind=exc.kind, error=message)
    else:
        logger.error("tool_execution_error", tool=tool_name, error=message, exc_info=True)
    return ToolResult(tool_name=tool_name, success=False, error=message)


def envelope_text(envelope: ToolResult) -> str:
    """JSON text carried as the single content item of an MCP response."""
    payload = envelope.result if envelope.success else {"error": envelope.error}
    return json.dumps(payload, indent=2, default=str)
