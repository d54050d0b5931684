import json
from enum import Enum
from typing import Any, Optional

import httpx
from langchain_core.exceptions import OutputParserException
from pydantic import ValidationError


class ErrorKind(str, Enum):
    CONFIGURATION = "configuration"
    TRANSIENT = "transient"
    RATE_LIMITED = "rate_limited"
    MALFORMED = "malformed"
    NOT_FOUND = "not_found"
    TERMINAL = "terminal"


class FridgeHackError(Exception):
    """Base for every error that crosses a module boundary.

    ``kind`` is decided once where the error is created; callers branch on it
    instead of inspecting the message.
    """

    default_kind = ErrorKind.TERMINAL

    def __init__(self, message: str, kind: Optional[ErrorKind] = None, user_message: Optional[str] = None):
        super().__init__(message)
        self.kind = kind or self.default_kind
        self.user_message = user_message or message


class ConfigurationError(FridgeHackError):
    default_kind = ErrorKind.CONFIGURATION


class TransientRemoteError(FridgeHackError):
    default_kind = ErrorKind.TRANSIENT


class MalformedResponseError(FridgeHackError):
    default_kind = ErrorKind.MALFORMED


class TerminalGenerationError(FridgeHackError):
    default_kind = ErrorKind.TERMINAL


class RecipeGenerationError(TerminalGenerationError):
    pass


class VideoGenerationError(TerminalGenerationError):
    pass


# gRPC status codes as reported inside long-running operation errors
_GRPC_NOT_FOUND = 5
_GRPC_RESOURCE_EXHAUSTED = 8


def kind_from_status(code: Any = None, status: Any = None) -> ErrorKind:
    status_name = str(status).upper() if status else ""
    if code == 429 or status_name == "RESOURCE_EXHAUSTED":
        return ErrorKind.RATE_LIMITED
    if code == 404 or status_name == "NOT_FOUND":
        return ErrorKind.NOT_FOUND
    return ErrorKind.TRANSIENT


def kind_from_operation_error(error: Any) -> ErrorKind:
    if isinstance(error, dict):
        code, status = error.get("code"), error.get("status")
    else:
        code, status = getattr(error, "code", None), getattr(error, "status", None)
    if code == _GRPC_NOT_FOUND:
        return ErrorKind.NOT_FOUND
    if code == _GRPC_RESOURCE_EXHAUSTED:
        return ErrorKind.RATE_LIMITED
    return kind_from_status(code, status)


def _status_of(exc: BaseException):
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code, None
    code = getattr(exc, "code", None)
    if not isinstance(code, int):
        code = getattr(exc, "status_code", None)
    return code, getattr(exc, "status", None)


def classify_remote_error(exc: BaseException) -> FridgeHackError:
    """Map an exception raised by a remote SDK onto the domain taxonomy."""
    if isinstance(exc, FridgeHackError):
        return exc

    if isinstance(exc, (OutputParserException, ValidationError, json.JSONDecodeError)):
        return MalformedResponseError(f"Malformed response: {exc}")

    current: Optional[BaseException] = exc
    while current is not None:
        code, status = _status_of(current)
        if code is not None or status is not None:
            kind = kind_from_status(code, status)
            return TransientRemoteError(f"Remote call failed ({code or status}): {exc}", kind=kind)
        current = current.__cause__

    return TransientRemoteError(f"Remote call failed: {exc}")
