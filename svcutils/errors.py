"""Structured errors, HTTP errors and helpers for walking error chains."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import StrEnum
from http import HTTPStatus
from typing import Any, Protocol, TypeVar, runtime_checkable

__all__ = [
    "CODE_INTERNAL",
    "CODE_VALIDATION",
    "CODE_NOT_FOUND",
    "CODE_ALREADY_EXISTS",
    "CODE_INVALID_INPUT",
    "CODE_TIMEOUT",
    "CODE_CANCELLED",
    "CODE_UNAVAILABLE",
    "CODE_PERMISSION_DENIED",
    "CODE_UNAUTHORIZED",
    "CODE_CONFLICT",
    "StructuredError",
    "HTTPError",
    "Severity",
    "ValidationIssue",
    "ErrorHandler",
    "new_error",
    "err_validation",
    "err_not_found",
    "err_already_exists",
    "err_invalid_input",
    "err_timeout",
    "err_cancelled",
    "err_internal",
    "new_http_error",
    "bad_request",
    "unauthorized",
    "forbidden",
    "not_found",
    "internal_error",
    "is_error",
    "find_error",
    "unwrap",
    "join",
    "is_validation",
    "is_not_found",
    "is_already_exists",
    "is_timeout",
    "is_cancelled",
    "get_http_status_code",
    "ERR_VALIDATION_SENTINEL",
    "ERR_NOT_FOUND_SENTINEL",
    "ERR_ALREADY_EXISTS_SENTINEL",
    "ERR_INVALID_INPUT_SENTINEL",
    "ERR_TIMEOUT_SENTINEL",
    "ERR_CANCELLED_SENTINEL",
    "ERR_INTERNAL_SENTINEL",
]

CODE_INTERNAL = "INTERNAL_ERROR"
CODE_VALIDATION = "VALIDATION_ERROR"
CODE_NOT_FOUND = "NOT_FOUND"
CODE_ALREADY_EXISTS = "ALREADY_EXISTS"
CODE_INVALID_INPUT = "INVALID_INPUT"
CODE_TIMEOUT = "TIMEOUT"
CODE_CANCELLED = "CANCELLED"
CODE_UNAVAILABLE = "UNAVAILABLE"
CODE_PERMISSION_DENIED = "PERMISSION_DENIED"
CODE_UNAUTHORIZED = "UNAUTHORIZED"
CODE_CONFLICT = "CONFLICT"

E = TypeVar("E", bound=BaseException)


class StructuredError(Exception):
    """An error with a code, a message, an optional cause and context values."""

    def __init__(
        self,
        code: str,
        message: str = "",
        cause: BaseException | None = None,
        *,
        timestamp: datetime | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.timestamp = timestamp
        self.context: dict[str, Any] = dict(context) if context else {}
        self.__cause__ = cause

    @property
    def cause(self) -> BaseException | None:
        """The wrapped underlying error."""
        return self.__cause__

    @property
    def status_code(self) -> int:
        """HTTP status for this error; always 500."""
        return int(HTTPStatus.INTERNAL_SERVER_ERROR)

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message

    def __repr__(self) -> str:
        return f"StructuredError(code={self.code!r}, message={self.message!r})"

    def with_context(self, key: str, value: Any) -> StructuredError:
        """Add a context value and return the error for chaining."""
        self.context[key] = value
        return self

    def matches(self, target: object) -> bool:
        """Return True if target is a structured error with the same non-empty code."""
        return isinstance(target, StructuredError) and bool(self.code) and self.code == target.code

    def response_body(self) -> dict[str, Any]:
        """Return the body of an HTTP response describing this error."""
        body: dict[str, Any] = {
            "error": self.message,
            "code": self.code,
            "timestamp": self.timestamp,
        }
        if self.cause is not None:
            body["cause"] = str(self.cause)
        if self.context:
            body["context"] = self.context
        return body


class HTTPError(Exception):
    """An error carrying an HTTP status code."""

    def __init__(self, code: int, message: str = "", cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.__cause__ = cause

    @property
    def cause(self) -> BaseException | None:
        """The wrapped underlying error."""
        return self.__cause__

    @property
    def status_code(self) -> int:
        """The HTTP status code."""
        return self.code

    def __str__(self) -> str:
        if self.message:
            return self.message
        if self.cause is not None:
            return str(self.cause)
        try:
            return HTTPStatus(self.code).phrase
        except ValueError:
            return ""

    def __repr__(self) -> str:
        return f"HTTPError(code={self.code!r}, message={self.message!r})"

    def matches(self, target: object) -> bool:
        """Return True if target is an HTTP error with the same status code."""
        return isinstance(target, HTTPError) and self.code == target.code

    def response_body(self) -> dict[str, Any]:
        """Return the body of an HTTP response describing this error."""
        body: dict[str, Any] = {"error": self.message, "code": self.code}
        if self.cause is not None:
            body["details"] = str(self.cause)
        return body


class Severity(StrEnum):
    """Severity of a validation issue."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class ValidationIssue:
    """A single validation problem found for a key."""

    key: str
    rule: str
    message: str
    severity: Severity
    value: Any = None
    suggestion: str = ""


@runtime_checkable
class ErrorHandler(Protocol):
    """Turns errors raised by request handlers into response errors."""

    def handle_error(self, err: BaseException) -> BaseException | None:
        """Handle an error and return the formatted error, if any."""


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _with_fraction(value: int, digits: int) -> str:
    whole, frac = divmod(value, 10**digits)
    text = str(whole)
    if frac:
        text += "." + str(frac).zfill(digits).rstrip("0")
    return text


def _format_duration(duration: timedelta) -> str:
    micros = duration // timedelta(microseconds=1)
    sign = "-" if micros < 0 else ""
    micros = abs(micros)
    if micros == 0:
        return "0s"
    if micros < 1_000:
        return f"{sign}{micros}µs"
    if micros < 1_000_000:
        return f"{sign}{_with_fraction(micros, 3)}ms"
    hours, rest = divmod(micros, 3_600_000_000)
    minutes, rest = divmod(rest, 60_000_000)
    seconds = _with_fraction(rest, 6)
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"


def new_error(code: str, message: str, cause: BaseException | None = None) -> StructuredError:
    """Create a structured error stamped with the current time."""
    return StructuredError(code, message, cause, timestamp=_now())


def err_validation(message: str, cause: BaseException | None = None) -> StructuredError:
    """Create a validation error."""
    return new_error(CODE_VALIDATION, message, cause)


def err_not_found(resource: str) -> StructuredError:
    """Create a not-found error for a resource."""
    return new_error(CODE_NOT_FOUND, f"{resource} not found").with_context("resource", resource)


def err_already_exists(resource: str) -> StructuredError:
    """Create an already-exists error for a resource."""
    return new_error(CODE_ALREADY_EXISTS, f"{resource} already exists").with_context(
        "resource", resource
    )


def err_invalid_input(field: str, reason: str) -> StructuredError:
    """Create an invalid-input error for a field."""
    return new_error(
        CODE_INVALID_INPUT, f"invalid input for field '{field}': {reason}"
    ).with_context("field", field)


def err_timeout(operation: str, duration: timedelta) -> StructuredError:
    """Create a timeout error for an operation."""
    text = _format_duration(duration)
    return (
        new_error(CODE_TIMEOUT, f"{operation} timed out after {text}")
        .with_context("operation", operation)
        .with_context("duration", text)
    )


def err_cancelled(operation: str) -> StructuredError:
    """Create a cancelled-operation error."""
    return new_error(CODE_CANCELLED, f"{operation} was cancelled").with_context(
        "operation", operation
    )


def err_internal(message: str, cause: BaseException | None = None) -> StructuredError:
    """Create an internal error."""
    return new_error(CODE_INTERNAL, message, cause)


def new_http_error(code: int, message: str) -> HTTPError:
    """Create an HTTP error with the given status code and message."""
    return HTTPError(code, message)


def bad_request(message: str) -> HTTPError:
    """Create a 400 Bad Request error."""
    return HTTPError(int(HTTPStatus.BAD_REQUEST), message)


def unauthorized(message: str) -> HTTPError:
    """Create a 401 Unauthorized error."""
    return HTTPError(int(HTTPStatus.UNAUTHORIZED), message)


def forbidden(message: str) -> HTTPError:
    """Create a 403 Forbidden error."""
    return HTTPError(int(HTTPStatus.FORBIDDEN), message)


def not_found(message: str) -> HTTPError:
    """Create a 404 Not Found error."""
    return HTTPError(int(HTTPStatus.NOT_FOUND), message)


def internal_error(err: BaseException | None) -> HTTPError:
    """Create a 500 Internal Server Error wrapping err."""
    return HTTPError(int(HTTPStatus.INTERNAL_SERVER_ERROR), cause=err)


def _walk(err: BaseException | None) -> Iterator[BaseException]:
    """Yield err and everything it wraps, depth first."""
    seen: set[int] = set()

    def visit(current: BaseException | None) -> Iterator[BaseException]:
        while current is not None and id(current) not in seen:
            seen.add(id(current))
            yield current
            if isinstance(current, BaseExceptionGroup):
                for sub in current.exceptions:
                    yield from visit(sub)
                return
            current = current.__cause__

    yield from visit(err)


def is_error(err: BaseException | None, target: BaseException | None) -> bool:
    """Return True if any error in err's chain is or matches target."""
    if err is None or target is None:
        return err is target
    for current in _walk(err):
        if current is target:
            return True
        matcher = getattr(current, "matches", None)
        if callable(matcher) and matcher(target):
            return True
    return False


def find_error(err: BaseException | None, kind: type[E]) -> E | None:
    """Return the first error in err's chain that is an instance of kind."""
    return next((current for current in _walk(err) if isinstance(current, kind)), None)


def unwrap(err: BaseException | None) -> BaseException | None:
    """Return the error directly wrapped by err, or None."""
    return None if err is None else err.__cause__


def join(*args: BaseException | None) -> BaseException | None:
    """Combine errors into one group, dropping None; None if nothing is left."""
    errors = [err for err in args if err is not None]
    if not errors:
        return None
    return BaseExceptionGroup("\n".join(str(err) for err in errors), errors)


ERR_VALIDATION_SENTINEL = StructuredError(CODE_VALIDATION)
ERR_NOT_FOUND_SENTINEL = StructuredError(CODE_NOT_FOUND)
ERR_ALREADY_EXISTS_SENTINEL = StructuredError(CODE_ALREADY_EXISTS)
ERR_INVALID_INPUT_SENTINEL = StructuredError(CODE_INVALID_INPUT)
ERR_TIMEOUT_SENTINEL = StructuredError(CODE_TIMEOUT)
ERR_CANCELLED_SENTINEL = StructuredError(CODE_CANCELLED)
ERR_INTERNAL_SENTINEL = StructuredError(CODE_INTERNAL)


def is_validation(err: BaseException | None) -> bool:
    """Return True if err's chain holds a validation error."""
    return is_error(err, ERR_VALIDATION_SENTINEL)


def is_not_found(err: BaseException | None) -> bool:
    """Return True if err's chain holds a not-found error."""
    return is_error(err, ERR_NOT_FOUND_SENTINEL)


def is_already_exists(err: BaseException | None) -> bool:
    """Return True if err's chain holds an already-exists error."""
    return is_error(err, ERR_ALREADY_EXISTS_SENTINEL)


def is_timeout(err: BaseException | None) -> bool:
    """Return True if err's chain holds a timeout error."""
    return is_error(err, ERR_TIMEOUT_SENTINEL)


def is_cancelled(err: BaseException | None) -> bool:
    """Return True if err's chain holds a cancelled-operation error."""
    return is_error(err, ERR_CANCELLED_SENTINEL)


def get_http_status_code(err: BaseException | None) -> int:
    """Return the status of the first HTTP error in the chain, else 500."""
    http_err = find_error(err, HTTPError)
    if http_err is not None:
        return http_err.code
    return int(HTTPStatus.INTERNAL_SERVER_ERROR)