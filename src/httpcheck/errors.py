# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers.

Every failure surfaced by ``validate`` or ``run`` is a :class:`CheckError`
subclass carrying an :class:`ErrorKind`. Validation failures derive from
:class:`ValidationError`; failures that can only happen while executing a
probe derive from :class:`ExecutionError`.
"""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum
from typing import Optional

import httpx


class ErrorKind(str, Enum):
    PARSE_ERROR = "ParseError"
    MISSING_FIELD = "MissingField"
    INVALID_ENUM = "InvalidEnum"
    INVALID_STATUS_CODE = "InvalidStatusCode"
    INVALID_HEADER_FORMAT = "InvalidHeaderFormat"
    BODY_CONTENT_TYPE_MISMATCH = "BodyContentTypeMismatch"
    INVALID_VERB = "InvalidVerbError"
    REQUEST_BUILD_ERROR = "RequestBuildError"
    TRANSPORT_ERROR = "TransportError"
    INVALID_PATTERN = "InvalidPattern"
    INVALID_MATCH_TYPE = "InvalidMatchType"
    MATCH_FAILURE = "MatchFailure"


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    CANCELLED = "CANCELLED"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class CheckError(Exception):
    """Base class for every probe failure."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CheckError):
    """Configuration document rejected before any request is sent."""


class ExecutionError(CheckError):
    """Failure while building, sending or matching a probe request."""


class ParseError(ValidationError):
    kind = ErrorKind.PARSE_ERROR


class MissingFieldError(ValidationError):
    kind = ErrorKind.MISSING_FIELD

    def __init__(self, field: str, value: str):
        super().__init__(f"{field} must be provided; got: {value!r}")
        self.field = field
        self.value = value


class InvalidEnumError(ValidationError):
    kind = ErrorKind.INVALID_ENUM

    def __init__(self, field: str, value: str, allowed: tuple[str, ...]):
        super().__init__(f"invalid {field} provided: {value!r}; expected one of: {', '.join(allowed)}")
        self.field = field
        self.value = value
        self.allowed = allowed


class InvalidStatusCodeError(ValidationError):
    kind = ErrorKind.INVALID_STATUS_CODE

    def __init__(self, value: str, reason: str = "must be an integer between 100 and 599"):
        super().__init__(f"invalid status code provided: {value!r}; {reason}")
        self.value = value


class InvalidHeaderFormatError(ValidationError):
    kind = ErrorKind.INVALID_HEADER_FORMAT

    def __init__(self, value: str):
        super().__init__(f'header format must be "header:value;header:value"; got: {value!r}')
        self.value = value


class BodyContentTypeMismatchError(ValidationError):
    kind = ErrorKind.BODY_CONTENT_TYPE_MISMATCH


class InvalidVerbError(ExecutionError):
    kind = ErrorKind.INVALID_VERB

    def __init__(self, value: str):
        super().__init__(f"provided invalid http verb: {value!r}")
        self.value = value


class RequestBuildError(ExecutionError):
    kind = ErrorKind.REQUEST_BUILD_ERROR


class TransportError(ExecutionError):
    kind = ErrorKind.TRANSPORT_ERROR

    def __init__(self, message: str, category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR):
        super().__init__(message)
        self.category = category


class CheckCancelled(TransportError):
    """The caller's context was cancelled or its deadline expired."""

    def __init__(self, message: str = "check cancelled", category: ErrorCategory = ErrorCategory.CANCELLED):
        super().__init__(message, category)


class InvalidPatternError(ExecutionError):
    kind = ErrorKind.INVALID_PATTERN

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"invalid regex pattern provided: {pattern!r}; {reason}")
        self.pattern = pattern


class InvalidMatchTypeError(ExecutionError):
    kind = ErrorKind.INVALID_MATCH_TYPE

    def __init__(self, value: str):
        super().__init__(f"invalid match type provided: {value!r}")
        self.value = value


class MatchFailure(ExecutionError):
    kind = ErrorKind.MATCH_FAILURE

    def __init__(self, message: str, expected: object = None, actual: object = None):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    # httpx wraps the underlying ssl/socket error (via httpcore), so walk the chain.
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, (ssl_module.SSLError, ssl_module.CertificateError)):
            return ErrorCategory.SSL_ERROR
        if isinstance(current, (socket.gaierror, socket.herror)):
            return ErrorCategory.DNS_ERROR
        current = current.__cause__ or current.__context__

    if isinstance(
        exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)
    ):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: Optional[ErrorCategory]) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout during check",
        ErrorCategory.CANCELLED: "Check cancelled by caller",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.UNKNOWN_ERROR: "Network error during check",
        None: "",
    }
    return mapping.get(category, "Check failed due to network error")


__all__ = [
    "BodyContentTypeMismatchError",
    "CheckCancelled",
    "CheckError",
    "ErrorCategory",
    "ErrorKind",
    "ExecutionError",
    "InvalidEnumError",
    "InvalidHeaderFormatError",
    "InvalidMatchTypeError",
    "InvalidPatternError",
    "InvalidStatusCodeError",
    "InvalidVerbError",
    "MatchFailure",
    "MissingFieldError",
    "ParseError",
    "RequestBuildError",
    "TransportError",
    "ValidationError",
    "categorize_exception",
    "error_category_to_reason",
]
