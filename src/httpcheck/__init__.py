# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
httpcheck package entrypoint.

This package implements a single HTTP health-check probe: a declarative JSON
configuration is validated, turned into one HTTP request, and the response is
matched against the expected status code or body. Scheduling and aggregation
belong to the enclosing check framework, which calls ``validate`` and ``run``.
"""

from .config import HttpSettings, load_http_settings
from .errors import (
    CheckCancelled,
    CheckError,
    ErrorCategory,
    ErrorKind,
    ExecutionError,
    MatchFailure,
    TransportError,
    ValidationError,
)
from .log import setup_logging
from .models import CheckResult, ContentType, MatchType, ProbeConfig, Verb
from .runtime import HttpCheck, execute, run
from .utils.context import CheckContext, check_context
from .validation import load_config, validate
from .version import __version__

__all__ = [
    "CheckCancelled",
    "CheckContext",
    "CheckError",
    "CheckResult",
    "ContentType",
    "ErrorCategory",
    "ErrorKind",
    "ExecutionError",
    "HttpCheck",
    "HttpSettings",
    "MatchFailure",
    "MatchType",
    "ProbeConfig",
    "TransportError",
    "ValidationError",
    "Verb",
    "check_context",
    "execute",
    "load_config",
    "load_http_settings",
    "run",
    "setup_logging",
    "validate",
    "__version__",
]
