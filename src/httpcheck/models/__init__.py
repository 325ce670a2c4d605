# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for httpcheck."""

from ..http.models import HttpRequest, HttpResponse
from .config import ContentType, HeaderPair, MatchType, ProbeConfig, Verb
from .result import CheckResult

__all__ = [
    "CheckResult",
    "ContentType",
    "HeaderPair",
    "HttpRequest",
    "HttpResponse",
    "MatchType",
    "ProbeConfig",
    "Verb",
]
