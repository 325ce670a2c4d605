# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe configuration model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

HeaderPair = tuple[str, str]


class Verb(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    CONNECT = "CONNECT"
    TRACE = "TRACE"


class MatchType(str, Enum):
    STATUS_CODE = "statusCode"
    SUBSTRING_MATCH = "substringMatch"
    EXACT_MATCH = "exactMatch"
    REGEX_MATCH = "regexMatch"


class ContentType(str, Enum):
    # Labels are sent verbatim as the Content-Type header value.
    PLAIN_TEXT = "plain/text"
    APPLICATION_JSON = "application/json"
    FORM_URLENCODED = "x-www-form-urlencoded"
    EMPTY = "empty"


def enum_values(enum_cls: type[Enum]) -> tuple[str, ...]:
    return tuple(member.value for member in enum_cls)


@dataclass(frozen=True)
class ProbeConfig:
    """A validated probe definition. Rebuilt from the document on every call."""

    url: str
    expected_output: str
    verb: Verb = Verb.GET
    match_type: MatchType = MatchType.STATUS_CODE
    insecure: bool = False
    headers: tuple[HeaderPair, ...] = ()
    body: str = ""
    content_type: ContentType = ContentType.EMPTY

    @property
    def has_body(self) -> bool:
        return self.content_type is not ContentType.EMPTY


__all__ = [
    "ContentType",
    "HeaderPair",
    "MatchType",
    "ProbeConfig",
    "Verb",
    "enum_values",
]
