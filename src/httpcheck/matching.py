# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Response matchers, one per MatchType."""

from __future__ import annotations

import re
from collections.abc import Callable

from .errors import InvalidMatchTypeError, InvalidPatternError, MatchFailure
from .http.models import HttpResponse
from .models.config import MatchType, ProbeConfig
from .validation import parse_status_code

Matcher = Callable[[ProbeConfig, HttpResponse], None]

NOT_FOUND_MESSAGE = "expected output not found in response body"


def match_status_code(config: ProbeConfig, response: HttpResponse) -> None:
    expected = parse_status_code(config.expected_output)
    if response.status_code != expected:
        raise MatchFailure(
            f"expected status code: {expected}; got: {response.status_code}",
            expected=expected,
            actual=response.status_code,
        )


def match_substring(config: ProbeConfig, response: HttpResponse) -> None:
    if config.expected_output.encode("utf-8") not in response.content:
        raise MatchFailure(NOT_FOUND_MESSAGE)


def match_exact(config: ProbeConfig, response: HttpResponse) -> None:
    if response.content != config.expected_output.encode("utf-8"):
        raise MatchFailure(NOT_FOUND_MESSAGE)


def compile_pattern(pattern: str) -> re.Pattern[bytes]:
    """
    Compile ``pattern`` as a bytes pattern so it runs against the raw body.

    Bodies that are not valid UTF-8 are matched as sent. Character classes
    such as ``\\w`` are ASCII-only in bytes patterns, and ``.`` matches a
    single byte, not a multi-byte character.
    """
    try:
        return re.compile(pattern.encode("utf-8"))
    except re.error as exc:
        raise InvalidPatternError(pattern, str(exc)) from exc


def match_regex(config: ProbeConfig, response: HttpResponse) -> None:
    # Unanchored: the pattern may match anywhere in the body.
    if compile_pattern(config.expected_output).search(response.content) is None:
        raise MatchFailure(NOT_FOUND_MESSAGE)


MATCHERS: dict[MatchType, Matcher] = {
    MatchType.STATUS_CODE: match_status_code,
    MatchType.SUBSTRING_MATCH: match_substring,
    MatchType.EXACT_MATCH: match_exact,
    MatchType.REGEX_MATCH: match_regex,
}


def reads_body(match_type: MatchType) -> bool:
    """Only the status-code matcher can judge a response without its body."""
    return match_type is not MatchType.STATUS_CODE


def get_matcher(match_type: MatchType) -> Matcher:
    try:
        return MATCHERS[match_type]
    except KeyError:
        raise InvalidMatchTypeError(str(getattr(match_type, "value", match_type))) from None


def evaluate(config: ProbeConfig, response: HttpResponse) -> None:
    """Raise MatchFailure (or a pattern error) unless ``response`` satisfies ``config``."""
    get_matcher(config.match_type)(config, response)


__all__ = [
    "MATCHERS",
    "Matcher",
    "compile_pattern",
    "evaluate",
    "get_matcher",
    "match_exact",
    "match_regex",
    "match_status_code",
    "match_substring",
    "reads_body",
]
