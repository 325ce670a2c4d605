# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe configuration validation shared by ``validate`` and ``run``."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from .errors import (
    BodyContentTypeMismatchError,
    InvalidEnumError,
    InvalidHeaderFormatError,
    InvalidStatusCodeError,
    MissingFieldError,
)
from .models.config import ContentType, HeaderPair, MatchType, ProbeConfig, Verb, enum_values
from .schema import ConfigDocument, parse_document

MIN_STATUS_CODE = 100
MAX_STATUS_CODE = 599

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def parse_status_code(value: str) -> int:
    """Parse an expected status code, rejecting anything outside 100-599."""
    if not _INTEGER_RE.fullmatch(value):
        raise InvalidStatusCodeError(value, "not an integer")
    try:
        status_code = int(value)
    except ValueError as exc:
        # Digit strings past the interpreter's int conversion limit.
        raise InvalidStatusCodeError(value, "not an integer") from exc
    if status_code < MIN_STATUS_CODE or status_code > MAX_STATUS_CODE:
        raise InvalidStatusCodeError(value)
    return status_code


def parse_headers(raw: str) -> tuple[HeaderPair, ...]:
    """
    Split ``"name:value;name:value"`` into ordered (name, value) pairs.

    Each segment splits on its first ``:`` only, so values may contain colons.
    Names and values are trimmed and must be non-empty.
    """
    if not raw:
        return ()
    pairs: list[HeaderPair] = []
    for segment in raw.split(";"):
        name, sep, value = segment.partition(":")
        name, value = name.strip(), value.strip()
        if not sep or not name or not value:
            raise InvalidHeaderFormatError(raw)
        pairs.append((name, value))
    return tuple(pairs)


def _enum_member(enum_cls: type, field: str, value: str) -> Any:
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidEnumError(field, value, enum_values(enum_cls)) from None


def check_config(fields: Mapping[str, Any]) -> ProbeConfig:
    """
    Apply the probe invariants in order and build a ProbeConfig.

    The first violated invariant determines the raised error.
    """
    url = fields["url"]
    if url == "":
        raise MissingFieldError("url", url)

    verb = _enum_member(Verb, "verb", fields["verb"])
    match_type = _enum_member(MatchType, "match_type", fields["match_type"])

    expected_output = fields["expected_output"]
    if expected_output == "":
        raise MissingFieldError("expected_output", expected_output)

    if match_type is MatchType.STATUS_CODE:
        parse_status_code(expected_output)

    headers = parse_headers(fields["headers"])

    body = fields["body"]
    raw_content_type = fields["content_type"]
    if raw_content_type == ContentType.EMPTY.value and body != "":
        raise BodyContentTypeMismatchError(
            f"body must not be provided when using empty content_type; got: {body!r}"
        )
    if raw_content_type != ContentType.EMPTY.value and body == "":
        raise BodyContentTypeMismatchError(
            f"body must be provided when using content_type {raw_content_type!r}; got: {body!r}"
        )
    content_type = _enum_member(ContentType, "content_type", raw_content_type)

    return ProbeConfig(
        url=url,
        expected_output=expected_output,
        verb=verb,
        match_type=match_type,
        insecure=fields["insecure"],
        headers=headers,
        body=body,
        content_type=content_type,
    )


def load_config(document: ConfigDocument) -> ProbeConfig:
    """Decode and validate a probe document."""
    return check_config(parse_document(document))


def validate(document: ConfigDocument) -> None:
    """
    Validate a probe document without touching the network.

    Raises a :class:`~httpcheck.errors.ValidationError` subclass on the first
    problem found; returns ``None`` when the document is usable.
    """
    load_config(document)


__all__ = [
    "MAX_STATUS_CODE",
    "MIN_STATUS_CODE",
    "check_config",
    "load_config",
    "parse_headers",
    "parse_status_code",
    "validate",
]
