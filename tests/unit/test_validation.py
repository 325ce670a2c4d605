# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import pytest

from httpcheck.errors import (
    BodyContentTypeMismatchError,
    InvalidEnumError,
    InvalidHeaderFormatError,
    InvalidStatusCodeError,
    MissingFieldError,
    ParseError,
)
from httpcheck.models.config import ContentType, MatchType, Verb
from httpcheck.validation import load_config, parse_headers, parse_status_code, validate


def _doc(**fields) -> str:
    base = {"url": "http://example/health", "expected_output": "200"}
    base.update(fields)
    return json.dumps(base)


def test_validate_accepts_minimal_document():
    assert validate(_doc()) is None


def test_load_config_builds_typed_config():
    config = load_config(
        _doc(
            verb="POST",
            match_type="substringMatch",
            expected_output="ok",
            insecure=True,
            headers="X-Token: abc ;Accept:text/plain",
            body="{}",
            content_type="application/json",
        )
    )
    assert config.verb is Verb.POST
    assert config.match_type is MatchType.SUBSTRING_MATCH
    assert config.content_type is ContentType.APPLICATION_JSON
    assert config.insecure is True
    assert config.headers == (("X-Token", "abc"), ("Accept", "text/plain"))
    assert config.has_body is True


def test_missing_url():
    with pytest.raises(MissingFieldError) as excinfo:
        validate(_doc(url=""))
    assert excinfo.value.field == "url"


def test_missing_expected_output():
    with pytest.raises(MissingFieldError) as excinfo:
        validate(_doc(expected_output=""))
    assert excinfo.value.field == "expected_output"


@pytest.mark.parametrize(
    "fields, field_name",
    [
        ({"verb": "FETCH"}, "verb"),
        ({"verb": "get"}, "verb"),
        ({"match_type": "jsonMatch"}, "match_type"),
        ({"content_type": "text/html", "body": "x"}, "content_type"),
    ],
)
def test_invalid_enum_values(fields, field_name):
    with pytest.raises(InvalidEnumError) as excinfo:
        validate(_doc(**fields))
    assert excinfo.value.field == field_name
    assert excinfo.value.value in excinfo.value.message


@pytest.mark.parametrize(
    "expected",
    ["700", "99", "abc", "2.5", " 200", "", pytest.param("1" * 5000, id="oversized-digits")],
)
def test_invalid_status_codes(expected):
    if expected == "":
        with pytest.raises(MissingFieldError):
            validate(_doc(expected_output=expected))
        return
    with pytest.raises(InvalidStatusCodeError) as excinfo:
        validate(_doc(expected_output=expected))
    assert repr(expected) in excinfo.value.message


def test_status_code_bounds_are_inclusive():
    assert parse_status_code("100") == 100
    assert parse_status_code("599") == 599
    assert parse_status_code("+204") == 204


def test_status_code_only_checked_for_status_match():
    assert validate(_doc(match_type="exactMatch", expected_output="hello")) is None


@pytest.mark.parametrize("headers", ["A:1;B", "A:1;", ";A:1", "A", ":1", "A:", "A: ;B:2"])
def test_invalid_header_format(headers):
    with pytest.raises(InvalidHeaderFormatError) as excinfo:
        validate(_doc(headers=headers))
    assert headers in excinfo.value.message


def test_parse_headers_splits_on_first_colon_only():
    assert parse_headers("Authorization:Bearer a:b") == (("Authorization", "Bearer a:b"),)
    assert parse_headers("A:1;B:2;A:3") == (("A", "1"), ("B", "2"), ("A", "3"))
    assert parse_headers("") == ()


def test_body_forbidden_with_empty_content_type():
    with pytest.raises(BodyContentTypeMismatchError):
        validate(_doc(content_type="empty", body="x"))


@pytest.mark.parametrize("content_type", ["plain/text", "application/json", "x-www-form-urlencoded"])
def test_body_required_with_content_type(content_type):
    with pytest.raises(BodyContentTypeMismatchError):
        validate(_doc(content_type=content_type, body=""))
    assert validate(_doc(content_type=content_type, body="payload")) is None


def test_first_violated_invariant_wins():
    # Empty url is reported before the invalid verb and the bad status code.
    with pytest.raises(MissingFieldError):
        validate(_doc(url="", verb="FETCH", expected_output="700"))
    # The verb is checked before the match type.
    with pytest.raises(InvalidEnumError) as excinfo:
        validate(_doc(verb="FETCH", match_type="nope"))
    assert excinfo.value.field == "verb"
    # Header format is checked before body/content-type consistency.
    with pytest.raises(InvalidHeaderFormatError):
        validate(_doc(headers="broken", body="x"))


def test_unknown_content_type_with_empty_body_reports_mismatch_first():
    with pytest.raises(BodyContentTypeMismatchError):
        validate(_doc(content_type="text/html"))


def test_validate_surfaces_parse_errors():
    with pytest.raises(ParseError):
        validate("{not json")


def test_oversized_status_code_is_a_validation_error():
    with pytest.raises(InvalidStatusCodeError) as excinfo:
        parse_status_code("2" * 5000)
    assert "not an integer" in excinfo.value.message
    assert isinstance(excinfo.value.__cause__, ValueError)
