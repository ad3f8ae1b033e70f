import logging

import pytest

from stagehand.extraction import (
    camel_to_snake_case,
    coerce_extract_data,
    convert_keys_to_snake_case,
    inject_urls,
    validate_against_schema,
)

URLS = {
    "42": "https://example.com",
    "7": "https://example.com/inner",
}


def test_inject_urls_replaces_matching_ids():
    value = {
        "url": 42,
        "nested": {"items": [{"linkUrl": "7"}, {"other": "value"}]},
    }
    inject_urls(value, URLS)
    assert value["url"] == "https://example.com"
    assert value["nested"]["items"][0]["linkUrl"] == "https://example.com/inner"
    assert value["nested"]["items"][1]["other"] == "value"


def test_inject_urls_only_touches_url_keys():
    value = {"id": 42, "URL_field": " 7 ", "pageUrl": "not a number"}
    result = inject_urls(value, URLS)
    assert result == {
        "id": 42,
        "URL_field": "https://example.com/inner",
        "pageUrl": "not a number",
    }


def test_inject_urls_canonicalises_ids_and_ignores_non_integers():
    value = {"url": "007", "linkUrl": 42.5, "imageUrl": True, "homeUrl": 99}
    inject_urls(value, URLS)
    assert value == {
        "url": "https://example.com/inner",
        "linkUrl": 42.5,
        "imageUrl": True,
        "homeUrl": 99,
    }


def test_inject_urls_in_top_level_list():
    value = [{"url": 42}, {"url": "1_0"}]
    inject_urls(value, URLS)
    assert value == [{"url": "https://example.com"}, {"url": "1_0"}]


def test_validate_against_schema_accepts_valid_data():
    schema = {"type": "object", "properties": {"a": {"type": "integer"}}}
    assert validate_against_schema(schema, {"a": 1}) is None


def test_validate_against_schema_reports_every_problem():
    schema = {
        "type": "object",
        "properties": {"a": {"type": "integer"}, "b": {"type": "string"}},
    }
    with pytest.raises(ValueError) as info:
        validate_against_schema(schema, {"a": "x", "b": 3})
    assert "; " in str(info.value)


def test_validate_against_schema_rejects_bad_schema():
    with pytest.raises(ValueError):
        validate_against_schema({"type": 5}, {})


@pytest.mark.parametrize(
    "text, expected",
    [
        ("companyName", "company_name"),
        ("headquartersCity", "headquarters_city"),
        ("HTTPServer", "http_server"),
        ("userID2", "user_id2"),
        ("version2Beta", "version2_beta"),
        ("foo-bar", "foo_bar"),
        ("already_snake", "already_snake"),
        ("_Foo", "_foo"),
        ("Name", "name"),
        ("", ""),
    ],
)
def test_camel_to_snake_case(text, expected):
    assert camel_to_snake_case(text) == expected


def test_convert_keys_to_snake_case_handles_nested_objects():
    value = {
        "companyName": "Stagehand",
        "details": {"headquartersCity": "San Francisco"},
        "items": [{"externalUrl": "1"}],
    }
    normalized = convert_keys_to_snake_case(value)
    assert normalized == {
        "company_name": "Stagehand",
        "details": {"headquarters_city": "San Francisco"},
        "items": [{"external_url": "1"}],
    }
    assert "companyName" in value


def test_coerce_extract_data_normalizes_and_validates_against_schema():
    schema = {
        "type": "object",
        "properties": {"company_name": {"type": "string"}},
        "required": ["company_name"],
        "additionalProperties": False,
    }
    result = coerce_extract_data({"companyName": "Stagehand"}, schema, None)
    assert result["company_name"] == "Stagehand"


def test_coerce_extract_data_keeps_valid_data():
    schema = {"type": "object", "properties": {"companyName": {"type": "string"}}}
    data = {"companyName": "Stagehand"}
    assert coerce_extract_data(data, schema, None) == {"companyName": "Stagehand"}


def test_coerce_extract_data_returns_raw_when_both_attempts_fail(caplog):
    schema = {
        "type": "object",
        "properties": {"count": {"type": "integer"}},
        "required": ["count"],
    }
    logger = logging.getLogger("test.extraction")
    with caplog.at_level(logging.ERROR, logger="test.extraction"):
        result = coerce_extract_data({"totalCount": "x"}, schema, logger)
    assert result == {"totalCount": "x"}
    assert any("Returning raw data" in r.getMessage() for r in caplog.records)


def test_coerce_extract_data_without_schema_uses_default_shape():
    data = {"extraction": "some text", "extra": 1}
    assert coerce_extract_data(data, None, None) == {"extraction": "some text"}


@pytest.mark.parametrize(
    "data",
    [{"other": 1}, {"extraction": 5}, ["extraction"], "plain"],
)
def test_coerce_extract_data_without_schema_keeps_other_data(data):
    assert coerce_extract_data(data, None, None) == data