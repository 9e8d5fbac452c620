import pytest

from http_lookup.settings import ConfigurationError
from http_lookup.uri import MalformedURIError, build_uri


def test_query_string_is_appended() -> None:
    assert str(build_uri("http://host/items", {}, "id=42")) == "http://host/items?id=42"


def test_template_ending_with_question_mark() -> None:
    assert str(build_uri("http://host/items?", {}, "id=42")) == "http://host/items?id=42"


def test_template_with_existing_query() -> None:
    assert str(build_uri("http://host/items?v=2", {}, "id=42")) == "http://host/items?v=2&id=42"


def test_empty_query_string_adds_nothing() -> None:
    assert str(build_uri("http://host/items", {}, "")) == "http://host/items"


def test_placeholders_replaced_verbatim_everywhere() -> None:
    url = build_uri("https://host/{id}/sub/{id}", {"id": "42"}, "id=42")
    assert str(url) == "https://host/42/sub/42?id=42"


def test_path_param_without_placeholder_is_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        build_uri("http://host/items", {"id": "42"}, "")


@pytest.mark.parametrize(
    ("template", "path_params"),
    [
        ("http://host/items/{id}", {"id": "bad value"}),
        ("http://host/items/{id}", {}),
        ("host/items", {}),
        ("ftp://host/items", {}),
        ("http:///items", {}),
        ("http://host/items/%zz", {}),
    ],
)
def test_malformed_uris(template: str, path_params: dict[str, str]) -> None:
    with pytest.raises(MalformedURIError):
        build_uri(template, path_params, "")


def test_path_values_are_not_expanded_again() -> None:
    with pytest.raises(MalformedURIError):
        build_uri("http://host/{a}/{b}", {"a": "{b}", "b": "x"}, "")


def test_each_placeholder_replaced_from_template() -> None:
    url = build_uri("http://host/{a}/{b}", {"a": "b", "b": "a"}, "")
    assert str(url) == "http://host/b/a"
