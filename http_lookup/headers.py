"""Resolution of configured request headers into name/value pairs."""

import base64
from typing import Mapping, Protocol

from http_lookup.settings import properties_with_prefix

AUTHORIZATION_HEADER = "Authorization"

_BASIC_SCHEME = "Basic "


class HeaderValuePreprocessor(Protocol):
    def preprocess_value(self, raw_value: str) -> str:
        ...


class HeaderPreprocessor(Protocol):
    def preprocess_value_for_header(self, header_name: str, raw_value: str) -> str:
        ...


class BasicAuthHeaderValuePreprocessor:
    """Turn ``Basic user:password`` into ``Basic <base64(user:password)>``."""

    def preprocess_value(self, raw_value: str) -> str:
        if not raw_value.startswith(_BASIC_SCHEME):
            return raw_value
        credentials = raw_value[len(_BASIC_SCHEME):]
        if ":" not in credentials:
            # already encoded
            return raw_value
        encoded = base64.b64encode(credentials.encode("utf-8")).decode("ascii")
        return f"{_BASIC_SCHEME}{encoded}"


class ComposeHeaderPreprocessor:
    """Dispatch to a per-header value preprocessor; unknown headers pass through."""

    def __init__(self, value_preprocessors: Mapping[str, HeaderValuePreprocessor] | None = None) -> None:
        self._value_preprocessors = {
            name.lower(): preprocessor for name, preprocessor in (value_preprocessors or {}).items()
        }

    def preprocess_value_for_header(self, header_name: str, raw_value: str) -> str:
        preprocessor = self._value_preprocessors.get(header_name.lower())
        if preprocessor is None:
            return raw_value
        return preprocessor.preprocess_value(raw_value)


def create_header_preprocessor() -> ComposeHeaderPreprocessor:
    """Default preprocessor: basic auth encoding for the Authorization header."""
    return ComposeHeaderPreprocessor({AUTHORIZATION_HEADER: BasicAuthHeaderValuePreprocessor()})


def prepare_header_map(
    header_prefix: str,
    properties: Mapping[str, str],
    preprocessor: HeaderPreprocessor,
) -> dict[str, str]:
    headers: dict[str, str] = {}
    for key, raw_value in properties_with_prefix(properties, header_prefix):
        name = key[len(header_prefix):].strip()
        if not name:
            continue
        headers[name] = preprocessor.preprocess_value_for_header(name, raw_value)
    return headers


def to_header_pairs(headers: Mapping[str, str]) -> tuple[tuple[str, str], ...]:
    return tuple(headers.items())
