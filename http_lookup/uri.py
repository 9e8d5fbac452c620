"""Composition of the final request URL from a template, path params and a query."""

import re
from typing import Mapping
from urllib.parse import urlsplit

import httpx

from http_lookup.settings import ConfigurationError

_ALLOWED_SCHEMES = frozenset({"http", "https"})
# RFC 3986 unreserved + reserved characters, plus '%' for escapes.
_ILLEGAL_CHARACTER = re.compile(r"[^A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_PLACEHOLDER = re.compile(r"\{([^{}]+)\}")


class MalformedURIError(ValueError):
    """Raised when the composed request target is not a valid URI."""


def _join_query(url: str, query_string: str) -> str:
    if not query_string:
        return url
    if url.endswith(("?", "&")):
        return f"{url}{query_string}"
    if "?" in url:
        return f"{url}&{query_string}"
    return f"{url}?{query_string}"


def build_uri(url_template: str, path_params: Mapping[str, str], query_string: str) -> httpx.URL:
    """
    Substitute path params into url_template and append query_string.

    Path values are substituted verbatim; callers are responsible for them
    being URI safe.
    """
    for name in path_params:
        if f"{{{name}}}" not in url_template:
            raise ConfigurationError(
                f"Path parameter '{name}' has no matching placeholder in URL template '{url_template}'."
            )

    url = _PLACEHOLDER.sub(lambda match: path_params.get(match.group(1), match.group(0)), url_template)
    url = _join_query(url, query_string)

    illegal = _ILLEGAL_CHARACTER.search(url)
    if illegal:
        raise MalformedURIError(f"Illegal character {illegal.group()!r} in URI '{url}'.")
    if _BAD_ESCAPE.search(url):
        raise MalformedURIError(f"Malformed percent escape in URI '{url}'.")

    try:
        parts = urlsplit(url)
    except ValueError as exc:
        raise MalformedURIError(f"Unable to parse URI '{url}': {exc!s}") from exc
    if parts.scheme.lower() not in _ALLOWED_SCHEMES:
        raise MalformedURIError(f"URI '{url}' must use http or https.")
    if not parts.netloc:
        raise MalformedURIError(f"URI '{url}' has no host.")

    try:
        return httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise MalformedURIError(f"Unable to parse URI '{url}': {exc!s}") from exc
