"""
Lookup query construction.

Lookup arguments are turned into a form encoded query string. Arguments whose
name also appears as a ``{name}`` placeholder in the URL template are recorded
as path parameters; they still appear in the query string.
"""

from dataclasses import dataclass, field
from typing import Mapping, Protocol, Sequence
from urllib.parse import urlencode


@dataclass(frozen=True, slots=True)
class LookupArg:
    """One key/value extracted from an incoming lookup key."""

    arg_name: str
    arg_value: str


@dataclass(frozen=True, slots=True)
class LookupQueryInfo:
    query_string: str
    body: str | None = None
    path_params: Mapping[str, str] = field(default_factory=dict)


class LookupQueryCreator(Protocol):
    def create_lookup_query(self, lookup_args: Sequence[LookupArg]) -> LookupQueryInfo:
        ...


def create_lookup_query(lookup_args: Sequence[LookupArg], url_template: str) -> LookupQueryInfo:
    """Build the query string and path parameters for a GET lookup."""
    path_params: dict[str, str] = {}
    for arg in lookup_args:
        if f"{{{arg.arg_name}}}" in url_template:
            path_params[arg.arg_name] = arg.arg_value

    query_string = urlencode(
        [(arg.arg_name, arg.arg_value) for arg in lookup_args],
        encoding="utf-8",
    )
    return LookupQueryInfo(query_string=query_string, body=None, path_params=path_params)


class GetQueryCreator:
    """Query creator bound to a single URL template."""

    def __init__(self, url_template: str) -> None:
        self._url_template = url_template

    def create_lookup_query(self, lookup_args: Sequence[LookupArg]) -> LookupQueryInfo:
        return create_lookup_query(lookup_args, self._url_template)
