import pytest

from http_lookup.query import LookupArg
from main import _parse_lookup_args


def test_parse_lookup_args_keeps_order_and_values() -> None:
    assert _parse_lookup_args(["id=42", " lang =en", "q=a=b", "empty="]) == [
        LookupArg("id", "42"),
        LookupArg("lang", "en"),
        LookupArg("q", "a=b"),
        LookupArg("empty", ""),
    ]


@pytest.mark.parametrize("raw", ["id", "=42", "  =x"])
def test_parse_lookup_args_rejects_malformed_input(raw: str) -> None:
    with pytest.raises(ValueError):
        _parse_lookup_args([raw])
