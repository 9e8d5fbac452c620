from http_lookup.query import GetQueryCreator, LookupArg, LookupQueryInfo, create_lookup_query


def test_args_without_placeholders_go_to_query_in_order() -> None:
    args = [LookupArg("b", "2"), LookupArg("a", "1"), LookupArg("c", "3")]
    info = create_lookup_query(args, "http://host/items")
    assert info == LookupQueryInfo(query_string="b=2&a=1&c=3", body=None, path_params={})


def test_values_are_form_encoded() -> None:
    args = [LookupArg("name", "John Smith"), LookupArg("q", "a&b=c/d"), LookupArg("city", "Kraków")]
    info = create_lookup_query(args, "http://host/search")
    assert info.query_string == "name=John+Smith&q=a%26b%3Dc%2Fd&city=Krak%C3%B3w"


def test_placeholder_args_become_path_params_and_stay_in_query() -> None:
    args = [LookupArg("id", "42"), LookupArg("lang", "en")]
    info = create_lookup_query(args, "http://host/items/{id}")
    assert info.path_params == {"id": "42"}
    assert info.query_string == "id=42&lang=en"
    assert info.body is None


def test_path_params_are_kept_raw() -> None:
    info = create_lookup_query([LookupArg("id", "a b")], "http://host/items/{id}")
    assert info.path_params == {"id": "a b"}


def test_placeholder_must_match_exact_name() -> None:
    info = create_lookup_query([LookupArg("id", "1")], "http://host/items/{identifier}")
    assert info.path_params == {}


def test_empty_args() -> None:
    info = create_lookup_query([], "http://host/items")
    assert info.query_string == ""
    assert info.path_params == {}


def test_get_query_creator_uses_bound_template() -> None:
    creator = GetQueryCreator("http://host/{tenant}/items")
    info = creator.create_lookup_query([LookupArg("tenant", "acme"), LookupArg("id", "7")])
    assert info.path_params == {"tenant": "acme"}
    assert info.query_string == "tenant=acme&id=7"
