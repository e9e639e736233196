import pytest
from api_request_builder.exceptions import DuplicateTemplateVariable, MissingRequiredParameter
from api_request_builder.parser.base import Param
from api_request_builder.request.template import build, path_placeholders


def _q(name: str, value, **overrides) -> Param:
    return Param(name=name, location="query", value=value, **overrides)


class TestPathPlaceholders:
    def test_in_order(self):
        assert path_placeholders("/store/{storeId}/pet/{petId}") == ["storeId", "petId"]

    def test_none(self):
        assert path_placeholders("/pet") == []


class TestBuildPath:
    def test_path_param_substitution(self):
        result = build("DELETE", "/pet/{petId}", [Param(name="petId", location="path", value=1)], [])
        assert result.url_template == "/pet/{petId}"
        assert result.path_variables == {"petId": "1"}
        assert result.query_variables == {}

    def test_missing_path_value_raises(self):
        with pytest.raises(MissingRequiredParameter):
            build("DELETE", "/pet/{petId}", [Param(name="petId", location="path")], [])

    def test_placeholder_without_param_raises(self):
        with pytest.raises(MissingRequiredParameter) as exc_info:
            build("GET", "/store/{storeId}/pet/{petId}", [Param(name="petId", location="path", value=1)], [])
        assert exc_info.value.name == "storeId"


class TestBuildQuery:
    def test_exploded_values_repeat_display_key(self):
        result = build("GET", "/pet/findByStatus", [], [_q("status", ["available", "pending"], explode=True)])
        assert result.url_template == "/pet/findByStatus?status={status0}&status={status1}"
        assert result.query_variables == {"status0": "available", "status1": "pending"}
        assert list(result.query_variables) == ["status0", "status1"]

    def test_comma_joined_value(self):
        result = build("GET", "/pet/findByTags", [], [_q("tags", ["1", "2"], explode=False)])
        assert result.url_template == "/pet/findByTags?tags={tags}"
        assert result.query_variables == {"tags": "1,2"}

    def test_no_present_query_params_no_question_mark(self):
        result = build("GET", "/pet/findByTags", [], [_q("tags", None), _q("limit", [], explode=True)])
        assert result.url_template == "/pet/findByTags"
        assert result.query_variables == {}

    def test_empty_joined_list_still_binds_key(self):
        result = build("GET", "/pets", [], [_q("tags", [], explode=False)])
        assert result.url_template == "/pets?tags={tags}"
        assert result.query_variables == {"tags": ""}

    def test_declaration_order_across_params(self):
        result = build(
            "GET",
            "/pets",
            [],
            [_q("limit", 10), _q("status", ["a", "b"], explode=True), _q("sort", "name")],
        )
        assert result.url_template == "/pets?limit={limit}&status={status0}&status={status1}&sort={sort}"
        assert list(result.query_variables) == ["limit", "status0", "status1", "sort"]

    def test_path_and_query_combined(self):
        result = build(
            "DELETE",
            "/pet/{petId}",
            [Param(name="petId", location="path", value=1)],
            [_q("api_key", "sample_api_key")],
        )
        assert result.url_template == "/pet/{petId}?api_key={api_key}"
        assert result.path_variables == {"petId": "1"}
        assert result.query_variables == {"api_key": "sample_api_key"}

    def test_pattern_with_query_appends_with_ampersand(self):
        result = build("GET", "/search?type=pet", [], [_q("q", "cat")])
        assert result.url_template == "/search?type=pet&q={q}"

    def test_allocated_name_colliding_with_declared_name_raises(self):
        with pytest.raises(DuplicateTemplateVariable) as exc_info:
            build("GET", "/pets", [], [_q("status", ["a", "b"], explode=True), _q("status0", "c")])
        assert exc_info.value.name == "status0"

    def test_space_delimited_value_keeps_its_elements(self):
        result = build("GET", "/pets", [], [_q("tags", ["a", "b"], style="spaceDelimited", explode=False), _q("q", "cat")])
        assert result.query_variables == {"tags": "a%20b", "q": "cat"}
        assert result.joined_elements == {"tags": ("a", "b")}
