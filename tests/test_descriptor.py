import pytest
from pydantic import ValidationError
from api_request_builder.exceptions import DuplicateTemplateVariable
from api_request_builder.request.descriptor import RequestDescriptor, emit, encode_literal


class TestEmit:
    def test_merges_path_and_query_variables(self):
        d = emit("delete", "/pet/{petId}?api_key={api_key}", {"petId": "1"}, {"api_key": "k"}, {"User-Agent": "x"})
        assert d.method == "DELETE"
        assert d.variables == {"petId": "1", "api_key": "k"}
        assert d.path_variables == {"petId": "1"}
        assert d.query_variables == {"api_key": "k"}
        assert d.body is None

    def test_path_and_query_name_clash_raises(self):
        with pytest.raises(DuplicateTemplateVariable):
            emit("GET", "/pet/{id}?id={id}", {"id": "1"}, {"id": "2"}, {})

    def test_does_not_share_input_maps(self):
        headers = {"User-Agent": "x"}
        d = emit("GET", "/pets", {}, {}, headers)
        headers["Accept"] = "text/plain"
        assert "Accept" not in d.headers

    def test_is_immutable(self):
        d = emit("GET", "/pets", {}, {}, {})
        with pytest.raises(ValidationError):
            d.method = "POST"

    def test_joined_elements_are_not_dumped(self):
        d = emit("GET", "/pets?tags={tags}", {}, {"tags": "a%20b"}, {}, joined_elements={"tags": ("a", "b")})
        assert d.joined_elements == {"tags": ("a", "b")}
        assert "joined_elements" not in d.model_dump()
        assert d.model_dump()["variables"] == {"tags": "a%20b"}


class TestExpandUrl:
    def test_substitutes_and_encodes(self):
        d = RequestDescriptor(
            method="GET",
            url_template="/pet/findByStatus?status={status0}&status={status1}",
            variables={"status0": "available now", "status1": "a&b"},
        )
        assert d.expand_url("http://petstore.swagger.io/v2/") == (
            "http://petstore.swagger.io/v2/pet/findByStatus?status=available%20now&status=a%26b"
        )

    def test_keeps_space_delimited_separator(self):
        d = RequestDescriptor(
            method="GET",
            url_template="/pets?tags={tags}",
            variables={"tags": "a b%20c"},
            joined_elements={"tags": ("a b", "c")},
        )
        assert d.expand_url() == "/pets?tags=a%20b%20c"

    def test_escapes_percent_in_caller_values(self):
        d = RequestDescriptor(method="GET", url_template="/files?path={path}", variables={"path": "a%2Fb"})
        assert d.expand_url() == "/files?path=a%252Fb"

    def test_escapes_percent_inside_space_delimited_elements(self):
        d = RequestDescriptor(
            method="GET",
            url_template="/pets?tags={tags}",
            variables={"tags": "50%%20off"},
            joined_elements={"tags": ("50%", "off")},
        )
        assert d.expand_url() == "/pets?tags=50%25%20off"

    def test_encodes_comma_and_pipe(self):
        d = RequestDescriptor(method="GET", url_template="/pets?t={t}&s={s}", variables={"t": "1,2", "s": "a|b"})
        assert d.expand_url() == "/pets?t=1%2C2&s=a%7Cb"

    def test_missing_binding_raises(self):
        d = RequestDescriptor(method="GET", url_template="/pet/{petId}")
        with pytest.raises(KeyError):
            d.expand_url()


class TestEncodeLiteral:
    def test_lone_percent_is_encoded(self):
        assert encode_literal("100%") == "100%25"

    def test_slash_is_encoded(self):
        assert encode_literal("a/b") == "a%2Fb"

    def test_existing_escape_is_encoded_again(self):
        assert encode_literal("a%2Fb") == "a%252Fb"
