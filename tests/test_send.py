"""Tests for sluice.server.send: module response construction."""

import base64
import hashlib
import json

from sluice.server.send import (
    CONTENT_TYPES,
    module_response,
    source_map_url,
    weak_etag,
    with_inline_source_map,
)

MAP = {"version": 3, "mappings": "AAAA"}


class TestWeakEtag:
    def test_empty_body(self) -> None:
        assert weak_etag(b"") == 'W/"0-2jmj7l5rSw0yVb/vlWAYkK/YBwk"'

    def test_length_is_hex(self) -> None:
        body = b"x" * 300
        digest = base64.b64encode(hashlib.sha1(body).digest()).decode()[:27]
        assert weak_etag(body) == f'W/"12c-{digest}"'

    def test_changes_with_content(self) -> None:
        assert weak_etag(b"a") != weak_etag(b"b")


class TestContentTypes:
    def test_aliases(self) -> None:
        assert CONTENT_TYPES == {
            "js": "application/javascript",
            "css": "text/css",
            "html": "text/html",
            "json": "application/json",
        }

    def test_json(self) -> None:
        assert module_response("{}", "json").content_type == "application/json"


class TestModuleResponse:
    def test_headers(self) -> None:
        response = module_response(
            "x", "js", etag="abc", cache_control="max-age=31536000,immutable"
        )
        assert response.status == 200
        assert response.headers == (
            ("Cache-Control", "max-age=31536000,immutable"),
            ("ETag", "abc"),
        )

    def test_default_etag(self) -> None:
        response = module_response("console.log(1)", "js")
        assert response.header("ETag") == weak_etag(b"console.log(1)")
        assert response.header("Cache-Control") == "no-cache"

    def test_static_headers_come_last(self) -> None:
        response = module_response("x", "js", etag="e", headers=(("X-A", "1"), ("X-B", "2")))
        assert response.headers[-2:] == (("X-A", "1"), ("X-B", "2"))

    def test_matching_if_none_match(self) -> None:
        response = module_response("x", "js", etag="abc", if_none_match="abc")
        assert response.status == 304
        assert response.body == ""

    def test_stale_if_none_match(self) -> None:
        response = module_response("x", "js", etag="abc", if_none_match="old")
        assert response.status == 200


class TestInlineSourceMap:
    def test_data_url(self) -> None:
        url = source_map_url(MAP)
        prefix = "data:application/json;base64,"
        assert url.startswith(prefix)
        assert json.loads(base64.b64decode(url[len(prefix) :])) == MAP

    def test_js_comment(self) -> None:
        code = with_inline_source_map("js", "x", MAP)
        assert code == f"x\n//# sourceMappingURL={source_map_url(MAP)}"

    def test_css_comment(self) -> None:
        code = with_inline_source_map("css", "a{}", MAP)
        assert code == f"a{{}}\n/*# sourceMappingURL={source_map_url(MAP)} */"

    def test_map_without_mappings_is_skipped(self) -> None:
        response = module_response("x", "js", etag="e", source_map={"version": 3, "mappings": ""})
        assert response.text == "x"

    def test_json_never_gets_a_comment(self) -> None:
        response = module_response("{}", "json", etag="e", source_map=MAP)
        assert response.text == "{}"
