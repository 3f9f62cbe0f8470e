"""Tests for sluice.errors: exception hierarchy and error messages."""

import pytest

from sluice.errors import (
    ConfigurationError,
    HTTPError,
    MalformedURL,
    NotFound,
    PipelineError,
    PipelineErrorKind,
    SluiceError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "cls", [ConfigurationError, HTTPError, NotFound, MalformedURL, PipelineError]
    )
    def test_sluice_errors(self, cls: type) -> None:
        assert issubclass(cls, SluiceError)

    def test_not_found_is_http_error(self) -> None:
        assert issubclass(NotFound, HTTPError)

    def test_malformed_url_is_value_error(self) -> None:
        assert issubclass(MalformedURL, ValueError)


class TestHTTPError:
    def test_str_with_detail(self) -> None:
        assert str(HTTPError(status=400, detail="Bad request")) == "400: Bad request"

    def test_str_without_detail(self) -> None:
        assert str(HTTPError(status=500)) == "500"

    def test_not_found_defaults(self) -> None:
        err = NotFound()
        assert err.status == 404
        assert err.detail == "Not Found"


class TestMalformedURL:
    def test_message(self) -> None:
        err = MalformedURL("/a%zz.js")
        assert err.url == "/a%zz.js"
        assert "URI malformed" in str(err)
        assert "/a%zz.js" in str(err)


class TestPipelineError:
    def test_codes(self) -> None:
        assert PipelineErrorKind.OUTDATED_OPTIMIZATION == "ERR_OUTDATED_OPTIMIZED_DEP"
        assert PipelineErrorKind.OPTIMIZATION_TIMEOUT == "ERR_OPTIMIZE_DEPS_TIMEOUT"
        assert PipelineError(PipelineErrorKind.TRANSFORM, "x").code == "ERR_TRANSFORM"

    @pytest.mark.parametrize(
        ("kind", "transient"),
        [
            (PipelineErrorKind.OUTDATED_OPTIMIZATION, True),
            (PipelineErrorKind.OPTIMIZATION_TIMEOUT, True),
            (PipelineErrorKind.TRANSFORM, False),
        ],
    )
    def test_transient(self, kind: PipelineErrorKind, transient: bool) -> None:
        assert PipelineError(kind, "x").transient is transient

    def test_message_and_url(self) -> None:
        err = PipelineError(PipelineErrorKind.TRANSFORM, "unexpected token", url="/a.js")
        assert str(err) == "unexpected token"
        assert err.message == "unexpected token"
        assert err.url == "/a.js"
