"""Module response construction.

Turns transformed code (or a serialized source map) into a
``Response``: content-type aliases, etag, cache policy, static headers,
and an inline source map reference for scripts and stylesheets.
"""

import base64
import hashlib
import json
from collections.abc import Iterable
from typing import Literal, TypeAlias

from sluice.http.response import Response
from sluice.transform.outcome import SourceMap

ContentKind: TypeAlias = Literal["js", "css", "json", "html"]

CONTENT_TYPES: dict[str, str] = {
    "js": "application/javascript",
    "css": "text/css",
    "html": "text/html",
    "json": "application/json",
}

NO_CACHE = "no-cache"
IMMUTABLE = "max-age=31536000,immutable"


def weak_etag(body: bytes) -> str:
    """Weak validator from length and SHA-1: ``W/"<len-hex>-<b64 digest>"``."""
    digest = base64.b64encode(hashlib.sha1(body).digest()).decode("ascii")[:27]  # noqa: S324
    return f'W/"{len(body):x}-{digest}"'


def source_map_url(source_map: SourceMap) -> str:
    """Encode *source_map* as a base64 ``data:`` URL."""
    payload = json.dumps(source_map, separators=(",", ":")).encode("utf-8")
    return "data:application/json;base64," + base64.b64encode(payload).decode("ascii")


def with_inline_source_map(kind: ContentKind, code: str, source_map: SourceMap) -> str:
    """Append a ``sourceMappingURL`` comment in the syntax *kind* expects."""
    if kind == "css":
        return f"{code}\n/*# sourceMappingURL={source_map_url(source_map)} */"
    return f"{code}\n//# sourceMappingURL={source_map_url(source_map)}"


def module_response(
    content: str,
    kind: ContentKind,
    *,
    if_none_match: str | None = None,
    etag: str | None = None,
    cache_control: str = NO_CACHE,
    headers: Iterable[tuple[str, str]] = (),
    source_map: SourceMap | None = None,
) -> Response:
    """Build the response for *content*.

    When no *etag* is given, a weak one is derived from the content.
    A client already holding that etag gets an empty 304. Source maps
    with ``mappings`` are inlined into ``js`` and ``css`` bodies.
    """
    if etag is None:
        etag = weak_etag(content.encode("utf-8"))
    if if_none_match is not None and if_none_match == etag:
        return Response(body="", status=304)

    if source_map and source_map.get("mappings") and kind in ("js", "css"):
        content = with_inline_source_map(kind, content, source_map)

    return (
        Response(body=content, content_type=CONTENT_TYPES.get(kind, kind))
        .with_header("Cache-Control", cache_control)
        .with_header("ETag", etag)
        .with_headers(headers)
    )
