"""URL normalization: ordered, pure ``str -> str`` steps.

A raw request URL goes through ``NORMALIZERS`` before any routing
decision. Module requests then go through ``MODULE_CANONICALIZERS`` to
reach the key the module graph indexes by. The order inside each tuple
matters: the timestamp is stripped *before* percent-decoding.
"""

import posixpath
import re
from collections.abc import Callable, Iterable
from typing import TypeAlias

from sluice.errors import MalformedURL
from sluice.urls.predicates import (
    FS_PREFIX,
    NULL_BYTE_PLACEHOLDER,
    VALID_ID_PREFIX,
    clean_url,
)

URLStep: TypeAlias = Callable[[str], str]

_TIMESTAMP_RE = re.compile(r"(?:^|(?<=&))t=\d+(?:&|(?!\w))")
_TRAILING_SEPARATOR_RE = re.compile(r"[?&]$")
_IMPORT_QUERY_RE = re.compile(r"(\?|&)import=?(?:&|$)")
_ESCAPE_RUN_RE = re.compile(r"(?:%[0-9A-Fa-f]{2})+")

# Escapes that decode to these stay encoded. "%" is kept too, so a
# second pass never decodes again.
_KEEP_ENCODED = frozenset(";/?:@&=+$,#%")


def remove_timestamp_query(url: str) -> str:
    """Strip every ``t=<digits>`` cache-busting query parameter.

    The path is never touched, even where a segment looks like ``t=5``.

    >>> remove_timestamp_query("/src/app.js?t=1650000000000")
    '/src/app.js'
    >>> remove_timestamp_query("/src/app.js?t=123&import")
    '/src/app.js?import'
    >>> remove_timestamp_query("/pages/t=5.js?t=1&t=2")
    '/pages/t=5.js'
    """
    path, sep, query = url.partition("?")
    if not sep:
        return url
    query = _TIMESTAMP_RE.sub("", query)
    if not query or query.startswith("#"):
        return path + query
    return _TRAILING_SEPARATOR_RE.sub("", f"{path}?{query}", count=1)


def decode_uri(url: str) -> str:
    """Percent-decode *url* with whole-URI semantics.

    Runs of escapes are decoded as UTF-8. Escapes that decode to a
    URI-reserved character (``/``, ``?``, ``#``, ...) are left as-is so
    the URL's structure cannot change.

    Raises:
        MalformedURL: On a ``%`` not followed by two hex digits, or on
            escaped bytes that are not valid UTF-8.
    """
    if "%" not in url:
        return url

    parts: list[str] = []
    pos = 0
    for match in _ESCAPE_RUN_RE.finditer(url):
        literal = url[pos : match.start()]
        if "%" in literal:
            raise MalformedURL(url)
        parts.append(literal)
        parts.append(_decode_escape_run(url, match.group()))
        pos = match.end()

    tail = url[pos:]
    if "%" in tail:
        raise MalformedURL(url)
    parts.append(tail)
    return "".join(parts)


def _decode_escape_run(url: str, run: str) -> str:
    out: list[str] = []
    pending = bytearray()

    def flush() -> None:
        if not pending:
            return
        try:
            out.append(pending.decode("utf-8"))
        except UnicodeDecodeError:
            raise MalformedURL(url, "invalid UTF-8 sequence") from None
        pending.clear()

    for hex_digits in run.split("%")[1:]:
        byte = int(hex_digits, 16)
        if byte < 0x80 and chr(byte) in _KEEP_ENCODED:
            flush()
            out.append("%" + hex_digits)
        else:
            pending.append(byte)
    flush()
    return "".join(out)


def restore_null_byte(url: str) -> str:
    """Turn the ``__x00__`` placeholder back into a literal null byte."""
    return url.replace(NULL_BYTE_PLACEHOLDER, "\0")


def remove_import_query(url: str) -> str:
    """Strip the ``import`` marker: ``/a.css?import`` -> ``/a.css``."""
    return _TRAILING_SEPARATOR_RE.sub("", _IMPORT_QUERY_RE.sub(r"\1", url, count=1), count=1)


def unwrap_id(url: str) -> str:
    """Undo the ``/@id/`` wrapping applied to non-URL module ids."""
    if url.startswith(VALID_ID_PREFIX):
        return restore_null_byte(url[len(VALID_ID_PREFIX) :])
    return url


def inject_query(url: str, query: str) -> str:
    """Insert *query* as the first query parameter, keeping the rest.

    >>> inject_query("/style.css", "direct")
    '/style.css?direct'
    >>> inject_query("/style.css?used#x", "direct")
    '/style.css?direct&used#x'
    """
    base, _, fragment = url.partition("#")
    path, _, search = base.partition("?")
    result = f"{path}?{query}"
    if search:
        result += "&" + search
    if fragment:
        result += "#" + fragment
    return result


def _compose(steps: Iterable[URLStep], url: str) -> str:
    for step in steps:
        url = step(url)
    return url


NORMALIZERS: tuple[URLStep, ...] = (remove_timestamp_query, decode_uri, restore_null_byte)
MODULE_CANONICALIZERS: tuple[URLStep, ...] = (remove_import_query, unwrap_id)


def normalize(raw_url: str) -> str:
    """Run a raw request URL through ``NORMALIZERS`` in order.

    Raises:
        MalformedURL: If percent-decoding fails.
    """
    return _compose(NORMALIZERS, raw_url)


def canonical_module_url(url: str) -> str:
    """Reduce a normalized module URL to the module graph's key."""
    return _compose(MODULE_CANONICALIZERS, url)


def prettify_url(url: str, root: str) -> str:
    """Shorten *url* for log lines.

    Absolute paths inside *root* (bare or behind ``/@fs/``) are shown
    relative to it; files under ``node_modules`` collapse to
    ``npm: <package>``.
    """
    url = remove_timestamp_query(url)
    is_absolute_file = url.startswith(root)
    if not (is_absolute_file or url.startswith(FS_PREFIX)):
        return url

    file = url if is_absolute_file else "/" + url[len(FS_PREFIX) :]
    relative = posixpath.relpath(clean_url(file), root)
    segments = relative.split("/")
    if "node_modules" in segments[1:]:
        index = segments.index("node_modules", 1)
        package = segments[index + 1] if index + 1 < len(segments) else ""
        if package.startswith("@") and index + 2 < len(segments):
            package = f"{package}/{segments[index + 2]}"
        suffix = " (source map)" if relative.endswith(".map") else ""
        return f"npm: {package}{suffix}"
    return relative
