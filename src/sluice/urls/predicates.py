"""Pure URL classifiers.

Every predicate takes a URL string as the browser requested it (path
plus optional query) and answers a yes/no question about it. None of
them touch the file system.
"""

import posixpath
import re

# Prefix for absolute file-system paths served from outside the root
FS_PREFIX = "/@fs/"

# Prefix for resolved ids that are not valid browser import specifiers
VALID_ID_PREFIX = "/@id/"

# Stands in for "\0" inside virtual module ids, which URLs cannot carry
NULL_BYTE_PLACEHOLDER = "__x00__"

_QUERY_OR_HASH_RE = re.compile(r"[?#].*$", re.DOTALL)
_KNOWN_JS_SRC_RE = re.compile(r"\.((j|t)sx?|m[jt]s|vue|marko|svelte|astro)($|\?)")
_CSS_LANGS_RE = re.compile(r"\.(css|less|sass|scss|styl|stylus|pcss|postcss|sss)($|\?)")
_IMPORT_QUERY_RE = re.compile(r"(\?|&)import=?(?:&|$)")
_DIRECT_REQUEST_RE = re.compile(r"(\?|&)direct\b")
_HTML_PROXY_RE = re.compile(r"\?html-proxy=?(?:&inline-css)?&index=(\d+)\.(js|css)$")
_DEP_VERSION_RE = re.compile(r"[?&](v=[\w.-]+)\b")


def clean_url(url: str) -> str:
    """Drop the query string and fragment: ``/a.js?x#y`` -> ``/a.js``."""
    return _QUERY_OR_HASH_RE.sub("", url)


def is_js_request(url: str) -> bool:
    """True for script sources, and for extensionless paths.

    ``/src/main.ts``, ``/App.vue`` and ``/@modules/react`` are scripts;
    ``/assets/`` (a directory) and ``/logo.png`` are not.
    """
    path = clean_url(url)
    if _KNOWN_JS_SRC_RE.search(path):
        return True
    return not posixpath.splitext(path)[1] and not path.endswith("/")


def is_import_request(url: str) -> bool:
    """True when the URL carries the ``import`` marker query parameter."""
    return _IMPORT_QUERY_RE.search(url) is not None


def is_css_request(url: str) -> bool:
    """True for stylesheets in any supported preprocessor language."""
    return _CSS_LANGS_RE.search(url) is not None


def is_direct_request(url: str) -> bool:
    """True when the URL carries the ``direct`` marker query parameter."""
    return _DIRECT_REQUEST_RE.search(url) is not None


def is_direct_css_request(url: str) -> bool:
    """A stylesheet requested for its raw content, not as a script import."""
    return is_css_request(url) and is_direct_request(url)


def is_html_proxy(url: str) -> bool:
    """True for inline ``<script>``/``<style>`` blocks proxied out of an HTML page."""
    return _HTML_PROXY_RE.search(url) is not None


def has_dep_version(url: str) -> bool:
    """True when the URL pins a dependency version (``?v=1a2b3c``)."""
    return _DEP_VERSION_RE.search(url) is not None
