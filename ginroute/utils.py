"""Small helpers shared by the router: paths, headers, addresses and XML maps."""

from __future__ import annotations

import logging
import os
from typing import Any, Callable
from xml.sax.saxutils import escape

VERSION = "v1.4.0-dev"
BIND_KEY = "_gin-gonic/gin/bindkey"
DEFAULT_PORT = "8080"

_log = logging.getLogger(__name__)


class H(dict):
    """A plain string-keyed mapping that can also be rendered as XML."""

    def to_xml(self) -> str:
        """Render the mapping as ``<map><key>value</key>...</map>``.

        Raises ValueError if a key is empty, since it cannot name an element.
        """
        parts = ["<map>"]
        for key, value in self.items():
            if not key:
                raise ValueError("xml: start tag with no name")
            parts.append(_element(str(key), value))
        parts.append("</map>")
        return "".join(parts)


def _element(name: str, value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, H):
        return value.to_xml()
    if isinstance(value, (list, tuple)):
        return "".join(_element(name, item) for item in value)
    if isinstance(value, bool):
        text = "true" if value else "false"
    elif isinstance(value, bytes):
        text = value.decode("utf-8", errors="replace")
    else:
        text = str(value)
    return f"<{name}>{escape(text)}</{name}>"


def filter_flags(content: str) -> str:
    """Return ``content`` up to the first space or semicolon."""
    for i, char in enumerate(content):
        if char in " ;":
            return content[:i]
    return content


def choose_data(custom: Any, wildcard: Any) -> Any:
    """Return ``custom`` unless it is None, else ``wildcard``.

    Raises ValueError when both are None.
    """
    if custom is not None:
        return custom
    if wildcard is None:
        raise ValueError("negotiation config is invalid")
    return wildcard


def parse_accept(accept_header: str) -> list[str]:
    """Split an Accept header into its media types, dropping parameters."""
    media_types = (part.split(";", 1)[0].strip() for part in accept_header.split(","))
    return [media for media in media_types if media]


def last_char(text: str) -> str:
    """Return the last character of ``text``; raise ValueError if it is empty."""
    if not text:
        raise ValueError("The length of the string can't be 0")
    return text[-1]


def name_of_function(func: Callable[..., Any]) -> str:
    """Return the fully qualified name of ``func``."""
    module = getattr(func, "__module__", None) or ""
    name = getattr(func, "__qualname__", None) or getattr(func, "__name__", repr(func))
    return f"{module}.{name}" if module else name


def _clean(path: str) -> str:
    """Lexically normalise a slash-separated path."""
    if not path:
        return "."
    rooted = path.startswith("/")
    segments: list[str] = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if segments and segments[-1] != "..":
                segments.pop()
            elif not rooted:
                segments.append("..")
            continue
        segments.append(segment)
    body = "/".join(segments)
    if rooted:
        return "/" + body
    return body or "."


def _join(*elements: str) -> str:
    non_empty = [element for element in elements if element]
    if not non_empty:
        return ""
    return _clean("/".join(non_empty))


def join_paths(absolute_path: str, relative_path: str) -> str:
    """Join two URL paths, keeping a trailing slash from ``relative_path``."""
    if not relative_path:
        return absolute_path
    final_path = _join(absolute_path, relative_path)
    if last_char(relative_path) == "/" and last_char(final_path) != "/":
        return final_path + "/"
    return final_path


def resolve_address(*args: str) -> str:
    """Choose the listen address.

    With no argument the PORT environment variable is used, falling back to
    port 8080; a single argument is returned as is; more raise ValueError.
    """
    if not args:
        port = os.environ.get("PORT", "")
        if port:
            _log.debug('Environment variable PORT="%s"', port)
            return ":" + port
        _log.debug("Environment variable PORT is undefined. Using port :%s by default", DEFAULT_PORT)
        return ":" + DEFAULT_PORT
    if len(args) == 1:
        return args[0]
    raise ValueError("too much parameters")