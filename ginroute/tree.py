"""Radix tree used to match request paths against registered routes."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Iterable, Optional
from urllib.parse import unquote_plus

_MAX_PARAMS = 255
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class RouteError(Exception):
    """Raised when a route cannot be registered or the tree is inconsistent."""


@dataclass(frozen=True)
class Param:
    """A single URL parameter: a key and its value."""

    key: str
    value: str


class Params(list):
    """Ordered list of URL parameters, in the order they appear in the path."""

    def get(self, name: str) -> Optional[str]:
        """Return the value of the first parameter called ``name``, or None."""
        return next((p.value for p in self if p.key == name), None)

    def by_name(self, name: str) -> str:
        """Return the value of the first parameter called ``name``, or ''."""
        value = self.get(name)
        return "" if value is None else value


class NodeType(IntEnum):
    STATIC = 0
    ROOT = 1
    PARAM = 2
    CATCH_ALL = 3


@dataclass
class RouteMatch:
    """Result of a lookup: the handlers found, the captured parameters and
    whether a trailing-slash redirect is recommended."""

    handlers: Any
    params: Params
    tsr: bool = False


def count_params(path: str) -> int:
    """Count the wildcards in ``path``, capped at 255."""
    return min(sum(1 for c in path if c in ":*"), _MAX_PARAMS)


def _unescape(value: str) -> str:
    # A malformed escape leaves the value untouched, as a failed decode would.
    if _BAD_ESCAPE.search(value):
        return value
    return unquote_plus(value)


def _common_prefix_length(a: str, b: str) -> int:
    length = 0
    for x, y in zip(a, b):
        if x != y:
            break
        length += 1
    return length


@dataclass(eq=False)
class Node:
    """A node of the routing tree."""

    path: str = ""
    indices: str = ""
    children: list = field(default_factory=list)
    handlers: Any = None
    priority: int = 0
    n_type: NodeType = NodeType.STATIC
    max_params: int = 0
    wild_child: bool = False

    def _increment_child_prio(self, pos: int) -> int:
        children = self.children
        children[pos].priority += 1
        prio = children[pos].priority

        new_pos = pos
        while new_pos > 0 and children[new_pos - 1].priority < prio:
            children[new_pos - 1], children[new_pos] = children[new_pos], children[new_pos - 1]
            new_pos -= 1

        if new_pos != pos:
            idx = self.indices
            self.indices = idx[:new_pos] + idx[pos] + idx[new_pos:pos] + idx[pos + 1:]
        return new_pos

    def add_route(self, path: str, handlers: Any) -> None:
        """Register ``handlers`` for ``path``; raise RouteError on conflicts."""
        full_path = path
        n = self
        n.priority += 1
        num_params = count_params(path)

        if not n.path and not n.children:
            n._insert_child(num_params, path, full_path, handlers)
            n.n_type = NodeType.ROOT
            return

        while True:
            n.max_params = max(n.max_params, num_params)

            i = _common_prefix_length(path, n.path)

            # Split edge
            if i < len(n.path):
                child = Node(
                    path=n.path[i:],
                    wild_child=n.wild_child,
                    indices=n.indices,
                    children=n.children,
                    handlers=n.handlers,
                    priority=n.priority - 1,
                )
                child.max_params = max((c.max_params for c in child.children), default=0)
                n.children = [child]
                n.indices = n.path[i]
                n.path = path[:i]
                n.handlers = None
                n.wild_child = False

            if i < len(path):
                path = path[i:]

                if n.wild_child:
                    n = n.children[0]
                    n.priority += 1
                    n.max_params = max(n.max_params, num_params)
                    num_params -= 1

                    if path.startswith(n.path) and (
                        len(n.path) >= len(path) or path[len(n.path)] == "/"
                    ):
                        continue

                    path_seg = path if n.n_type == NodeType.CATCH_ALL else path.split("/", 1)[0]
                    prefix = full_path[: full_path.index(path_seg)] + n.path
                    raise RouteError(
                        f"'{path_seg}' in new path '{full_path}' conflicts with existing "
                        f"wildcard '{n.path}' in existing prefix '{prefix}'"
                    )

                c = path[0]

                # slash after param
                if n.n_type == NodeType.PARAM and c == "/" and len(n.children) == 1:
                    n = n.children[0]
                    n.priority += 1
                    continue

                pos = n.indices.find(c)
                if pos >= 0:
                    pos = n._increment_child_prio(pos)
                    n = n.children[pos]
                    continue

                if c not in ":*":
                    n.indices += c
                    child = Node(max_params=num_params)
                    n.children.append(child)
                    n._increment_child_prio(len(n.indices) - 1)
                    n = child
                n._insert_child(num_params, path, full_path, handlers)
                return

            if i == len(path):
                if n.handlers is not None:
                    raise RouteError(f"handlers are already registered for path '{full_path}'")
                n.handlers = handlers
            return

    def _insert_child(self, num_params: int, path: str, full_path: str, handlers: Any) -> None:
        n = self
        offset = 0
        end_of_path = len(path)
        i = 0

        while num_params > 0:
            c = path[i]
            if c not in ":*":
                i += 1
                continue

            end = i + 1
            while end < end_of_path and path[end] != "/":
                if path[end] in ":*":
                    raise RouteError(
                        "only one wildcard per path segment is allowed, has: "
                        f"'{path[i:]}' in path '{full_path}'"
                    )
                end += 1

            if n.children:
                raise RouteError(
                    f"wildcard route '{path[i:end]}' conflicts with existing children "
                    f"in path '{full_path}'"
                )

            if end - i < 2:
                raise RouteError(
                    f"wildcards must be named with a non-empty name in path '{full_path}'"
                )

            if c == ":":
                if i > 0:
                    n.path = path[offset:i]
                    offset = i

                child = Node(n_type=NodeType.PARAM, max_params=num_params)
                n.children = [child]
                n.wild_child = True
                n = child
                n.priority += 1
                num_params -= 1

                if end < end_of_path:
                    n.path = path[offset:end]
                    offset = end
                    child = Node(max_params=num_params, priority=1)
                    n.children = [child]
                    n = child
            else:
                if end != end_of_path or num_params > 1:
                    raise RouteError(
                        "catch-all routes are only allowed at the end of the path "
                        f"in path '{full_path}'"
                    )
                if n.path and n.path[-1] == "/":
                    raise RouteError(
                        "catch-all conflicts with existing handle for the path segment "
                        f"root in path '{full_path}'"
                    )

                i -= 1
                if i < 0 or path[i] != "/":
                    raise RouteError(f"no / before catch-all in path '{full_path}'")

                n.path = path[offset:i]

                child = Node(wild_child=True, n_type=NodeType.CATCH_ALL, max_params=1)
                n.children = [child]
                n.indices = path[i]
                n = child
                n.priority += 1

                n.children = [
                    Node(
                        path=path[i:],
                        n_type=NodeType.CATCH_ALL,
                        max_params=1,
                        handlers=handlers,
                        priority=1,
                    )
                ]
                return

            i += 1

        n.path = path[offset:]
        n.handlers = handlers

    def get_value(
        self, path: str, params: Optional[Iterable[Param]] = None, unescape: bool = False
    ) -> RouteMatch:
        """Look up ``path``, collecting wildcard values after ``params``.

        When nothing matches, ``tsr`` tells whether the path with a trailing
        slash added or removed would match.
        """
        found = Params(params or ())
        n = self

        def convert(value: str) -> str:
            return _unescape(value) if unescape else value

        while True:
            if len(path) > len(n.path):
                if path.startswith(n.path):
                    path = path[len(n.path):]

                    if not n.wild_child:
                        pos = n.indices.find(path[0])
                        if pos >= 0:
                            n = n.children[pos]
                            continue
                        return RouteMatch(None, found, path == "/" and n.handlers is not None)

                    n = n.children[0]
                    if n.n_type == NodeType.PARAM:
                        end = path.find("/")
                        if end < 0:
                            end = len(path)
                        found.append(Param(n.path[1:], convert(path[:end])))

                        if end < len(path):
                            if n.children:
                                path = path[end:]
                                n = n.children[0]
                                continue
                            return RouteMatch(None, found, len(path) == end + 1)

                        if n.handlers is not None:
                            return RouteMatch(n.handlers, found)
                        tsr = False
                        if len(n.children) == 1:
                            n = n.children[0]
                            tsr = n.path == "/" and n.handlers is not None
                        return RouteMatch(None, found, tsr)

                    if n.n_type == NodeType.CATCH_ALL:
                        found.append(Param(n.path[2:], convert(path)))
                        return RouteMatch(n.handlers, found)

                    raise RouteError("invalid node type")
            elif path == n.path:
                if n.handlers is not None:
                    return RouteMatch(n.handlers, found)

                if path == "/" and n.wild_child and n.n_type != NodeType.ROOT:
                    return RouteMatch(None, found, True)

                pos = n.indices.find("/")
                if pos >= 0:
                    n = n.children[pos]
                    tsr = (len(n.path) == 1 and n.handlers is not None) or (
                        n.n_type == NodeType.CATCH_ALL and n.children[0].handlers is not None
                    )
                    return RouteMatch(None, found, tsr)
                return RouteMatch(None, found, False)

            tsr = path == "/" or (
                len(n.path) == len(path) + 1
                and n.path[len(path)] == "/"
                and path == n.path[:-1]
                and n.handlers is not None
            )
            return RouteMatch(None, found, tsr)

    def find_case_insensitive_path(self, path: str, fix_trailing_slash: bool) -> Optional[str]:
        """Return the registered spelling of ``path`` ignoring case, or None.

        With ``fix_trailing_slash`` a missing or extra trailing slash is fixed too.
        """
        n = self
        parts: list[str] = []

        while len(path) >= len(n.path) and path[: len(n.path)].lower() == n.path.lower():
            path = path[len(n.path):]
            parts.append(n.path)

            if path:
                if not n.wild_child:
                    first = path[0].lower()
                    for index_char, child in zip(n.indices, n.children):
                        # Both the character and its lower-case form may exist.
                        if first == index_char.lower():
                            out = child.find_case_insensitive_path(path, fix_trailing_slash)
                            if out is not None:
                                return "".join(parts) + out

                    if fix_trailing_slash and path == "/" and n.handlers is not None:
                        return "".join(parts)
                    return None

                n = n.children[0]
                if n.n_type == NodeType.PARAM:
                    k = path.find("/")
                    if k < 0:
                        k = len(path)
                    parts.append(path[:k])

                    if k < len(path):
                        if n.children:
                            path = path[k:]
                            n = n.children[0]
                            continue
                        if fix_trailing_slash and len(path) == k + 1:
                            return "".join(parts)
                        return None

                    if n.handlers is not None:
                        return "".join(parts)
                    if fix_trailing_slash and len(n.children) == 1:
                        n = n.children[0]
                        if n.path == "/" and n.handlers is not None:
                            return "".join(parts) + "/"
                    return None

                if n.n_type == NodeType.CATCH_ALL:
                    return "".join(parts) + path

                raise RouteError("invalid node type")

            if n.handlers is not None:
                return "".join(parts)

            if fix_trailing_slash:
                pos = n.indices.find("/")
                if pos >= 0:
                    n = n.children[pos]
                    if (len(n.path) == 1 and n.handlers is not None) or (
                        n.n_type == NodeType.CATCH_ALL and n.children[0].handlers is not None
                    ):
                        return "".join(parts) + "/"
            return None

        if fix_trailing_slash:
            if path == "/":
                return "".join(parts)
            if (
                len(path) + 1 == len(n.path)
                and n.path[len(path)] == "/"
                and path.lower() == n.path[: len(path)].lower()
                and n.handlers is not None
            ):
                return "".join(parts) + n.path
        return None


class MethodTrees(list):
    """Ordered list of ``(method, root node)`` pairs."""

    def get(self, method: str) -> Optional[Node]:
        """Return the root node for ``method``, or None."""
        return next((root for tree_method, root in self if tree_method == method), None)