"""Radix-style route tree with static, parameter and wildcard segments."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, MutableMapping, Optional, Union

Handlers = Dict[str, Any]
BytesLike = Union[bytes, bytearray, memoryview]


class Kind(Enum):
    """What a path segment in the tree matches."""

    STATIC = 0
    PARAM = 1
    WILDCARD = 2


@dataclass
class Node:
    """One segment of a route; handlers are keyed by HTTP method."""

    path: str = ""
    kind: Kind = Kind.STATIC
    children: List["Node"] = field(default_factory=list)
    handlers: Handlers = field(default_factory=dict)
    param_name: str = ""
    is_end: bool = False


@dataclass
class PathMatchContext:
    """Reusable scratch space for byte-path lookups.

    Lookups append to :attr:`segments`, so call :meth:`reset` between uses.
    """

    segments: List[str] = field(default_factory=list)
    path_bytes: bytearray = field(default_factory=bytearray)
    params: Dict[str, str] = field(default_factory=dict)

    def reset(self) -> None:
        """Empty the segments, the path scratch buffer and the parameters."""
        self.segments.clear()
        self.path_bytes.clear()
        self.params.clear()


def split_path(path: str) -> List[str]:
    """Split *path* on ``/`` after dropping one trailing slash (except for ``/``)."""
    if len(path) > 1 and path.endswith("/"):
        path = path[:-1]
    return path.split("/")


def _split_bytes(path: BytesLike) -> List[str]:
    text = bytes(path).decode("utf-8", "surrogateescape")
    if not text.startswith("/"):
        return [""] + text.split("/")
    if len(text) > 1 and text.endswith("/"):
        text = text[:-1]
    return text[1:].split("/")


def _segment_kind(segment: str) -> Kind:
    if segment.startswith(":"):
        return Kind.PARAM
    if segment == "*":
        return Kind.WILDCARD
    return Kind.STATIC


def _find_node(
    node: Node, segments: List[str], params: Optional[MutableMapping[str, str]]
) -> Optional[Handlers]:
    index = 0
    while index < len(segments):
        segment = segments[index]
        if not segment:
            index += 1
            continue
        for child in node.children:
            if child.kind is Kind.STATIC:
                if child.path == segment:
                    break
            elif child.kind is Kind.PARAM:
                if params is not None:
                    params[child.param_name] = segment
                break
            else:
                if params is not None and child.param_name:
                    params[child.param_name] = "/".join(segments[index:])
                return child.handlers if child.is_end else None
        else:
            return None
        node = child
        index += 1
    return node.handlers if node.is_end else None


def _find_static_node(node: Node, segments: List[str]) -> Optional[Handlers]:
    for segment in segments:
        if not segment:
            continue
        node = next(
            (c for c in node.children if c.kind is Kind.STATIC and c.path == segment),
            None,
        )
        if node is None:
            return None
    return node.handlers if node.is_end else None


@dataclass
class Tree:
    """Route tree; lookups take the first matching child without backtracking."""

    root: Node = field(default_factory=Node)

    def insert(self, path: str, method: str, handler: Any) -> None:
        """Register *handler* for *method* on *path*; an empty path is ignored."""
        if not path:
            return
        if not path.startswith("/"):
            path = "/" + path
        segments = split_path(path)
        last = len(segments) - 1
        current = self.root
        for i, segment in enumerate(segments):
            if not segment:
                continue
            kind = _segment_kind(segment)
            param_name = segment[1:] if kind is Kind.PARAM else ""
            match = next(
                (
                    child
                    for child in current.children
                    if child.kind is kind
                    and (kind is not Kind.STATIC or child.path == segment)
                    and (kind is not Kind.PARAM or child.param_name == param_name)
                ),
                None,
            )
            if match is None:
                match = Node(path=segment, kind=kind, param_name=param_name)
                current.children.append(match)
            current = match
            if i == last:
                current.is_end = True
                current.handlers[method] = handler

    def find(
        self, path: str, params: Optional[MutableMapping[str, str]] = None
    ) -> Optional[Handlers]:
        """Return the handlers for *path*, or None; parameters go into *params*."""
        if not path:
            return None
        if not path.startswith("/"):
            path = "/" + path
        return _find_node(self.root, split_path(path), params)

    def find_bytes(
        self, path: BytesLike, params: Optional[MutableMapping[str, str]] = None
    ) -> Optional[Handlers]:
        """Like :meth:`find`, for a byte-string path."""
        if not len(path):
            return None
        return _find_node(self.root, _split_bytes(path), params)

    def find_bytes_with_context(
        self, path: BytesLike, ctx: PathMatchContext
    ) -> Optional[Handlers]:
        """Like :meth:`find_bytes`, collecting segments and parameters in *ctx*."""
        if not len(path):
            return None
        ctx.segments.extend(_split_bytes(path))
        return _find_node(self.root, ctx.segments, ctx.params)

    def find_static(self, path: str) -> Optional[Handlers]:
        """Return the handlers for *path* following static segments only, or None."""
        if not path:
            return None
        if not path.startswith("/"):
            path = "/" + path
        return _find_static_node(self.root, split_path(path))

    def find_static_bytes(self, path: BytesLike) -> Optional[Handlers]:
        """Like :meth:`find_static`, for a byte-string path."""
        if not len(path):
            return None
        return _find_static_node(self.root, _split_bytes(path))