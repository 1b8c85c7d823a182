"""AST serialization for directive-sugar nodes.

Three conversions:
- ``from_mdast``: build typed nodes from an mdast-shaped mapping, as
  produced by remark with remark-directive (``root``, ``paragraph``,
  ``containerDirective``, ``data.directiveLabel``, ``position.start``);
  GFM ``delete`` and reference-style links and images are understood
- ``to_dict`` / ``from_dict``: JSON-compatible round-trip of (resolved) trees
- ``to_json`` / ``from_json``: the same, as a string

All output is deterministic (sorted keys) so dumps can be diffed.

Example:
    tree = {
        "type": "root",
        "children": [
            {"type": "paragraph", "children": [
                {"type": "textDirective", "name": "badge-v", "attributes": {}, "children": []},
            ]},
        ],
    }
    doc = from_mdast(tree)
    print(to_json(DirectiveSugar()(doc)))

Thread Safety:
    All functions are pure. Safe to call from any thread.

"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from directive_sugar.location import SourceLocation
from directive_sugar.nodes import (
    BlockQuote,
    CodeBlock,
    CodeSpan,
    Directive,
    Document,
    Element,
    Emphasis,
    Heading,
    HtmlBlock,
    HtmlInline,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    RenderTarget,
    SoftBreak,
    Strikethrough,
    Strong,
    Text,
    ThematicBreak,
)

# Registry of node type names to classes for deserialization
_NODE_TYPES: dict[str, type] = {
    "Document": Document,
    "Heading": Heading,
    "Paragraph": Paragraph,
    "BlockQuote": BlockQuote,
    "List": List,
    "ListItem": ListItem,
    "ThematicBreak": ThematicBreak,
    "HtmlBlock": HtmlBlock,
    "CodeBlock": CodeBlock,
    "Directive": Directive,
    "Element": Element,
    "Text": Text,
    "Emphasis": Emphasis,
    "Strong": Strong,
    "Strikethrough": Strikethrough,
    "Link": Link,
    "Image": Image,
    "CodeSpan": CodeSpan,
    "LineBreak": LineBreak,
    "SoftBreak": SoftBreak,
    "HtmlInline": HtmlInline,
    "RenderTarget": RenderTarget,
}

# Fields that contain child node tuples
_CHILDREN_FIELDS = {"children", "items"}

_DIRECTIVE_KINDS = {
    "containerDirective": "container",
    "leafDirective": "leaf",
    "textDirective": "text",
}


# =============================================================================
# Typed dict round-trip
# =============================================================================


def to_dict(node: Node) -> dict[str, Any]:
    """Convert an AST node to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.
    Render targets of resolved directives are serialized with the node.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}

    for f in fields(node):
        result[f.name] = _serialize_value(getattr(node, f.name))

    return result


def _serialize_value(value: Any) -> Any:
    """Serialize a single field value."""
    if isinstance(value, Node | RenderTarget):
        return to_dict(value)  # type: ignore[arg-type]
    if isinstance(value, SourceLocation):
        return {
            "_type": "SourceLocation",
            "lineno": value.lineno,
            "col_offset": value.col_offset,
            "end_lineno": value.end_lineno,
            "end_col_offset": value.end_col_offset,
            "source_file": value.source_file,
        }
    if isinstance(value, tuple | list):
        return [_serialize_value(item) for item in value]
    if isinstance(value, Mapping):
        return {key: _serialize_value(item) for key, item in value.items()}
    # Primitives: str, int, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a typed AST node from a dict produced by ``to_dict``.

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name not in data:
            continue
        kwargs[f.name] = _deserialize_value(data[f.name], f.name)

    return node_cls(**kwargs)


def _deserialize_value(value: Any, field_name: str = "") -> Any:
    """Deserialize a single field value."""
    if isinstance(value, dict):
        type_name = value.get("_type")
        if type_name == "SourceLocation":
            return SourceLocation(
                lineno=value["lineno"],
                col_offset=value["col_offset"],
                end_lineno=value.get("end_lineno"),
                end_col_offset=value.get("end_col_offset"),
                source_file=value.get("source_file"),
            )
        if type_name is not None:
            return from_dict(value)
        return {key: _deserialize_value(item) for key, item in value.items()}
    if isinstance(value, list):
        items = [_deserialize_value(item) for item in value]
        # Child sequences are tuples; property values (className) stay lists
        return tuple(items) if field_name in _CHILDREN_FIELDS else items
    return value


def to_json(node: Node, *, indent: int | None = None) -> str:
    """Serialize an AST node to a JSON string (sorted keys)."""
    return json.dumps(to_dict(node), sort_keys=True, indent=indent, ensure_ascii=False)


def from_json(data: str) -> Node:
    """Deserialize a JSON string produced by ``to_json``."""
    return from_dict(json.loads(data))


# =============================================================================
# mdast import
# =============================================================================


@dataclass(frozen=True, slots=True)
class _Definition:
    url: str
    title: str | None


def from_mdast(tree: Mapping[str, Any], *, source_file: str | None = None) -> Document:
    """Build a Document from an mdast-shaped mapping.

    ``imageReference`` / ``linkReference`` nodes are resolved against the
    document's ``definition`` nodes (first definition wins); the
    definitions themselves produce no node. A reference without a
    definition falls back to its source text, as CommonMark renders it.

    Args:
        tree: mdast ``root`` node (nested mappings with ``type`` keys)
        source_file: Recorded on every node location

    Returns:
        The typed document

    Raises:
        ValueError: If the root is not ``root`` or a node type is unsupported
    """
    if tree.get("type") != "root":
        msg = f"Expected an mdast 'root' node, got {tree.get('type')!r}"
        raise ValueError(msg)
    definitions: dict[str, _Definition] = {}
    _collect_definitions(tree, definitions)
    reader = _MdastReader(source_file, definitions)
    return Document(
        location=reader.location(tree),
        children=reader.children(tree, inline=False),
    )


def _normalize_label(label: str) -> str:
    return " ".join(label.lower().split())


def _collect_definitions(node: Mapping[str, Any], definitions: dict[str, _Definition]) -> None:
    for child in node.get("children") or ():
        if child.get("type") == "definition":
            key = _normalize_label(child.get("identifier") or child.get("label") or "")
            definitions.setdefault(key, _Definition(child.get("url", ""), child.get("title")))
        else:
            _collect_definitions(child, definitions)


class _MdastReader:
    """Converts mdast mappings to nodes for one document."""

    __slots__ = ("definitions", "source_file")

    def __init__(self, source_file: str | None, definitions: Mapping[str, _Definition]) -> None:
        self.source_file = source_file
        self.definitions = definitions

    def location(self, node: Mapping[str, Any]) -> SourceLocation:
        position = node.get("position")
        if not position:
            return SourceLocation(lineno=0, col_offset=0, source_file=self.source_file)
        start = position.get("start") or {}
        end = position.get("end") or {}
        return SourceLocation(
            lineno=start.get("line", 0),
            col_offset=start.get("column", 0),
            end_lineno=end.get("line"),
            end_col_offset=end.get("column"),
            source_file=self.source_file,
        )

    def children(self, node: Mapping[str, Any], *, inline: bool) -> tuple[Node, ...]:
        """Convert the children of ``node``; ``inline`` tells phrasing from flow content."""
        converted: list[Node] = []
        for child in node.get("children") or ():
            match child.get("type"):
                case "definition":
                    continue
                case "imageReference" | "linkReference":
                    converted.extend(self._reference(child))
                case _:
                    converted.append(self._convert(child, inline=inline))
        return tuple(converted)

    def _reference(self, node: Mapping[str, Any]) -> tuple[Node, ...]:
        loc = self.location(node)
        label = node.get("label") or node.get("identifier") or ""
        definition = self.definitions.get(_normalize_label(node.get("identifier") or label))
        is_image = node.get("type") == "imageReference"

        if definition is not None:
            if is_image:
                image = Image(
                    location=loc,
                    url=definition.url,
                    alt=node.get("alt") or "",
                    title=definition.title,
                )
                return (image,)
            link = Link(
                location=loc,
                url=definition.url,
                title=definition.title,
                children=self.children(node, inline=True),
            )
            return (link,)

        match node.get("referenceType"):
            case "full":
                suffix = f"[{label}]"
            case "collapsed":
                suffix = "[]"
            case _:
                suffix = ""
        if is_image:
            return (Text(location=loc, content=f"![{node.get('alt') or ''}]{suffix}"),)
        return (
            Text(location=loc, content="["),
            *self.children(node, inline=True),
            Text(location=loc, content=f"]{suffix}"),
        )

    def _convert(self, node: Mapping[str, Any], *, inline: bool) -> Node:
        loc = self.location(node)
        node_type = node.get("type")

        match node_type:
            case "text":
                return Text(location=loc, content=node.get("value", ""))
            case "emphasis":
                return Emphasis(location=loc, children=self.children(node, inline=True))
            case "strong":
                return Strong(location=loc, children=self.children(node, inline=True))
            case "delete":
                return Strikethrough(location=loc, children=self.children(node, inline=True))
            case "link":
                return Link(
                    location=loc,
                    url=node.get("url", ""),
                    title=node.get("title"),
                    children=self.children(node, inline=True),
                )
            case "image":
                return Image(
                    location=loc,
                    url=node.get("url", ""),
                    alt=node.get("alt") or "",
                    title=node.get("title"),
                )
            case "inlineCode":
                return CodeSpan(location=loc, code=node.get("value", ""))
            case "break":
                return LineBreak(location=loc)
            case "html":
                html = node.get("value", "")
                if inline:
                    return HtmlInline(location=loc, html=html)
                return HtmlBlock(location=loc, html=html)
            case "paragraph":
                data = node.get("data") or {}
                return Paragraph(
                    location=loc,
                    children=self.children(node, inline=True),
                    is_label=bool(data.get("directiveLabel")),
                )
            case "heading":
                return Heading(
                    location=loc,
                    level=node.get("depth", 1),
                    children=self.children(node, inline=True),
                )
            case "blockquote":
                return BlockQuote(location=loc, children=self.children(node, inline=False))
            case "list":
                return List(
                    location=loc,
                    items=self.children(node, inline=False),  # type: ignore[arg-type]
                    ordered=bool(node.get("ordered")),
                    start=node.get("start") or 1,
                )
            case "listItem":
                return ListItem(
                    location=loc,
                    children=self.children(node, inline=False),
                    checked=node.get("checked"),
                )
            case "thematicBreak":
                return ThematicBreak(location=loc)
            case "code":
                info = " ".join(part for part in (node.get("lang"), node.get("meta")) if part)
                return CodeBlock(location=loc, code=node.get("value", ""), info=info or None)
            case "containerDirective" | "leafDirective" | "textDirective":
                kind = _DIRECTIVE_KINDS[node_type]
                attributes = {
                    key: str(value)
                    for key, value in (node.get("attributes") or {}).items()
                    if value is not None
                }
                return Directive(
                    location=loc,
                    kind=kind,  # type: ignore[arg-type]
                    name=node.get("name", ""),
                    attributes=attributes,
                    children=self.children(node, inline=kind != "container"),
                )
            case _:
                msg = f"Unsupported mdast node type: {node_type!r}"
                raise ValueError(msg)
